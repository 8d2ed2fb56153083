from decimal import Decimal

from django.test import TestCase

from events.tests.factories import CourseFactory, PlayerFactory, RoundFactory
from register.models import PlayerCourseHandicap


class CourseHandicapCacheTests(TestCase):

    def setUp(self):
        self.course = CourseFactory(course_rating=Decimal("72.4"), slope_rating=135, par=72)
        self.round = RoundFactory(course=self.course)
        self.player = PlayerFactory(handicap_index=Decimal("10.0"))

    def test_course_handicap_is_calculated_and_cached(self):
        course_handicap = PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)

        self.assertEqual(course_handicap, 12)
        record = PlayerCourseHandicap.objects.get(player=self.player, round=self.round)
        self.assertEqual(record.course_handicap, 12)

    def test_cached_value_is_used(self):
        PlayerCourseHandicap.objects.create(player=self.player, round=self.round, course_handicap=99)

        course_handicap = PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)

        self.assertEqual(course_handicap, 99)

    def test_course_handicaps_keyed_by_player(self):
        other = PlayerFactory(handicap_index=None)

        course_handicaps = PlayerCourseHandicap.objects.course_handicaps([self.player, other], self.round)

        self.assertEqual(course_handicaps, {self.player.id: 12, other.id: 0})

    def test_handicap_index_change_invalidates_cache(self):
        PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)

        self.player.handicap_index = Decimal("20.0")
        self.player.save()

        self.assertFalse(PlayerCourseHandicap.objects.filter(player=self.player).exists())
        course_handicap = PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)
        self.assertEqual(course_handicap, 24)

    def test_unrelated_player_change_keeps_cache(self):
        PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)

        self.player.name = "Renamed"
        self.player.save()

        self.assertTrue(PlayerCourseHandicap.objects.filter(player=self.player).exists())

    def test_course_rating_change_invalidates_cache(self):
        PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)

        self.course.slope_rating = 113
        self.course.save()

        self.assertFalse(PlayerCourseHandicap.objects.filter(round=self.round).exists())
        course_handicap = PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)
        self.assertEqual(course_handicap, 10)

    def test_course_change_on_round_invalidates_cache(self):
        PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)

        self.round.course = CourseFactory(course_rating=Decimal("70.0"), slope_rating=113, par=72)
        self.round.save()

        self.assertFalse(PlayerCourseHandicap.objects.filter(round=self.round).exists())
        course_handicap = PlayerCourseHandicap.objects.get_course_handicap(self.player, self.round)
        self.assertEqual(course_handicap, 8)

    def test_round_without_course_data_gets_zero(self):
        round_obj = RoundFactory(course=CourseFactory(course_rating=None, slope_rating=None, par=None))

        course_handicap = PlayerCourseHandicap.objects.get_course_handicap(self.player, round_obj)

        self.assertEqual(course_handicap, 0)
