from decimal import Decimal

from django.test import TestCase

from events.models import Match, MatchParticipant, Round, Tournament
from events.tests.factories import RoundFactory, BestBallRoundFactory, MatchFactory, MatchParticipantFactory, \
    PlayerFactory, create_course_with_holes
from scores.exceptions import MatchLockedError, ScoringFormatError, PlayerNotInMatchError, InvalidHoleNumberError
from scores.match_play import TEAM_A, TEAM_B, IN_PROGRESS, COMPLETED, UPCOMING
from scores.models import Score, PlayerScore
from scores.services import ScoringService, build_scorecard


class HoleScoreEntryTests(TestCase):

    def setUp(self):
        self.round = RoundFactory()
        self.match = MatchFactory(round=self.round)
        self.service = ScoringService()

    def test_first_score_starts_match(self):
        summary = self.service.record_hole_score(self.match.id, 1, 4, 5)

        match = Match.objects.get(pk=self.match.id)
        self.assertEqual(summary.status, IN_PROGRESS)
        self.assertEqual(match.status, IN_PROGRESS)
        self.assertEqual(match.leading_team, TEAM_A)
        self.assertEqual(match.lead_amount, 1)
        self.assertEqual(match.current_hole, 2)

    def test_hole_result_saved_with_score(self):
        self.service.record_hole_score(self.match.id, 1, 5, 4)

        score = Score.objects.get(match=self.match, hole_number=1)
        self.assertEqual(score.winning_team, TEAM_B)
        self.assertEqual(score.leading_team, TEAM_B)
        self.assertEqual(score.match_status, "1 UP")

    def test_resubmitting_a_hole_does_not_double_count(self):
        self.service.record_hole_score(self.match.id, 1, 4, 5)
        summary = self.service.record_hole_score(self.match.id, 1, 4, 5)

        self.assertEqual(Score.objects.filter(match=self.match).count(), 1)
        self.assertEqual(summary.team_a_wins, 1)
        self.assertEqual(summary.lead_amount, 1)

    def test_corrected_score_replaces_previous(self):
        self.service.record_hole_score(self.match.id, 1, 4, 5)
        summary = self.service.record_hole_score(self.match.id, 1, 5, 4)

        self.assertEqual(summary.leading_team, TEAM_B)
        self.assertEqual(summary.team_a_wins, 0)

    def test_round_and_tournament_pending_totals(self):
        self.service.record_hole_score(self.match.id, 1, 4, 5)

        round_obj = Round.objects.get(pk=self.round.id)
        tournament = Tournament.objects.get(pk=self.round.tournament_id)
        self.assertEqual(round_obj.pending_team_a_score, Decimal("1.0"))
        self.assertEqual(tournament.pending_team_a_score, Decimal("1.0"))
        self.assertEqual(tournament.team_a_score, Decimal("0"))

    def test_clinched_match_completes_and_locks(self):
        for hole_number in range(1, 11):
            summary = self.service.record_hole_score(self.match.id, hole_number, 3, 4)

        match = Match.objects.get(pk=self.match.id)
        self.assertEqual(summary.result, "10&8")
        self.assertEqual(match.status, COMPLETED)
        self.assertEqual(match.result, "10&8")
        self.assertTrue(match.locked)

        tournament = Tournament.objects.get(pk=self.round.tournament_id)
        self.assertEqual(tournament.team_a_score, Decimal("1.0"))
        self.assertEqual(tournament.pending_team_a_score, Decimal("0"))

    def test_locked_match_rejects_scores(self):
        self.service.record_hole_score(self.match.id, 1, 4, 5)
        self.service.set_locked(self.match.id, True)

        with self.assertRaises(MatchLockedError):
            self.service.record_hole_score(self.match.id, 1, 6, 3)

        score = Score.objects.get(match=self.match, hole_number=1)
        self.assertEqual((score.team_a_score, score.team_b_score), (4, 5))

    def test_unlocked_match_accepts_corrections(self):
        for hole_number in range(1, 11):
            self.service.record_hole_score(self.match.id, hole_number, 3, 4)

        self.service.set_locked(self.match.id, False)
        summary = self.service.record_hole_score(self.match.id, 10, 4, 3)

        match = Match.objects.get(pk=self.match.id)
        self.assertEqual(summary.status, IN_PROGRESS)
        self.assertEqual(match.status, IN_PROGRESS)
        self.assertEqual(match.lead_amount, 8)
        self.assertFalse(match.locked)

    def test_invalid_hole_number_rejected(self):
        with self.assertRaises(InvalidHoleNumberError):
            self.service.record_hole_score(self.match.id, 19, 4, 5)

        self.assertFalse(Score.objects.filter(match=self.match).exists())

    def test_player_scores_rejected_for_team_formats(self):
        with self.assertRaises(ScoringFormatError):
            self.service.record_player_scores(self.match.id, 1, {1: 4})

    def test_recalculate_is_idempotent(self):
        self.service.record_hole_score(self.match.id, 1, 4, 5)
        self.service.record_hole_score(self.match.id, 2, 4, 4)

        first = self.service.recalculate_match(self.match.id)
        second = self.service.recalculate_match(self.match.id)

        self.assertEqual(first, second)

    def test_clearing_scores_returns_match_to_upcoming(self):
        self.service.record_hole_score(self.match.id, 1, 4, 5)
        summary = self.service.record_hole_score(self.match.id, 1, None, None)

        self.assertEqual(summary.status, UPCOMING)

    def test_delete_match_refreshes_totals(self):
        self.service.record_hole_score(self.match.id, 1, 4, 5)

        self.service.delete_match(self.match.id)

        round_obj = Round.objects.get(pk=self.round.id)
        self.assertFalse(Match.objects.filter(pk=self.match.id).exists())
        self.assertEqual(round_obj.pending_team_a_score, Decimal("0"))


class BestBallEntryTests(TestCase):

    def setUp(self):
        self.course = create_course_with_holes(course_rating=Decimal("72.0"), slope_rating=113, par=72)
        self.round = BestBallRoundFactory(course=self.course)
        self.match = MatchFactory(round=self.round)
        self.a1 = MatchParticipantFactory(match=self.match, side=TEAM_A,
                                          player=PlayerFactory(handicap_index=Decimal("12.0"))).player
        self.a2 = MatchParticipantFactory(match=self.match, side=TEAM_A,
                                          player=PlayerFactory(handicap_index=Decimal("20.0"))).player
        self.b1 = MatchParticipantFactory(match=self.match, side=TEAM_B,
                                          player=PlayerFactory(handicap_index=Decimal("0.0"))).player
        self.b2 = MatchParticipantFactory(match=self.match, side=TEAM_B,
                                          player=PlayerFactory(handicap_index=Decimal("4.0"))).player
        self.service = ScoringService()

    def test_team_scores_use_best_net_score(self):
        # hole 5 is ranked 5
        summary, hole = self.service.record_player_scores(self.match.id, 5, {
            self.a1.id: 5,
            self.a2.id: 6,
            self.b1.id: 5,
            self.b2.id: 6,
        })

        self.assertEqual(hole.team_a_score, 4)
        self.assertEqual(hole.team_b_score, 5)
        self.assertEqual(hole.counting_players(TEAM_A), [self.a1.id])

        score = Score.objects.get(match=self.match, hole_number=5)
        self.assertEqual((score.team_a_score, score.team_b_score), (4, 5))
        self.assertEqual(score.winning_team, TEAM_A)
        self.assertEqual(summary.leading_team, TEAM_A)

        a1_score = PlayerScore.objects.get(match=self.match, hole_number=5, player=self.a1)
        self.assertEqual(a1_score.handicap_strokes, 1)
        self.assertEqual(a1_score.net_score, 4)
        self.assertTrue(a1_score.is_counting)

    def test_team_level_score_rejected(self):
        with self.assertRaises(ScoringFormatError):
            self.service.record_hole_score(self.match.id, 1, 4, 5)

    def test_player_outside_match_rejected(self):
        outsider = PlayerFactory()

        with self.assertRaises(PlayerNotInMatchError):
            self.service.record_player_scores(self.match.id, 1, {outsider.id: 4})

        self.assertFalse(PlayerScore.objects.filter(match=self.match).exists())

    def test_hole_waits_for_both_teams(self):
        summary, hole = self.service.record_player_scores(self.match.id, 1, {self.a1.id: 4})

        self.assertIsNone(hole.team_b_score)
        self.assertEqual(summary.status, IN_PROGRESS)
        self.assertIsNone(summary.leading_team)

    def test_handicap_change_recomputes_net_scores(self):
        self.service.record_player_scores(self.match.id, 5, {self.a1.id: 5, self.b1.id: 4})

        self.a1.handicap_index = Decimal("2.0")
        self.a1.save()

        a1_score = PlayerScore.objects.get(match=self.match, hole_number=5, player=self.a1)
        self.assertEqual(a1_score.handicap_strokes, 0)
        self.assertEqual(a1_score.net_score, 5)
        self.assertEqual(Match.objects.get(pk=self.match.id).leading_team, TEAM_B)

    def test_handicap_change_leaves_locked_match_alone(self):
        self.service.record_player_scores(self.match.id, 5, {self.a1.id: 5, self.b1.id: 4})
        self.service.set_locked(self.match.id, True)

        self.a1.handicap_index = Decimal("2.0")
        self.a1.save()

        a1_score = PlayerScore.objects.get(match=self.match, hole_number=5, player=self.a1)
        self.assertEqual(a1_score.net_score, 4)
        self.assertIsNone(Match.objects.get(pk=self.match.id).leading_team)

    def test_course_rating_change_recomputes_net_scores(self):
        self.service.record_player_scores(self.match.id, 5, {self.a1.id: 5, self.b1.id: 4})

        self.course.course_rating = Decimal("62.0")
        self.course.save()

        a1_score = PlayerScore.objects.get(match=self.match, hole_number=5, player=self.a1)
        self.assertEqual(a1_score.handicap_strokes, 0)
        self.assertEqual(Match.objects.get(pk=self.match.id).leading_team, TEAM_B)

    def test_side_change_recomputes_match(self):
        self.service.record_player_scores(self.match.id, 5, {self.a1.id: 5, self.b1.id: 4})
        participant = MatchParticipant.objects.get(match=self.match, player=self.b1)

        def move_to_team_a():
            participant.side = TEAM_A
            participant.save()

        self.service.change_roster(self.match.id, move_to_team_a)

        score = Score.objects.get(match=self.match, hole_number=5)
        self.assertEqual((score.team_a_score, score.team_b_score), (4, None))
        self.assertEqual(Match.objects.get(pk=self.match.id).leading_team, None)

    def test_locked_match_roster_cannot_change(self):
        self.service.set_locked(self.match.id, True)
        participant = MatchParticipant.objects.get(match=self.match, player=self.b1)

        with self.assertRaises(MatchLockedError):
            self.service.change_roster(self.match.id, participant.delete)

        self.assertTrue(MatchParticipant.objects.filter(pk=participant.pk).exists())

    def test_scorecard(self):
        self.service.record_player_scores(self.match.id, 5, {self.a1.id: 5, self.b1.id: 4})

        scorecard = build_scorecard(Match.objects.get(pk=self.match.id))

        self.assertEqual(len(scorecard["holes"]), 18)
        hole_five = scorecard["holes"][4]
        self.assertEqual(hole_five["handicap_rank"], 5)
        self.assertEqual(hole_five["match_status"], "AS")
        self.assertEqual(len(hole_five["player_scores"]), 2)
        totals = {player["player"]: player for player in scorecard["players"]}
        self.assertEqual(totals[self.a1.id]["front_nine"], 5)
        self.assertEqual(totals[self.a1.id]["course_handicap"], 12)
