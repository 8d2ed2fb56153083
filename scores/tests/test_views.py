import json

from django.contrib.auth.models import User
from django.test import TestCase
from http import HTTPStatus
from rest_framework.test import APIClient

from events.models import Match
from events.tests.factories import RoundFactory, BestBallRoundFactory, MatchFactory, MatchParticipantFactory, \
    create_course_with_holes
from scores.match_play import TEAM_A, TEAM_B


class RecordScoreViewTests(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(username="scorer", email="scorer@rowdycup.com", password="secret")
        self.match = MatchFactory(round=RoundFactory())
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def post_score(self, hole_number, team_a_score, team_b_score):
        data = json.dumps({
            "match": self.match.id,
            "hole_number": hole_number,
            "team_a_score": team_a_score,
            "team_b_score": team_b_score,
        })
        return self.client.post("/api/scores/record/", data=data, content_type="application/json")

    def test_record_score(self):
        response = self.post_score(1, 4, 5)

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.data["leading_team"], TEAM_A)
        self.assertEqual(response.data["status"], "in_progress")

    def test_requires_authentication(self):
        client = APIClient()
        response = client.post("/api/scores/record/", data=json.dumps({"match": self.match.id, "hole_number": 1}),
                               content_type="application/json")

        self.assertIn(response.status_code, (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN))

    def test_invalid_hole_number(self):
        response = self.post_score(0, 4, 5)

        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)

    def test_unknown_match(self):
        data = json.dumps({"match": 9999, "hole_number": 1, "team_a_score": 4, "team_b_score": 5})
        response = self.client.post("/api/scores/record/", data=data, content_type="application/json")

        self.assertEqual(response.status_code, HTTPStatus.NOT_FOUND)

    def test_locked_match_conflict(self):
        Match.objects.filter(pk=self.match.id).update(locked=True)

        response = self.post_score(1, 4, 5)

        self.assertEqual(response.status_code, HTTPStatus.CONFLICT)

    def test_scores_listed_for_match(self):
        self.post_score(1, 4, 5)
        self.post_score(2, 5, 5)

        response = self.client.get("/api/scores/?match={}".format(self.match.id))

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual([score["hole_number"] for score in response.data], [1, 2])
        self.assertEqual(response.data[1]["winning_team"], "halved")
        self.assertEqual(response.data[1]["match_status"], "1 UP")


class RecordPlayerScoresViewTests(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(username="scorer", email="scorer@rowdycup.com", password="secret")
        self.match = MatchFactory(round=BestBallRoundFactory(course=create_course_with_holes()))
        self.player_a = MatchParticipantFactory(match=self.match, side=TEAM_A).player
        self.player_b = MatchParticipantFactory(match=self.match, side=TEAM_B).player
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def test_record_player_scores(self):
        data = json.dumps({
            "match": self.match.id,
            "hole_number": 3,
            "scores": [
                {"player": self.player_a.id, "gross_score": 3},
                {"player": self.player_b.id, "gross_score": 4},
            ]
        })
        response = self.client.post("/api/scores/record-players/", data=data, content_type="application/json")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.data["match"]["leading_team"], TEAM_A)
        self.assertEqual(response.data["hole"]["team_a_score"], 3)
        self.assertEqual(len(response.data["hole"]["player_scores"]), 2)

    def test_team_score_rejected_for_best_ball(self):
        data = json.dumps({"match": self.match.id, "hole_number": 1, "team_a_score": 4, "team_b_score": 5})
        response = self.client.post("/api/scores/record/", data=data, content_type="application/json")

        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)

    def test_duplicate_player_rejected(self):
        data = json.dumps({
            "match": self.match.id,
            "hole_number": 1,
            "scores": [
                {"player": self.player_a.id, "gross_score": 3},
                {"player": self.player_a.id, "gross_score": 4},
            ]
        })
        response = self.client.post("/api/scores/record-players/", data=data, content_type="application/json")

        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)
