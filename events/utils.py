from collections import defaultdict
from decimal import Decimal

from scores.match_play import COMPLETED, IN_PROGRESS, TEAM_A, TEAM_B

WIN_POINTS = Decimal("1.0")
HALF_POINTS = Decimal("0.5")
NO_POINTS = Decimal("0.0")


class ScoreTotals:
    def __init__(self, team_a_score=NO_POINTS, team_b_score=NO_POINTS, pending_team_a_score=NO_POINTS,
                 pending_team_b_score=NO_POINTS):
        self.team_a_score = Decimal(team_a_score)
        self.team_b_score = Decimal(team_b_score)
        self.pending_team_a_score = Decimal(pending_team_a_score)
        self.pending_team_b_score = Decimal(pending_team_b_score)

    def __add__(self, other):
        return ScoreTotals(
            self.team_a_score + other.team_a_score,
            self.team_b_score + other.team_b_score,
            self.pending_team_a_score + other.pending_team_a_score,
            self.pending_team_b_score + other.pending_team_b_score,
        )

    def __eq__(self, other):
        if not isinstance(other, ScoreTotals):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return "ScoreTotals({})".format(self.to_dict())

    def to_dict(self):
        return {
            "team_a_score": self.team_a_score,
            "team_b_score": self.team_b_score,
            "pending_team_a_score": self.pending_team_a_score,
            "pending_team_b_score": self.pending_team_b_score,
        }


def match_points(leading_team):
    if leading_team == TEAM_A:
        return WIN_POINTS, NO_POINTS
    if leading_team == TEAM_B:
        return NO_POINTS, WIN_POINTS
    return HALF_POINTS, HALF_POINTS


def match_totals(status, leading_team):
    """
    Points one match contributes to its round.

    A completed match is worth 1 point to the winner, or half a point each when all
    square. A match still being played is split the same way on its current standing,
    but counted as pending. An upcoming match contributes nothing.
    """
    if status == COMPLETED:
        team_a, team_b = match_points(leading_team)
        return ScoreTotals(team_a_score=team_a, team_b_score=team_b)
    if status == IN_PROGRESS:
        team_a, team_b = match_points(leading_team)
        return ScoreTotals(pending_team_a_score=team_a, pending_team_b_score=team_b)
    return ScoreTotals()


def round_totals(matches):
    """Sum of match points over (status, leading_team) pairs for every match in a round."""
    totals = ScoreTotals()
    for status, leading_team in matches:
        totals = totals + match_totals(status, leading_team)
    return totals


def tournament_totals(rounds):
    totals = ScoreTotals()
    for totals_for_round in rounds:
        totals = totals + totals_for_round
    return totals


def player_records(results):
    """
    Win/loss/tie record and points per player from completed matches.

    Parameters:
        results: (player_id, side, leading_team) tuples, one per participant in each
            completed match.

    Returns:
        dict: player_id -> {"wins", "losses", "ties", "points", "matches_played"}
    """
    records = defaultdict(lambda: {"wins": 0, "losses": 0, "ties": 0, "points": NO_POINTS, "matches_played": 0})

    for player_id, side, leading_team in results:
        record = records[player_id]
        record["matches_played"] += 1
        if leading_team is None:
            record["ties"] += 1
            record["points"] += HALF_POINTS
        elif leading_team == side:
            record["wins"] += 1
            record["points"] += WIN_POINTS
        else:
            record["losses"] += 1

    return dict(records)
