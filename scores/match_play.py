"""
Match play state machine.

A match is scored hole by hole: the side with the lower score wins the hole, equal
scores halve it. The match state is always derived from the full sequence of hole
scores, so re-running it over the same scores gives the same answer no matter how
many times, or in which order, the individual holes were entered.
"""
from typing import Iterable, List, Optional

from scores.exceptions import InvalidHoleNumberError

HOLES_PER_MATCH = 18

TEAM_A = "A"
TEAM_B = "B"
HALVED = "halved"

TEAM_CHOICES = (
    (TEAM_A, "Team A"),
    (TEAM_B, "Team B"),
)

UPCOMING = "upcoming"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"

MATCH_STATUS_CHOICES = (
    (UPCOMING, "Upcoming"),
    (IN_PROGRESS, "In Progress"),
    (COMPLETED, "Completed"),
)

ALL_SQUARE = "AS"


class HoleScore:
    """The two team scores for one hole. Either side may still be missing."""

    def __init__(self, hole_number: int, team_a_score: Optional[int] = None, team_b_score: Optional[int] = None):
        self.hole_number = hole_number
        self.team_a_score = team_a_score
        self.team_b_score = team_b_score

    def is_complete(self):
        return self.team_a_score is not None and self.team_b_score is not None

    def is_started(self):
        return self.team_a_score is not None or self.team_b_score is not None

    def winner(self):
        if not self.is_complete():
            return None
        if self.team_a_score < self.team_b_score:
            return TEAM_A
        if self.team_b_score < self.team_a_score:
            return TEAM_B
        return HALVED

    def __repr__(self):
        return "HoleScore({}, {}, {})".format(self.hole_number, self.team_a_score, self.team_b_score)


class HoleResult:
    """How one hole went, and where the match stood after it."""

    def __init__(self, hole_number: int, winning_team: Optional[str], leading_team: Optional[str],
                 lead_amount: int, counted: bool):
        self.hole_number = hole_number
        self.winning_team = winning_team
        self.leading_team = leading_team
        self.lead_amount = lead_amount
        self.counted = counted

    @property
    def match_status(self):
        if not self.counted:
            return None
        return format_running_status(self.lead_amount)

    def to_dict(self):
        return {
            "hole_number": self.hole_number,
            "winning_team": self.winning_team,
            "leading_team": self.leading_team if self.counted else None,
            "lead_amount": self.lead_amount if self.counted else 0,
            "match_status": self.match_status,
        }


class MatchSummary:

    def __init__(self, leading_team: Optional[str] = None, lead_amount: int = 0, status: str = UPCOMING,
                 result: Optional[str] = None, team_a_wins: int = 0, team_b_wins: int = 0, thru: int = 0,
                 clinched_on: Optional[int] = None):
        self.leading_team = leading_team
        self.lead_amount = lead_amount
        self.status = status
        self.result = result
        self.team_a_wins = team_a_wins
        self.team_b_wins = team_b_wins
        self.thru = thru
        self.clinched_on = clinched_on

    @property
    def is_completed(self):
        return self.status == COMPLETED

    @property
    def current_hole(self):
        return min(self.thru + 1, HOLES_PER_MATCH)

    def to_dict(self):
        return {
            "leading_team": self.leading_team,
            "lead_amount": self.lead_amount,
            "status": self.status,
            "result": self.result,
            "team_a_wins": self.team_a_wins,
            "team_b_wins": self.team_b_wins,
            "thru": self.thru,
            "clinched_on": self.clinched_on,
        }

    def __eq__(self, other):
        if not isinstance(other, MatchSummary):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return "MatchSummary({})".format(self.to_dict())


def validate_hole_number(hole_number):
    if isinstance(hole_number, bool) or not isinstance(hole_number, int):
        raise InvalidHoleNumberError(hole_number)
    if hole_number < 1 or hole_number > HOLES_PER_MATCH:
        raise InvalidHoleNumberError(hole_number)
    return hole_number


def order_hole_scores(hole_scores: Iterable[HoleScore]) -> List[HoleScore]:
    """Sort hole scores by hole number, rejecting numbers out of range or entered twice."""
    seen = set()
    ordered = []
    for hole_score in hole_scores:
        validate_hole_number(hole_score.hole_number)
        if hole_score.hole_number in seen:
            raise InvalidHoleNumberError(hole_score.hole_number, duplicate=True)
        seen.add(hole_score.hole_number)
        ordered.append(hole_score)
    return sorted(ordered, key=lambda s: s.hole_number)


def leader(team_a_wins, team_b_wins):
    if team_a_wins > team_b_wins:
        return TEAM_A
    if team_b_wins > team_a_wins:
        return TEAM_B
    return None


def is_clinched(lead_amount, hole_number):
    """The trailing side can no longer catch up: the lead is bigger than the holes left."""
    return hole_number < HOLES_PER_MATCH and lead_amount > HOLES_PER_MATCH - hole_number


def format_result(lead_amount, holes_remaining=0):
    if lead_amount == 0:
        return ALL_SQUARE
    if holes_remaining > 0:
        return "{}&{}".format(lead_amount, holes_remaining)
    return "{} UP".format(lead_amount)


def format_running_status(lead_amount):
    if lead_amount == 0:
        return ALL_SQUARE
    return "{} UP".format(lead_amount)


def hole_results(hole_scores: Iterable[HoleScore]) -> List[HoleResult]:
    """
    Walk the holes in order and report each one's winner plus the running match status.

    Holes that are not fully scored are reported without a winner and do not move the
    tally. Once the match is clinched, every later hole is reported as not counted.
    """
    results = []
    team_a_wins = 0
    team_b_wins = 0
    clinched = False

    for hole_score in order_hole_scores(hole_scores):
        if clinched or not hole_score.is_complete():
            results.append(HoleResult(hole_score.hole_number, None, leader(team_a_wins, team_b_wins),
                                      abs(team_a_wins - team_b_wins), counted=False))
            continue

        winner = hole_score.winner()
        if winner == TEAM_A:
            team_a_wins += 1
        elif winner == TEAM_B:
            team_b_wins += 1

        lead_amount = abs(team_a_wins - team_b_wins)
        results.append(HoleResult(hole_score.hole_number, winner, leader(team_a_wins, team_b_wins), lead_amount,
                                  counted=True))
        clinched = is_clinched(lead_amount, hole_score.hole_number)

    return results


def compute_match_state(hole_scores: Iterable[HoleScore]) -> MatchSummary:
    """
    Derive the complete match state from every hole score recorded for the match.

    Parameters:
        hole_scores: HoleScore objects in any order; at most one per hole number.

    Returns:
        MatchSummary: leading team, lead amount, status and, once completed, the result.
        A clinched match reads "<lead>&<holes remaining>" (e.g. "3&2"). A match that goes
        the distance reads "<lead> UP", or "AS" when all square.

    Raises:
        InvalidHoleNumberError: A hole number is outside 1-18 or appears twice.
    """
    ordered = order_hole_scores(hole_scores)
    results = hole_results(ordered)

    team_a_wins = sum(1 for r in results if r.counted and r.winning_team == TEAM_A)
    team_b_wins = sum(1 for r in results if r.counted and r.winning_team == TEAM_B)
    lead_amount = abs(team_a_wins - team_b_wins)
    leading_team = leader(team_a_wins, team_b_wins)
    counted = [r.hole_number for r in results if r.counted]
    thru = max(counted) if counted else 0

    summary = MatchSummary(leading_team=leading_team, lead_amount=lead_amount, team_a_wins=team_a_wins,
                           team_b_wins=team_b_wins, thru=thru)

    if not any(s.is_started() for s in ordered):
        return summary

    clinched_on = next((r.hole_number for r in results if r.counted and is_clinched(r.lead_amount, r.hole_number)),
                       None)
    if clinched_on is not None:
        summary.status = COMPLETED
        summary.clinched_on = clinched_on
        summary.result = format_result(lead_amount, HOLES_PER_MATCH - clinched_on)
    elif len(counted) == HOLES_PER_MATCH:
        summary.status = COMPLETED
        summary.result = format_result(lead_amount)
    else:
        summary.status = IN_PROGRESS

    return summary
