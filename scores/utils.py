from typing import Dict, Iterable, List, Optional

from courses.utils import strokes_for_hole
from scores.match_play import HoleScore, TEAM_A, TEAM_B


class BestBallPlayerScore:
    def __init__(self, player_id: int, team: str, gross_score: Optional[int], handicap_strokes: int = 0,
                 net_score: Optional[int] = None, is_counting: bool = False):
        self.player_id = player_id
        self.team = team
        self.gross_score = gross_score
        self.handicap_strokes = handicap_strokes
        self.net_score = net_score
        self.is_counting = is_counting

    def to_dict(self):
        return {
            "player": self.player_id,
            "team": self.team,
            "gross_score": self.gross_score,
            "handicap_strokes": self.handicap_strokes,
            "net_score": self.net_score,
            "is_counting": self.is_counting,
        }

    def __repr__(self):
        return "BestBallPlayerScore({})".format(self.to_dict())


class BestBallHole:
    """Every player's score on one hole and the resulting team scores."""

    def __init__(self, hole_number: int, player_scores: List[BestBallPlayerScore]):
        self.hole_number = hole_number
        self.player_scores = player_scores
        self.team_a_score = team_score(player_scores, TEAM_A)
        self.team_b_score = team_score(player_scores, TEAM_B)

        for player_score in player_scores:
            best = {TEAM_A: self.team_a_score, TEAM_B: self.team_b_score}.get(player_score.team)
            player_score.is_counting = best is not None and player_score.net_score == best

    def as_hole_score(self):
        return HoleScore(self.hole_number, self.team_a_score, self.team_b_score)

    def counting_players(self, team):
        return [ps.player_id for ps in self.player_scores if ps.team == team and ps.is_counting]

    def to_dict(self):
        return {
            "hole_number": self.hole_number,
            "team_a_score": self.team_a_score,
            "team_b_score": self.team_b_score,
            "player_scores": [ps.to_dict() for ps in self.player_scores],
        }


def net_score(gross_score, handicap_strokes):
    if gross_score is None:
        return None
    return gross_score - handicap_strokes


def player_hole_score(player_id, team, gross_score, course_handicap, handicap_rank):
    strokes = strokes_for_hole(course_handicap, handicap_rank)
    return BestBallPlayerScore(player_id, team, gross_score, handicap_strokes=strokes,
                               net_score=net_score(gross_score, strokes))


def team_score(player_scores: Iterable[BestBallPlayerScore], team: str):
    """The team's best (lowest) net score on the hole, or None until a teammate has scored."""
    nets = [ps.net_score for ps in player_scores if ps.team == team and ps.net_score is not None]
    if not nets:
        return None
    return min(nets)


def score_best_ball_hole(hole_number, handicap_rank, entries, course_handicaps):
    """
    Apply handicap strokes to each player's gross score and find the counting scores.

    Parameters:
        hole_number: The hole being scored.
        handicap_rank: The hole's difficulty rank (1 is hardest), or None when unranked.
        entries: (player_id, team, gross_score) tuples; gross_score may be None.
        course_handicaps: Map of player_id to course handicap for the round.

    Returns:
        BestBallHole
    """
    player_scores = [
        player_hole_score(player_id, team, gross_score, course_handicaps.get(player_id, 0), handicap_rank)
        for player_id, team, gross_score in entries
    ]
    return BestBallHole(hole_number, player_scores)


def team_hole_score(hole_number, team_a_score, team_b_score):
    """Formats other than best ball enter one gross score per team, used as is."""
    return HoleScore(hole_number, team_a_score, team_b_score)


class PlayerScoreIndex:
    """
    Player scores keyed by (hole number, match id), then player id.

    Team scores are a derived view over the players on each hole.
    """

    def __init__(self):
        self._scores: Dict[tuple, Dict[int, BestBallPlayerScore]] = {}

    def record(self, match_id: int, hole_number: int, player_score: BestBallPlayerScore):
        self._scores.setdefault((hole_number, match_id), {})[player_score.player_id] = player_score

    def for_hole(self, match_id: int, hole_number: int) -> Dict[int, BestBallPlayerScore]:
        return self._scores.get((hole_number, match_id), {})

    def get(self, match_id: int, hole_number: int, player_id: int) -> Optional[BestBallPlayerScore]:
        return self.for_hole(match_id, hole_number).get(player_id)

    def holes(self, match_id: int) -> List[int]:
        return sorted(hole for hole, match in self._scores if match == match_id)

    def best_ball_hole(self, match_id: int, hole_number: int) -> BestBallHole:
        return BestBallHole(hole_number, list(self.for_hole(match_id, hole_number).values()))

    def hole_scores(self, match_id: int) -> List[HoleScore]:
        return [self.best_ball_hole(match_id, hole).as_hole_score() for hole in self.holes(match_id)]


def player_totals(gross_scores):
    """
    Front nine, back nine and total gross for one player.

    Parameters:
        gross_scores: Map of hole number to gross score; unplayed holes may be missing or None.
    """
    front = sum(score for hole, score in gross_scores.items() if score is not None and hole <= 9)
    back = sum(score for hole, score in gross_scores.items() if score is not None and hole > 9)
    return {
        "front_nine": front,
        "back_nine": back,
        "total": front + back,
    }
