import structlog
from typing import Dict, Optional

from django.db import transaction

from events.models import Match, Round, Tournament
from register.models import PlayerCourseHandicap
from scores.exceptions import MatchLockedError, ScoringFormatError, PlayerNotInMatchError
from scores.match_play import COMPLETED, HOLES_PER_MATCH, MatchSummary, compute_match_state, hole_results, \
    validate_hole_number
from scores.models import Score, PlayerScore
from scores.utils import BestBallHole, BestBallPlayerScore, PlayerScoreIndex, player_hole_score, \
    player_totals

logger = structlog.get_logger(__name__)


class ScoringService:
    """
    The write path for hole scores.

    Every write runs in one transaction holding the match's row lock:
      1. Save the raw score.
      2. Best ball only: recompute strokes, net scores and team scores for every hole.
      3. Recompute the match from hole 1.
      4. Recompute the round totals.
      5. Recompute the tournament totals.
    """

    @transaction.atomic()
    def record_hole_score(self, match_id: int, hole_number: int, team_a_score: Optional[int],
                          team_b_score: Optional[int]) -> MatchSummary:
        validate_hole_number(hole_number)
        match = self._lock_match(match_id)

        if match.round.is_best_ball:
            raise ScoringFormatError(is_best_ball=True)

        Score.objects.update_or_create(match=match, hole_number=hole_number, defaults={
            "team_a_score": team_a_score,
            "team_b_score": team_b_score,
        })
        logger.info("Hole score recorded", match_id=match.id, hole_number=hole_number, team_a_score=team_a_score,
                    team_b_score=team_b_score)

        return self._recalculate(match)

    @transaction.atomic()
    def record_player_scores(self, match_id: int, hole_number: int, gross_scores: Dict[int, Optional[int]]):
        """
        Save gross scores for players in a best ball match.

        Parameters:
            match_id: The match being scored.
            hole_number: 1-18.
            gross_scores: Map of player id to gross score; None clears a player's score.

        Returns:
            (MatchSummary, BestBallHole): the match state and the scored hole with net
            scores and counting flags.
        """
        validate_hole_number(hole_number)
        match = self._lock_match(match_id)

        if not match.round.is_best_ball:
            raise ScoringFormatError(is_best_ball=False)

        participants = set(match.participants.values_list("player_id", flat=True))
        for player_id in gross_scores:
            if player_id not in participants:
                raise PlayerNotInMatchError(player_id)

        for player_id, gross_score in gross_scores.items():
            PlayerScore.objects.update_or_create(match=match, hole_number=hole_number, player_id=player_id,
                                                 defaults={"gross_score": gross_score})
        logger.info("Player scores recorded", match_id=match.id, hole_number=hole_number,
                    players=sorted(gross_scores.keys()))

        summary = self._recalculate(match)
        return summary, self.best_ball_hole(match, hole_number)

    @transaction.atomic()
    def recalculate_match(self, match_id: int) -> MatchSummary:
        match = self._lock_match(match_id)
        return self._recalculate(match)

    @transaction.atomic()
    def set_locked(self, match_id: int, locked: bool) -> Match:
        match = Match.objects.get_for_update(match_id)
        match.locked = locked
        match.save(update_fields=["locked"])
        logger.info("Match lock changed", match_id=match.id, locked=locked, status=match.status)
        return match

    @transaction.atomic()
    def delete_match(self, match_id: int):
        match = Match.objects.get_for_update(match_id)
        round_id = match.round_id
        tournament_id = match.round.tournament_id

        match.delete()
        logger.info("Match deleted", match_id=match_id, round_id=round_id)

        Round.objects.refresh_totals(round_id)
        Tournament.objects.refresh_totals(tournament_id)

    @transaction.atomic()
    def delete_round(self, round_id: int):
        round_obj = Round.objects.select_for_update().get(pk=round_id)
        tournament_id = round_obj.tournament_id

        round_obj.delete()
        logger.info("Round deleted", round_id=round_id, tournament_id=tournament_id)

        Tournament.objects.refresh_totals(tournament_id)

    @transaction.atomic()
    def change_roster(self, match_id: int, change):
        """
        Add, change or remove a match participant while holding the match's row lock,
        then recompute the match. The side a player is on decides which team their
        best ball scores count for.

        Parameters:
            match_id: The match whose roster is changing.
            change: Callable that performs the change, e.g. a serializer's save.

        Raises:
            MatchLockedError: The match is locked.
        """
        match = self._lock_match(match_id)
        result = change()
        logger.info("Match roster changed", match_id=match.id)
        self._recalculate(match)
        return result

    def recalculate_unlocked(self, matches):
        """Recompute every unlocked match in the queryset; locked matches stay frozen."""
        for match_id in matches.filter(locked=False).values_list("id", flat=True):
            self.recalculate_match(match_id)

    def best_ball_hole(self, match, hole_number) -> BestBallHole:
        sides = self._sides(match)
        player_scores = [
            BestBallPlayerScore(ps.player_id, sides.get(ps.player_id), ps.gross_score,
                                handicap_strokes=ps.handicap_strokes, net_score=ps.net_score)
            for ps in PlayerScore.objects.for_match(match).filter(hole_number=hole_number)
        ]
        return BestBallHole(hole_number, player_scores)

    def _lock_match(self, match_id):
        match = Match.objects.get_for_update(match_id)
        if match.locked:
            logger.warning("Rejected change to locked match", match_id=match.id)
            raise MatchLockedError(match.id)
        return match

    @staticmethod
    def _sides(match):
        return dict(match.participants.values_list("player_id", "side"))

    def _recalculate(self, match) -> MatchSummary:
        round_obj = match.round
        was_completed = match.status == COMPLETED

        if round_obj.is_best_ball:
            self._apply_best_ball(match, round_obj)

        scores = list(Score.objects.for_match(match))
        hole_scores = [score.as_hole_score() for score in scores]
        summary = compute_match_state(hole_scores)

        results = {result.hole_number: result for result in hole_results(hole_scores)}
        for score in scores:
            result = results[score.hole_number]
            score.winning_team = result.winning_team
            score.leading_team = result.leading_team if result.counted else None
            score.match_status = result.match_status
        Score.objects.bulk_update(scores, ["winning_team", "leading_team", "match_status"])

        match.apply_summary(summary)
        if summary.is_completed and not was_completed:
            match.locked = True
            logger.info("Match completed", match_id=match.id, result=summary.result,
                        leading_team=summary.leading_team, clinched_on=summary.clinched_on)
        match.save()

        Round.objects.refresh_totals(round_obj.id)
        Tournament.objects.refresh_totals(round_obj.tournament_id)

        return summary

    def _apply_best_ball(self, match, round_obj):
        ranks = round_obj.course.handicap_ranks() if round_obj.course is not None else {}
        participants = list(match.participants.select_related("player"))
        sides = {participant.player_id: participant.side for participant in participants}
        course_handicaps = PlayerCourseHandicap.objects.course_handicaps(
            [participant.player for participant in participants], round_obj
        )

        index = PlayerScoreIndex()
        player_scores = list(PlayerScore.objects.for_match(match))
        for ps in player_scores:
            index.record(match.id, ps.hole_number, player_hole_score(
                ps.player_id, sides.get(ps.player_id), ps.gross_score, course_handicaps.get(ps.player_id, 0),
                ranks.get(ps.hole_number),
            ))

        holes = {hole_number: index.best_ball_hole(match.id, hole_number) for hole_number in index.holes(match.id)}

        for ps in player_scores:
            computed = index.get(match.id, ps.hole_number, ps.player_id)
            ps.handicap_strokes = computed.handicap_strokes
            ps.net_score = computed.net_score
            ps.is_counting = computed.is_counting
        PlayerScore.objects.bulk_update(player_scores, ["handicap_strokes", "net_score", "is_counting"])

        for hole_number, best_ball in holes.items():
            Score.objects.update_or_create(match=match, hole_number=hole_number, defaults={
                "team_a_score": best_ball.team_a_score,
                "team_b_score": best_ball.team_b_score,
            })


def build_scorecard(match):
    """
    Hole by hole view of a match: par and rank for each hole, team scores and the
    running status, player scores for best ball, and gross totals per player.
    """
    round_obj = match.round
    course_holes = {hole.hole_number: hole for hole in round_obj.course.holes.all()} if round_obj.course else {}
    scores = {score.hole_number: score for score in Score.objects.for_match(match)}
    participants = list(match.participants.select_related("player").order_by("side", "player__name"))
    sides = {participant.player_id: participant.side for participant in participants}

    player_scores = {}
    gross_by_player = {participant.player_id: {} for participant in participants}
    for ps in PlayerScore.objects.for_match(match):
        player_scores.setdefault(ps.hole_number, []).append(
            BestBallPlayerScore(ps.player_id, sides.get(ps.player_id), ps.gross_score,
                                handicap_strokes=ps.handicap_strokes, net_score=ps.net_score,
                                is_counting=ps.is_counting).to_dict()
        )
        gross_by_player.setdefault(ps.player_id, {})[ps.hole_number] = ps.gross_score

    holes = []
    for hole_number in range(1, HOLES_PER_MATCH + 1):
        course_hole = course_holes.get(hole_number)
        score = scores.get(hole_number)
        holes.append({
            "hole_number": hole_number,
            "par": course_hole.par if course_hole else None,
            "handicap_rank": course_hole.handicap_rank if course_hole else None,
            "team_a_score": score.team_a_score if score else None,
            "team_b_score": score.team_b_score if score else None,
            "winning_team": score.winning_team if score else None,
            "leading_team": score.leading_team if score else None,
            "match_status": score.match_status if score else None,
            "player_scores": player_scores.get(hole_number, []),
        })

    course_handicaps = PlayerCourseHandicap.objects.course_handicaps(
        [participant.player for participant in participants], round_obj
    ) if round_obj.is_best_ball else {}

    players = []
    for participant in participants:
        totals = player_totals(gross_by_player.get(participant.player_id, {}))
        players.append({
            "player": participant.player_id,
            "name": participant.player.name,
            "side": participant.side,
            "course_handicap": course_handicaps.get(participant.player_id),
            **totals,
        })

    return {
        "match": match.id,
        "round": round_obj.id,
        "match_type": round_obj.match_type,
        "status": match.status,
        "result": match.result,
        "leading_team": match.leading_team,
        "lead_amount": match.lead_amount,
        "current_hole": match.current_hole,
        "locked": match.locked,
        "holes": holes,
        "players": players,
    }
