import structlog

from django.db import models

from events.utils import round_totals, tournament_totals, player_records
from scores.match_play import COMPLETED

logger = structlog.get_logger(__name__)

TOTALS_FIELDS = ["team_a_score", "team_b_score", "pending_team_a_score", "pending_team_b_score"]


class TournamentManager(models.Manager):

    def refresh_totals(self, tournament_id):
        """
        Recompute the tournament's committed and pending totals from every match in
        every round, and save them.
        """
        tournament = self.select_for_update().get(pk=tournament_id)
        totals = tournament_totals(
            round_totals(round_obj.matches.values_list("status", "leading_team"))
            for round_obj in tournament.rounds.all()
        )
        tournament.apply_totals(totals)
        tournament.save(update_fields=TOTALS_FIELDS)

        logger.info("Tournament totals refreshed", tournament_id=tournament.id, **{
            key: str(value) for key, value in totals.to_dict().items()
        })
        return tournament

    def player_records(self, tournament_id):
        from events.models import MatchParticipant

        results = MatchParticipant.objects \
            .filter(match__round__tournament_id=tournament_id) \
            .filter(match__status=COMPLETED) \
            .values_list("player_id", "side", "match__leading_team")

        return player_records(results)


class RoundManager(models.Manager):

    def refresh_totals(self, round_id):
        round_obj = self.select_for_update().get(pk=round_id)
        totals = round_totals(round_obj.matches.values_list("status", "leading_team"))
        round_obj.apply_totals(totals)
        round_obj.save(update_fields=TOTALS_FIELDS)

        logger.info("Round totals refreshed", round_id=round_obj.id, **{
            key: str(value) for key, value in totals.to_dict().items()
        })
        return round_obj


class MatchManager(models.Manager):

    def get_for_update(self, match_id):
        """Fetch the match holding its row lock, so writes to one match run one at a time."""
        return self.select_for_update().get(pk=match_id)
