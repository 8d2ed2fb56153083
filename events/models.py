from django.conf import settings
from django.db import models
from django.db.models import CASCADE, PROTECT, SET_NULL, UniqueConstraint

from courses.models import Course
from core.util import current_season
from events.managers import TournamentManager, RoundManager, MatchManager
from events.utils import ScoreTotals
from register.models import Player, Team
from scores.match_play import MATCH_STATUS_CHOICES, TEAM_CHOICES, UPCOMING, COMPLETED

MATCH_TYPE_CHOICES = (
    ("Singles Match", "Singles Match"),
    ("2-man Team Best Ball", "2-man Team Best Ball"),
    ("4-man Team Best Ball", "4-man Team Best Ball"),
    ("2-man Team Scramble", "2-man Team Scramble"),
    ("2-man Team Shamble", "2-man Team Shamble"),
    ("Alternate Shot", "Alternate Shot"),
)


class TeamScoreFields(models.Model):
    team_a_score = models.DecimalField(verbose_name="Team A score", max_digits=5, decimal_places=1, default=0)
    team_b_score = models.DecimalField(verbose_name="Team B score", max_digits=5, decimal_places=1, default=0)
    pending_team_a_score = models.DecimalField(verbose_name="Team A pending score", max_digits=5, decimal_places=1,
                                               default=0)
    pending_team_b_score = models.DecimalField(verbose_name="Team B pending score", max_digits=5, decimal_places=1,
                                               default=0)

    class Meta:
        abstract = True

    def totals(self):
        return ScoreTotals(self.team_a_score, self.team_b_score, self.pending_team_a_score, self.pending_team_b_score)

    def apply_totals(self, totals):
        self.team_a_score = totals.team_a_score
        self.team_b_score = totals.team_b_score
        self.pending_team_a_score = totals.pending_team_a_score
        self.pending_team_b_score = totals.pending_team_b_score


class Tournament(TeamScoreFields):
    name = models.CharField(verbose_name="Name", max_length=100)
    year = models.IntegerField(verbose_name="Year", default=current_season)
    is_active = models.BooleanField(verbose_name="Is active", default=True)
    start_date = models.DateField(verbose_name="Start date", blank=True, null=True)
    end_date = models.DateField(verbose_name="End date", blank=True, null=True)
    team_a = models.ForeignKey(verbose_name="Team A", to=Team, related_name="+", null=True, blank=True,
                               on_delete=SET_NULL)
    team_b = models.ForeignKey(verbose_name="Team B", to=Team, related_name="+", null=True, blank=True,
                               on_delete=SET_NULL)

    objects = TournamentManager()

    class Meta:
        ordering = ("-year", "name")

    def __str__(self):
        return "{} {}".format(self.year, self.name)


class Round(TeamScoreFields):
    tournament = models.ForeignKey(verbose_name="Tournament", to=Tournament, related_name="rounds",
                                   on_delete=CASCADE)
    course = models.ForeignKey(verbose_name="Course", to=Course, related_name="rounds", null=True, blank=True,
                               on_delete=PROTECT)
    name = models.CharField(verbose_name="Name", max_length=100)
    match_type = models.CharField(verbose_name="Match type", max_length=40, choices=MATCH_TYPE_CHOICES,
                                  default="Singles Match")
    round_date = models.DateField(verbose_name="Round date", blank=True, null=True)
    start_time = models.CharField(verbose_name="Start time", max_length=20, blank=True, null=True)

    objects = RoundManager()

    class Meta:
        ordering = ("tournament", "round_date", "id")

    @property
    def is_best_ball(self):
        return settings.BEST_BALL_FORMAT_MARKER in (self.match_type or "")

    @property
    def is_complete(self):
        statuses = [match.status for match in self.matches.all()]
        return len(statuses) > 0 and all(status == COMPLETED for status in statuses)

    def __str__(self):
        return "{} - {}".format(self.tournament.name, self.name)


class Match(models.Model):
    round = models.ForeignKey(verbose_name="Round", to=Round, related_name="matches", on_delete=CASCADE)
    name = models.CharField(verbose_name="Name", max_length=100)
    status = models.CharField(verbose_name="Status", max_length=20, choices=MATCH_STATUS_CHOICES, default=UPCOMING)
    locked = models.BooleanField(verbose_name="Locked", default=False)
    leading_team = models.CharField(verbose_name="Leading team", max_length=1, choices=TEAM_CHOICES, blank=True,
                                    null=True)
    lead_amount = models.IntegerField(verbose_name="Lead amount", default=0)
    current_hole = models.IntegerField(verbose_name="Current hole", default=1)
    result = models.CharField(verbose_name="Result", max_length=10, blank=True, null=True)

    objects = MatchManager()

    class Meta:
        verbose_name_plural = "Matches"
        ordering = ("round", "id")

    def apply_summary(self, summary):
        self.leading_team = summary.leading_team
        self.lead_amount = summary.lead_amount
        self.status = summary.status
        self.result = summary.result
        self.current_hole = summary.current_hole

    def __str__(self):
        return "{}: {}".format(self.round, self.name)


class MatchParticipant(models.Model):
    match = models.ForeignKey(verbose_name="Match", to=Match, related_name="participants", on_delete=CASCADE)
    player = models.ForeignKey(verbose_name="Player", to=Player, related_name="match_participants",
                               on_delete=CASCADE)
    side = models.CharField(verbose_name="Side", max_length=1, choices=TEAM_CHOICES)

    class Meta:
        constraints = [
            UniqueConstraint(fields=["match", "player"], name="unique_match_player")
        ]

    def __str__(self):
        return "{} ({}) - {}".format(self.player, self.side, self.match)
