from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import UniqueConstraint, CASCADE

from events.models import Match
from register.models import Player
from scores.managers import ScoreManager, PlayerScoreManager
from scores.match_play import HoleScore, TEAM_CHOICES

HOLE_WINNER_CHOICES = TEAM_CHOICES + (("halved", "Halved"), )


class Score(models.Model):
    match = models.ForeignKey(verbose_name="Match", to=Match, related_name="scores", on_delete=CASCADE)
    hole_number = models.IntegerField(verbose_name="Hole number",
                                      validators=[MinValueValidator(1), MaxValueValidator(18)])
    team_a_score = models.IntegerField(verbose_name="Team A score", blank=True, null=True)
    team_b_score = models.IntegerField(verbose_name="Team B score", blank=True, null=True)
    winning_team = models.CharField(verbose_name="Hole won by", max_length=6, choices=HOLE_WINNER_CHOICES,
                                    blank=True, null=True)
    leading_team = models.CharField(verbose_name="Leading team after hole", max_length=1, choices=TEAM_CHOICES,
                                    blank=True, null=True)
    match_status = models.CharField(verbose_name="Match status after hole", max_length=10, blank=True, null=True)

    objects = ScoreManager()

    class Meta:
        verbose_name = "Hole Score"
        verbose_name_plural = "Hole Scores"
        ordering = ("match", "hole_number")
        constraints = [
            UniqueConstraint(fields=["match", "hole_number"], name="unique_match_hole")
        ]

    def as_hole_score(self):
        return HoleScore(self.hole_number, self.team_a_score, self.team_b_score)

    def __str__(self):
        return "{} Hole {}: {} - {}".format(self.match, self.hole_number, self.team_a_score, self.team_b_score)


class PlayerScore(models.Model):
    match = models.ForeignKey(verbose_name="Match", to=Match, related_name="player_scores", on_delete=CASCADE)
    player = models.ForeignKey(verbose_name="Player", to=Player, related_name="hole_scores", on_delete=CASCADE)
    hole_number = models.IntegerField(verbose_name="Hole number",
                                      validators=[MinValueValidator(1), MaxValueValidator(18)])
    gross_score = models.IntegerField(verbose_name="Gross score", blank=True, null=True)
    handicap_strokes = models.IntegerField(verbose_name="Handicap strokes", default=0)
    net_score = models.IntegerField(verbose_name="Net score", blank=True, null=True)
    is_counting = models.BooleanField(verbose_name="Counting score", default=False)

    objects = PlayerScoreManager()

    class Meta:
        verbose_name = "Player Hole Score"
        verbose_name_plural = "Player Hole Scores"
        ordering = ("match", "hole_number", "player")
        constraints = [
            UniqueConstraint(fields=["match", "hole_number", "player"], name="unique_match_hole_player")
        ]

    def __str__(self):
        return "{} Hole {}: {} {}".format(self.match, self.hole_number, self.player, self.gross_score)
