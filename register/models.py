from django.db import models
from django.db.models import CASCADE, PROTECT, UniqueConstraint

from .managers import PlayerCourseHandicapManager


class Team(models.Model):
    name = models.CharField(verbose_name="Name", max_length=60, unique=True)
    short_name = models.CharField(verbose_name="Short name", max_length=20)
    color_code = models.CharField(verbose_name="Color code", max_length=7, default="#000000")

    class Meta:
        ordering = ("name", )

    def __str__(self):
        return self.name


class Player(models.Model):
    name = models.CharField(verbose_name="Name", max_length=60)
    team = models.ForeignKey(verbose_name="Team", to=Team, related_name="players", on_delete=PROTECT)
    handicap_index = models.DecimalField(verbose_name="Handicap index", max_digits=4, decimal_places=1, blank=True,
                                         null=True)

    class Meta:
        ordering = ("team", "name")

    def __str__(self):
        return self.name


class PlayerCourseHandicap(models.Model):
    player = models.ForeignKey(verbose_name="Player", to=Player, related_name="course_handicaps", on_delete=CASCADE)
    round = models.ForeignKey(verbose_name="Round", to="events.Round", related_name="course_handicaps",
                              on_delete=CASCADE)
    course_handicap = models.IntegerField(verbose_name="Course handicap", default=0)

    objects = PlayerCourseHandicapManager()

    class Meta:
        verbose_name = "Player Course Handicap"
        verbose_name_plural = "Player Course Handicaps"
        constraints = [
            UniqueConstraint(fields=["player", "round"], name="unique_player_round_handicap")
        ]

    def __str__(self):
        return "{} - {}: {}".format(self.round, self.player, self.course_handicap)
