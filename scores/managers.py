from django.db import models


class ScoreManager(models.Manager):

    def for_match(self, match):
        return self.filter(match=match).order_by("hole_number")


class PlayerScoreManager(models.Manager):

    def for_match(self, match):
        return self.filter(match=match).select_related("player").order_by("hole_number", "player")
