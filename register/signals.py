from django.conf import settings
from django.db.models.signals import pre_save, post_save
from django.dispatch import receiver

from .models import PlayerCourseHandicap


def best_ball_matches(**filters):
    from events.models import Match

    return Match.objects.filter(round__match_type__contains=settings.BEST_BALL_FORMAT_MARKER, **filters).distinct()


def recalculate_best_ball(matches):
    """Net scores depend on course handicaps, so unlocked best ball matches are scored again."""
    from scores.services import ScoringService

    ScoringService().recalculate_unlocked(matches)


@receiver(pre_save, sender="register.Player")
def invalidate_player_handicaps(sender, instance, **kwargs):
    instance.handicap_changed = False
    if instance.pk is None:
        return

    previous = sender.objects.filter(pk=instance.pk).values("handicap_index").first()
    if previous is not None and previous["handicap_index"] != instance.handicap_index:
        PlayerCourseHandicap.objects.invalidate_player(instance.pk)
        instance.handicap_changed = True


@receiver(post_save, sender="register.Player")
def rescore_player_matches(sender, instance, created, **kwargs):
    if getattr(instance, "handicap_changed", False):
        recalculate_best_ball(best_ball_matches(participants__player_id=instance.pk))


@receiver(pre_save, sender="courses.Course")
def invalidate_course_handicaps(sender, instance, **kwargs):
    instance.handicap_changed = False
    if instance.pk is None:
        return

    previous = sender.objects.filter(pk=instance.pk).values("course_rating", "slope_rating", "par").first()
    if previous is None:
        return

    current = {
        "course_rating": instance.course_rating,
        "slope_rating": instance.slope_rating,
        "par": instance.par,
    }
    if previous != current:
        PlayerCourseHandicap.objects.invalidate_course(instance.pk)
        instance.handicap_changed = True


@receiver(post_save, sender="courses.Course")
def rescore_course_matches(sender, instance, created, **kwargs):
    if getattr(instance, "handicap_changed", False):
        recalculate_best_ball(best_ball_matches(round__course_id=instance.pk))


@receiver(pre_save, sender="events.Round")
def invalidate_round_handicaps(sender, instance, **kwargs):
    instance.handicap_changed = False
    if instance.pk is None:
        return

    previous = sender.objects.filter(pk=instance.pk).values("course_id").first()
    if previous is not None and previous["course_id"] != instance.course_id:
        PlayerCourseHandicap.objects.invalidate_round(instance.pk)
        instance.handicap_changed = True


@receiver(post_save, sender="events.Round")
def rescore_round_matches(sender, instance, created, **kwargs):
    if getattr(instance, "handicap_changed", False):
        recalculate_best_ball(best_ball_matches(round_id=instance.pk))
