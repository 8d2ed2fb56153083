import structlog

from django.db import models

from courses.utils import course_handicap_for

logger = structlog.get_logger(__name__)


class PlayerCourseHandicapManager(models.Manager):

    def get_course_handicap(self, player, round_obj):
        """
        Return the player's course handicap for a round, computing and caching it when
        no cached value exists.
        """
        record = self.filter(player=player, round=round_obj).first()
        if record is not None:
            return record.course_handicap
        return self.refresh(player, round_obj).course_handicap

    def course_handicaps(self, players, round_obj):
        return {player.id: self.get_course_handicap(player, round_obj) for player in players}

    def refresh(self, player, round_obj):
        course_handicap = course_handicap_for(player, round_obj.course)
        record, _ = self.update_or_create(player=player, round=round_obj,
                                          defaults={"course_handicap": course_handicap})
        logger.info("Course handicap calculated", player_id=player.id, round_id=round_obj.id,
                    handicap_index=str(player.handicap_index), course_handicap=course_handicap)
        return record

    def invalidate_player(self, player_id):
        count, _ = self.filter(player_id=player_id).delete()
        logger.info("Course handicaps invalidated for player", player_id=player_id, count=count)

    def invalidate_course(self, course_id):
        count, _ = self.filter(round__course_id=course_id).delete()
        logger.info("Course handicaps invalidated for course", course_id=course_id, count=count)

    def invalidate_round(self, round_id):
        count, _ = self.filter(round_id=round_id).delete()
        logger.info("Course handicaps invalidated for round", round_id=round_id, count=count)
