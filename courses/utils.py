from decimal import Decimal

import structlog

from core.util import round_half_up, to_decimal

logger = structlog.get_logger(__name__)

STANDARD_SLOPE = Decimal(113)
MAX_STROKES_RANK = 1
SECOND_STROKE_HANDICAP = 19


def calculate_course_handicap(handicap_index, course_rating, slope_rating, course_par):
    """
    Convert a handicap index into a course handicap for a specific course.

    course handicap = index * slope / 113 + (rating - par), rounded half up.

    Parameters:
        handicap_index: The player's index; None for an unrated player.
        course_rating: Course rating, e.g. 72.4.
        slope_rating: Slope rating, e.g. 135.
        course_par: Par for the course.

    Returns:
        int: The course handicap. Falls back to 0 when the player is unrated or the
        course is missing any of rating, slope or par.
    """
    if handicap_index is None:
        return 0

    if course_rating is None or slope_rating is None or course_par is None:
        logger.warning("Missing course data, using a course handicap of 0", handicap_index=str(handicap_index),
                       course_rating=course_rating, slope_rating=slope_rating, course_par=course_par)
        return 0

    index = to_decimal(handicap_index)
    raw = index * to_decimal(slope_rating) / STANDARD_SLOPE + (to_decimal(course_rating) - to_decimal(course_par))
    return round_half_up(raw)


def strokes_for_hole(course_handicap, handicap_rank):
    """
    Strokes received on one hole: 0, 1 or 2.

    A stroke is received on every hole whose rank is within the course handicap. Only
    the rank 1 hole gives a second stroke, once the course handicap reaches 19.
    """
    if not handicap_rank:
        return 0

    if handicap_rank == MAX_STROKES_RANK and course_handicap >= SECOND_STROKE_HANDICAP:
        return 2

    if course_handicap >= handicap_rank:
        return 1

    return 0


def course_handicap_for(player, course):
    if course is None:
        return calculate_course_handicap(player.handicap_index, None, None, None)
    return calculate_course_handicap(player.handicap_index, course.course_rating, course.slope_rating, course.par)
