from rest_framework.exceptions import APIException


class InvalidHoleNumberError(APIException):

    def __init__(self, hole_number, duplicate=False):
        self.status_code = 400
        self.hole_number = hole_number
        if duplicate:
            self.detail = f"Hole {hole_number} has more than one score"
        else:
            self.detail = f"Hole number {hole_number} is not between 1 and 18"


class MatchLockedError(APIException):

    def __init__(self, match_id):
        self.status_code = 409
        self.match_id = match_id
        self.detail = "This match is locked and scores can no longer be changed"


class ScoringFormatError(APIException):

    def __init__(self, is_best_ball):
        self.status_code = 400
        if is_best_ball:
            self.detail = "Best ball matches are scored one player at a time"
        else:
            self.detail = "Only best ball matches accept individual player scores"


class PlayerNotInMatchError(APIException):

    def __init__(self, player_id):
        self.status_code = 400
        self.player_id = player_id
        self.detail = f"Player {player_id} is not playing in this match"
