from rest_framework import serializers

from register.serializers import TeamSerializer
from .models import Tournament, Round, Match, MatchParticipant


def fixed_on_update(serializer, field_name, value):
    """Existing rows cannot be moved to a different parent."""
    if serializer.instance is not None and getattr(serializer.instance, field_name) != value:
        raise serializers.ValidationError("{} cannot be changed once created".format(field_name.capitalize()))
    return value


class MatchParticipantSerializer(serializers.ModelSerializer):

    player_name = serializers.CharField(source="player.name", read_only=True)

    class Meta:
        model = MatchParticipant
        fields = ("id", "match", "player", "player_name", "side", )

    def validate_match(self, value):
        return fixed_on_update(self, "match", value)


class MatchSerializer(serializers.ModelSerializer):

    participants = MatchParticipantSerializer(many=True, read_only=True)

    class Meta:
        model = Match
        fields = ("id", "round", "name", "status", "locked", "leading_team", "lead_amount", "current_hole", "result",
                  "participants", )
        read_only_fields = ("status", "locked", "leading_team", "lead_amount", "current_hole", "result", )

    def validate_round(self, value):
        return fixed_on_update(self, "round", value)


class RoundSerializer(serializers.ModelSerializer):

    is_best_ball = serializers.BooleanField(read_only=True)

    class Meta:
        model = Round
        fields = ("id", "tournament", "course", "name", "match_type", "is_best_ball", "round_date", "start_time",
                  "team_a_score", "team_b_score", "pending_team_a_score", "pending_team_b_score", )
        read_only_fields = ("team_a_score", "team_b_score", "pending_team_a_score", "pending_team_b_score", )

    def validate_tournament(self, value):
        return fixed_on_update(self, "tournament", value)


class TournamentSerializer(serializers.ModelSerializer):

    team_a_detail = TeamSerializer(source="team_a", read_only=True)
    team_b_detail = TeamSerializer(source="team_b", read_only=True)

    class Meta:
        model = Tournament
        fields = ("id", "name", "year", "is_active", "start_date", "end_date", "team_a", "team_b", "team_a_detail",
                  "team_b_detail", "team_a_score", "team_b_score", "pending_team_a_score", "pending_team_b_score", )
        read_only_fields = ("team_a_score", "team_b_score", "pending_team_a_score", "pending_team_b_score", )
