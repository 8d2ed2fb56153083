from rest_framework import serializers

from .models import Team, Player, PlayerCourseHandicap


class TeamSerializer(serializers.ModelSerializer):

    class Meta:
        model = Team
        fields = ("id", "name", "short_name", "color_code", )


class PlayerSerializer(serializers.ModelSerializer):

    team_name = serializers.CharField(source="team.name", read_only=True)

    class Meta:
        model = Player
        fields = ("id", "name", "team", "team_name", "handicap_index", )


class PlayerCourseHandicapSerializer(serializers.ModelSerializer):

    class Meta:
        model = PlayerCourseHandicap
        fields = ("id", "player", "round", "course_handicap", )
        read_only_fields = ("course_handicap", )
