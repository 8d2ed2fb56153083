from rest_framework import serializers

from scores.models import Score, PlayerScore


class ScoreSerializer(serializers.ModelSerializer):

    class Meta:
        model = Score
        fields = ("id", "match", "hole_number", "team_a_score", "team_b_score", "winning_team", "leading_team",
                  "match_status", )
        read_only_fields = ("winning_team", "leading_team", "match_status", )


class PlayerScoreSerializer(serializers.ModelSerializer):

    player_name = serializers.CharField(source="player.name", read_only=True)

    class Meta:
        model = PlayerScore
        fields = ("id", "match", "player", "player_name", "hole_number", "gross_score", "handicap_strokes",
                  "net_score", "is_counting", )
        read_only_fields = ("handicap_strokes", "net_score", "is_counting", )


class ScoreUpdateSerializer(serializers.Serializer):
    match = serializers.IntegerField()
    hole_number = serializers.IntegerField()
    team_a_score = serializers.IntegerField(min_value=1, allow_null=True, required=False, default=None)
    team_b_score = serializers.IntegerField(min_value=1, allow_null=True, required=False, default=None)


class GrossScoreSerializer(serializers.Serializer):
    player = serializers.IntegerField()
    gross_score = serializers.IntegerField(min_value=1, allow_null=True)


class PlayerScoresUpdateSerializer(serializers.Serializer):
    match = serializers.IntegerField()
    hole_number = serializers.IntegerField()
    scores = GrossScoreSerializer(many=True)

    def validate_scores(self, value):
        if len(value) == 0:
            raise serializers.ValidationError("At least one player score is required")
        players = [score["player"] for score in value]
        if len(players) != len(set(players)):
            raise serializers.ValidationError("A player can only be scored once per hole")
        return value

    def gross_scores(self):
        return {score["player"]: score["gross_score"] for score in self.validated_data["scores"]}
