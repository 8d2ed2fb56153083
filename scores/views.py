from django.shortcuts import get_object_or_404
from rest_framework import viewsets, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from events.models import Match
from scores.models import Score, PlayerScore
from scores.serializers import ScoreSerializer, PlayerScoreSerializer, ScoreUpdateSerializer, \
    PlayerScoresUpdateSerializer
from scores.services import ScoringService


class ScoreViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ScoreSerializer

    def get_queryset(self):
        queryset = Score.objects.all()
        match_id = self.request.query_params.get("match", None)
        hole_number = self.request.query_params.get("hole", None)

        if match_id is not None:
            queryset = queryset.filter(match=match_id)
        if hole_number is not None:
            queryset = queryset.filter(hole_number=hole_number)

        return queryset.order_by("match", "hole_number")


class PlayerScoreViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = PlayerScoreSerializer

    def get_queryset(self):
        queryset = PlayerScore.objects.select_related("player")
        match_id = self.request.query_params.get("match", None)
        player_id = self.request.query_params.get("player", None)

        if match_id is not None:
            queryset = queryset.filter(match=match_id)
        if player_id is not None:
            queryset = queryset.filter(player=player_id)

        return queryset.order_by("match", "hole_number", "player")


@api_view(("POST",))
@permission_classes((permissions.IsAuthenticated,))
def record_score(request):
    serializer = ScoreUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    match = get_object_or_404(Match, pk=data["match"])
    summary = ScoringService().record_hole_score(match.id, data["hole_number"], data["team_a_score"],
                                                 data["team_b_score"])

    return Response(summary.to_dict(), status=200)


@api_view(("POST",))
@permission_classes((permissions.IsAuthenticated,))
def record_player_scores(request):
    serializer = PlayerScoresUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    match = get_object_or_404(Match, pk=data["match"])
    summary, hole = ScoringService().record_player_scores(match.id, data["hole_number"], serializer.gross_scores())

    return Response({
        "match": summary.to_dict(),
        "hole": hole.to_dict(),
    }, status=200)
