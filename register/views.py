from django.shortcuts import get_object_or_404
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from events.models import Round
from .models import Team, Player, PlayerCourseHandicap
from .serializers import TeamSerializer, PlayerSerializer, PlayerCourseHandicapSerializer


class TeamViewSet(viewsets.ModelViewSet):

    queryset = Team.objects.all()
    serializer_class = TeamSerializer


class PlayerViewSet(viewsets.ModelViewSet):
    serializer_class = PlayerSerializer

    def get_queryset(self):
        queryset = Player.objects.select_related("team")
        team_id = self.request.query_params.get("team", None)

        if team_id is not None:
            queryset = queryset.filter(team=team_id)

        return queryset.order_by("team", "name")


class CourseHandicapViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = PlayerCourseHandicapSerializer

    def get_queryset(self):
        queryset = PlayerCourseHandicap.objects.all()
        round_id = self.request.query_params.get("round", None)
        player_id = self.request.query_params.get("player", None)

        if round_id is not None:
            queryset = queryset.filter(round=round_id)
        if player_id is not None:
            queryset = queryset.filter(player=player_id)

        return queryset.order_by("round", "player")

    @action(detail=False, methods=["get"])
    def lookup(self, request):
        """Course handicap for one player in one round, calculated on demand when not cached."""
        player = get_object_or_404(Player, pk=request.query_params.get("player", 0))
        round_obj = get_object_or_404(Round.objects.select_related("course"), pk=request.query_params.get("round", 0))
        course_handicap = PlayerCourseHandicap.objects.get_course_handicap(player, round_obj)

        return Response({
            "player": player.id,
            "round": round_obj.id,
            "course_handicap": course_handicap,
        }, status=200)
