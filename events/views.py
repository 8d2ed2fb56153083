from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from register.models import Player
from scores.services import ScoringService, build_scorecard
from .models import Tournament, Round, Match, MatchParticipant
from .serializers import TournamentSerializer, RoundSerializer, MatchSerializer, MatchParticipantSerializer


class TournamentViewSet(viewsets.ModelViewSet):
    serializer_class = TournamentSerializer

    def get_queryset(self):
        queryset = Tournament.objects.select_related("team_a", "team_b")
        year = self.request.query_params.get("year", None)
        active = self.request.query_params.get("active", None)

        if year is not None:
            queryset = queryset.filter(year=year)
        if active is not None and active == "true":
            queryset = queryset.filter(is_active=True)

        return queryset

    @action(detail=True, methods=["get"])
    def standings(self, request, pk):
        tournament = self.get_object()
        rounds = []
        for round_obj in tournament.rounds.all():
            rounds.append({
                "round": round_obj.id,
                "name": round_obj.name,
                "match_type": round_obj.match_type,
                "is_complete": round_obj.is_complete,
                **round_obj.totals().to_dict(),
            })

        return Response({
            "tournament": tournament.id,
            "rounds": rounds,
            **tournament.totals().to_dict(),
        }, status=200)

    @action(detail=True, methods=["get"], url_path="player-records")
    def player_records(self, request, pk):
        tournament = self.get_object()
        records = Tournament.objects.player_records(tournament.id)
        players = Player.objects.filter(pk__in=records.keys()).select_related("team")

        data = [{
            "player": player.id,
            "name": player.name,
            "team": player.team_id,
            **records[player.id],
        } for player in players]
        data.sort(key=lambda record: (-record["points"], record["name"]))

        return Response(data, status=200)


class RoundViewSet(viewsets.ModelViewSet):
    serializer_class = RoundSerializer

    def get_queryset(self):
        queryset = Round.objects.all()
        tournament_id = self.request.query_params.get("tournament", None)

        if tournament_id is not None:
            queryset = queryset.filter(tournament=tournament_id)

        return queryset

    def perform_destroy(self, instance):
        ScoringService().delete_round(instance.id)


class MatchViewSet(viewsets.ModelViewSet):
    serializer_class = MatchSerializer

    def get_queryset(self):
        queryset = Match.objects.prefetch_related("participants__player")
        round_id = self.request.query_params.get("round", None)
        status = self.request.query_params.get("status", None)

        if round_id is not None:
            queryset = queryset.filter(round=round_id)
        if status is not None:
            queryset = queryset.filter(status=status)

        return queryset

    def perform_destroy(self, instance):
        ScoringService().delete_match(instance.id)

    @action(detail=True, methods=["post"], permission_classes=[IsAuthenticated])
    def lock(self, request, pk):
        match = ScoringService().set_locked(self.get_object().id, True)
        return Response(MatchSerializer(match).data, status=200)

    @action(detail=True, methods=["post"], permission_classes=[IsAuthenticated])
    def unlock(self, request, pk):
        match = ScoringService().set_locked(self.get_object().id, False)
        return Response(MatchSerializer(match).data, status=200)

    @action(detail=True, methods=["post"], permission_classes=[IsAuthenticated])
    def recalculate(self, request, pk):
        summary = ScoringService().recalculate_match(self.get_object().id)
        return Response(summary.to_dict(), status=200)

    @action(detail=True, methods=["get"])
    def scorecard(self, request, pk):
        return Response(build_scorecard(self.get_object()), status=200)


class MatchParticipantViewSet(viewsets.ModelViewSet):
    serializer_class = MatchParticipantSerializer

    def get_queryset(self):
        queryset = MatchParticipant.objects.select_related("player")
        match_id = self.request.query_params.get("match", None)

        if match_id is not None:
            queryset = queryset.filter(match=match_id)

        return queryset

    def perform_create(self, serializer):
        ScoringService().change_roster(serializer.validated_data["match"].id, serializer.save)

    def perform_update(self, serializer):
        ScoringService().change_roster(serializer.instance.match_id, serializer.save)

    def perform_destroy(self, instance):
        ScoringService().change_roster(instance.match_id, instance.delete)
