from django.contrib import admin
from django.urls import path, include
from rest_framework.authtoken import views as auth_views
from rest_framework.routers import DefaultRouter

from courses import views as course_views
from events import views as event_views
from register import views as register_views
from scores import views as scoring_views

admin.site.site_header = "Rowdy Cup Administration"

# Create a router and register our viewsets with it.
router = DefaultRouter()
router.register(r"courses", course_views.CourseViewSet, "courses")
router.register(r"holes", course_views.HoleViewSet, "holes")
router.register(r"teams", register_views.TeamViewSet, "teams")
router.register(r"players", register_views.PlayerViewSet, "players")
router.register(r"course-handicaps", register_views.CourseHandicapViewSet, "course-handicaps")
router.register(r"tournaments", event_views.TournamentViewSet, "tournaments")
router.register(r"rounds", event_views.RoundViewSet, "rounds")
router.register(r"matches", event_views.MatchViewSet, "matches")
router.register(r"match-participants", event_views.MatchParticipantViewSet, "match-participants")
router.register(r"scores", scoring_views.ScoreViewSet, "scores")
router.register(r"player-scores", scoring_views.PlayerScoreViewSet, "player-scores")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/scores/record/", scoring_views.record_score),
    path("api/scores/record-players/", scoring_views.record_player_scores),
    path("api/", include(router.urls)),
    path("auth/token/login/", auth_views.obtain_auth_token, name="login"),
]
