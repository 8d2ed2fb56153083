from django.contrib import admin

from core.util import linkify
from scores.models import Score, PlayerScore


class ScoreAdmin(admin.ModelAdmin):
    fields = ["match", "hole_number", "team_a_score", "team_b_score", "winning_team", "leading_team",
              "match_status", ]
    readonly_fields = fields
    list_display = ["id", linkify("match"), "hole_number", "team_a_score", "team_b_score", "winning_team",
                    "match_status", ]
    list_display_links = ("id", )
    list_select_related = ("match", "match__round", "match__round__tournament", )
    list_filter = ("match__round", )
    ordering = ["match", "hole_number", ]
    search_fields = ("match__name", )

    def has_add_permission(self, request):
        return False


class PlayerScoreAdmin(admin.ModelAdmin):
    fields = ["match", "player", "hole_number", "gross_score", "handicap_strokes", "net_score", "is_counting", ]
    readonly_fields = fields
    list_display = ["id", linkify("match"), linkify("player"), "hole_number", "gross_score", "net_score",
                    "is_counting", ]
    list_display_links = ("id", )
    list_select_related = ("match", "player", )
    list_filter = ("match__round", "is_counting", )
    ordering = ["match", "hole_number", "player", ]
    search_fields = ("player__name", "match__name", )

    def has_add_permission(self, request):
        return False


admin.site.register(Score, ScoreAdmin)
admin.site.register(PlayerScore, PlayerScoreAdmin)
