from django.contrib import admin

from core.util import linkify
from .models import Team, Player, PlayerCourseHandicap


class PlayerInline(admin.TabularInline):
    model = Player
    can_delete = False
    extra = 0
    show_change_link = True
    fields = ["name", "handicap_index", ]


class TeamAdmin(admin.ModelAdmin):
    fields = ["name", "short_name", "color_code", ]
    list_display = ["name", "short_name", "color_code", ]
    inlines = [PlayerInline, ]
    save_on_top = True


class PlayerAdmin(admin.ModelAdmin):
    model = Player
    save_on_top = True
    fields = ["name", "team", "handicap_index", ]
    list_display = ["name", linkify("team"), "handicap_index", ]
    list_display_links = ("name", )
    list_filter = ("team", )
    list_select_related = ("team", )
    ordering = ["team", "name", ]
    search_fields = ("name", )


class PlayerCourseHandicapAdmin(admin.ModelAdmin):
    fields = ["player", "round", "course_handicap", ]
    readonly_fields = fields
    list_display = ["id", linkify("player"), linkify("round"), "course_handicap", ]
    list_display_links = ("id", )
    list_filter = ("round", )
    list_select_related = ("player", "round", "round__tournament", )
    search_fields = ("player__name", )

    def has_add_permission(self, request):
        return False


admin.site.register(Team, TeamAdmin)
admin.site.register(Player, PlayerAdmin)
admin.site.register(PlayerCourseHandicap, PlayerCourseHandicapAdmin)
