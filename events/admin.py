import structlog
from django.contrib import admin, messages

from core.util import linkify
from scores.exceptions import MatchLockedError
from scores.services import ScoringService
from .models import Tournament, Round, Match, MatchParticipant

logger = structlog.get_logger(__name__)


class RoundInline(admin.TabularInline):
    model = Round
    can_delete = False
    extra = 0
    show_change_link = True
    fields = ["name", "course", "match_type", "round_date", "team_a_score", "team_b_score", ]
    readonly_fields = ["team_a_score", "team_b_score", ]


class MatchParticipantInline(admin.TabularInline):
    model = MatchParticipant
    can_delete = True
    extra = 0
    fields = ["player", "side", ]

    def has_add_permission(self, request, obj=None):
        return not (obj and obj.locked) and super().has_add_permission(request, obj)

    def has_change_permission(self, request, obj=None):
        return not (obj and obj.locked) and super().has_change_permission(request, obj)

    def has_delete_permission(self, request, obj=None):
        return not (obj and obj.locked) and super().has_delete_permission(request, obj)


class TournamentAdmin(admin.ModelAdmin):
    fields = ["name", "year", "is_active", "start_date", "end_date", "team_a", "team_b", "team_a_score",
              "team_b_score", "pending_team_a_score", "pending_team_b_score", ]
    readonly_fields = ["team_a_score", "team_b_score", "pending_team_a_score", "pending_team_b_score", ]
    list_display = ["year", "name", "is_active", "team_a_score", "team_b_score", ]
    list_display_links = ("name", )
    list_filter = ("year", "is_active", )
    ordering = ["-year", "name", ]
    inlines = [RoundInline, ]
    save_on_top = True


class RoundAdmin(admin.ModelAdmin):
    fields = ["tournament", "name", "course", "match_type", "round_date", "start_time", "team_a_score",
              "team_b_score", "pending_team_a_score", "pending_team_b_score", ]
    readonly_fields = ["team_a_score", "team_b_score", "pending_team_a_score", "pending_team_b_score", ]
    list_display = ["name", linkify("tournament"), linkify("course"), "match_type", "round_date", "team_a_score",
                    "team_b_score", ]
    list_display_links = ("name", )
    list_filter = ("tournament", "match_type", )
    list_select_related = ("tournament", "course", )
    ordering = ["tournament", "round_date", ]
    search_fields = ["name", "tournament__name", ]
    save_on_top = True

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return self.readonly_fields + ["tournament", ]
        return self.readonly_fields

    def delete_model(self, request, obj):
        ScoringService().delete_round(obj.id)

    def delete_queryset(self, request, queryset):
        service = ScoringService()
        for round_obj in queryset:
            service.delete_round(round_obj.id)


class MatchAdmin(admin.ModelAdmin):
    fields = ["round", "name", "status", "locked", "leading_team", "lead_amount", "current_hole", "result", ]
    readonly_fields = ["status", "locked", "leading_team", "lead_amount", "current_hole", "result", ]
    list_display = ["name", linkify("round"), "status", "result", "locked", ]
    list_display_links = ("name", )
    list_filter = ("round__tournament", "round", "status", "locked", )
    list_select_related = ("round", "round__tournament", )
    ordering = ["round", "id", ]
    search_fields = ["name", "participants__player__name", ]
    inlines = [MatchParticipantInline, ]
    actions = ["lock_matches", "unlock_matches", "recalculate_matches", ]
    save_on_top = True

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return self.readonly_fields + ["round", ]
        return self.readonly_fields

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        if not form.instance.locked:
            ScoringService().recalculate_match(form.instance.id)

    def delete_model(self, request, obj):
        ScoringService().delete_match(obj.id)

    def delete_queryset(self, request, queryset):
        service = ScoringService()
        for match in queryset:
            service.delete_match(match.id)

    def lock_matches(self, request, queryset):
        service = ScoringService()
        for match in queryset:
            service.set_locked(match.id, True)
        self.message_user(request, "{} match(es) locked".format(queryset.count()), messages.SUCCESS)

    lock_matches.short_description = "Lock selected matches"

    def unlock_matches(self, request, queryset):
        service = ScoringService()
        for match in queryset:
            service.set_locked(match.id, False)
        self.message_user(request, "{} match(es) unlocked".format(queryset.count()), messages.SUCCESS)

    unlock_matches.short_description = "Unlock selected matches"

    def recalculate_matches(self, request, queryset):
        service = ScoringService()
        skipped = []
        for match in queryset:
            try:
                service.recalculate_match(match.id)
            except MatchLockedError:
                skipped.append(match.name)

        if skipped:
            logger.warning("Locked matches were not recalculated", matches=skipped)
            self.message_user(request, "Skipped locked matches: {}".format(", ".join(skipped)), messages.WARNING)
        else:
            self.message_user(request, "Matches recalculated", messages.SUCCESS)

    recalculate_matches.short_description = "Recalculate selected matches"


admin.site.register(Tournament, TournamentAdmin)
admin.site.register(Round, RoundAdmin)
admin.site.register(Match, MatchAdmin)
