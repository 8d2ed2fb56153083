from django.contrib import admin
from courses.models import Course, Hole


class HoleInline(admin.TabularInline):
    model = Hole
    can_delete = True
    extra = 0
    fields = ["hole_number", "par", "handicap_rank", ]


class CourseAdmin(admin.ModelAdmin):
    fields = ["name", "location", "description", "course_rating", "slope_rating", "par", ]
    list_display = ["name", "location", "course_rating", "slope_rating", "par", ]
    save_on_top = True
    inlines = [HoleInline, ]


admin.site.register(Course, CourseAdmin)
