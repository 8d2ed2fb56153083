from .models import Course, Hole
from rest_framework import serializers


class HoleSerializer(serializers.ModelSerializer):

    class Meta:
        model = Hole
        fields = ("id", "course", "hole_number", "par", "handicap_rank", )


class CourseSerializer(serializers.ModelSerializer):
    holes = HoleSerializer(many=True, read_only=True)
    has_rating_data = serializers.BooleanField(read_only=True)

    class Meta:
        model = Course
        fields = ("id", "name", "location", "description", "course_rating", "slope_rating", "par", "has_rating_data",
                  "holes", )
