from rest_framework import viewsets

from .models import Course, Hole
from .serializers import CourseSerializer, HoleSerializer


class CourseViewSet(viewsets.ModelViewSet):

    queryset = Course.objects.with_holes()
    serializer_class = CourseSerializer


class HoleViewSet(viewsets.ModelViewSet):

    serializer_class = HoleSerializer

    def get_queryset(self):
        queryset = Hole.objects.all()
        course_id = self.request.query_params.get("course", None)

        if course_id is not None:
            queryset = queryset.filter(course=course_id)

        return queryset.order_by("course", "hole_number")
