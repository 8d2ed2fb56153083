from django.db import models


class CourseManager(models.Manager):

    def with_holes(self):
        return self.prefetch_related("holes")
