from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import CASCADE, UniqueConstraint

from courses.managers import CourseManager


class Course(models.Model):
    name = models.CharField(max_length=100, unique=True)
    location = models.CharField(max_length=100, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    course_rating = models.DecimalField(verbose_name="Course rating", max_digits=4, decimal_places=1, blank=True,
                                        null=True)
    slope_rating = models.IntegerField(verbose_name="Slope rating", blank=True, null=True)
    par = models.IntegerField(verbose_name="Par", blank=True, null=True)

    objects = CourseManager()

    def has_rating_data(self):
        return self.course_rating is not None and self.slope_rating is not None and self.par is not None

    def handicap_ranks(self):
        return {hole.hole_number: hole.handicap_rank for hole in self.holes.all()}

    def __str__(self):
        return self.name


class Hole(models.Model):
    course = models.ForeignKey(Course, related_name='holes', on_delete=CASCADE)
    hole_number = models.IntegerField(default=0, validators=[MinValueValidator(1), MaxValueValidator(18)])
    par = models.IntegerField(default=0)
    handicap_rank = models.IntegerField(verbose_name="Handicap rank", blank=True, null=True,
                                        validators=[MinValueValidator(1), MaxValueValidator(18)])

    class Meta:
        ordering = ("course", "hole_number")
        constraints = [
            UniqueConstraint(fields=["course", "hole_number"], name="unique_course_holenumber")
        ]

    def __str__(self):
        """
        Provide a human-readable label combining the course name and hole number.

        Returns:
            A string in the format "<course name> Hole <hole_number>".
        """
        return "{} Hole {}".format(self.course.name, self.hole_number)
