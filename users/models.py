# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    ROLE_STUDENT = "student"
    ROLE_EDUCATOR = "educator"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = (
        (ROLE_STUDENT, 'Student'),
        (ROLE_EDUCATOR, 'Educator'),
        (ROLE_ADMIN, 'Admin'),
    )

    # Login is by email; username just mirrors it
    email = models.EmailField(unique=True)

    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=ROLE_STUDENT,
    )

    @property
    def is_student(self):
        return self.role == self.ROLE_STUDENT

    @property
    def is_educator(self):
        return self.role == self.ROLE_EDUCATOR

    @property
    def is_portal_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def display_name(self):
        profile = getattr(self, "student_profile", None)
        if profile is not None and profile.full_name:
            return profile.full_name
        return self.get_full_name() or self.email or self.username

    def __str__(self):
        return self.email or self.username
