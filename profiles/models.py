# profiles/models.py
from django.db import models
from django.conf import settings


class StudentProfile(models.Model):
    # All three must be filled in for the profile to count as complete
    COMPLETION_FIELDS = ("primary_phone", "emergency_contact_name", "emergency_contact_phone")

    GENDER_CHOICES = [
        ("male", "Male"),
        ("female", "Female"),
        ("other", "Other"),
        ("prefer_not_to_say", "Prefer not to say"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="student_profile",
    )

    # Academic (managed by admins)
    full_name = models.CharField(max_length=255)
    department = models.CharField(max_length=255, db_index=True)
    program = models.CharField(max_length=255, blank=True, null=True)
    semester = models.PositiveSmallIntegerField(blank=True, null=True)
    section = models.CharField(max_length=20, blank=True, null=True)
    student_id = models.CharField(max_length=50, unique=True, help_text="Institutional roll number")
    enrollment_year = models.PositiveIntegerField(blank=True, null=True)
    expected_graduation_year = models.PositiveIntegerField(blank=True, null=True)
    specialization = models.CharField(max_length=255, blank=True, null=True)
    cgpa = models.DecimalField(max_digits=4, decimal_places=2, blank=True, null=True)
    backlogs_count = models.PositiveIntegerField(default=0)

    # Personal (editable by the student)
    date_of_birth = models.DateField(blank=True, null=True)
    gender = models.CharField(max_length=20, choices=GENDER_CHOICES, blank=True, null=True)
    primary_phone = models.CharField(max_length=20, blank=True, null=True)
    alternate_phone = models.CharField(max_length=20, blank=True, null=True)
    personal_email = models.EmailField(blank=True, null=True)
    permanent_address = models.TextField(blank=True, null=True)
    current_address = models.TextField(blank=True, null=True)
    emergency_contact_name = models.CharField(max_length=255, blank=True, null=True)
    emergency_contact_phone = models.CharField(max_length=20, blank=True, null=True)
    profile_photo_url = models.URLField(max_length=1024, blank=True, null=True)

    profile_completed = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["full_name"]
        indexes = [
            models.Index(
                fields=["department", "semester", "section"],
                name="profile_dept_sem_sec_idx",
            ),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.student_id})"

    def has_completion_fields(self) -> bool:
        return all(getattr(self, field) for field in self.COMPLETION_FIELDS)

    def save(self, *args, **kwargs):
        self.profile_completed = self.has_completion_fields()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "profile_completed" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["profile_completed"]
        super().save(*args, **kwargs)
