# activities/models.py
from django.db import models
from django.conf import settings


class Activity(models.Model):
    STATUS_PENDING = "pending"
    STATUS_VERIFIED = "verified"
    STATUS_REJECTED = "rejected"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_VERIFIED, "Verified"),
        (STATUS_REJECTED, "Rejected"),
    ]

    CATEGORY_ACADEMICS = "Academics"
    CATEGORY_SPORTS = "Sports"
    CATEGORY_VOLUNTEERING = "Volunteering"
    CATEGORY_INTERNSHIPS = "Internships"
    CATEGORY_SKILLS = "Skills"
    CATEGORY_CO_CURRICULAR = "Co-curricular"

    CATEGORY_CHOICES = [
        (CATEGORY_ACADEMICS, "Academics"),
        (CATEGORY_SPORTS, "Sports"),
        (CATEGORY_VOLUNTEERING, "Volunteering"),
        (CATEGORY_INTERNSHIPS, "Internships"),
        (CATEGORY_SKILLS, "Skills"),
        (CATEGORY_CO_CURRICULAR, "Co-curricular"),
    ]

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="activities",
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    category = models.CharField(max_length=100, choices=CATEGORY_CHOICES)
    date = models.DateField()
    proof = models.TextField(blank=True, null=True, help_text="Link or note backing the claim")

    status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )

    # Set on verified/rejected, cleared on pending
    verified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="verified_activities",
        null=True,
        blank=True,
    )
    verified_at = models.DateTimeField(null=True, blank=True)

    # Set only while verified
    certificate_token = models.CharField(
        max_length=64,
        unique=True,
        null=True,
        blank=True,
    )
    qr_code = models.TextField(null=True, blank=True, help_text="PNG data URL")
    certificate_issued_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "activities"
        indexes = [
            models.Index(
                fields=["student", "created_at"],
                name="activity_student_created_idx",
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"

    @property
    def is_verified(self):
        return self.status == self.STATUS_VERIFIED

    @classmethod
    def status_values(cls):
        return [value for value, _ in cls.STATUS_CHOICES]

    @classmethod
    def category_values(cls):
        return [value for value, _ in cls.CATEGORY_CHOICES]
