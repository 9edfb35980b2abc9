from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from core.sanitizers import sanitize_text
from .models import StudentProfile

User = get_user_model()


# Fields a student may change on their own profile
STUDENT_EDITABLE_FIELDS = [
    "date_of_birth",
    "gender",
    "primary_phone",
    "alternate_phone",
    "personal_email",
    "permanent_address",
    "current_address",
    "emergency_contact_name",
    "emergency_contact_phone",
    "profile_photo_url",
]

REQUIRED_CREATE_FIELDS = ["user_id", "full_name", "department", "student_id"]

PROFILE_FIELDS = [
    "id",
    "user_id",
    "email",
    "full_name",
    "department",
    "program",
    "semester",
    "section",
    "student_id",
    "enrollment_year",
    "expected_graduation_year",
    "specialization",
    "cgpa",
    "backlogs_count",
    "date_of_birth",
    "gender",
    "primary_phone",
    "alternate_phone",
    "personal_email",
    "permanent_address",
    "current_address",
    "emergency_contact_name",
    "emergency_contact_phone",
    "profile_photo_url",
    "profile_completed",
    "created_at",
    "updated_at",
]


class StudentProfileSerializer(serializers.ModelSerializer):
    user_id = serializers.PrimaryKeyRelatedField(
        source="user",
        queryset=User.objects.all(),
    )
    email = serializers.CharField(source="user.email", read_only=True)

    class Meta:
        model = StudentProfile
        fields = PROFILE_FIELDS
        read_only_fields = ["id", "email", "profile_completed", "created_at", "updated_at"]
        extra_kwargs = {
            "student_id": {
                "validators": [
                    UniqueValidator(
                        queryset=StudentProfile.objects.all(),
                        message="Student ID already exists",
                    )
                ],
            },
        }

    def validate_user_id(self, value):
        if self.instance is not None:
            if value != self.instance.user:
                raise serializers.ValidationError("Profile owner cannot be changed")
            return value
        if StudentProfile.objects.filter(user=value).exists():
            raise serializers.ValidationError("Student profile already exists for this user")
        return value

    def validate_full_name(self, value):
        value = sanitize_text(value, max_length=255)
        if not value:
            raise serializers.ValidationError("Full name is required")
        return value

    def validate_department(self, value):
        value = sanitize_text(value, max_length=255)
        if not value:
            raise serializers.ValidationError("Department is required")
        return value


class StudentSelfUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = StudentProfile
        fields = STUDENT_EDITABLE_FIELDS


def missing_required_fields(data) -> list:
    return [field for field in REQUIRED_CREATE_FIELDS if not data.get(field)]


def flatten_errors(errors) -> str:
    """
    Turn serializer.errors into one line for bulk import reports.
    """
    parts = []
    for field, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            text = "; ".join(str(m) for m in messages)
        else:
            text = str(messages)
        parts.append(text if field == "non_field_errors" else f"{field}: {text}")
    return ", ".join(parts)
