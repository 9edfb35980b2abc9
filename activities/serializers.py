from rest_framework import serializers

from core.sanitizers import sanitize_description, sanitize_text, sanitize_title
from .models import Activity


class ActivitySerializer(serializers.ModelSerializer):
    student_id = serializers.IntegerField(source="student.id", read_only=True)
    student_email = serializers.CharField(source="student.email", read_only=True)
    verified_by_email = serializers.CharField(
        source="verified_by.email", read_only=True, default=None
    )

    class Meta:
        model = Activity
        fields = [
            "id",
            "student_id",
            "student_email",
            "title",
            "description",
            "category",
            "date",
            "proof",
            "status",
            "verified_by",
            "verified_by_email",
            "verified_at",
            "qr_code",
            "certificate_issued_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ActivityCreateSerializer(serializers.ModelSerializer):
    """
    Student submission. Owner and every verification field are set by the
    server, never by the request body.
    """
    proof = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = Activity
        fields = ["title", "description", "category", "date", "proof"]

    def validate_title(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Title is required")
        return value

    def validate_description(self, value):
        value = sanitize_description(value)
        if not value:
            raise serializers.ValidationError("Description is required")
        return value

    def validate_proof(self, value):
        value = sanitize_text(value, max_length=2048)
        return value or None

    def create(self, validated_data):
        return Activity.objects.create(
            student=self.context["request"].user,
            **validated_data,
        )


class StatusUpdateSerializer(serializers.Serializer):
    # Value checked by the state machine so bad input gets InvalidStatus
    status = serializers.CharField()
