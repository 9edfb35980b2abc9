# activities/verification.py
"""
Public, unauthenticated certificate lookup.

Only verified activities resolve. Unknown ids and existing-but-unverified
activities raise the same CertificateNotFound so existence never leaks.
"""
from django.conf import settings

from core.exceptions import CertificateNotFound
from .certificates import build_verification_url
from .models import Activity


def parse_activity_id(raw):
    """
    Return `raw` as a positive int, or None when it is not a well-formed id.
    """
    value = str(raw or "").strip()
    if not (value.isascii() and value.isdigit()):
        return None
    activity_id = int(value)
    if activity_id <= 0:
        return None
    return activity_id


def get_verified_activity(activity_id) -> Activity:
    activity = (
        Activity.objects
        .select_related("student", "verified_by", "student__student_profile")
        .filter(pk=activity_id, status=Activity.STATUS_VERIFIED)
        .first()
    )
    if activity is None:
        raise CertificateNotFound()
    return activity


def public_identity(user):
    if user is None:
        return None
    return {
        "id": user.id,
        "name": user.display_name,
        "email": user.email,
    }


def build_certificate_view(activity: Activity) -> dict:
    return {
        "certificate": {
            "id": activity.id,
            "title": activity.title,
            "description": activity.description,
            "category": activity.category,
            "date": activity.date.isoformat() if activity.date else None,
            "status": activity.status,
            "verified_at": activity.verified_at,
            "certificate_issued_at": activity.certificate_issued_at,
            "student": public_identity(activity.student),
            "verified_by": public_identity(activity.verified_by),
        },
        "institution": getattr(settings, "INSTITUTION_NAME", "Student Activity Portal"),
        "verification_url": build_verification_url(activity.id),
        "valid_until": None,
    }


def lookup_certificate(activity_id) -> dict:
    return build_certificate_view(get_verified_activity(activity_id))
