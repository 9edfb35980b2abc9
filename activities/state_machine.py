# activities/state_machine.py
"""
Activity verification state machine.

pending ⇄ verified ⇄ rejected, every state reachable from every other
(and from itself). Each target state fully determines the derived fields:

    verified  -> verifier + verified_at set, new certificate issued
    rejected  -> verifier + verified_at set, certificate cleared
    pending   -> verifier, verified_at and certificate cleared
"""
import logging

from django.db import transaction
from django.utils import timezone

from core.exceptions import ActivityNotFound, InvalidStatus
from .certificates import issue_certificate
from .models import Activity

logger = logging.getLogger("sap.activities")


TRANSITION_FIELDS = [
    "status",
    "verified_by",
    "verified_at",
    "certificate_token",
    "qr_code",
    "certificate_issued_at",
    "updated_at",
]


def validate_status(new_status) -> str:
    if new_status not in Activity.status_values():
        raise InvalidStatus(
            f"Invalid status: {new_status!r}. "
            f"Expected one of: {', '.join(Activity.status_values())}"
        )
    return new_status


def _apply(activity: Activity, new_status: str, verifier, certificate=None):
    now = timezone.now()
    activity.status = new_status

    if new_status == Activity.STATUS_PENDING:
        activity.verified_by = None
        activity.verified_at = None
    else:
        activity.verified_by = verifier
        activity.verified_at = now

    if certificate is not None:
        activity.certificate_token = certificate.token
        activity.qr_code = certificate.qr_code
        activity.certificate_issued_at = certificate.issued_at
    else:
        activity.certificate_token = None
        activity.qr_code = None
        activity.certificate_issued_at = None


def transition(activity_id, new_status: str, verifier) -> Activity:
    """
    Move an activity to `new_status` on behalf of `verifier`.

    The caller is responsible for checking that `verifier` holds the
    educator role. Runs as one transaction holding the row lock; if the
    certificate cannot be issued nothing is written.

    Raises InvalidStatus, ActivityNotFound or IssuanceError.
    """
    validate_status(new_status)

    with transaction.atomic():
        try:
            activity = Activity.objects.select_for_update().get(pk=activity_id)
        except Activity.DoesNotExist:
            raise ActivityNotFound()

        old_status = activity.status

        certificate = None
        if new_status == Activity.STATUS_VERIFIED:
            certificate = issue_certificate(activity.id)

        _apply(activity, new_status, verifier, certificate)
        activity.save(update_fields=TRANSITION_FIELDS)

    logger.info(
        f"Activity state transition: activity={activity.id}, "
        f"from={old_status}, to={new_status}, actor={getattr(verifier, 'id', 'unknown')}"
    )

    return activity
