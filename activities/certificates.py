# activities/certificates.py
"""
Certificate issuance for verified activities.

A certificate is a fresh opaque token plus a QR image (PNG data URL) that
points at the public verification page of the frontend:

    {CERTIFICATE_BASE_URL}/verify/activity/<activity_id>?token=<token>

Nothing is written to storage here; the caller persists the returned values.
"""
import base64
import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Optional
from urllib.parse import urlencode

import qrcode
from django.conf import settings
from django.utils import timezone
from qrcode.constants import ERROR_CORRECT_M

from core.exceptions import IssuanceError

logger = logging.getLogger("sap.activities")


QR_TARGET_SIZE_PX = 256
QR_BORDER_MODULES = 2
QR_FILL_COLOR = "#000000"
QR_BACK_COLOR = "#FFFFFF"

SECURE_HASH_LENGTH = 16


@dataclass
class IssuedCertificate:
    token: str
    qr_code: str
    verification_url: str
    issued_at: datetime


def build_verification_url(activity_id) -> str:
    """
    Canonical public URL of an activity certificate.
    """
    base = str(getattr(settings, "CERTIFICATE_BASE_URL", "") or "").strip().rstrip("/")
    return f"{base}/verify/activity/{activity_id}"


def generate_certificate_token() -> str:
    # ~32 chars base64url, safe for URLs.
    return secrets.token_urlsafe(24)


def render_qr_data_url(payload: str) -> str:
    """
    Encode `payload` as a ~256px black-on-white QR PNG and return it as a
    self-contained data URL.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        border=QR_BORDER_MODULES,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    # Pick the module size that gets closest to the target width
    modules = qr.modules_count + 2 * QR_BORDER_MODULES
    qr.box_size = max(1, round(QR_TARGET_SIZE_PX / modules))

    img = qr.make_image(fill_color=QR_FILL_COLOR, back_color=QR_BACK_COLOR)
    buffer = BytesIO()
    img.save(buffer, format="PNG")

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def issue_certificate(activity_id) -> IssuedCertificate:
    """
    Build a new certificate for an activity that is becoming verified.

    Every call returns a new token, so re-verifying an activity replaces
    any link printed from an earlier certificate.
    """
    token = generate_certificate_token()
    verification_url = build_verification_url(activity_id)
    qr_payload = f"{verification_url}?{urlencode({'token': token})}"

    try:
        qr_code = render_qr_data_url(qr_payload)
    except Exception as exc:
        logger.error(f"QR generation failed for activity={activity_id}: {exc}")
        raise IssuanceError() from exc

    logger.info(f"Generated certificate QR for activity={activity_id}")

    return IssuedCertificate(
        token=token,
        qr_code=qr_code,
        verification_url=verification_url,
        issued_at=timezone.now(),
    )


def _hash_secret() -> bytes:
    secret = getattr(settings, "CERTIFICATE_HASH_SECRET", "") or settings.SECRET_KEY
    return secret.encode("utf-8")


def generate_verification_hash(activity_id, student_id, issued_at: Optional[datetime] = None) -> str:
    """
    Short tamper-evidence hash for shared certificate links.

    Advisory only: the public lookup does not check it.
    """
    issued_at = issued_at or timezone.now()
    issued_ms = int(issued_at.timestamp() * 1000)

    payload = f"{activity_id}-{student_id}-{issued_ms}".encode("utf-8")
    digest = hmac.new(_hash_secret(), payload, hashlib.sha256).hexdigest()
    return digest[:SECURE_HASH_LENGTH]


def secure_verification_url(activity_id, student_id, issued_at: Optional[datetime] = None) -> str:
    hash_value = generate_verification_hash(activity_id, student_id, issued_at)
    return f"{build_verification_url(activity_id)}?{urlencode({'hash': hash_value})}"
