# activities/certificate_generator.py

import base64
import logging
from io import BytesIO

from django.conf import settings

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.utils import ImageReader
from reportlab.lib import colors

from .certificates import build_verification_url

logger = logging.getLogger("sap.activities")

ACCENT_COLOR = colors.HexColor("#2c3e50")


def _qr_image_reader(data_url):
    """
    Turn the stored PNG data URL back into something reportlab can draw.
    Returns None when the activity has no usable QR.
    """
    if not data_url or "," not in data_url:
        return None
    try:
        raw = base64.b64decode(data_url.split(",", 1)[1])
        return ImageReader(BytesIO(raw))
    except (ValueError, OSError) as exc:
        logger.warning(f"Could not decode stored QR image: {exc}")
        return None


def render_certificate_pdf(activity) -> bytes:
    """
    Render a one-page landscape certificate for a verified activity and
    return the PDF bytes. Nothing is written to storage.
    """
    buffer = BytesIO()

    page_size = landscape(A4)
    p = canvas.Canvas(buffer, pagesize=page_size)
    width, height = page_size

    institution = getattr(settings, "INSTITUTION_NAME", "Student Activity Portal")
    student = activity.student
    verifier = activity.verified_by

    # ---------- Border ----------
    p.setStrokeColor(ACCENT_COLOR)
    p.setLineWidth(4)
    margin = 30
    p.rect(
        margin,
        margin,
        width - 2 * margin,
        height - 2 * margin,
        stroke=1,
        fill=0,
    )

    # ---------- Title ----------
    p.setFillColor(ACCENT_COLOR)
    p.setFont("Helvetica-Bold", 34)
    p.drawCentredString(width / 2.0, height - 120, "Certificate of Achievement")

    # ---------- Body text ----------
    p.setFillColor(colors.black)
    p.setFont("Helvetica", 18)
    p.drawCentredString(width / 2.0, height - 190, f"This is to certify that {student.display_name}")
    p.drawCentredString(width / 2.0, height - 220, f"has completed \"{activity.title}\"")

    p.setFont("Helvetica", 14)
    date_text = activity.date.strftime("%d %B %Y") if activity.date else ""
    p.drawCentredString(width / 2.0, height - 255, f"{activity.category} - {date_text}")

    # ---------- Footer ----------
    p.setFont("Helvetica-Oblique", 12)
    p.drawString(margin + 10, 100, f"Issued by {institution}")
    if verifier is not None:
        p.drawString(margin + 10, 80, f"Verified by: {verifier.display_name}")
    if activity.verified_at:
        p.drawString(margin + 10, 60, f"Verified on: {activity.verified_at.strftime('%d %B %Y')}")

    # ---------- QR + link ----------
    qr_reader = _qr_image_reader(activity.qr_code)
    qr_size = 120
    if qr_reader is not None:
        p.drawImage(
            qr_reader,
            width - qr_size - margin - 20,
            margin + 40,
            width=qr_size,
            height=qr_size,
            preserveAspectRatio=True,
            mask="auto",
        )

    p.setFont("Helvetica", 9)
    p.drawRightString(width - margin - 20, margin + 25, build_verification_url(activity.id))

    p.showPage()
    p.save()

    buffer.seek(0)
    return buffer.getvalue()
