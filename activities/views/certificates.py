import logging

from django.http import HttpResponse
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.throttling import ScopedRateThrottle
from rest_framework import status

from core.exceptions import ActivityNotFound, CertificateNotFound
from activities.models import Activity
from activities.certificates import build_verification_url, secure_verification_url
from activities.certificate_generator import render_certificate_pdf
from activities.verification import get_verified_activity, lookup_certificate, parse_activity_id
from .generics import api_error, user_can_view_activity

logger = logging.getLogger("sap.activities")


class ActivityCertificateView(APIView):
    """
    GET /api/activities/<activity_id>/certificate/
    QR image and shareable links for a verified activity (owner or educator).
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, activity_id):
        try:
            activity = Activity.objects.get(pk=activity_id)
        except Activity.DoesNotExist:
            raise ActivityNotFound()

        if not user_can_view_activity(request.user, activity):
            return api_error("Not allowed", status.HTTP_403_FORBIDDEN)

        if not activity.is_verified:
            raise CertificateNotFound()

        return Response({
            "activity_id": activity.id,
            "qr_code": activity.qr_code,
            "verification_url": build_verification_url(activity.id),
            "secure_verification_url": secure_verification_url(
                activity.id,
                activity.student_id,
                activity.certificate_issued_at,
            ),
            "certificate_issued_at": activity.certificate_issued_at,
        }, status=status.HTTP_200_OK)


def _parse_or_reject(raw_id):
    activity_id = parse_activity_id(raw_id)
    if activity_id is None:
        return None, api_error("Invalid activity ID", status.HTTP_400_BAD_REQUEST)
    return activity_id, None


class PublicVerifyView(APIView):
    """
    GET /api/activities/verify/<activity_id>/
    Public certificate lookup behind the QR code. No authentication.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "cert-verify"

    def get(self, request, activity_id):
        parsed_id, error = _parse_or_reject(activity_id)
        if error is not None:
            return error

        return Response(lookup_certificate(parsed_id), status=status.HTTP_200_OK)


class PublicCertificatePDFView(APIView):
    """
    GET /api/activities/verify/<activity_id>/pdf/
    Printable certificate for a verified activity, rendered on the fly.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "cert-verify"

    def get(self, request, activity_id):
        parsed_id, error = _parse_or_reject(activity_id)
        if error is not None:
            return error

        activity = get_verified_activity(parsed_id)
        pdf_bytes = render_certificate_pdf(activity)
        logger.info(f"Certificate PDF rendered for activity={activity.id}")

        response = HttpResponse(pdf_bytes, content_type="application/pdf")
        response["Content-Disposition"] = f'inline; filename="certificate_{activity.id}.pdf"'
        response["Cache-Control"] = "no-store"
        return response
