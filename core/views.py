import time

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


def _database_ok() -> bool:
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1")
    except OperationalError:
        return False
    return True


class HealthCheckView(APIView):
    """
    GET /api/health/

    Used by the hosting platform. 503 when the database is unreachable so
    the instance is taken out of rotation.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        started = time.monotonic()
        db_ok = _database_ok()
        elapsed_ms = round((time.monotonic() - started) * 1000, 1)

        return Response(
            {
                "service": "sap-backend",
                "status": "ok" if db_ok else "degraded",
                "database": db_ok,
                "env": getattr(settings, "ENV", "development"),
                "certificate_base_url": settings.CERTIFICATE_BASE_URL,
                "latency_ms": elapsed_ms,
            },
            status=status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
