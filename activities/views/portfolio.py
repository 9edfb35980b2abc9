from django.utils import timezone
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from users.permissions import IsStudent
from activities.models import Activity
from activities.serializers import ActivitySerializer


def build_portfolio(user):
    """
    Verified activities of a student plus per-category counts.
    Every category is present so the frontend can chart zeros.
    """
    verified = (
        Activity.objects
        .select_related("student", "verified_by")
        .filter(student=user, status=Activity.STATUS_VERIFIED)
        .order_by("-date", "-created_at")
    )

    categories = {value: 0 for value in Activity.category_values()}
    for activity in verified:
        categories[activity.category] = categories.get(activity.category, 0) + 1

    return {
        "student_id": user.id,
        "name": user.display_name,
        "email": user.email,
        "activities": ActivitySerializer(verified, many=True).data,
        "verified_count": len(verified),
        "categories": categories,
    }


class PortfolioView(APIView):
    """
    GET /api/portfolio/
    """
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request):
        return Response(build_portfolio(request.user))


class PortfolioExportView(APIView):
    """
    GET /api/portfolio/export/
    Same data as the portfolio, as a downloadable JSON document.
    """
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request):
        data = build_portfolio(request.user)
        data["export_date"] = timezone.now().isoformat()

        response = Response(data)
        response["Content-Disposition"] = f'attachment; filename="portfolio_{request.user.id}.json"'
        return response
