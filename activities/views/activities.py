import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from core.exceptions import ActivityNotFound
from users.permissions import IsEducator, IsStudent
from activities.models import Activity
from activities.serializers import (
    ActivitySerializer,
    ActivityCreateSerializer,
    StatusUpdateSerializer,
)
from activities.state_machine import transition, validate_status
from .generics import api_error, user_can_view_activity

logger = logging.getLogger("sap.activities")


class ActivityListCreateView(APIView):
    """
    POST /api/activities/   student submits an activity (always pending)
    GET  /api/activities/   educator review queue, optional ?status=
    """

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsStudent()]
        return [IsAuthenticated(), IsEducator()]

    def get(self, request):
        qs = Activity.objects.select_related("student", "verified_by")

        status_filter = request.query_params.get("status")
        if status_filter:
            qs = qs.filter(status=validate_status(status_filter))

        serializer = ActivitySerializer(qs.order_by("-created_at"), many=True)
        return Response(serializer.data)

    def post(self, request):
        serializer = ActivityCreateSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        activity = serializer.save()

        logger.info(f"Activity submitted: activity={activity.id}, student={request.user.id}")

        return Response(
            {
                "message": "Activity added successfully",
                "activity": ActivitySerializer(activity).data,
            },
            status=status.HTTP_201_CREATED,
        )


class StudentActivitiesView(APIView):
    """
    GET /api/activities/student/
    The caller's own submissions, newest first.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        qs = (
            Activity.objects
            .select_related("student", "verified_by")
            .filter(student=request.user)
            .order_by("-created_at")
        )
        return Response(ActivitySerializer(qs, many=True).data)


class ActivityDetailView(APIView):
    """
    GET /api/activities/<activity_id>/
    Visible to the owning student and to educators.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, activity_id):
        try:
            activity = Activity.objects.select_related("student", "verified_by").get(pk=activity_id)
        except Activity.DoesNotExist:
            raise ActivityNotFound()

        if not user_can_view_activity(request.user, activity):
            return api_error("Not allowed", status.HTTP_403_FORBIDDEN)

        return Response(ActivitySerializer(activity).data)


class ActivityStatusUpdateView(APIView):
    """
    PATCH /api/activities/<activity_id>/status/
    Body: {"status": "pending" | "verified" | "rejected"}
    """
    permission_classes = [IsAuthenticated, IsEducator]

    def patch(self, request, activity_id):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        activity = transition(
            activity_id,
            serializer.validated_data["status"],
            verifier=request.user,
        )

        return Response(
            {
                "message": "Activity status updated",
                "activity": ActivitySerializer(activity).data,
            },
            status=status.HTTP_200_OK,
        )
