import logging

from django.db import IntegrityError, transaction
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from users.models import User
from users.permissions import IsAdminOrEducator, IsPortalAdmin, IsStudent, has_role
from .models import StudentProfile
from .serializers import (
    STUDENT_EDITABLE_FIELDS,
    StudentProfileSerializer,
    StudentSelfUpdateSerializer,
    flatten_errors,
    missing_required_fields,
)

logger = logging.getLogger("sap.profiles")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 200

INVALID_BODY_ERROR = "Invalid request body. Expected a JSON object."


def _invalid_body():
    return Response({"error": INVALID_BODY_ERROR}, status=status.HTTP_400_BAD_REQUEST)


def _positive_int(raw, default):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


class MyProfileView(APIView):
    """
    GET /api/profile/me/
    """
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request):
        profile = StudentProfile.objects.select_related("user").filter(user=request.user).first()
        if profile is None:
            return Response(
                {"error": "Profile not found. Please contact administrator."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(StudentProfileSerializer(profile).data)


class ProfileListCreateView(APIView):
    """
    GET  /api/profile/?department=&semester=&section=&page=&limit=
    POST /api/profile/
    """
    permission_classes = [IsAuthenticated, IsPortalAdmin]

    def get(self, request):
        params = request.query_params
        qs = StudentProfile.objects.select_related("user")

        if params.get("department"):
            qs = qs.filter(department=params["department"])
        # Non-numeric semester is ignored
        semester = _positive_int(params.get("semester"), None)
        if semester is not None:
            qs = qs.filter(semester=semester)
        if params.get("section"):
            qs = qs.filter(section=params["section"])

        page = _positive_int(params.get("page"), 1)
        limit = min(_positive_int(params.get("limit"), DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
        offset = (page - 1) * limit

        profiles = list(qs.order_by("full_name")[offset:offset + limit])

        return Response({
            "profiles": StudentProfileSerializer(profiles, many=True).data,
            "pagination": {
                "page": page,
                "limit": limit,
                "has_more": len(profiles) == limit,
            },
        })

    def post(self, request):
        if not isinstance(request.data, dict):
            return _invalid_body()

        missing = missing_required_fields(request.data)
        if missing:
            return Response(
                {"error": f"Missing required fields: {', '.join(missing)}"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = StudentProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save()

        logger.info(f"Student profile created: user={profile.user_id}, by={request.user.id}")

        return Response(
            {
                "message": "Student profile created successfully",
                "profile": StudentProfileSerializer(profile).data,
            },
            status=status.HTTP_201_CREATED,
        )


class ProfileDetailView(APIView):
    """
    GET    /api/profile/<user_id>/   admin or educator
    PUT    /api/profile/<user_id>/   admin (any field), owning student (personal fields only)
    DELETE /api/profile/<user_id>/   admin
    """
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticated(), IsAdminOrEducator()]
        if self.request.method == "DELETE":
            return [IsAuthenticated(), IsPortalAdmin()]
        return [IsAuthenticated()]

    def get_object(self, user_id):
        return StudentProfile.objects.select_related("user").filter(user_id=user_id).first()

    def get(self, request, user_id):
        profile = self.get_object(user_id)
        if profile is None:
            return Response({"error": "Profile not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(StudentProfileSerializer(profile).data)

    def put(self, request, user_id):
        user = request.user
        is_admin = has_role(user, User.ROLE_ADMIN)
        is_owner = user.id == user_id and has_role(user, User.ROLE_STUDENT)

        if not is_admin and not is_owner:
            return Response(
                {"error": "Unauthorized. Students can only update their own profile, admins can update all profiles."},
                status=status.HTTP_403_FORBIDDEN,
            )

        profile = self.get_object(user_id)
        if profile is None:
            return Response({"error": "Student profile not found"}, status=status.HTTP_404_NOT_FOUND)

        if not isinstance(request.data, dict):
            return _invalid_body()

        if not is_admin:
            data = {key: value for key, value in request.data.items() if key in STUDENT_EDITABLE_FIELDS}
            if not data:
                return Response({"error": "No valid fields to update"}, status=status.HTTP_400_BAD_REQUEST)
            serializer = StudentSelfUpdateSerializer(profile, data=data, partial=True)
        else:
            serializer = StudentProfileSerializer(profile, data=request.data, partial=True)

        serializer.is_valid(raise_exception=True)
        profile = serializer.save()

        logger.info(f"Student profile updated: user={profile.user_id}, by={user.id}")

        return Response({
            "message": "Student profile updated successfully",
            "profile": StudentProfileSerializer(profile).data,
        })

    def delete(self, request, user_id):
        profile = self.get_object(user_id)
        if profile is None:
            return Response({"error": "Student profile not found"}, status=status.HTTP_404_NOT_FOUND)

        profile.delete()
        logger.info(f"Student profile deleted: user={user_id}, by={request.user.id}")

        return Response({"message": "Student profile deleted successfully"})


class ProfileBulkImportView(APIView):
    """
    POST /api/profile/bulk-import/
    Body: {"profiles": [{user_id, full_name, department, student_id, ...}, ...]}

    Each entry is validated and saved on its own; one bad row never blocks
    the rest.
    """
    permission_classes = [IsAuthenticated, IsPortalAdmin]

    def post(self, request):
        items = request.data.get("profiles") if isinstance(request.data, dict) else None
        if not isinstance(items, list) or not items:
            return Response(
                {"error": "Invalid profiles data. Expected an array."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        successful = []
        failed = []

        for item in items:
            if not isinstance(item, dict):
                failed.append({"user_id": None, "error": "Each profile must be an object"})
                continue

            missing = missing_required_fields(item)
            if missing:
                failed.append({
                    "user_id": item.get("user_id"),
                    "error": f"Missing required fields: {', '.join(missing)}",
                })
                continue

            serializer = StudentProfileSerializer(data=item)
            if not serializer.is_valid():
                failed.append({"user_id": item.get("user_id"), "error": flatten_errors(serializer.errors)})
                continue

            try:
                with transaction.atomic():
                    profile = serializer.save()
            except IntegrityError as exc:
                failed.append({"user_id": item.get("user_id"), "error": str(exc)})
                continue

            successful.append(StudentProfileSerializer(profile).data)

        logger.info(
            f"Profile bulk import by={request.user.id}: "
            f"{len(successful)} successful, {len(failed)} failed"
        )

        return Response({
            "message": f"Bulk import completed: {len(successful)} successful, {len(failed)} failed",
            "results": {
                "successful": successful,
                "failed": failed,
            },
        })
