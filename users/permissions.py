from rest_framework.permissions import BasePermission

from .models import User


# ---- Helper functions -------------------------------------------------


def has_role(user, *roles) -> bool:
    if not user or not user.is_authenticated:
        return False
    return getattr(user, "role", None) in roles


# ---- Permission classes -----------------------------------------------


class IsStudent(BasePermission):
    message = "This endpoint is only for students"

    def has_permission(self, request, view):
        return has_role(request.user, User.ROLE_STUDENT)


class IsEducator(BasePermission):
    """
    Verifier capability: only educators may approve or reject activities.
    """
    message = "Only educators can perform this action"

    def has_permission(self, request, view):
        return has_role(request.user, User.ROLE_EDUCATOR)


class IsPortalAdmin(BasePermission):
    message = "Only admin can manage users"

    def has_permission(self, request, view):
        return has_role(request.user, User.ROLE_ADMIN)


class IsAdminOrEducator(BasePermission):
    message = "Unauthorized"

    def has_permission(self, request, view):
        return has_role(request.user, User.ROLE_ADMIN, User.ROLE_EDUCATOR)
