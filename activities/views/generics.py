from rest_framework.response import Response
from rest_framework import status

from users.models import User


def api_error(message: str, status_code=status.HTTP_400_BAD_REQUEST):
    """
    Small helper to standardize error responses across the activities app.
    Always returns: {"error": "<message>"} with the given status code.
    """
    return Response({"error": message}, status=status_code)


def user_can_view_activity(user, activity) -> bool:
    """
    Owner and educators may see an activity and its certificate.
    """
    if not user or not getattr(user, "is_authenticated", False):
        return False

    if activity.student_id == user.id:
        return True

    return user.role == User.ROLE_EDUCATOR
