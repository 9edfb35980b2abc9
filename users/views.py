# users/views.py - account management (admin only)
import logging

from django.contrib.auth import get_user_model
from django.db.models import ProtectedError
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .permissions import IsPortalAdmin
from .serializers import CreateUserSerializer, UserSerializer

User = get_user_model()

logger = logging.getLogger("sap.users")


class UserViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    GET    /api/users/        list accounts
    POST   /api/users/        create an account (email, password, role)
    DELETE /api/users/<id>/   delete an account and everything it owns
    """
    queryset = User.objects.all().order_by('-date_joined')
    permission_classes = [IsAuthenticated, IsPortalAdmin]

    def get_serializer_class(self):
        if self.action == 'create':
            return CreateUserSerializer
        return UserSerializer

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"users": serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"User created: user={user.id}, role={user.role}, by={request.user.id}")

        return Response(
            {
                "message": "User created successfully",
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()

        if user.role == User.ROLE_ADMIN:
            if User.objects.filter(role=User.ROLE_ADMIN).count() <= 1:
                return Response(
                    {"error": "Cannot delete the last admin user"},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        user_id = user.id
        try:
            user.delete()
        except ProtectedError:
            return Response(
                {"error": "User has verified activities and cannot be deleted"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(f"User deleted: user={user_id}, by={request.user.id}")

        return Response({"message": "User deleted successfully"}, status=status.HTTP_200_OK)
