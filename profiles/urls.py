from django.urls import path
from .views import (
    MyProfileView,
    ProfileListCreateView,
    ProfileDetailView,
    ProfileBulkImportView,
)

urlpatterns = [
    path("", ProfileListCreateView.as_view(), name="profile-list-create"),
    path("me/", MyProfileView.as_view(), name="profile-me"),
    path("bulk-import/", ProfileBulkImportView.as_view(), name="profile-bulk-import"),
    path("<int:user_id>/", ProfileDetailView.as_view(), name="profile-detail"),
]
