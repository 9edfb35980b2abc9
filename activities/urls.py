from django.urls import path
from .views import (
    ActivityListCreateView,
    StudentActivitiesView,
    ActivityDetailView,
    ActivityStatusUpdateView,
    ActivityCertificateView,
    PublicVerifyView,
    PublicCertificatePDFView,
)

urlpatterns = [
    path("", ActivityListCreateView.as_view(), name="activity-list-create"),
    path("student/", StudentActivitiesView.as_view(), name="activity-student-list"),

    # Public (QR target)
    path("verify/<str:activity_id>/", PublicVerifyView.as_view(), name="activity-verify"),
    path("verify/<str:activity_id>/pdf/", PublicCertificatePDFView.as_view(), name="activity-certificate-pdf"),

    path("<int:activity_id>/", ActivityDetailView.as_view(), name="activity-detail"),
    path("<int:activity_id>/status/", ActivityStatusUpdateView.as_view(), name="activity-status-update"),
    path("<int:activity_id>/certificate/", ActivityCertificateView.as_view(), name="activity-certificate"),
]
