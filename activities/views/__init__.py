from .activities import (
    ActivityListCreateView,
    StudentActivitiesView,
    ActivityDetailView,
    ActivityStatusUpdateView,
)
from .certificates import ActivityCertificateView, PublicVerifyView, PublicCertificatePDFView
from .portfolio import PortfolioView, PortfolioExportView
from .generics import api_error
