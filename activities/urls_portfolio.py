from django.urls import path
from .views import PortfolioView, PortfolioExportView

urlpatterns = [
    path("", PortfolioView.as_view(), name="portfolio"),
    path("export/", PortfolioExportView.as_view(), name="portfolio-export"),
]
