from django.urls import path
from core.analytics.api import lead_stats

urlpatterns = [
    path("<slug:tenant>/stats", lead_stats, name="lead-stats"),
]
