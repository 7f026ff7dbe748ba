from django.urls import path
from core.audit.api import audit_logs

urlpatterns = [
    path("<slug:tenant>/audit", audit_logs, name="audit-logs"),
]
