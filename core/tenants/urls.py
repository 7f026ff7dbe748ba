from django.urls import path
from .api import tenants, tenant_detail, tenant_settings

urlpatterns = [
    path("tenants", tenants, name="tenants"),
    path("<slug:tenant>", tenant_detail, name="tenant-detail"),
    path("<slug:tenant>/settings", tenant_settings, name="tenant-settings"),
]
