from django.urls import path
from core.catalog.api import lead_statuses, product_types, custom_fields

urlpatterns = [
    path("<slug:tenant>/statuses", lead_statuses, name="lead-statuses"),
    path("<slug:tenant>/product-types", product_types, name="product-types"),
    path("<slug:tenant>/custom-fields", custom_fields, name="custom-fields"),
]
