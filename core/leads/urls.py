from django.urls import path
from core.leads.api import leads_list, leads_detail, lead_appointments

urlpatterns = [
    path("<slug:tenant>/leads", leads_list, name="leads-list"),
    path("<slug:tenant>/leads/<uuid:lead_id>", leads_detail, name="leads-detail"),
    path("<slug:tenant>/leads/<uuid:lead_id>/appointments", lead_appointments, name="lead-appointments"),
]
