from django.urls import path
from core.iam.api import members, member_detail

urlpatterns = [
    path("<slug:tenant>/members", members, name="tenant-members"),
    path("<slug:tenant>/members/<uuid:membership_id>", member_detail, name="tenant-member-detail"),
]
