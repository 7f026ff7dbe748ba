from django.urls import path
from core.public.views import PublicLeadsView

urlpatterns = [
    path("public/<slug:tenant>/leads", PublicLeadsView.as_view(), name="public-leads"),
]
