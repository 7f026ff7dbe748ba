from django.urls import path
from core.messaging.api import templates, lead_messages

urlpatterns = [
    path("<slug:tenant>/templates", templates, name="message-templates"),
    path("<slug:tenant>/leads/<uuid:lead_id>/messages", lead_messages, name="lead-messages"),
]
