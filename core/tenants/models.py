import uuid
from django.db import models
from django.utils import timezone as dj_timezone


def default_working_days():
    return [1, 2, 3, 4, 5]


class Tenant(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=50, unique=True)
    name = models.CharField(max_length=255)
    industry = models.CharField(max_length=100, blank=True, default="")
    timezone = models.CharField(max_length=64, default="Europe/London")
    created_at = models.DateTimeField(default=dj_timezone.now, db_index=True)

    class Meta:
        db_table = "tenants"

    def __str__(self) -> str:
        return self.name


class TenantSettings(models.Model):
    """
    Branding and working-hours preferences; one row per tenant.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.OneToOneField(Tenant, on_delete=models.CASCADE, related_name="settings")

    business_name = models.CharField(max_length=255, blank=True, default="")
    business_address = models.CharField(max_length=500, blank=True, default="")
    business_phone = models.CharField(max_length=32, blank=True, default="")
    business_email = models.EmailField(blank=True, default="")
    website = models.URLField(blank=True, default="")

    working_hours_start = models.CharField(max_length=5, default="09:00")
    working_hours_end = models.CharField(max_length=5, default="17:00")
    working_days = models.JSONField(default=default_working_days)

    default_email_sender = models.CharField(max_length=255, blank=True, default="")
    default_sms_sender = models.CharField(max_length=32, blank=True, default="")

    auto_assign_leads = models.BooleanField(default=False)
    lead_sla_hours = models.PositiveIntegerField(default=24)

    primary_color = models.CharField(max_length=7, default="#3b82f6")
    logo = models.CharField(max_length=500, blank=True, default="")

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tenant_settings"
