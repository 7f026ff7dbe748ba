import uuid
from django.conf import settings
from django.db import models
from django.utils import timezone


class Lead(models.Model):
    class Priority(models.TextChoices):
        LOW = "LOW", "Low"
        MEDIUM = "MEDIUM", "Medium"
        HIGH = "HIGH", "High"
        URGENT = "URGENT", "Urgent"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="leads")
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="created_leads")
    assigned_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_leads",
    )
    product_type = models.ForeignKey(
        "catalog.ProductType",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="leads",
    )
    status = models.ForeignKey("catalog.LeadStatus", on_delete=models.PROTECT, related_name="leads")

    name = models.CharField(max_length=200, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    address = models.CharField(max_length=500, blank=True, default="")
    postcode = models.CharField(max_length=16, blank=True, default="")

    job_value = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    estimated_value = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    priority = models.CharField(max_length=8, choices=Priority.choices, default=Priority.MEDIUM)
    source = models.CharField(max_length=100, null=True, blank=True)
    notes = models.TextField(blank=True, default="")

    # tenant-defined values keyed by CustomField.slug
    custom_field_values = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "leads"
        indexes = [
            models.Index(fields=["tenant", "created_at"], name="lead_tenant_created_idx"),
            models.Index(fields=["tenant", "status"], name="lead_tenant_status_idx"),
            models.Index(fields=["tenant", "priority"], name="lead_tenant_priority_idx"),
            models.Index(fields=["tenant", "email"], name="lead_tenant_email_idx"),
            models.Index(fields=["tenant", "phone"], name="lead_tenant_phone_idx"),
        ]

    @property
    def deal_value(self):
        """Estimated value, else job value, else 0."""
        return self.estimated_value or self.job_value or 0

    def touch(self):
        self.updated_at = timezone.now()


class Appointment(models.Model):
    class Type(models.TextChoices):
        CALL = "CALL", "Call"
        MEETING = "MEETING", "Meeting"
        SITE_VISIT = "SITE_VISIT", "Site visit"
        DEMO = "DEMO", "Demo"
        CONSULTATION = "CONSULTATION", "Consultation"
        FOLLOW_UP = "FOLLOW_UP", "Follow up"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    lead = models.ForeignKey(Lead, on_delete=models.CASCADE, related_name="appointments")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointments",
    )

    type = models.CharField(max_length=16, choices=Type.choices)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    starts_at = models.DateTimeField(db_index=True)
    ends_at = models.DateTimeField(null=True, blank=True)
    location = models.CharField(max_length=500, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "appointments"
        indexes = [
            models.Index(fields=["lead", "starts_at"], name="appt_lead_starts_idx"),
        ]
