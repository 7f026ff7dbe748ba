import uuid
from django.db import models
from django.utils import timezone


class LeadStatus(models.Model):
    """
    One stage of a tenant's pipeline. is_final marks an exit stage (won/lost).
    """
    WON_SLUG = "won"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="lead_statuses")

    name = models.CharField(max_length=100)
    slug = models.CharField(max_length=100)
    color = models.CharField(max_length=7, default="#6b7280")
    order = models.PositiveIntegerField(default=0)
    is_default = models.BooleanField(default=False)
    is_final = models.BooleanField(default=False)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "lead_statuses"
        constraints = [models.UniqueConstraint(fields=["tenant", "slug"], name="uq_lead_status_tenant_slug")]
        indexes = [models.Index(fields=["tenant", "order"], name="lead_status_tenant_order_idx")]

    def __str__(self) -> str:
        return self.name


class ProductType(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="product_types")

    name = models.CharField(max_length=200)
    slug = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "product_types"
        constraints = [models.UniqueConstraint(fields=["tenant", "slug"], name="uq_product_type_tenant_slug")]
        indexes = [models.Index(fields=["tenant", "is_active", "order"], name="product_type_tenant_active_idx")]

    def __str__(self) -> str:
        return self.name


class CustomField(models.Model):
    class Type(models.TextChoices):
        TEXT = "TEXT", "Text"
        NUMBER = "NUMBER", "Number"
        SELECT = "SELECT", "Select"
        MULTISELECT = "MULTISELECT", "Multi-select"
        DATE = "DATE", "Date"
        BOOLEAN = "BOOLEAN", "Boolean"
        TEXTAREA = "TEXTAREA", "Text area"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="custom_fields")

    name = models.CharField(max_length=200)
    slug = models.CharField(max_length=100)
    type = models.CharField(max_length=16, choices=Type.choices, default=Type.TEXT)
    # list of strings; only meaningful for SELECT / MULTISELECT
    options = models.JSONField(null=True, blank=True)
    is_required = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "custom_fields"
        constraints = [models.UniqueConstraint(fields=["tenant", "slug"], name="uq_custom_field_tenant_slug")]
        indexes = [models.Index(fields=["tenant", "is_active", "order"], name="custom_field_tenant_active_idx")]

    def __str__(self) -> str:
        return self.name
