from django.conf import settings
from django.db import models
from django.utils import timezone


class AuditLog(models.Model):
    """
    Append-only history of mutating actions.
    Rows are never updated or deleted; record a new row instead.
    """

    class Action(models.TextChoices):
        LEAD_CREATED = "LEAD_CREATED", "Lead created"
        LEAD_UPDATED = "LEAD_UPDATED", "Lead updated"
        STATUS_CHANGED = "STATUS_CHANGED", "Status changed"
        LEAD_DELETED = "LEAD_DELETED", "Lead deleted"
        APPOINTMENT_CREATED = "APPOINTMENT_CREATED", "Appointment created"
        MESSAGE_SENT = "MESSAGE_SENT", "Message sent"

    id = models.BigAutoField(primary_key=True)

    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="audit_logs")
    # no FK constraint: the lead id stays on the row after the lead is deleted
    lead = models.ForeignKey(
        "leads.Lead",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="audit_logs",
    )
    # null user = "System" (public form submissions)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_logs",
    )

    action = models.CharField(max_length=64, db_index=True)
    meta = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "audit_logs"
        indexes = [
            models.Index(fields=["tenant", "created_at"], name="audit_tenant_created_idx"),
            models.Index(fields=["tenant", "lead", "created_at"], name="audit_tenant_lead_created_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Audit log entries are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Audit log entries cannot be deleted")
