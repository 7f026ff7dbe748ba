import uuid
from django.conf import settings
from django.db import models
from django.utils import timezone

from core.tenants.models import Tenant


class Role(models.TextChoices):
    """
    Membership roles, declared lowest to highest.
    Declaration order is the permission order: AGENT < MANAGER < ADMIN.
    """
    AGENT = "agent", "Agent"
    MANAGER = "manager", "Manager"
    ADMIN = "admin", "Admin"

    @property
    def rank(self) -> int:
        return list(Role).index(self)

    def covers(self, other) -> bool:
        return self.rank >= Role(other).rank


class TenantMembership(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="memberships")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="tenant_memberships")
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.AGENT)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "tenant_memberships"
        constraints = [models.UniqueConstraint(fields=["tenant", "user"], name="uq_membership_tenant_user")]
        indexes = [models.Index(fields=["tenant", "role"], name="membership_tenant_role_idx")]

    def has_role(self, min_role) -> bool:
        return Role(self.role).covers(min_role)
