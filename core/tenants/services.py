import logging

from django.db import transaction

from core.catalog.models import LeadStatus
from core.iam.models import Role, TenantMembership
from core.tenants.models import Tenant, TenantSettings

logger = logging.getLogger(__name__)

# (name, slug, color, is_default, is_final); order follows position
DEFAULT_STATUSES = [
    ("New Lead", "new", "#6b7280", True, False),
    ("Contacted", "contacted", "#3b82f6", False, False),
    ("Qualified", "qualified", "#8b5cf6", False, False),
    ("Quote Requested", "quote_requested", "#f59e0b", False, False),
    ("Quote Sent", "quote_sent", "#f97316", False, False),
    ("Follow Up", "follow_up", "#84cc16", False, False),
    ("Won", LeadStatus.WON_SLUG, "#10b981", False, True),
    ("Lost", "lost", "#ef4444", False, True),
]


def create_default_statuses(tenant):
    return LeadStatus.objects.bulk_create(
        [
            LeadStatus(
                tenant=tenant,
                name=name,
                slug=slug,
                color=color,
                order=i,
                is_default=is_default,
                is_final=is_final,
            )
            for i, (name, slug, color, is_default, is_final) in enumerate(DEFAULT_STATUSES, start=1)
        ]
    )


def create_tenant(*, owner, name, slug, industry="", timezone="Europe/London", settings=None):
    """
    Tenant + settings row + admin membership for the owner + default pipeline,
    all or nothing.
    """
    with transaction.atomic():
        tenant = Tenant.objects.create(name=name, slug=slug, industry=industry, timezone=timezone)
        TenantSettings.objects.create(tenant=tenant, **{"business_name": name, **(settings or {})})
        TenantMembership.objects.create(tenant=tenant, user=owner, role=Role.ADMIN)
        create_default_statuses(tenant)

    logger.info("Tenant %s created by user %s", tenant.slug, owner.id)
    return tenant
