from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from core.audit.models import AuditLog
from core.audit.utils import record_audit
from core.catalog.models import LeadStatus, ProductType
from core.catalog.validation import validate_custom_field_values
from core.common.exceptions import ReferenceInvalid
from core.iam.models import TenantMembership
from core.leads.models import Lead

logger = logging.getLogger(__name__)

User = get_user_model()

# validated payload key -> model attribute
SCALAR_FIELDS = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "address": "address",
    "postcode": "postcode",
    "jobValue": "job_value",
    "estimatedValue": "estimated_value",
    "priority": "priority",
    "source": "source",
    "notes": "notes",
}


def default_status(tenant) -> LeadStatus | None:
    return LeadStatus.objects.filter(tenant=tenant, is_default=True).order_by("order").first()


def resolve_status(tenant, status_id) -> LeadStatus:
    if status_id is None:
        status = default_status(tenant)
        if not status:
            raise ReferenceInvalid("No default status configured for this tenant")
        return status

    status = LeadStatus.objects.filter(id=status_id, tenant=tenant).first()
    if not status:
        raise ReferenceInvalid("Invalid status")
    return status


def resolve_product_type(tenant, product_type_id) -> ProductType | None:
    if product_type_id is None:
        return None
    product_type = ProductType.objects.filter(id=product_type_id, tenant=tenant).first()
    if not product_type:
        raise ReferenceInvalid("Invalid product type")
    return product_type


def resolve_assignee(tenant, user_id):
    if user_id is None:
        return None
    membership = TenantMembership.objects.select_related("user").filter(tenant=tenant, user_id=user_id).first()
    if not membership:
        raise ReferenceInvalid("Assigned user is not a member of this tenant")
    return membership.user


def get_system_user():
    """
    Synthetic author for leads captured by public embed forms.
    """
    email = settings.SYSTEM_USER_EMAIL
    user, created = User.objects.get_or_create(
        username=email,
        defaults={"email": email, "first_name": "System"},
    )
    if created:
        user.set_unusable_password()
        user.save(update_fields=["password"])
    return user


def create_lead(
    *,
    tenant,
    created_by,
    data: dict[str, Any],
    audited_by=None,
    audit_meta: dict[str, Any] | None = None,
) -> Lead:
    """
    Create a lead from a validated payload and write its LEAD_CREATED row.

    All tenant references are checked before anything is written.
    """
    status = resolve_status(tenant, data.get("statusId"))
    product_type = resolve_product_type(tenant, data.get("productTypeId"))
    assignee = resolve_assignee(tenant, data.get("assignedUserId"))
    custom_values = validate_custom_field_values(tenant, data.get("customFieldValues"))

    lead = Lead(
        tenant=tenant,
        created_by=created_by,
        status=status,
        product_type=product_type,
        assigned_user=assignee,
        custom_field_values=custom_values,
    )
    for key, attr in SCALAR_FIELDS.items():
        if key in data:
            setattr(lead, attr, data[key])
    if not lead.priority:
        lead.priority = Lead.Priority.MEDIUM

    with transaction.atomic():
        lead.save()
        record_audit(
            tenant=tenant,
            lead=lead,
            user=audited_by,
            action=AuditLog.Action.LEAD_CREATED,
            meta=audit_meta if audit_meta is not None else {"source": lead.source},
        )

    logger.info("Lead %s created for tenant %s", lead.id, tenant.slug)
    return lead


def change_status(*, lead: Lead, status_id, user) -> Lead:
    new_status = resolve_status(lead.tenant, status_id)
    old_status = lead.status

    with transaction.atomic():
        lead.status = new_status
        lead.touch()
        lead.save(update_fields=["status", "updated_at"])
        record_audit(
            tenant=lead.tenant,
            lead=lead,
            user=user,
            action=AuditLog.Action.STATUS_CHANGED,
            meta={"oldStatus": old_status.name, "newStatus": new_status.name},
        )
    return lead


def update_lead(*, lead: Lead, data: dict[str, Any], user) -> Lead:
    """
    Full-field update. Only keys present in data are applied; the
    LEAD_UPDATED row lists them.
    """
    tenant = lead.tenant

    if "productTypeId" in data:
        lead.product_type = resolve_product_type(tenant, data["productTypeId"])
    if "assignedUserId" in data:
        lead.assigned_user = resolve_assignee(tenant, data["assignedUserId"])
    if "customFieldValues" in data:
        lead.custom_field_values = validate_custom_field_values(tenant, data["customFieldValues"])

    for key, attr in SCALAR_FIELDS.items():
        if key in data:
            setattr(lead, attr, data[key])

    with transaction.atomic():
        lead.touch()
        lead.save()
        record_audit(
            tenant=tenant,
            lead=lead,
            user=user,
            action=AuditLog.Action.LEAD_UPDATED,
            meta={"updatedFields": sorted(data.keys())},
        )
    return lead


def delete_lead(*, lead: Lead, user) -> None:
    with transaction.atomic():
        record_audit(
            tenant=lead.tenant,
            lead=lead,
            user=user,
            action=AuditLog.Action.LEAD_DELETED,
            meta={"leadName": lead.name},
        )
        lead.delete()
    logger.info("Lead deleted by user %s", getattr(user, "id", None))
