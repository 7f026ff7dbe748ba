# repo-root/core/messaging/api.py

import logging

from django.db import transaction
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from core.audit.models import AuditLog
from core.audit.utils import record_audit
from core.common.exceptions import ReferenceInvalid, error_response
from core.iam.models import Role
from core.iam.permissions import IsTenantMember, require_role
from core.leads.models import Lead
from core.messaging.apps import get_dispatcher
from core.messaging.models import Channel, Message, Template
from core.messaging.rendering import render_template, template_variables
from core.messaging.serializers import (
    MessageSerializer,
    SendMessageSerializer,
    TemplateCreateSerializer,
    TemplateSerializer,
)

logger = logging.getLogger(__name__)

SUBJECT_MAX_LENGTH = Message._meta.get_field("subject").max_length


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsTenantMember])
def templates(request, tenant: str):
    """
    GET  /api/{tenant}/templates?channel=SMS   active templates only unless ?all=1
    POST /api/{tenant}/templates              manager+
    """
    if request.method == "GET":
        qs = Template.objects.filter(tenant=request.tenant).order_by("name")
        channel = (request.query_params.get("channel") or "").strip().upper()
        if channel:
            qs = qs.filter(channel=channel)
        if request.query_params.get("all") != "1":
            qs = qs.filter(is_active=True)
        return Response({"templates": TemplateSerializer(qs, many=True).data})

    require_role(request.membership, Role.MANAGER)

    s = TemplateCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    row = Template.objects.create(
        tenant=request.tenant,
        name=data["name"].strip(),
        channel=data["channel"],
        subject=data["subject"],
        body=data["body"],
        is_active=data["isActive"],
    )
    return Response(TemplateSerializer(row).data, status=status.HTTP_201_CREATED)


def _default_recipient(lead, channel):
    if channel == Channel.EMAIL:
        return lead.email
    return lead.phone


def _default_sender(tenant, channel):
    settings_row = getattr(tenant, "settings", None)
    if settings_row is None:
        return None
    if channel == Channel.EMAIL:
        return settings_row.default_email_sender or None
    return settings_row.default_sms_sender or None


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsTenantMember])
def lead_messages(request, tenant: str, lead_id):
    """
    GET  /api/{tenant}/leads/{lead_id}/messages   newest first
    POST /api/{tenant}/leads/{lead_id}/messages
      body: {"channel": "SMS", "templateId"?: uuid, "body"?: str, "subject"?: str, "to"?: str}

    The Message row and its MESSAGE_SENT audit entry are stored for failed
    sends too; the response is then 502 with the provider error.
    """
    lead = (
        Lead.objects.filter(id=lead_id, tenant=request.tenant)
        .select_related("status", "product_type")
        .first()
    )
    if not lead:
        return error_response("Lead not found", "NOT_FOUND", status.HTTP_404_NOT_FOUND)

    if request.method == "GET":
        qs = lead.messages.select_related("user").order_by("-created_at")
        return Response({"messages": MessageSerializer(qs, many=True).data})

    s = SendMessageSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data
    channel = data["channel"]

    template = None
    if data.get("templateId"):
        template = Template.objects.filter(
            id=data["templateId"], tenant=request.tenant, is_active=True
        ).first()
        if template is None:
            raise ReferenceInvalid("Invalid template")
        if template.channel != channel:
            raise ReferenceInvalid("Template channel does not match")

    raw_body = (data.get("body") or "").strip() or template.body
    raw_subject = data.get("subject")
    if raw_subject is None and template is not None:
        raw_subject = template.subject

    variables = template_variables(lead=lead, tenant=request.tenant, user=request.user)
    body = render_template(raw_body, variables)
    # rendered tokens can outgrow the stored column
    subject = render_template(raw_subject or "", variables)[:SUBJECT_MAX_LENGTH]

    to = (data.get("to") or "").strip() or _default_recipient(lead, channel)
    if not to:
        return error_response(
            "Validation error",
            "VALIDATION_ERROR",
            status.HTTP_400_BAD_REQUEST,
            details={"to": ["Recipient is required."]},
        )

    result = get_dispatcher().send(
        channel,
        to,
        body,
        subject=subject or None,
        sender=_default_sender(request.tenant, channel),
    )

    with transaction.atomic():
        msg = Message.objects.create(
            tenant=request.tenant,
            lead=lead,
            user=request.user,
            template=template,
            channel=channel,
            to=to,
            subject=subject,
            body=body,
            status=Message.Status.SENT if result.success else Message.Status.FAILED,
            provider_id=result.provider_id or "",
            error=result.error or "",
        )
        record_audit(
            tenant=request.tenant,
            lead=lead,
            user=request.user,
            action=AuditLog.Action.MESSAGE_SENT,
            meta={
                "messageId": str(msg.id),
                "channel": channel,
                "to": to,
                "status": msg.status,
                "templateId": str(template.id) if template else None,
            },
        )
        lead.touch()
        lead.save(update_fields=["updated_at"])

    if not result.success:
        logger.warning("message to lead=%s failed: %s", lead.id, result.error)
        return error_response(
            result.error or "Message delivery failed",
            "DELIVERY_FAILED",
            status.HTTP_502_BAD_GATEWAY,
            details={"message": MessageSerializer(msg).data},
        )

    return Response(MessageSerializer(msg).data, status=status.HTTP_201_CREATED)
