# repo-root/core/leads/api.py

import math

from django.db import transaction
from django.db.models import Q
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from core.audit.models import AuditLog
from core.audit.serializers import AuditLogSerializer
from core.audit.utils import record_audit
from core.common.exceptions import error_response
from core.iam.models import Role
from core.iam.permissions import IsTenantMember, require_role
from core.leads.models import Lead, Appointment
from core.leads.serializers import (
    LeadSerializer,
    LeadCreateSerializer,
    LeadUpdateSerializer,
    LeadStatusUpdateSerializer,
    AppointmentSerializer,
    AppointmentCreateSerializer,
)
from core.leads import services
from core.messaging.serializers import MessageSerializer

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _int_param(request, name, default):
    try:
        return int(request.query_params.get(name) or default)
    except (TypeError, ValueError):
        return default


def _lead_qs(tenant):
    return Lead.objects.filter(tenant=tenant).select_related(
        "status", "product_type", "created_by", "assigned_user"
    )


def _not_found():
    return error_response("Lead not found", "NOT_FOUND", status.HTTP_404_NOT_FOUND)


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsTenantMember])
def leads_list(request, tenant: str):
    """
    GET /api/{tenant}/leads
    Headers: Authorization: Bearer <jwt>

    Query:
      status=<status slug optional>
      productType=<product type slug optional>
      priority=<LOW|MEDIUM|HIGH|URGENT optional>
      search=<optional: name/email/phone/postcode>
      page=<int optional, default 1>
      limit=<int optional, default 20, max 100>

    POST /api/{tenant}/leads
      body: lead fields; statusId falls back to the tenant's default status
    """
    if request.method == "POST":
        return _create_lead(request)

    status_slug = (request.query_params.get("status") or "").strip()
    product_slug = (request.query_params.get("productType") or "").strip()
    priority = (request.query_params.get("priority") or "").strip().upper()
    search = (request.query_params.get("search") or "").strip()

    limit = max(1, min(MAX_PAGE_SIZE, _int_param(request, "limit", DEFAULT_PAGE_SIZE)))
    page = max(1, _int_param(request, "page", 1))

    qs = _lead_qs(request.tenant).order_by("-created_at", "-id")

    if status_slug:
        qs = qs.filter(status__slug=status_slug)

    if product_slug:
        qs = qs.filter(product_type__slug=product_slug)

    if priority:
        qs = qs.filter(priority=priority)

    if search:
        qs = qs.filter(
            Q(name__icontains=search) |
            Q(email__icontains=search) |
            Q(phone__icontains=search) |
            Q(postcode__icontains=search)
        )

    total = qs.count()
    offset = (page - 1) * limit
    items = qs[offset: offset + limit]

    return Response(
        {
            "leads": LeadSerializer(items, many=True).data,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
        }
    )


def _create_lead(request):
    s = LeadCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)

    lead = services.create_lead(
        tenant=request.tenant,
        created_by=request.user,
        audited_by=request.user,
        data=s.validated_data,
    )
    lead = _lead_qs(request.tenant).get(id=lead.id)
    return Response(LeadSerializer(lead).data, status=status.HTTP_201_CREATED)


@api_view(["GET", "PATCH", "DELETE"])
@permission_classes([IsAuthenticated, IsTenantMember])
def leads_detail(request, tenant: str, lead_id):
    """
    GET    /api/{tenant}/leads/{lead_id}
    PATCH  /api/{tenant}/leads/{lead_id}   {"statusId": ...} alone, or any lead fields
    DELETE /api/{tenant}/leads/{lead_id}   manager+
    """
    if request.method == "DELETE":
        require_role(request.membership, Role.MANAGER)

    lead = _lead_qs(request.tenant).filter(id=lead_id).first()
    if not lead:
        return _not_found()

    if request.method == "GET":
        data = LeadSerializer(lead).data
        data["appointments"] = AppointmentSerializer(
            lead.appointments.order_by("starts_at")[:10], many=True
        ).data
        data["messages"] = MessageSerializer(
            lead.messages.select_related("user").order_by("-created_at")[:20], many=True
        ).data
        data["auditLogs"] = AuditLogSerializer(
            AuditLog.objects.filter(tenant=request.tenant, lead_id=lead.id)
            .select_related("user")
            .order_by("-created_at", "-id")[:50],
            many=True,
        ).data
        return Response(data)

    if request.method == "DELETE":
        services.delete_lead(lead=lead, user=request.user)
        return Response({"success": True})

    # PATCH
    if "statusId" in request.data:
        s = LeadStatusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        services.change_status(lead=lead, status_id=s.validated_data["statusId"], user=request.user)
    else:
        s = LeadUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        if s.validated_data:
            services.update_lead(lead=lead, data=s.validated_data, user=request.user)

    lead = _lead_qs(request.tenant).get(id=lead.id)
    return Response(LeadSerializer(lead).data)


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsTenantMember])
def lead_appointments(request, tenant: str, lead_id):
    """
    GET  /api/{tenant}/leads/{lead_id}/appointments   soonest first
    POST /api/{tenant}/leads/{lead_id}/appointments
    """
    lead = Lead.objects.filter(id=lead_id, tenant=request.tenant).first()
    if not lead:
        return _not_found()

    if request.method == "GET":
        qs = lead.appointments.order_by("starts_at")
        return Response({"appointments": AppointmentSerializer(qs, many=True).data})

    s = AppointmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    with transaction.atomic():
        appt = Appointment.objects.create(
            lead=lead,
            created_by=request.user,
            type=data["type"],
            title=data["title"],
            description=data["description"],
            starts_at=data["startsAt"],
            ends_at=data.get("endsAt"),
            location=data["location"],
            notes=data["notes"],
        )
        record_audit(
            tenant=request.tenant,
            lead=lead,
            user=request.user,
            action=AuditLog.Action.APPOINTMENT_CREATED,
            meta={"appointmentId": str(appt.id), "type": appt.type, "startsAt": appt.starts_at.isoformat()},
        )

    return Response(AppointmentSerializer(appt).data, status=status.HTTP_201_CREATED)
