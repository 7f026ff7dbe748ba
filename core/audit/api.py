from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.audit.models import AuditLog
from core.audit.serializers import AuditLogSerializer
from core.iam.permissions import IsTenantMember


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsTenantMember])
def audit_logs(request, tenant: str):
    """
    GET /api/{tenant}/audit?action=<optional exact match>
    Latest 200 entries, newest first.
    """
    qs = AuditLog.objects.filter(tenant=request.tenant).select_related("user")

    action = (request.query_params.get("action") or "").strip()
    if action:
        qs = qs.filter(action=action)

    qs = qs.order_by("-created_at", "-id")[:200]
    return Response({"items": AuditLogSerializer(qs, many=True).data})
