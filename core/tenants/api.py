from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from core.iam.models import Role, TenantMembership
from core.iam.permissions import IsTenantMember, require_role
from core.tenants.models import TenantSettings
from core.tenants.serializers import TenantCreateSerializer, TenantSerializer, TenantSettingsSerializer
from core.tenants.services import create_tenant


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
def tenants(request):
    """
    GET  /api/tenants   tenants the caller belongs to, with their role
    POST /api/tenants   {"name", "slug", "industry"?, "timezone"?}
                        caller becomes admin; default pipeline is created
    """
    if request.method == "GET":
        memberships = (
            TenantMembership.objects.filter(user_id=request.user.id)
            .select_related("tenant")
            .order_by("tenant__name")
        )
        return Response(
            {
                "tenants": [
                    {**TenantSerializer(m.tenant).data, "role": m.role}
                    for m in memberships
                ]
            }
        )

    s = TenantCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    tenant = create_tenant(
        owner=request.user,
        name=data["name"].strip(),
        slug=data["slug"],
        industry=data["industry"],
        timezone=data["timezone"],
    )
    return Response({**TenantSerializer(tenant).data, "role": Role.ADMIN}, status=status.HTTP_201_CREATED)


def _settings_for(tenant):
    settings_row, _ = TenantSettings.objects.get_or_create(tenant=tenant, defaults={"business_name": tenant.name})
    return settings_row


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsTenantMember])
def tenant_detail(request, tenant: str):
    """
    GET /api/{tenant}
    """
    m = request.membership
    return Response(
        {
            "tenant": TenantSerializer(request.tenant).data,
            "membership": {"id": str(m.id), "role": m.role},
            "settings": TenantSettingsSerializer(_settings_for(request.tenant)).data,
            "user": {"id": request.user.id, "email": request.user.email},
        }
    )


@api_view(["GET", "PATCH"])
@permission_classes([IsAuthenticated, IsTenantMember])
def tenant_settings(request, tenant: str):
    """
    GET   /api/{tenant}/settings
    PATCH /api/{tenant}/settings   admin only, partial update
    """
    settings_row = _settings_for(request.tenant)

    if request.method == "GET":
        return Response(TenantSettingsSerializer(settings_row).data)

    require_role(request.membership, Role.ADMIN)

    s = TenantSettingsSerializer(settings_row, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    s.save()
    return Response(s.data)
