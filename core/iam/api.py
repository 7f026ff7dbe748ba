from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from core.common.exceptions import error_response
from core.iam.models import Role, TenantMembership
from core.iam.permissions import HasRole, IsTenantMember, require_role
from core.iam.serializers import MembershipCreateSerializer, MembershipSerializer, MembershipUpdateSerializer


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsTenantMember])
def members(request, tenant: str):
    """
    GET  /api/{tenant}/members
    POST /api/{tenant}/members   admin only, {"email", "role"?}
    """
    if request.method == "GET":
        qs = TenantMembership.objects.filter(tenant=request.tenant).select_related("user").order_by("created_at")
        return Response({"members": MembershipSerializer(qs, many=True).data})

    require_role(request.membership, Role.ADMIN)

    s = MembershipCreateSerializer(data=request.data, context={})
    s.is_valid(raise_exception=True)
    user = s.context["user"]

    if TenantMembership.objects.filter(tenant=request.tenant, user=user).exists():
        return error_response(
            "Validation error",
            "VALIDATION_ERROR",
            status.HTTP_400_BAD_REQUEST,
            details={"email": ["User is already a member of this tenant."]},
        )

    m = TenantMembership.objects.create(tenant=request.tenant, user=user, role=s.validated_data["role"])
    return Response(MembershipSerializer(m).data, status=status.HTTP_201_CREATED)


@api_view(["PATCH", "DELETE"])
@permission_classes([IsAuthenticated, IsTenantMember, HasRole.at_least(Role.ADMIN)])
def member_detail(request, tenant: str, membership_id):
    """
    PATCH  /api/{tenant}/members/{membership_id}   admin only, {"role"}
    DELETE /api/{tenant}/members/{membership_id}   admin only

    The last admin of a tenant cannot be demoted or removed.
    """
    m = TenantMembership.objects.filter(id=membership_id, tenant=request.tenant).select_related("user").first()
    if not m:
        return error_response("Member not found", "NOT_FOUND", status.HTTP_404_NOT_FOUND)

    if request.method == "PATCH":
        s = MembershipUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        new_role = s.validated_data["role"]
    else:
        new_role = None

    if m.role == Role.ADMIN and new_role != Role.ADMIN:
        admins = TenantMembership.objects.filter(tenant=request.tenant, role=Role.ADMIN).count()
        if admins <= 1:
            return error_response(
                "Tenant must keep at least one admin",
                "BAD_REQUEST",
                status.HTTP_400_BAD_REQUEST,
            )

    if request.method == "DELETE":
        m.delete()
        return Response({"success": True})

    m.role = new_role
    m.save(update_fields=["role"])
    return Response(MembershipSerializer(m).data)
