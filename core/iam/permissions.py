from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission

from core.iam.models import Role, TenantMembership


class TenantAccessDenied(PermissionDenied):
    default_detail = "Forbidden: No access to tenant"


class InsufficientRole(PermissionDenied):
    default_detail = "Forbidden: Insufficient permissions"


def get_tenant_membership(tenant_slug: str, user):
    if not tenant_slug or not user or not user.is_authenticated:
        return None
    return (
        TenantMembership.objects.select_related("tenant", "user")
        .filter(tenant__slug=tenant_slug, user_id=user.id)
        .first()
    )


def require_tenant_membership(tenant_slug: str, user, min_role=None) -> TenantMembership:
    """
    Resolve the caller's membership for a tenant slug.

    Raises TenantAccessDenied when there is no membership (an unknown tenant
    looks the same as a foreign one), and InsufficientRole when min_role is
    given and the caller's role ranks below it.
    """
    membership = get_tenant_membership(tenant_slug, user)
    if not membership:
        raise TenantAccessDenied()

    if min_role is not None and not membership.has_role(min_role):
        raise InsufficientRole()

    return membership


def require_role(membership: TenantMembership, min_role) -> None:
    if not membership.has_role(min_role):
        raise InsufficientRole()


def _tenant_slug(request, view):
    return getattr(request, "tenant_slug", None) or getattr(view, "kwargs", {}).get("tenant")


class IsTenantMember(BasePermission):
    """
    Requires:
      - tenant slug in the URL (attached by TenantScopeMiddleware)
      - authenticated user
    Attaches:
      - request.membership
      - request.tenant
    """
    message = TenantAccessDenied.default_detail

    def has_permission(self, request, view):
        membership = get_tenant_membership(_tenant_slug(request, view), request.user)
        if not membership:
            return False

        request.membership = membership
        request.tenant = membership.tenant
        return True


class HasRole(BasePermission):
    """
    Usage:
      permission_classes = [IsAuthenticated, IsTenantMember, HasRole.at_least(Role.MANAGER)]
    """

    min_role = Role.AGENT
    message = InsufficientRole.default_detail

    @classmethod
    def at_least(cls, role):
        return type("HasRoleSub", (cls,), {"min_role": Role(role)})

    def has_permission(self, request, view):
        membership = getattr(request, "membership", None)
        return bool(membership) and membership.has_role(self.min_role)
