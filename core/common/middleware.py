import re
from django.http import JsonResponse

# first segment after /api/ that is a route of its own, not a tenant slug
RESERVED_SEGMENTS = frozenset({"auth", "schema", "docs", "public", "tenants"})

TENANT_SLUG_RE = re.compile(r"^[a-z0-9-]+$")


class TenantScopeMiddleware:
    """
    - Tenant-scoped API paths look like /api/<tenant-slug>/...
    - Parse the slug and attach request.tenant_slug.
    - Membership checks are enforced in endpoints/permissions (server-side).
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.tenant_slug = None
        path = request.path or "/"

        if not path.startswith("/api/"):
            return self.get_response(request)

        segment = path[len("/api/"):].split("/", 1)[0]
        if not segment or segment in RESERVED_SEGMENTS:
            return self.get_response(request)

        if not TENANT_SLUG_RE.match(segment):
            return JsonResponse({"error": "Invalid tenant", "code": "TENANT_INVALID"}, status=400)

        request.tenant_slug = segment
        return self.get_response(request)
