import logging
import time

from django.conf import settings
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework import status

from core.catalog.models import CustomField, ProductType
from core.common.exceptions import RateLimited, error_response
from core.common.ratelimit import rate_limit_or_raise, RateLimitExceeded
from core.leads import services
from core.tenants.models import Tenant
from core.public.serializers import PublicLeadSerializer

logger = logging.getLogger(__name__)

THANK_YOU = "Thank you! We'll be in touch soon."


def allowed_origins():
    return [o for o in getattr(settings, "ALLOWED_EMBED_ORIGINS", []) if o]


def origin_allowed(origin: str) -> bool:
    """
    With no allow-list configured every origin is accepted; requests
    without an Origin header (server-to-server) always are.
    """
    allowed = allowed_origins()
    if not origin or not allowed:
        return True
    return origin in allowed


def _client_ip(request):
    forwarded = (request.META.get("HTTP_X_FORWARDED_FOR") or "").split(",")[0].strip()
    return forwarded or request.META.get("REMOTE_ADDR", "")


def _rate_limit(request, tenant_slug: str):
    limit = int(getattr(settings, "PUBLIC_LEADS_RATE_LIMIT_PER_MIN", 30))
    minute_bucket = int(time.time() // 60)
    rl_key = f"rl:public-leads:{tenant_slug}:{_client_ip(request)}:{minute_bucket}"

    try:
        rate_limit_or_raise(key=rl_key, limit=limit, window_seconds=60)
    except RateLimitExceeded as e:
        raise RateLimited(wait=e.retry_after_seconds)


class PublicLeadsView(APIView):
    """
    POST    /api/public/{tenant}/leads   embed form submission (no auth)
    GET     /api/public/{tenant}/leads   embed form configuration
    OPTIONS /api/public/{tenant}/leads   CORS preflight

    Body (POST):
      {
        "name": "Jane",
        "email": "jane@example.com",
        "phone": "+44...",
        "message": "...",
        "source": "website",
        "utmSource": "...", "utmMedium": "...", "utmCampaign": "...",
        "customFieldValues": {...}
      }

    Response 201:
      { "success": true, "leadId": "<uuid>", "message": "..." }
    """
    authentication_classes = []
    permission_classes = []

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        origin = request.META.get("HTTP_ORIGIN", "")
        if not allowed_origins():
            response["Access-Control-Allow-Origin"] = "*"
        elif origin and origin_allowed(origin):
            response["Access-Control-Allow-Origin"] = origin
            response["Vary"] = "Origin"
        response["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        return response

    def options(self, request, *args, **kwargs):
        return Response(status=status.HTTP_200_OK)

    def get(self, request, tenant: str):
        t = Tenant.objects.filter(slug=tenant).select_related("settings").first()
        if not t:
            return error_response("Tenant not found", "NOT_FOUND", status.HTTP_404_NOT_FOUND)

        tenant_settings = getattr(t, "settings", None)
        product_types = ProductType.objects.filter(tenant=t, is_active=True).order_by("order", "name")
        custom_fields = CustomField.objects.filter(tenant=t, is_active=True).order_by("order", "name")

        return Response(
            {
                "tenant": {
                    "name": t.name,
                    "businessName": (tenant_settings.business_name if tenant_settings else "") or t.name,
                    "primaryColor": (tenant_settings.primary_color if tenant_settings else "") or "#3b82f6",
                },
                "productTypes": [{"id": str(pt.id), "name": pt.name, "slug": pt.slug} for pt in product_types],
                "customFields": [
                    {
                        "id": str(cf.id),
                        "name": cf.name,
                        "slug": cf.slug,
                        "type": cf.type,
                        "options": cf.options,
                        "isRequired": cf.is_required,
                    }
                    for cf in custom_fields
                ],
            }
        )

    def post(self, request, tenant: str):
        origin = request.META.get("HTTP_ORIGIN", "")
        if not origin_allowed(origin):
            logger.warning("public lead rejected tenant=%s origin=%s", tenant, origin)
            return error_response("Origin not allowed", "FORBIDDEN", status.HTTP_403_FORBIDDEN)

        _rate_limit(request, tenant)

        t = Tenant.objects.filter(slug=tenant).first()
        if not t:
            return error_response("Tenant not found", "NOT_FOUND", status.HTTP_404_NOT_FOUND)

        # checked before validation so a misconfigured tenant reports that first
        services.resolve_status(t, None)

        s = PublicLeadSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        utm = s.utm

        custom_values = dict(data["customFieldValues"] or {})
        custom_values.update({f"utm_{k}": v for k, v in utm.items() if v})

        lead = services.create_lead(
            tenant=t,
            created_by=services.get_system_user(),
            audited_by=None,
            data={
                "name": data["name"],
                "email": data["email"],
                "phone": data["phone"].strip(),
                "address": data["address"].strip(),
                "postcode": data["postcode"].strip(),
                "notes": data["message"],
                "source": data["source"],
                "priority": "MEDIUM",
                "customFieldValues": custom_values,
            },
            audit_meta={"source": "public_form", "origin": origin or None, "utm": utm},
        )

        logger.info("public lead captured tenant=%s lead=%s", t.slug, lead.id)
        return Response(
            {"success": True, "leadId": str(lead.id), "message": THANK_YOU},
            status=status.HTTP_201_CREATED,
        )
