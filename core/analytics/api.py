from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.analytics.stats import compute_lead_stats
from core.iam.permissions import IsTenantMember

DEFAULT_DAYS = 30
MAX_DAYS = 365


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsTenantMember])
def lead_stats(request, tenant: str):
    """
    GET /api/{tenant}/stats?days=30

    Returns:
      - summary (totalLeads, pipelineValue, wonValue, conversionRate, averageDealSize)
      - leadsByStatus, leadsBySource
      - upcomingAppointments (next 7 days), recentActivity (last 7 days)
      - dailyTrend (per day in the tenant's timezone)
    """
    try:
        days = int(request.query_params.get("days") or DEFAULT_DAYS)
    except (TypeError, ValueError):
        days = DEFAULT_DAYS
    days = max(1, min(MAX_DAYS, days))

    return Response(compute_lead_stats(request.tenant, days=days))
