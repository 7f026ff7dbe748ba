from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.db.models import Count, Q
from django.db.models.functions import TruncDate
from django.utils import timezone

from core.audit.models import AuditLog
from core.catalog.models import LeadStatus
from core.iam.utils import display_name
from core.leads.models import Appointment, Lead

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
UPCOMING_DAYS = 7
ACTIVITY_DAYS = 7


def tenant_zone(tenant):
    try:
        return ZoneInfo(tenant.timezone or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("unknown timezone %r for tenant=%s, using UTC", tenant.timezone, tenant.slug)
        return ZoneInfo("UTC")


def _start_of_day(d, tz):
    return datetime.combine(d, time.min, tzinfo=tz)


def _end_of_day(d, tz):
    return datetime.combine(d, time.max, tzinfo=tz)


def _money(value) -> float:
    return float(Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def compute_lead_stats(tenant, days: int = 30, now=None) -> dict:
    """
    Reporting snapshot for one tenant over the last `days` days.

    The window runs from start-of-day(now - days) to end-of-day(now), both
    in the tenant's timezone. Lead value is the estimated value, else the
    job value, else 0. Read only.
    """
    tz = tenant_zone(tenant)
    now = now or timezone.now()
    local_now = now.astimezone(tz)

    start = _start_of_day(local_now.date() - timedelta(days=days), tz)
    end = _end_of_day(local_now.date(), tz)

    window = Q(created_at__gte=start, created_at__lte=end)
    leads = list(Lead.objects.filter(window, tenant=tenant).select_related("status"))

    total = len(leads)
    pipeline_value = Decimal("0")
    won_value = Decimal("0")
    won_count = 0
    valued = []

    for lead in leads:
        value = Decimal(lead.deal_value)
        is_won = lead.status.slug == LeadStatus.WON_SLUG
        if not lead.status.is_final or is_won:
            pipeline_value += value
        if is_won:
            won_value += value
            won_count += 1
        if lead.estimated_value or lead.job_value:
            valued.append(value)

    conversion_rate = _money(Decimal(won_count) / total * 100) if total else 0
    average_deal_size = _money(sum(valued) / len(valued)) if valued else 0

    by_status = (
        LeadStatus.objects.filter(tenant=tenant)
        .annotate(count=Count("leads", filter=Q(leads__created_at__gte=start, leads__created_at__lte=end)))
        .order_by("order", "name")
    )

    # null and blank sources share the "Unknown" bucket
    source_counts = {}
    source_rows = (
        Lead.objects.filter(window, tenant=tenant)
        .values("source")
        .annotate(count=Count("id"))
    )
    for row in source_rows:
        key = (row["source"] or "").strip() or "Unknown"
        source_counts[key] = source_counts.get(key, 0) + row["count"]
    by_source = sorted(
        ({"source": k, "count": v} for k, v in source_counts.items()),
        key=lambda x: (-x["count"], x["source"]),
    )

    upcoming = (
        Appointment.objects.filter(
            lead__tenant=tenant,
            starts_at__gte=now,
            starts_at__lte=_end_of_day(local_now.date() + timedelta(days=UPCOMING_DAYS), tz),
        )
        .select_related("lead")
        .order_by("starts_at")[:10]
    )

    activity = (
        AuditLog.objects.filter(tenant=tenant, created_at__gte=now - timedelta(days=ACTIVITY_DAYS))
        .select_related("user", "lead")
        .order_by("-created_at", "-id")[:20]
    )

    trend = (
        Lead.objects.filter(window, tenant=tenant)
        .annotate(day=TruncDate("created_at", tzinfo=tz))
        .values("day")
        .annotate(count=Count("id"))
        .order_by("day")
    )

    return {
        "summary": {
            "totalLeads": total,
            "pipelineValue": _money(pipeline_value),
            "wonValue": _money(won_value),
            "conversionRate": conversion_rate,
            "averageDealSize": average_deal_size,
        },
        "leadsByStatus": [
            {
                "id": str(s.id),
                "name": s.name,
                "slug": s.slug,
                "color": s.color,
                "count": s.count,
                "isFinal": s.is_final,
            }
            for s in by_status
        ],
        "leadsBySource": by_source,
        "upcomingAppointments": [
            {
                "id": str(a.id),
                "type": a.type,
                "title": a.title,
                "startsAt": a.starts_at.isoformat(),
                "lead": {
                    "id": str(a.lead.id),
                    "name": a.lead.name,
                    "phone": a.lead.phone,
                    "email": a.lead.email,
                },
            }
            for a in upcoming
        ],
        "recentActivity": [
            {
                "id": log.id,
                "action": log.action,
                "createdAt": log.created_at.isoformat(),
                "user": display_name(log.user) or "System",
                "lead": log.lead.name if log.lead_id and log.lead else None,
                "meta": log.meta,
            }
            for log in activity
        ],
        "dailyTrend": [{"date": row["day"].isoformat(), "count": row["count"]} for row in trend],
    }
