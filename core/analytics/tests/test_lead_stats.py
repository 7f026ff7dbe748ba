from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest

from core.analytics.stats import compute_lead_stats
from core.audit.models import AuditLog
from core.audit.utils import record_audit
from core.leads.models import Appointment, Lead

NOW = datetime(2030, 6, 15, 12, 0, tzinfo=dt_timezone.utc)


def _lead(tenant, user, status, **kw):
    kw.setdefault("created_at", NOW - timedelta(days=1))
    return Lead.objects.create(tenant=tenant, created_by=user, status=status, **kw)


@pytest.mark.django_db
def test_empty_tenant(tenant, statuses):
    stats = compute_lead_stats(tenant, days=30, now=NOW)

    assert stats["summary"] == {
        "totalLeads": 0,
        "pipelineValue": 0,
        "wonValue": 0,
        "conversionRate": 0,
        "averageDealSize": 0,
    }
    assert stats["dailyTrend"] == []
    assert stats["leadsBySource"] == []
    assert all(s["count"] == 0 for s in stats["leadsByStatus"])
    assert [s["slug"] for s in stats["leadsByStatus"]][0] == "new"


@pytest.mark.django_db
def test_summary_formulas(tenant, statuses, user):
    _lead(tenant, user, statuses["new"], estimated_value=Decimal("100"), job_value=Decimal("999"))
    _lead(tenant, user, statuses["won"], job_value=Decimal("300"))
    _lead(tenant, user, statuses["lost"], estimated_value=Decimal("50"))
    _lead(tenant, user, statuses["contacted"])

    summary = compute_lead_stats(tenant, days=30, now=NOW)["summary"]

    assert summary["totalLeads"] == 4
    # lost is final and not won, so it is left out of the pipeline
    assert summary["pipelineValue"] == 400.0
    assert summary["wonValue"] == 300.0
    assert summary["conversionRate"] == 25.0
    assert summary["averageDealSize"] == 150.0


@pytest.mark.django_db
def test_conversion_rate_rounds_to_two_places(tenant, statuses, user):
    _lead(tenant, user, statuses["won"])
    _lead(tenant, user, statuses["new"])
    _lead(tenant, user, statuses["new"])

    summary = compute_lead_stats(tenant, days=30, now=NOW)["summary"]
    assert summary["conversionRate"] == 33.33
    assert 0 <= summary["conversionRate"] <= 100
    assert summary["averageDealSize"] == 0


@pytest.mark.django_db
def test_window_excludes_older_leads(tenant, statuses, user):
    _lead(tenant, user, statuses["new"])
    _lead(tenant, user, statuses["new"], created_at=NOW - timedelta(days=40))

    assert compute_lead_stats(tenant, days=30, now=NOW)["summary"]["totalLeads"] == 1
    assert compute_lead_stats(tenant, days=60, now=NOW)["summary"]["totalLeads"] == 2


@pytest.mark.django_db
def test_status_and_source_breakdowns(tenant, statuses, user):
    for _ in range(3):
        _lead(tenant, user, statuses["new"], source="website")
    _lead(tenant, user, statuses["contacted"], source=None)

    stats = compute_lead_stats(tenant, days=30, now=NOW)

    counts = {s["slug"]: s["count"] for s in stats["leadsByStatus"]}
    assert counts["new"] == 3
    assert counts["contacted"] == 1
    assert counts["won"] == 0
    assert stats["leadsBySource"] == [{"source": "website", "count": 3}, {"source": "Unknown", "count": 1}]


@pytest.mark.django_db
def test_daily_trend_uses_tenant_timezone(tenant, statuses, user):
    tenant.timezone = "America/New_York"
    tenant.save(update_fields=["timezone"])

    # 02:00 UTC on the 15th is still the 14th in New York
    _lead(tenant, user, statuses["new"], created_at=datetime(2030, 6, 15, 2, 0, tzinfo=dt_timezone.utc))
    _lead(tenant, user, statuses["new"], created_at=datetime(2030, 6, 15, 11, 0, tzinfo=dt_timezone.utc))
    _lead(tenant, user, statuses["new"], created_at=datetime(2030, 6, 12, 15, 0, tzinfo=dt_timezone.utc))

    trend = compute_lead_stats(tenant, days=30, now=NOW)["dailyTrend"]
    assert trend == [
        {"date": "2030-06-12", "count": 1},
        {"date": "2030-06-14", "count": 1},
        {"date": "2030-06-15", "count": 1},
    ]


@pytest.mark.django_db
def test_upcoming_appointments_and_recent_activity(tenant, statuses, user):
    lead = _lead(tenant, user, statuses["new"], name="Jane", phone="+44")
    Appointment.objects.create(lead=lead, type="CALL", title="soon", starts_at=NOW + timedelta(days=1))
    Appointment.objects.create(lead=lead, type="CALL", title="later", starts_at=NOW + timedelta(days=10))
    Appointment.objects.create(lead=lead, type="CALL", title="past", starts_at=NOW - timedelta(hours=1))

    log = record_audit(tenant=tenant, lead=lead, action=AuditLog.Action.LEAD_CREATED, meta={"source": "public_form"})
    AuditLog.objects.filter(id=log.id).update(created_at=NOW - timedelta(days=1))

    stats = compute_lead_stats(tenant, days=30, now=NOW)

    assert [a["title"] for a in stats["upcomingAppointments"]] == ["soon"]
    assert stats["upcomingAppointments"][0]["lead"] == {
        "id": str(lead.id),
        "name": "Jane",
        "phone": "+44",
        "email": "",
    }
    assert len(stats["recentActivity"]) == 1
    assert stats["recentActivity"][0]["user"] == "System"
    assert stats["recentActivity"][0]["lead"] == "Jane"


@pytest.mark.django_db
def test_stats_endpoint(tenant, statuses, agent_client):
    r = agent_client.get("/api/acme/stats?days=not-a-number")
    assert r.status_code == 200
    assert set(r.json()) == {
        "summary",
        "leadsByStatus",
        "leadsBySource",
        "upcomingAppointments",
        "recentActivity",
        "dailyTrend",
    }
    assert agent_client.get("/api/acme/stats?days=5000").status_code == 200
