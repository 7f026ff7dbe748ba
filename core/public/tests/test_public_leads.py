import pytest
from rest_framework.test import APIClient

from core.audit.models import AuditLog
from core.catalog.models import CustomField
from core.common.ratelimit import RateLimitExceeded
from core.leads.models import Lead

ORIGIN = "https://shop.example"


@pytest.fixture
def allow_list(settings):
    settings.ALLOWED_EMBED_ORIGINS = [ORIGIN]
    return settings


@pytest.mark.django_db
def test_disallowed_origin_writes_nothing(tenant, statuses, allow_list):
    r = APIClient().post(
        "/api/public/acme/leads", {"name": "Jane"}, format="json", HTTP_ORIGIN="https://evil.example"
    )
    assert r.status_code == 403
    assert r.json()["error"] == "Origin not allowed"
    assert Lead.objects.count() == 0
    assert AuditLog.objects.count() == 0


@pytest.mark.django_db
def test_allowed_origin_creates_lead_under_system_user(tenant, statuses, allow_list):
    r = APIClient().post(
        "/api/public/acme/leads",
        {
            "name": "Jane",
            "email": "jane@x.com",
            "message": "Need blinds",
            "utmSource": "google",
            "utmCampaign": "spring",
            "customFieldValues": {"rooms": 3},
        },
        format="json",
        HTTP_ORIGIN=ORIGIN,
    )
    assert r.status_code == 201, r.content
    assert r["Access-Control-Allow-Origin"] == ORIGIN
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Thank you! We'll be in touch soon."

    lead = Lead.objects.select_related("created_by").get(id=body["leadId"])
    assert lead.status == statuses["new"]
    assert lead.source == "website"
    assert lead.notes == "Need blinds"
    assert lead.created_by.email == "system@leadpipeline.local"
    assert lead.custom_field_values == {"rooms": 3, "utm_source": "google", "utm_campaign": "spring"}

    log = AuditLog.objects.get(lead_id=lead.id)
    assert log.user is None
    assert log.action == AuditLog.Action.LEAD_CREATED
    assert log.meta == {
        "source": "public_form",
        "origin": ORIGIN,
        "utm": {"source": "google", "medium": None, "campaign": "spring"},
    }


@pytest.mark.django_db
def test_no_allow_list_accepts_any_origin(tenant, statuses):
    r = APIClient().post(
        "/api/public/acme/leads", {"name": "Jane", "source": "facebook"}, format="json", HTTP_ORIGIN="https://any.example"
    )
    assert r.status_code == 201
    assert r["Access-Control-Allow-Origin"] == "*"
    assert Lead.objects.get().source == "facebook"


@pytest.mark.django_db
def test_missing_name_is_validation_error(tenant, statuses):
    r = APIClient().post("/api/public/acme/leads", {"email": "jane@x.com"}, format="json")
    assert r.status_code == 400
    assert "name" in r.json()["details"]
    assert r["Access-Control-Allow-Methods"] == "GET, POST, OPTIONS"


@pytest.mark.django_db
def test_unknown_tenant(db):
    r = APIClient().post("/api/public/nope/leads", {"name": "Jane"}, format="json")
    assert r.status_code == 404


@pytest.mark.django_db
def test_tenant_without_default_status(tenant):
    r = APIClient().post("/api/public/acme/leads", {"name": "Jane"}, format="json")
    assert r.status_code == 400
    assert r.json()["error"] == "No default status configured for this tenant"


@pytest.mark.django_db
def test_rate_limited(tenant, statuses, monkeypatch):
    def boom(**kwargs):
        raise RateLimitExceeded(retry_after_seconds=17)

    monkeypatch.setattr("core.public.views.rate_limit_or_raise", boom)
    r = APIClient().post("/api/public/acme/leads", {"name": "Jane"}, format="json")
    assert r.status_code == 429
    assert r.json()["code"] == "RATE_LIMITED"
    assert r["Retry-After"] == "17"
    assert Lead.objects.count() == 0


@pytest.mark.django_db
def test_form_config(tenant, product_type):
    CustomField.objects.create(
        tenant=tenant, name="Property", slug="property_type", type="SELECT", options=["House", "Flat"]
    )
    CustomField.objects.create(tenant=tenant, name="Hidden", slug="hidden", is_active=False)

    r = APIClient().get("/api/public/acme/leads")
    assert r.status_code == 200
    body = r.json()
    assert body["tenant"] == {"name": "Acme", "businessName": "Acme Ltd", "primaryColor": "#3b82f6"}
    assert [p["slug"] for p in body["productTypes"]] == ["roller-blinds"]
    assert [f["slug"] for f in body["customFields"]] == ["property_type"]
    assert body["customFields"][0]["options"] == ["House", "Flat"]


@pytest.mark.django_db
def test_preflight(tenant):
    r = APIClient().options("/api/public/acme/leads", HTTP_ORIGIN=ORIGIN)
    assert r.status_code == 200
    assert r["Access-Control-Allow-Headers"] == "Content-Type, Authorization"
