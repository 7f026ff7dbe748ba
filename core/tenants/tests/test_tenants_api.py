import pytest
from django.core.management import call_command

from core.catalog.models import LeadStatus
from core.conftest import client_for
from core.iam.models import Role, TenantMembership
from core.leads.models import Lead
from core.tenants.models import Tenant


@pytest.mark.django_db
def test_tenant_defaults():
    t = Tenant.objects.create(name="Initech", slug="initech")
    assert t.created_at is not None
    assert t.timezone == "Europe/London"


@pytest.mark.django_db
def test_create_tenant_bootstraps_pipeline(django_user_model):
    founder = django_user_model.objects.create_user(username="f", email="f@x.com", password="pass12345")
    client = client_for(founder)

    r = client.post("/api/tenants", {"name": "Bright Windows", "slug": "bright-windows"}, format="json")
    assert r.status_code == 201, r.content
    assert r.json()["role"] == "admin"

    tenant = Tenant.objects.get(slug="bright-windows")
    assert TenantMembership.objects.get(tenant=tenant, user=founder).role == Role.ADMIN
    assert LeadStatus.objects.filter(tenant=tenant, is_default=True).count() == 1
    assert set(LeadStatus.objects.filter(tenant=tenant, is_final=True).values_list("slug", flat=True)) == {"won", "lost"}

    listed = client.get("/api/tenants").json()["tenants"]
    assert [t["slug"] for t in listed] == ["bright-windows"]


@pytest.mark.django_db
@pytest.mark.parametrize("slug", ["tenants", "Bad Slug", "acme", "ab"])
def test_create_tenant_rejects_bad_slugs(tenant, auth_client, slug):
    r = auth_client.post("/api/tenants", {"name": "X", "slug": slug}, format="json")
    assert r.status_code == 400
    assert "slug" in r.json()["details"]


@pytest.mark.django_db
def test_create_tenant_rejects_unknown_timezone(auth_client):
    r = auth_client.post("/api/tenants", {"name": "X", "slug": "xyz", "timezone": "Mars/Olympus"}, format="json")
    assert r.status_code == 400
    assert "timezone" in r.json()["details"]


@pytest.mark.django_db
def test_tenant_detail(tenant, auth_client):
    r = auth_client.get("/api/acme")
    assert r.status_code == 200
    body = r.json()
    assert body["tenant"]["slug"] == "acme"
    assert body["membership"]["role"] == "admin"
    assert body["settings"]["businessName"] == "Acme Ltd"


@pytest.mark.django_db
def test_settings_patch_admin_only(tenant, auth_client, agent_client):
    r = agent_client.patch("/api/acme/settings", {"primaryColor": "#000000"}, format="json")
    assert r.status_code == 403

    r2 = auth_client.patch("/api/acme/settings", {"primaryColor": "#000000", "workingDays": [1, 2, 3]}, format="json")
    assert r2.status_code == 200, r2.content
    assert r2.json()["primaryColor"] == "#000000"
    assert r2.json()["workingDays"] == [1, 2, 3]
    assert r2.json()["businessName"] == "Acme Ltd"


@pytest.mark.django_db
def test_seed_demo_is_idempotent():
    call_command("seed_demo")
    call_command("seed_demo")

    tenant = Tenant.objects.get(slug="premier-blinds")
    assert Lead.objects.filter(tenant=tenant).count() == 3
    assert tenant.templates.count() == 3
