import pytest

from core.catalog.models import CustomField, ProductType
from core.catalog.validation import validate_custom_field_values
from rest_framework.exceptions import ValidationError


@pytest.mark.django_db
def test_statuses_listed_in_pipeline_order(tenant, statuses, agent_client):
    r = agent_client.get("/api/acme/statuses")
    assert r.status_code == 200
    slugs = [s["slug"] for s in r.json()["statuses"]]
    assert slugs[0] == "new"
    assert slugs[-2:] == ["won", "lost"]


@pytest.mark.django_db
def test_create_status_requires_manager(tenant, statuses, agent_client):
    r = agent_client.post("/api/acme/statuses", {"name": "Booked", "slug": "booked", "color": "#112233"}, format="json")
    assert r.status_code == 403


@pytest.mark.django_db
def test_create_status_rejects_duplicate_slug(tenant, statuses, auth_client):
    r = auth_client.post("/api/acme/statuses", {"name": "New again", "slug": "new", "color": "#112233"}, format="json")
    assert r.status_code == 400
    assert r.json()["details"] == {"slug": ["This slug is already in use."]}


@pytest.mark.django_db
def test_create_status_rejects_bad_color(tenant, auth_client):
    r = auth_client.post("/api/acme/statuses", {"name": "Booked", "slug": "booked", "color": "blue"}, format="json")
    assert r.status_code == 400
    assert "color" in r.json()["details"]


@pytest.mark.django_db
def test_product_types_create_and_list(tenant, auth_client):
    r = auth_client.post("/api/acme/product-types", {"name": "Shutters", "slug": "shutters"}, format="json")
    assert r.status_code == 201, r.content
    assert ProductType.objects.filter(tenant=tenant, slug="shutters").exists()

    listed = auth_client.get("/api/acme/product-types").json()["productTypes"]
    assert [p["slug"] for p in listed] == ["shutters"]


@pytest.mark.django_db
def test_custom_field_create(tenant, auth_client):
    r = auth_client.post(
        "/api/acme/custom-fields",
        {"name": "Property", "slug": "property_type", "type": "SELECT", "options": ["House", "Flat"], "isRequired": True},
        format="json",
    )
    assert r.status_code == 201, r.content
    body = r.json()
    assert body["options"] == ["House", "Flat"]
    assert body["isRequired"] is True


@pytest.mark.django_db
def test_custom_field_validation_rules(tenant):
    CustomField.objects.create(
        tenant=tenant, name="Property", slug="property_type", type=CustomField.Type.SELECT,
        options=["House", "Flat"], is_required=True,
    )
    CustomField.objects.create(tenant=tenant, name="Keen", slug="keen", type=CustomField.Type.BOOLEAN)
    CustomField.objects.create(tenant=tenant, name="Old", slug="old", type=CustomField.Type.NUMBER, is_active=False)

    ok = validate_custom_field_values(tenant, {"property_type": "Flat", "keen": True, "old": "ignored", "utm_source": "x"})
    assert ok["utm_source"] == "x"

    with pytest.raises(ValidationError) as exc:
        validate_custom_field_values(tenant, {"keen": "yes"})
    issues = exc.value.detail["customFieldValues"]
    assert set(issues) == {"property_type", "keen"}
