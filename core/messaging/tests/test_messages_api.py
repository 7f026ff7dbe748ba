import pytest

from core.audit.models import AuditLog
from core.leads.models import Lead
from core.messaging.dispatch import SendResult
from core.messaging.models import Message, Template


@pytest.fixture
def lead(tenant, statuses, product_type, user):
    return Lead.objects.create(
        tenant=tenant,
        created_by=user,
        status=statuses["new"],
        product_type=product_type,
        name="Jane",
        phone="+447700900000",
        email="jane@x.com",
    )


@pytest.mark.django_db
def test_send_templated_sms(tenant, lead, auth_client, fake_dispatcher):
    tpl = Template.objects.create(
        tenant=tenant,
        name="Hello",
        channel="SMS",
        body="Hi {{lead.name}}, thanks for asking {{tenant.businessName}} about {{lead.productType}}",
    )

    r = auth_client.post(
        f"/api/acme/leads/{lead.id}/messages", {"channel": "SMS", "templateId": str(tpl.id)}, format="json"
    )
    assert r.status_code == 201, r.content
    body = r.json()
    assert body["status"] == "SENT"
    assert body["providerId"] == "SM123"
    assert body["body"] == "Hi Jane, thanks for asking Acme Ltd about Roller Blinds"

    assert fake_dispatcher.sent[0]["to"] == "+447700900000"
    assert fake_dispatcher.sent[0]["channel"] == "SMS"

    log = AuditLog.objects.get(action=AuditLog.Action.MESSAGE_SENT)
    assert log.lead_id == lead.id
    assert log.meta["status"] == "SENT"


@pytest.mark.django_db
def test_email_defaults_to_lead_email(lead, auth_client, fake_dispatcher):
    r = auth_client.post(
        f"/api/acme/leads/{lead.id}/messages",
        {"channel": "EMAIL", "subject": "For {{lead.name}}", "body": "Hello"},
        format="json",
    )
    assert r.status_code == 201
    assert fake_dispatcher.sent[0]["to"] == "jane@x.com"
    assert fake_dispatcher.sent[0]["subject"] == "For Jane"


@pytest.mark.django_db
def test_failed_send_is_stored_and_reported(lead, auth_client, fake_dispatcher):
    fake_dispatcher.result = SendResult(success=False, error="Invalid number")

    r = auth_client.post(f"/api/acme/leads/{lead.id}/messages", {"channel": "SMS", "body": "x"}, format="json")
    assert r.status_code == 502
    assert r.json()["error"] == "Invalid number"
    assert r.json()["code"] == "DELIVERY_FAILED"

    msg = Message.objects.get(lead=lead)
    assert msg.status == Message.Status.FAILED
    assert msg.error == "Invalid number"


@pytest.mark.django_db
def test_body_or_template_required(lead, auth_client, fake_dispatcher):
    r = auth_client.post(f"/api/acme/leads/{lead.id}/messages", {"channel": "SMS"}, format="json")
    assert r.status_code == 400
    assert fake_dispatcher.sent == []


@pytest.mark.django_db
def test_foreign_template_rejected(other_tenant, lead, auth_client, fake_dispatcher):
    tpl = Template.objects.create(tenant=other_tenant, name="X", channel="SMS", body="x")
    r = auth_client.post(
        f"/api/acme/leads/{lead.id}/messages", {"channel": "SMS", "templateId": str(tpl.id)}, format="json"
    )
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_REFERENCE"
    assert Message.objects.count() == 0


@pytest.mark.django_db
def test_sent_messages_show_on_lead_detail(lead, auth_client, fake_dispatcher):
    auth_client.post(f"/api/acme/leads/{lead.id}/messages", {"channel": "SMS", "body": "one"}, format="json")
    detail = auth_client.get(f"/api/acme/leads/{lead.id}").json()
    assert [m["body"] for m in detail["messages"]] == ["one"]
    assert detail["messages"][0]["sentBy"] == "owner"


@pytest.mark.django_db
def test_templates_create_requires_manager(tenant, auth_client, agent_client):
    payload = {"name": "Hi", "channel": "SMS", "body": "Hi {{lead.name}}"}
    assert agent_client.post("/api/acme/templates", payload, format="json").status_code == 403

    r = auth_client.post("/api/acme/templates", payload, format="json")
    assert r.status_code == 201
    assert [t["name"] for t in agent_client.get("/api/acme/templates").json()["templates"]] == ["Hi"]


@pytest.mark.django_db
def test_rendered_subject_is_clipped_to_column_length(tenant, lead, auth_client, fake_dispatcher):
    lead.name = "J" * 200
    lead.save(update_fields=["name"])
    tpl = Template.objects.create(
        tenant=tenant, name="Long", channel="EMAIL", subject="{{lead.name}} {{lead.name}}", body="Hello"
    )

    r = auth_client.post(
        f"/api/acme/leads/{lead.id}/messages", {"channel": "EMAIL", "templateId": str(tpl.id)}, format="json"
    )
    assert r.status_code == 201, r.content
    assert len(Message.objects.get(lead=lead).subject) == 255
    assert len(fake_dispatcher.sent[0]["subject"]) == 255
