import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from core.catalog.models import LeadStatus, ProductType
from core.iam.models import Role, TenantMembership
from core.messaging.apps import set_dispatcher
from core.messaging.dispatch import SendResult
from core.tenants.models import Tenant, TenantSettings
from core.tenants.services import create_default_statuses

User = get_user_model()


def client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")
    return client


@pytest.fixture
def tenant(db):
    t = Tenant.objects.create(name="Acme", slug="acme")
    TenantSettings.objects.create(tenant=t, business_name="Acme Ltd", business_phone="+44 20 0000 0000")
    return t


@pytest.fixture
def other_tenant(db):
    return Tenant.objects.create(name="Globex", slug="globex")


@pytest.fixture
def statuses(tenant):
    return {s.slug: s for s in create_default_statuses(tenant)}


@pytest.fixture
def product_type(tenant):
    return ProductType.objects.create(tenant=tenant, name="Roller Blinds", slug="roller-blinds", order=1)


@pytest.fixture
def make_member(tenant):
    def _make(username, role=Role.AGENT, t=None):
        user = User.objects.create_user(username=username, email=f"{username}@acme.com", password="pass12345")
        TenantMembership.objects.create(tenant=t or tenant, user=user, role=role)
        return user
    return _make


@pytest.fixture
def user(make_member):
    return make_member("owner", Role.ADMIN)


@pytest.fixture
def agent(make_member):
    return make_member("agent", Role.AGENT)


@pytest.fixture
def auth_client(user):
    return client_for(user)


@pytest.fixture
def agent_client(agent):
    return client_for(agent)


class FakeDispatcher:
    def __init__(self, result=None):
        self.result = result or SendResult(success=True, provider_id="SM123")
        self.sent = []

    def send(self, channel, to, body, subject=None, sender=None):
        self.sent.append({"channel": channel, "to": to, "body": body, "subject": subject, "sender": sender})
        return self.result


@pytest.fixture
def fake_dispatcher():
    fake = FakeDispatcher()
    previous = set_dispatcher(fake)
    yield fake
    set_dispatcher(previous)


@pytest.fixture
def won_status(statuses):
    return statuses[LeadStatus.WON_SLUG]
