from types import SimpleNamespace

import pytest

from core.iam.models import Role, TenantMembership
from core.iam.permissions import HasRole, InsufficientRole, TenantAccessDenied, require_tenant_membership
from core.conftest import client_for


def test_role_order():
    assert Role.AGENT.rank < Role.MANAGER.rank < Role.ADMIN.rank
    assert Role.ADMIN.covers(Role.MANAGER)
    assert Role.MANAGER.covers("manager")
    assert not Role.AGENT.covers(Role.MANAGER)


@pytest.mark.django_db
def test_require_tenant_membership(tenant, user, agent):
    m = require_tenant_membership("acme", user, min_role=Role.ADMIN)
    assert m.tenant == tenant

    with pytest.raises(InsufficientRole):
        require_tenant_membership("acme", agent, min_role=Role.MANAGER)

    with pytest.raises(TenantAccessDenied):
        require_tenant_membership("globex", user)


@pytest.mark.django_db
def test_members_list_and_add(tenant, user, auth_client, django_user_model):
    django_user_model.objects.create_user(username="newbie", email="newbie@acme.com", password="pass12345")

    r = auth_client.post("/api/acme/members", {"email": "newbie@acme.com", "role": "manager"}, format="json")
    assert r.status_code == 201, r.content
    assert r.json()["role"] == "manager"

    dup = auth_client.post("/api/acme/members", {"email": "newbie@acme.com"}, format="json")
    assert dup.status_code == 400

    emails = [m["email"] for m in auth_client.get("/api/acme/members").json()["members"]]
    assert emails == ["owner@acme.com", "newbie@acme.com"]


@pytest.mark.django_db
def test_members_write_is_admin_only(tenant, agent_client):
    r = agent_client.post("/api/acme/members", {"email": "owner@acme.com"}, format="json")
    assert r.status_code == 403


@pytest.mark.django_db
def test_role_change_and_last_admin_guard(tenant, user, agent, auth_client):
    agent_membership = TenantMembership.objects.get(tenant=tenant, user=agent)
    r = auth_client.patch(f"/api/acme/members/{agent_membership.id}", {"role": "manager"}, format="json")
    assert r.status_code == 200
    assert r.json()["role"] == "manager"

    own = TenantMembership.objects.get(tenant=tenant, user=user)
    r2 = auth_client.patch(f"/api/acme/members/{own.id}", {"role": "agent"}, format="json")
    assert r2.status_code == 400
    own.refresh_from_db()
    assert own.role == Role.ADMIN


@pytest.mark.django_db
def test_manager_cannot_change_roles(tenant, make_member, agent):
    manager = make_member("mgr", Role.MANAGER)
    target = TenantMembership.objects.get(tenant=tenant, user=agent)
    r = client_for(manager).patch(f"/api/acme/members/{target.id}", {"role": "admin"}, format="json")
    assert r.status_code == 403


def test_has_role_at_least():
    admin_only = HasRole.at_least(Role.ADMIN)()
    manager_req = SimpleNamespace(membership=SimpleNamespace(has_role=lambda r: Role("manager").covers(r)))
    admin_req = SimpleNamespace(membership=SimpleNamespace(has_role=lambda r: Role("admin").covers(r)))

    assert admin_only.has_permission(manager_req, None) is False
    assert admin_only.has_permission(admin_req, None) is True
    assert HasRole.at_least(Role.MANAGER)().has_permission(SimpleNamespace(), None) is False


@pytest.mark.django_db
def test_manager_cannot_remove_members(tenant, make_member, agent):
    manager = make_member("mgr", Role.MANAGER)
    target = TenantMembership.objects.get(tenant=tenant, user=agent)
    r = client_for(manager).delete(f"/api/acme/members/{target.id}")
    assert r.status_code == 403
    assert r.json()["error"] == "Forbidden: Insufficient permissions"
    assert TenantMembership.objects.filter(id=target.id).exists()
