from clubportal.guards import evaluate_access, LOGIN_ENDPOINT, DASHBOARD_ENDPOINT
from clubportal.permissions import (
    SUPER_ADMIN, ADMIN, MEMBER,
    VIEW_DASHBOARD, MANAGE_PROJECTS, MANAGE_EVENTS, MANAGE_SETTINGS, MANAGE_CONTENT, MANAGE_MEMBERS, MANAGE_ADMINS,
    can, can_provision, allowed_roles,
)
from clubportal.session_store import SessionProfile


def profile(role):
    return SessionProfile(uid='u1', email='u1@example.org', username='u1', role=role)


def test_every_role_reaches_the_shared_screens():
    for role in (SUPER_ADMIN, ADMIN, MEMBER):
        for capability in (VIEW_DASHBOARD, MANAGE_PROJECTS, MANAGE_EVENTS, MANAGE_SETTINGS, MANAGE_CONTENT):
            assert can(role, capability), (role, capability)


def test_account_management_is_restricted():
    assert allowed_roles(MANAGE_MEMBERS) == [SUPER_ADMIN, ADMIN]
    assert allowed_roles(MANAGE_ADMINS) == [SUPER_ADMIN]


def test_unknown_role_has_no_capabilities():
    assert not can('GUEST', VIEW_DASHBOARD)
    assert not can(None, VIEW_DASHBOARD)


def test_provisioning_rules():
    assert can_provision(SUPER_ADMIN, ADMIN)
    assert can_provision(SUPER_ADMIN, MEMBER)
    assert can_provision(ADMIN, MEMBER)
    assert not can_provision(ADMIN, ADMIN)
    assert not can_provision(MEMBER, MEMBER)
    # Nobody provisions a super admin; that only happens through setup
    assert not can_provision(SUPER_ADMIN, SUPER_ADMIN)


def test_evaluate_access_sends_anonymous_users_to_login():
    assert evaluate_access(None) == LOGIN_ENDPOINT
    assert evaluate_access(None, MANAGE_ADMINS) == LOGIN_ENDPOINT


def test_evaluate_access_sends_unauthorized_roles_to_dashboard():
    assert evaluate_access(profile(MEMBER), MANAGE_MEMBERS) == DASHBOARD_ENDPOINT
    assert evaluate_access(profile(ADMIN), MANAGE_ADMINS) == DASHBOARD_ENDPOINT


def test_evaluate_access_allows_permitted_roles():
    assert evaluate_access(profile(MEMBER)) is None
    assert evaluate_access(profile(ADMIN), MANAGE_MEMBERS) is None
    assert evaluate_access(profile(SUPER_ADMIN), MANAGE_ADMINS) is None
