import logging

import pytest

from user.authorizer import (
    Allowed, AuthorizationPolicy, Authorizer, DenialReason, is_enforced,
)
from user.jwt_utils import Principal

PRINCIPAL = Principal(user_id=7, username="sara", tenant_id=1, role="admin")


class FakePermissions:
    def __init__(self, granted=(), error=None):
        self.granted = set(granted)
        self.error = error
        self.calls = 0

    def has_permission(self, principal, capability):
        self.calls += 1
        if self.error:
            raise self.error
        return capability in self.granted


class FakeTenants:
    def __init__(self, tenants=(), error=None):
        self.tenants = set(tenants)
        self.error = error
        self.calls = 0

    def has_tenant_access(self, principal, tenant_id):
        self.calls += 1
        if self.error:
            raise self.error
        return int(tenant_id) in self.tenants


def enforced(granted=(), tenants=(), **kwargs):
    return Authorizer(
        AuthorizationPolicy.ENFORCED,
        FakePermissions(granted, kwargs.get("permission_error")),
        FakeTenants(tenants, kwargs.get("tenant_error")),
    )


@pytest.mark.parametrize("env,expected", [
    ("production", AuthorizationPolicy.ENFORCED),
    ("development", AuthorizationPolicy.BYPASSED),
    ("test", AuthorizationPolicy.BYPASSED),
    (None, AuthorizationPolicy.BYPASSED),
    ("Production", AuthorizationPolicy.BYPASSED),
])
def test_policy_from_environment(env, expected):
    assert AuthorizationPolicy.from_environment(env) is expected
    assert is_enforced(env) is (expected is AuthorizationPolicy.ENFORCED)


def test_explicit_policy_overrides_environment():
    assert AuthorizationPolicy.from_config(
        {"APP_ENV": "development", "AUTHORIZATION_POLICY": "enforced"}
    ) is AuthorizationPolicy.ENFORCED
    assert AuthorizationPolicy.from_config({"APP_ENV": "production"}) is AuthorizationPolicy.ENFORCED


def test_bypassed_policy_allows_everything_without_lookups():
    permissions, tenants = FakePermissions(), FakeTenants()
    authorizer = Authorizer(AuthorizationPolicy.BYPASSED, permissions, tenants)
    assert authorizer.authorize(None, "delete_customers", 99) == Allowed
    assert permissions.calls == 0 and tenants.calls == 0


def test_enforced_allows_with_capability_and_tenant():
    decision = enforced({"view_customers"}, {1}).authorize(PRINCIPAL, "view_customers", 1)
    assert decision.allowed is True
    assert decision.reason is None


def test_missing_capability_is_reported_before_tenant():
    decision = enforced(set(), set()).authorize(PRINCIPAL, "view_customers", 1)
    assert decision.allowed is False
    assert decision.reason is DenialReason.NO_PERMISSION


def test_missing_tenant_scope():
    decision = enforced({"view_customers"}, {2}).authorize(PRINCIPAL, "view_customers", 1)
    assert decision.reason is DenialReason.NO_TENANT_ACCESS


def test_missing_principal_has_no_capability():
    authorizer = enforced({"view_customers"}, {1})
    assert authorizer.has_capability(None, "view_customers") is False
    assert authorizer.authorize(None, "view_customers", 1).reason is DenialReason.NO_PERMISSION


@pytest.mark.parametrize("kwargs", [
    {"permission_error": RuntimeError("db down")},
    {"tenant_error": RuntimeError("db down")},
])
def test_lookup_failure_fails_closed(kwargs):
    authorizer = enforced({"view_customers"}, {1}, **kwargs)
    decision = authorizer.authorize(PRINCIPAL, "view_customers", 1)
    assert decision.allowed is False
    assert decision.reason is DenialReason.LOOKUP_FAILED


def test_has_capability_is_false_when_lookup_raises():
    authorizer = enforced(permission_error=RuntimeError("boom"))
    assert authorizer.has_capability(PRINCIPAL, "view_customers") is False


def test_resolvers_are_consulted_on_every_call():
    authorizer = enforced({"view_customers"}, {1})
    for _ in range(3):
        authorizer.authorize(PRINCIPAL, "view_customers", 1)
    assert authorizer.permission_resolver.calls == 3
    assert authorizer.tenant_resolver.calls == 3


def test_denials_are_logged_with_reason(caplog):
    with caplog.at_level(logging.WARNING, logger="user.authorizer"):
        enforced({"view_customers"}, {2}).authorize(PRINCIPAL, "view_customers", 1)
    assert "no_tenant_access" in caplog.text
