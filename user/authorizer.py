"""
Request authorization: capability check followed by tenant-scope check.

The authorizer never reads the runtime environment itself. An
``AuthorizationPolicy`` is chosen once at application start and injected;
under ``BYPASSED`` every request is allowed, under ``ENFORCED`` the
permission and tenant resolvers are consulted on every call (no caching).
Resolver errors deny the request.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

PRODUCTION_ENVIRONMENT = "production"


class AuthorizationPolicy(str, Enum):
    ENFORCED = "enforced"
    BYPASSED = "bypassed"

    @classmethod
    def from_environment(cls, environment):
        return cls.ENFORCED if environment == PRODUCTION_ENVIRONMENT else cls.BYPASSED

    @classmethod
    def from_config(cls, config):
        explicit = config.get("AUTHORIZATION_POLICY")
        if explicit:
            return cls(str(explicit).strip().lower())
        return cls.from_environment(config.get("APP_ENV"))


def is_enforced(environment):
    return AuthorizationPolicy.from_environment(environment) is AuthorizationPolicy.ENFORCED


class DenialReason(str, Enum):
    NO_PERMISSION = "no_permission"
    NO_TENANT_ACCESS = "no_tenant_access"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    reason: Optional[DenialReason] = None

    @classmethod
    def allow(cls):
        return cls(True)

    @classmethod
    def deny(cls, reason):
        return cls(False, DenialReason(reason))


Allowed = AuthorizationDecision.allow()


def Denied(reason):
    return AuthorizationDecision.deny(reason)


class _LookupError(Exception):
    pass


class Authorizer:
    def __init__(self, policy, permission_resolver, tenant_resolver):
        self.policy = AuthorizationPolicy(policy)
        self.permission_resolver = permission_resolver
        self.tenant_resolver = tenant_resolver

    @property
    def is_enforced(self):
        return self.policy is AuthorizationPolicy.ENFORCED

    def has_capability(self, principal, capability):
        try:
            return self._check_capability(principal, capability)
        except _LookupError:
            return False

    def has_tenant_scope(self, principal, tenant_id):
        try:
            return self._check_tenant(principal, tenant_id)
        except _LookupError:
            return False

    def authorize(self, principal, capability, tenant_id=None):
        if not self.is_enforced:
            return Allowed
        try:
            if not self._check_capability(principal, capability):
                return self._deny(DenialReason.NO_PERMISSION, principal, capability, tenant_id)
            if tenant_id is not None and not self._check_tenant(principal, tenant_id):
                return self._deny(DenialReason.NO_TENANT_ACCESS, principal, capability, tenant_id)
        except _LookupError:
            return self._deny(DenialReason.LOOKUP_FAILED, principal, capability, tenant_id)
        return Allowed

    def _check_capability(self, principal, capability):
        if principal is None:
            return False
        try:
            return bool(self.permission_resolver.has_permission(principal, capability))
        except Exception as e:
            logger.error("Permission lookup failed for %s: %s", capability, e)
            raise _LookupError() from e

    def _check_tenant(self, principal, tenant_id):
        if principal is None:
            return False
        try:
            return bool(self.tenant_resolver.has_tenant_access(principal, tenant_id))
        except Exception as e:
            logger.error("Tenant scope lookup failed for tenant %s: %s", tenant_id, e)
            raise _LookupError() from e

    @staticmethod
    def _deny(reason, principal, capability, tenant_id):
        logger.warning(
            "Denied %s on tenant %s for user %s: %s",
            capability, tenant_id, getattr(principal, "user_id", None), reason.value,
        )
        return Denied(reason)
