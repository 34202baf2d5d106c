from functools import wraps
from flask import current_app, g, request
from src.errors import BadRequest, Unauthorized
from validation.field_rules import as_id
from .jwt_utils import get_principal

TENANT_FIELD = 'tenant_id'


def get_authorizer(app=None):
    return (app or current_app).extensions['authorizer']


def get_current_principal():
    """Principal of the current request, resolved at most once"""
    if 'principal' not in g:
        g.principal = get_principal(request)
    return g.principal


def _tenant_from_request(source):
    if source == 'query':
        return request.args.get(TENANT_FIELD)
    payload = g.get('payload')
    if payload is None:
        payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return None
    return payload.get(TENANT_FIELD)


def require_permission(capability, tenant_from='body'):
    """Deny with 401 unless the principal holds `capability` for the request's tenant.

    Runs after the validation decorators; under a bypassed policy every
    request passes without consulting the resolvers.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            authorizer = get_authorizer()
            if not authorizer.is_enforced:
                return f(*args, **kwargs)

            tenant_id = g.get('tenant_id')
            if tenant_id is None:
                tenant_id = as_id(_tenant_from_request(tenant_from))
            if tenant_id is None:
                raise BadRequest('tenant_required')

            decision = authorizer.authorize(get_current_principal(), capability, tenant_id)
            if not decision.allowed:
                raise Unauthorized()
            return f(*args, **kwargs)
        return decorated_function
    return decorator
