"""
Flask decorators running the field evaluator against the incoming request.

The parsed input is left on ``flask.g`` (``g.payload`` for bodies,
``g.query`` for query strings) so the view and the permission check read the
same values that were validated.
"""
from functools import wraps

from flask import g, request

from localization import request_lang
from src.errors import BadRequest, ValidationFailed
from .field_rules import as_id, is_absent, validate_fields


def get_json_payload():
    """Return the request body as a dict, raising when it is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        if request.get_data(cache=True):
            raise BadRequest("invalid_body")
        return {}
    if not isinstance(data, dict):
        raise BadRequest("invalid_body")
    return data


def _raise_on_failure(values, field_rules):
    outcome = validate_fields(values, field_rules, request_lang())
    if not outcome.valid:
        raise ValidationFailed(outcome.errors)


def validate_body(field_rules):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            payload = get_json_payload()
            _raise_on_failure(payload, field_rules)
            g.payload = payload
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def validate_query(field_rules):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            query = request.args.to_dict()
            _raise_on_failure(query, field_rules)
            g.query = query
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def parse_id_list(payload, key, missing_key, invalid_key):
    """Extract ``(tenant_id, ids)`` from a bulk-delete body.

    Non-numeric entries are dropped; duplicates collapse, order is kept.
    """
    tenant_id = payload.get("tenant_id")
    if is_absent(tenant_id):
        raise BadRequest("tenant_required")
    tenant = as_id(tenant_id)
    if tenant is None:
        raise BadRequest("tenant_required")

    raw_ids = payload.get(key)
    if not isinstance(raw_ids, list) or not raw_ids:
        raise BadRequest(missing_key)

    ids = []
    for raw in raw_ids:
        value = as_id(raw)
        if value is not None and value not in ids:
            ids.append(value)
    if not ids:
        raise BadRequest(invalid_key)
    return tenant, ids


def id_list(key, missing_key, invalid_key):
    """Decorator form of :func:`parse_id_list`; sets ``g.tenant_id`` and ``g.ids``."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            payload = get_json_payload()
            g.payload = payload
            g.tenant_id, g.ids = parse_id_list(payload, key, missing_key, invalid_key)
            return f(*args, **kwargs)
        return decorated_function
    return decorator
