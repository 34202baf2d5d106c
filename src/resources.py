"""Helpers shared by the tenant-scoped resource blueprints."""
import logging
from decimal import Decimal, InvalidOperation
from flask import g, jsonify, request
from localization import get_message, request_lang
from src.errors import BadRequest, NotFound
from src.extensions import db
from validation.field_rules import as_id

logger = logging.getLogger(__name__)


def as_decimal(value, default=None):
    if value is None or value == '':
        return default
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return default


def as_float(value):
    return float(value) if value is not None else None


def iso(value):
    return value.isoformat() if value else None


def query_tenant_id():
    """Tenant id of a read/item request, taken from the query string."""
    tenant_id = as_id(request.args.get('tenant_id'))
    if tenant_id is None:
        raise BadRequest('tenant_required')
    return tenant_id


def payload_tenant_id():
    tenant_id = as_id(g.payload.get('tenant_id'))
    if tenant_id is None:
        raise BadRequest('tenant_required')
    return tenant_id


def get_owned_or_404(query, not_found_key):
    row = query.first()
    if row is None:
        raise NotFound(not_found_key)
    return row


def apply_updates(row, payload, converters):
    """Copy the provided keys of ``payload`` onto ``row``; absent keys are left alone.

    Keys mapped to ``None`` are non-nullable columns, so blank values for
    them keep the stored value.
    """
    for name, convert in converters.items():
        if name not in payload:
            continue
        value = payload[name]
        if convert is None:
            if value is None or value == "":
                continue
            setattr(row, name, value)
        else:
            setattr(row, name, convert(value))


def message(key, status=200, **extra):
    body = {'message': get_message(key, request_lang(), **extra.pop('params', {}))}
    body.update(extra)
    return jsonify(body), status


def bulk_delete_response(affected, no_found_key, deleted_key, resource):
    """Turn the row count of a tenant-scoped bulk mutation into the API response."""
    if not affected:
        db.session.rollback()
        raise NotFound(no_found_key)
    db.session.commit()
    logger.info("Deleted %s %s row(s) for tenant %s", affected, resource, g.tenant_id)
    return message(deleted_key, params={'count': affected})
