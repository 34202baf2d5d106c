from flask import Blueprint, jsonify
from src.resources import query_tenant_id
from user.auth_middleware import require_permission
from user.user import Role
from validation import field, rules, validate_query

bp = Blueprint('roles', __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)


@bp.route('/list', methods=['GET'])
@validate_query(TENANT_QUERY_RULES)
@require_permission('view_roles', tenant_from='query')
def list_roles():
    """Every role of the tenant, unpaginated"""
    roles = Role.query.filter_by(tenant_id=query_tenant_id()).order_by(Role.created_at.desc()).all()
    return jsonify({'data': [role.to_dict() for role in roles]})
