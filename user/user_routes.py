import logging
from flask import Blueprint, g, jsonify, request
from localization import request_lang
from src.extensions import db
from src.errors import Conflict, NotFound
from src.listing import paginated_list
from src.resources import as_id, bulk_delete_response, message, payload_tenant_id, query_tenant_id
from user.auth_middleware import require_permission
from user.user import User, Role, USER_STATUS_ACTIVE, USER_STATUS_DELETED
from validation import field, rules, validate_body, validate_query, id_list

logger = logging.getLogger(__name__)

bp = Blueprint('users', __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

CREATE_USER_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    username=field("Username", "اسم المستخدم").required().min_length(3).max_length(80),
    full_name=field("Full Name", "الاسم الكامل").required().min_length(3).max_length(200),
    full_name_ar=field("Full Name (Arabic)", "الاسم الكامل بالعربية").optional().min_length(3).max_length(200),
    email=field("Email", "البريد الإلكتروني").required().email(),
    phone=field("Phone", "رقم الهاتف").optional().phone(),
    password=field("Password", "كلمة المرور").required().min_length(8),
    role_id=field("Role ID", "معرف الدور").required().integer(),
)

SEARCH_COLUMNS = (User.full_name, User.full_name_ar, User.email, User.username)
SORT_COLUMNS = {
    'full_name': User.full_name,
    'email': User.email,
    'username': User.username,
    'created_at': User.created_at,
}


# -------------------- CREATE USER --------------------
@bp.route('', methods=['POST'])
@validate_body(CREATE_USER_RULES)
@require_permission('create_users')
def create_user():
    data = g.payload
    tenant_id = payload_tenant_id()

    if User.query.filter_by(email=data['email']).first():
        raise Conflict('email_exists')

    role = Role.query.filter_by(id=as_id(data['role_id']), tenant_id=tenant_id).first()
    if not role:
        raise NotFound('role_not_found')

    user = User(
        tenant_id=tenant_id,
        role_id=role.id,
        username=data['username'],
        full_name=data['full_name'],
        full_name_ar=data.get('full_name_ar') or None,
        email=data['email'],
        phone=data.get('phone') or None,
        status=USER_STATUS_ACTIVE,
    )
    user.set_password(data['password'])
    db.session.add(user)
    db.session.commit()
    logger.info("Created user %s with role %s for tenant %s", user.id, role.slug, tenant_id)
    return message('user_created', 201, user_id=user.id)


# -------------------- LIST USERS --------------------
@bp.route('', methods=['GET'])
@validate_query(TENANT_QUERY_RULES)
@require_permission('view_users', tenant_from='query')
def list_users():
    lang = request_lang()
    q = User.query.filter(
        User.tenant_id == query_tenant_id(), User.status != USER_STATUS_DELETED
    )
    return jsonify(paginated_list(
        q, request.args,
        search_columns=SEARCH_COLUMNS,
        sort_columns=SORT_COLUMNS,
        default_sort=User.created_at,
        filters={'status': User.status, 'role_id': User.role_id},
        serialize=lambda u: u.to_dict(lang),
    ))


# -------------------- DELETE USERS (soft) --------------------
@bp.route('', methods=['DELETE'])
@id_list('user_ids', 'missing_user_ids', 'invalid_user_ids')
@require_permission('delete_users')
def delete_users():
    affected = User.query.filter(
        User.id.in_(g.ids),
        User.tenant_id == g.tenant_id,
        User.status != USER_STATUS_DELETED,
    ).update({User.status: USER_STATUS_DELETED}, synchronize_session=False)
    return bulk_delete_response(affected, 'no_users_found', 'users_deleted', 'user')
