import logging
from flask import Blueprint, g, jsonify, request
from src.extensions import db
from src.errors import Conflict, NotFound
from src.listing import paginated_list
from src.resources import as_id, bulk_delete_response, get_owned_or_404, message, payload_tenant_id, query_tenant_id
from user.auth_middleware import require_permission
from user.user import User, USER_STATUS_DELETED
from validation import field, rules, validate_body, validate_query, id_list
from branches.branch import Branch, UserBranch

logger = logging.getLogger(__name__)

bp = Blueprint("user_branches", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

USER_BRANCH_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    user_id=field("User ID", "معرف المستخدم").required().integer(),
    branch_id=field("Branch ID", "معرف الفرع").required().integer(),
)

SEARCH_COLUMNS = (User.full_name, User.email, Branch.name, Branch.name_ar)
SORT_COLUMNS = {
    "user_name": User.full_name,
    "user_email": User.email,
    "branch_name": Branch.name,
    "branch_name_ar": Branch.name_ar,
}


def _tenant_assignments(tenant_id):
    return UserBranch.query.join(
        Branch, Branch.id == UserBranch.branch_id
    ).join(
        User, User.id == UserBranch.user_id
    ).filter(Branch.tenant_id == tenant_id)


def _owned_assignment(user_branch_id, tenant_id):
    return get_owned_or_404(
        _tenant_assignments(tenant_id).filter(UserBranch.id == user_branch_id), "user_branch_not_found"
    )


def _check_user_and_branch(user_id, branch_id, tenant_id):
    user = User.query.filter(
        User.id == user_id, User.tenant_id == tenant_id, User.status != USER_STATUS_DELETED
    ).first()
    if not user:
        raise NotFound("user_not_found")
    if not Branch.query.filter_by(id=branch_id, tenant_id=tenant_id).first():
        raise NotFound("branch_not_found")


def _already_assigned(user_id, branch_id, exclude_id=None):
    q = UserBranch.query.filter_by(user_id=user_id, branch_id=branch_id)
    if exclude_id is not None:
        q = q.filter(UserBranch.id != exclude_id)
    return q.first() is not None


# -------------------- ASSIGN USER TO BRANCH --------------------
@bp.route("", methods=["POST"])
@validate_body(USER_BRANCH_RULES)
@require_permission("create_user_branch")
def create_user_branch():
    data = g.payload
    tenant_id = payload_tenant_id()
    user_id = as_id(data["user_id"])
    branch_id = as_id(data["branch_id"])

    _check_user_and_branch(user_id, branch_id, tenant_id)
    if _already_assigned(user_id, branch_id):
        raise Conflict("already_assigned")

    assignment = UserBranch(user_id=user_id, branch_id=branch_id)
    db.session.add(assignment)
    db.session.commit()
    logger.info("Assigned user %s to branch %s", user_id, branch_id)
    return message("user_branch_created", 201, user_branch_id=assignment.id)


# -------------------- LIST USER BRANCHES --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_user_branches", tenant_from="query")
def list_user_branches():
    return jsonify(paginated_list(
        _tenant_assignments(query_tenant_id()), request.args,
        search_columns=SEARCH_COLUMNS,
        sort_columns=SORT_COLUMNS,
        default_sort=Branch.created_at,
    ))


# -------------------- UNASSIGN USER BRANCHES --------------------
@bp.route("", methods=["DELETE"])
@id_list("user_branch_ids", "missing_user_branch_ids", "invalid_user_branch_ids")
@require_permission("delete_user_branch")
def delete_user_branches():
    tenant_branches = db.select(Branch.id).where(Branch.tenant_id == g.tenant_id)
    affected = UserBranch.query.filter(
        UserBranch.id.in_(g.ids),
        UserBranch.branch_id.in_(tenant_branches),
    ).delete(synchronize_session=False)
    return bulk_delete_response(affected, "no_user_branches_found", "user_branches_deleted", "user branch")


# -------------------- GET USER BRANCH --------------------
@bp.route("/<int:user_branch_id>", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_user_branches", tenant_from="query")
def get_user_branch(user_branch_id):
    return jsonify(_owned_assignment(user_branch_id, query_tenant_id()).to_dict())


# -------------------- UPDATE USER BRANCH --------------------
@bp.route("/<int:user_branch_id>", methods=["PUT"])
@validate_body(USER_BRANCH_RULES)
@require_permission("edit_user_branch")
def update_user_branch(user_branch_id):
    data = g.payload
    tenant_id = payload_tenant_id()
    assignment = _owned_assignment(user_branch_id, tenant_id)
    user_id = as_id(data["user_id"])
    branch_id = as_id(data["branch_id"])

    _check_user_and_branch(user_id, branch_id, tenant_id)
    if _already_assigned(user_id, branch_id, exclude_id=assignment.id):
        raise Conflict("already_assigned")

    assignment.user_id = user_id
    assignment.branch_id = branch_id
    db.session.commit()
    return message("user_branch_updated")


# -------------------- DELETE USER BRANCH --------------------
@bp.route("/<int:user_branch_id>", methods=["DELETE"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("delete_user_branch", tenant_from="query")
def delete_user_branch(user_branch_id):
    assignment = _owned_assignment(user_branch_id, query_tenant_id())
    db.session.delete(assignment)
    db.session.commit()
    return message("user_branch_deleted")
