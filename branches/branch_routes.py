import logging
from flask import Blueprint, g, jsonify, request
from src.extensions import db
from src.errors import Conflict
from src.listing import paginated_list
from src.resources import as_decimal, bulk_delete_response, message, payload_tenant_id, query_tenant_id
from user.auth_middleware import require_permission
from validation import field, rules, validate_body, validate_query, id_list
from branches.branch import Branch

logger = logging.getLogger(__name__)

bp = Blueprint("branches", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

CREATE_BRANCH_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    name=field("Branch Name", "اسم الفرع").required().min_length(3).max_length(200),
    name_ar=field("Branch Name (Arabic)", "اسم الفرع بالعربية").optional().min_length(3).max_length(200),
    address=field("Address", "العنوان").optional().min_length(3).max_length(255),
    address_ar=field("Address (Arabic)", "العنوان بالعربية").optional().min_length(3).max_length(255),
    latitude=field("Latitude", "خط العرض").optional().decimal(),
    longitude=field("Longitude", "خط الطول").optional().decimal(),
)

SEARCH_COLUMNS = (Branch.name, Branch.name_ar, Branch.address, Branch.address_ar)
SORT_COLUMNS = {
    "name": Branch.name,
    "name_ar": Branch.name_ar,
    "created_at": Branch.created_at,
}


# -------------------- CREATE BRANCH --------------------
@bp.route("", methods=["POST"])
@validate_body(CREATE_BRANCH_RULES)
@require_permission("create_branch")
def create_branch():
    data = g.payload
    tenant_id = payload_tenant_id()

    if Branch.query.filter_by(tenant_id=tenant_id, name=data["name"]).first():
        raise Conflict("branch_exists")

    branch = Branch(
        tenant_id=tenant_id,
        name=data["name"],
        name_ar=data.get("name_ar") or None,
        address=data.get("address") or None,
        address_ar=data.get("address_ar") or None,
        latitude=as_decimal(data.get("latitude")),
        longitude=as_decimal(data.get("longitude")),
    )
    db.session.add(branch)
    db.session.commit()
    logger.info("Created branch %s for tenant %s", branch.id, tenant_id)
    return message("branch_created", 201, branch_id=branch.id)


# -------------------- LIST BRANCHES --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_branches", tenant_from="query")
def list_branches():
    q = Branch.query.filter(Branch.tenant_id == query_tenant_id())
    return jsonify(paginated_list(
        q, request.args,
        search_columns=SEARCH_COLUMNS,
        sort_columns=SORT_COLUMNS,
        default_sort=Branch.created_at,
    ))


# -------------------- DELETE BRANCHES --------------------
@bp.route("", methods=["DELETE"])
@id_list("branch_ids", "missing_branch_ids", "invalid_branch_ids")
@require_permission("delete_branch")
def delete_branches():
    affected = Branch.query.filter(
        Branch.id.in_(g.ids), Branch.tenant_id == g.tenant_id
    ).delete(synchronize_session=False)
    return bulk_delete_response(affected, "no_branches_found", "branches_deleted", "branch")
