import logging
from flask import Blueprint, g, jsonify, request
from localization import request_lang
from src.extensions import db
from src.errors import NotFound
from src.listing import paginated_list
from src.resources import (
    as_decimal, as_id, apply_updates, bulk_delete_response, get_owned_or_404,
    message, payload_tenant_id, query_tenant_id,
)
from user.auth_middleware import require_permission
from validation import field, rules, validate_body, validate_query, id_list
from branches.branch import Branch
from customers.customer import Customer

logger = logging.getLogger(__name__)

bp = Blueprint("customers", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

CREATE_CUSTOMER_RULES = rules(
    full_name=field("Full Name", "الاسم الكامل").required().min_length(3).max_length(200),
    full_name_ar=field("Full Name (Arabic)", "الاسم الكامل بالعربية").optional().min_length(3).max_length(200),
    email=field("Email", "البريد الإلكتروني").required().email(),
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    branch_id=field("Branch ID", "معرف الفرع").optional().integer(),
    phone=field("Phone", "رقم الهاتف").optional().phone(),
    address=field("Address", "العنوان").optional().max_length(255),
    address_ar=field("Address (Arabic)", "العنوان بالعربية").optional().max_length(255),
    credit_limit=field("Credit Limit", "حد الائتمان").optional().number(),
)

UPDATE_CUSTOMER_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    full_name=field("Full Name", "الاسم الكامل").optional().min_length(3).max_length(200),
    full_name_ar=field("Full Name (Arabic)", "الاسم الكامل بالعربية").optional().min_length(3).max_length(200),
    email=field("Email", "البريد الإلكتروني").optional().email(),
    branch_id=field("Branch ID", "معرف الفرع").optional().integer(),
    phone=field("Phone", "رقم الهاتف").optional().phone(),
    address=field("Address", "العنوان").optional().max_length(255),
    address_ar=field("Address (Arabic)", "العنوان بالعربية").optional().max_length(255),
    credit_limit=field("Credit Limit", "حد الائتمان").optional().number(),
)

SEARCH_COLUMNS = (Customer.full_name, Customer.full_name_ar, Customer.phone, Customer.email)
SORT_COLUMNS = {
    "full_name": Customer.full_name,
    "full_name_ar": Customer.full_name_ar,
    "email": Customer.email,
    "credit_limit": Customer.credit_limit,
    "created_at": Customer.created_at,
}


def _branch_in_tenant(branch_id, tenant_id):
    if branch_id is None:
        return None
    if not Branch.query.filter_by(id=branch_id, tenant_id=tenant_id).first():
        raise NotFound("branch_not_found")
    return branch_id


def _owned_customer(customer_id, tenant_id):
    return get_owned_or_404(
        Customer.query.filter_by(id=customer_id, tenant_id=tenant_id), "customer_not_found"
    )


# -------------------- CREATE CUSTOMER --------------------
@bp.route("", methods=["POST"])
@validate_body(CREATE_CUSTOMER_RULES)
@require_permission("create_customers")
def create_customer():
    data = g.payload
    tenant_id = payload_tenant_id()
    branch_id = _branch_in_tenant(as_id(data.get("branch_id")), tenant_id)

    cust = Customer(
        tenant_id=tenant_id,
        branch_id=branch_id,
        full_name=data["full_name"],
        full_name_ar=data.get("full_name_ar") or None,
        email=data["email"],
        phone=data.get("phone") or None,
        address=data.get("address") or None,
        address_ar=data.get("address_ar") or None,
        credit_limit=as_decimal(data.get("credit_limit"), 0),
    )
    db.session.add(cust)
    db.session.commit()
    logger.info("Created customer %s for tenant %s", cust.id, tenant_id)
    return message("customer_created", 201, customer_id=cust.id)


# -------------------- LIST CUSTOMERS --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_customers", tenant_from="query")
def list_customers():
    lang = request_lang()
    q = Customer.query.filter(Customer.tenant_id == query_tenant_id())
    return jsonify(paginated_list(
        q, request.args,
        search_columns=SEARCH_COLUMNS,
        sort_columns=SORT_COLUMNS,
        default_sort=Customer.created_at,
        filters={"branch_id": Customer.branch_id},
        serialize=lambda c: c.to_dict(lang),
    ))


# -------------------- DELETE CUSTOMERS --------------------
@bp.route("", methods=["DELETE"])
@id_list("customer_ids", "missing_customer_ids", "invalid_customer_ids")
@require_permission("delete_customers")
def delete_customers():
    affected = Customer.query.filter(
        Customer.id.in_(g.ids), Customer.tenant_id == g.tenant_id
    ).delete(synchronize_session=False)
    return bulk_delete_response(affected, "no_customers_found", "customers_deleted", "customer")


# -------------------- GET CUSTOMER --------------------
@bp.route("/<int:customer_id>", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_customers", tenant_from="query")
def get_customer(customer_id):
    cust = _owned_customer(customer_id, query_tenant_id())
    return jsonify(cust.to_dict(request_lang()))


# -------------------- UPDATE CUSTOMER --------------------
@bp.route("/<int:customer_id>", methods=["PUT"])
@validate_body(UPDATE_CUSTOMER_RULES)
@require_permission("edit_customer")
def update_customer(customer_id):
    data = g.payload
    tenant_id = payload_tenant_id()
    cust = _owned_customer(customer_id, tenant_id)

    if "branch_id" in data:
        data = dict(data, branch_id=_branch_in_tenant(as_id(data["branch_id"]), tenant_id))
    apply_updates(cust, data, {
        "full_name": None,
        "full_name_ar": lambda v: v or None,
        "email": None,
        "phone": lambda v: v or None,
        "address": lambda v: v or None,
        "address_ar": lambda v: v or None,
        "branch_id": lambda v: v,
        "credit_limit": lambda v: as_decimal(v, 0),
    })
    db.session.commit()
    return message("customer_updated")


# -------------------- DELETE CUSTOMER --------------------
@bp.route("/<int:customer_id>", methods=["DELETE"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("delete_customers", tenant_from="query")
def delete_customer(customer_id):
    affected = Customer.query.filter_by(
        id=customer_id, tenant_id=query_tenant_id()
    ).delete(synchronize_session=False)
    if not affected:
        raise NotFound("customer_not_found")
    db.session.commit()
    return message("customer_deleted")
