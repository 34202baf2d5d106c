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
from user.user import User
from validation import field, rules, validate_body, validate_query, id_list
from branches.branch import Branch
from customers.customer import Customer
from sales.sales_order import SalesOrder, SalesOrderItem, ORDER_STATUS_DRAFT

logger = logging.getLogger(__name__)

bp = Blueprint("sales_orders", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

CREATE_SALES_ORDER_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    customer_id=field("Customer ID", "معرف العميل").required().integer(),
    user_id=field("User ID", "معرف المستخدم").required().integer(),
    branch_id=field("Branch ID", "معرف الفرع").optional().integer(),
    order_status=field("Order Status", "حالة الطلب").optional().max_length(30),
    total_amount=field("Total Amount", "المبلغ الإجمالي").optional().number(),
)

UPDATE_SALES_ORDER_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    customer_id=field("Customer ID", "معرف العميل").optional().integer(),
    user_id=field("User ID", "معرف المستخدم").optional().integer(),
    branch_id=field("Branch ID", "معرف الفرع").optional().integer(),
    order_status=field("Order Status", "حالة الطلب").optional().max_length(30),
    total_amount=field("Total Amount", "المبلغ الإجمالي").optional().number(),
)

SORT_COLUMNS = {
    "created_at": SalesOrder.created_at,
    "order_status": SalesOrder.order_status,
    "total_amount": SalesOrder.total_amount,
    "customer_id": SalesOrder.customer_id,
}
FILTERS = {
    "customer_id": SalesOrder.customer_id,
    "branch_id": SalesOrder.branch_id,
    "order_status": SalesOrder.order_status,
}


def _require_in_tenant(model, row_id, tenant_id, not_found_key):
    if not model.query.filter_by(id=row_id, tenant_id=tenant_id).first():
        raise NotFound(not_found_key)
    return row_id


def _owned_order(order_id, tenant_id):
    return get_owned_or_404(
        SalesOrder.query.filter_by(id=order_id, tenant_id=tenant_id), "sales_order_not_found"
    )


# -------------------- CREATE SALES ORDER --------------------
@bp.route("", methods=["POST"])
@validate_body(CREATE_SALES_ORDER_RULES)
@require_permission("create_sales_orders")
def create_sales_order():
    data = g.payload
    tenant_id = payload_tenant_id()

    customer_id = _require_in_tenant(Customer, as_id(data["customer_id"]), tenant_id, "customer_not_found")
    user_id = _require_in_tenant(User, as_id(data["user_id"]), tenant_id, "user_not_found")
    branch_id = as_id(data.get("branch_id"))
    if branch_id is not None:
        _require_in_tenant(Branch, branch_id, tenant_id, "branch_not_found")

    order = SalesOrder(
        tenant_id=tenant_id,
        customer_id=customer_id,
        user_id=user_id,
        branch_id=branch_id,
        order_status=data.get("order_status") or ORDER_STATUS_DRAFT,
        total_amount=as_decimal(data.get("total_amount"), 0),
    )
    db.session.add(order)
    db.session.commit()
    logger.info("Created sales order %s for tenant %s", order.id, tenant_id)
    return message("sales_order_created", 201, sales_order_id=order.id)


# -------------------- LIST SALES ORDERS --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_sales_orders", tenant_from="query")
def list_sales_orders():
    lang = request_lang()
    q = SalesOrder.query.filter(SalesOrder.tenant_id == query_tenant_id())
    return jsonify(paginated_list(
        q, request.args,
        search_columns=(SalesOrder.order_status,),
        sort_columns=SORT_COLUMNS,
        default_sort=SalesOrder.created_at,
        filters=FILTERS,
        serialize=lambda o: o.to_dict(lang),
    ))


# -------------------- DELETE SALES ORDERS --------------------
@bp.route("", methods=["DELETE"])
@id_list("sales_order_ids", "missing_sales_order_ids", "invalid_sales_order_ids")
@require_permission("delete_sales_orders")
def delete_sales_orders():
    owned = db.select(SalesOrder.id).where(
        SalesOrder.id.in_(g.ids), SalesOrder.tenant_id == g.tenant_id
    )
    SalesOrderItem.query.filter(
        SalesOrderItem.sales_order_id.in_(owned)
    ).delete(synchronize_session=False)
    affected = SalesOrder.query.filter(
        SalesOrder.id.in_(g.ids), SalesOrder.tenant_id == g.tenant_id
    ).delete(synchronize_session=False)
    return bulk_delete_response(affected, "no_sales_orders_found", "sales_orders_deleted", "sales order")


# -------------------- GET SALES ORDER --------------------
@bp.route("/<int:sales_order_id>", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_sales_orders", tenant_from="query")
def get_sales_order(sales_order_id):
    order = _owned_order(sales_order_id, query_tenant_id())
    return jsonify(order.to_dict(request_lang(), include_items=True))


# -------------------- UPDATE SALES ORDER --------------------
@bp.route("/<int:sales_order_id>", methods=["PUT"])
@validate_body(UPDATE_SALES_ORDER_RULES)
@require_permission("edit_sales_orders")
def update_sales_order(sales_order_id):
    data = dict(g.payload)
    tenant_id = payload_tenant_id()
    order = _owned_order(sales_order_id, tenant_id)

    if as_id(data.get("customer_id")) is not None:
        data["customer_id"] = _require_in_tenant(Customer, as_id(data["customer_id"]), tenant_id, "customer_not_found")
    if as_id(data.get("user_id")) is not None:
        data["user_id"] = _require_in_tenant(User, as_id(data["user_id"]), tenant_id, "user_not_found")
    if "branch_id" in data:
        data["branch_id"] = as_id(data["branch_id"])
        if data["branch_id"] is not None:
            _require_in_tenant(Branch, data["branch_id"], tenant_id, "branch_not_found")

    apply_updates(order, data, {
        "customer_id": None,
        "user_id": None,
        "branch_id": lambda v: v,
        "order_status": None,
        "total_amount": lambda v: as_decimal(v, order.total_amount),
    })
    db.session.commit()
    return message("sales_order_updated")


# -------------------- DELETE SALES ORDER --------------------
@bp.route("/<int:sales_order_id>", methods=["DELETE"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("delete_sales_orders", tenant_from="query")
def delete_sales_order(sales_order_id):
    order = _owned_order(sales_order_id, query_tenant_id())
    db.session.delete(order)
    db.session.commit()
    return message("sales_order_deleted")
