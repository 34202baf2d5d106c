import logging
from flask import Blueprint, g, jsonify, request
from localization import request_lang
from src.extensions import db
from src.errors import BadRequest, NotFound
from src.listing import paginated_list
from src.resources import as_decimal, as_id, bulk_delete_response, message, query_tenant_id
from user.auth_middleware import require_permission
from validation import field, rules, validate_body, validate_query, id_list
from products.product import Product
from sales.sales_order import SalesOrder, SalesOrderItem

logger = logging.getLogger(__name__)

bp = Blueprint("sales_order_items", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

CREATE_ITEM_RULES = rules(
    sales_order_id=field("Sales Order ID", "معرف طلب المبيعات").required().integer(),
    product_id=field("Product ID", "معرف المنتج").required().integer(),
    quantity=field("Quantity", "الكمية").required().number(),
    price=field("Price", "السعر").optional().number(),
    total=field("Total", "الإجمالي").optional().number(),
)

SORT_COLUMNS = {
    "id": SalesOrderItem.id,
    "quantity": SalesOrderItem.quantity,
    "price": SalesOrderItem.price,
    "total": SalesOrderItem.total,
    "created_at": SalesOrderItem.created_at,
}
FILTERS = {
    "sales_order_id": SalesOrderItem.sales_order_id,
    "product_id": SalesOrderItem.product_id,
}


# -------------------- CREATE SALES ORDER ITEM --------------------
@bp.route("", methods=["POST"])
@validate_query(TENANT_QUERY_RULES)
@validate_body(CREATE_ITEM_RULES)
@require_permission("create_sales_orders", tenant_from="query")
def create_sales_order_item():
    data = g.payload
    tenant_id = query_tenant_id()
    sales_order_id = as_id(data["sales_order_id"])
    product_id = as_id(data["product_id"])

    # duplicate check comes before any existence check
    if SalesOrderItem.query.filter_by(sales_order_id=sales_order_id, product_id=product_id).first():
        raise BadRequest("duplicate_item")

    if not SalesOrder.query.filter_by(id=sales_order_id, tenant_id=tenant_id).first():
        raise NotFound("sales_order_not_found")
    product = Product.active_in_tenant(tenant_id).filter(Product.id == product_id).first()
    if not product:
        raise NotFound("product_not_found")

    quantity = as_decimal(data["quantity"])
    price = as_decimal(data.get("price"), product.base_price)
    total = as_decimal(data.get("total"), quantity * price)

    item = SalesOrderItem(
        sales_order_id=sales_order_id,
        product_id=product_id,
        quantity=quantity,
        price=price,
        total=total,
    )
    db.session.add(item)
    db.session.commit()
    logger.info("Added product %s to sales order %s", product_id, sales_order_id)
    return message("sales_order_item_created", 201, sales_order_item_id=item.id)


# -------------------- LIST SALES ORDER ITEMS --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_sales_orders", tenant_from="query")
def list_sales_order_items():
    lang = request_lang()
    q = SalesOrderItem.query.join(
        SalesOrder, SalesOrder.id == SalesOrderItem.sales_order_id
    ).filter(SalesOrder.tenant_id == query_tenant_id())
    return jsonify(paginated_list(
        q, request.args,
        sort_columns=SORT_COLUMNS,
        default_sort=SalesOrderItem.id,
        filters=FILTERS,
        serialize=lambda item: item.to_dict(lang),
    ))


# -------------------- DELETE SALES ORDER ITEMS --------------------
@bp.route("", methods=["DELETE"])
@id_list("sales_order_item_ids", "missing_sales_order_item_ids", "invalid_sales_order_item_ids")
@require_permission("delete_sales_orders")
def delete_sales_order_items():
    tenant_orders = db.select(SalesOrder.id).where(SalesOrder.tenant_id == g.tenant_id)
    affected = SalesOrderItem.query.filter(
        SalesOrderItem.id.in_(g.ids),
        SalesOrderItem.sales_order_id.in_(tenant_orders),
    ).delete(synchronize_session=False)
    return bulk_delete_response(
        affected, "no_sales_order_items_found", "sales_order_items_deleted", "sales order item"
    )
