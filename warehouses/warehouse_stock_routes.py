import logging
from flask import Blueprint, g, jsonify, request
from src.extensions import db
from src.errors import Conflict, NotFound
from src.listing import paginated_list
from src.resources import (
    as_decimal, as_id, bulk_delete_response, get_owned_or_404,
    message, payload_tenant_id, query_tenant_id,
)
from user.auth_middleware import require_permission
from validation import field, rules, validate_body, validate_query, id_list
from products.product import Product
from warehouses.warehouse import Warehouse, WarehouseStock

logger = logging.getLogger(__name__)

bp = Blueprint("warehouse_stocks", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

CREATE_STOCK_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    warehouse_id=field("Warehouse ID", "معرف المستودع").required().integer(),
    product_id=field("Product ID", "معرف المنتج").required().integer(),
    quantity=field("Quantity", "الكمية").optional().number(),
)

UPDATE_STOCK_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    warehouse_id=field("Warehouse ID", "معرف المستودع").optional().integer(),
    product_id=field("Product ID", "معرف المنتج").optional().integer(),
    quantity=field("Quantity", "الكمية").optional().number(),
)

SORT_COLUMNS = {
    "quantity": WarehouseStock.quantity,
    "updated_at": WarehouseStock.updated_at,
    "created_at": WarehouseStock.created_at,
    "product_name": Product.product_name,
}
FILTERS = {
    "warehouse_id": WarehouseStock.warehouse_id,
    "product_id": WarehouseStock.product_id,
}


def _check_warehouse_and_product(warehouse_id, product_id, tenant_id):
    if not Warehouse.query.filter_by(id=warehouse_id, tenant_id=tenant_id).first():
        raise NotFound("warehouse_not_found")
    if not Product.active_in_tenant(tenant_id).filter(Product.id == product_id).first():
        raise NotFound("product_not_found")


def _stock_exists(tenant_id, warehouse_id, product_id, exclude_id=None):
    q = WarehouseStock.query.filter_by(tenant_id=tenant_id, warehouse_id=warehouse_id, product_id=product_id)
    if exclude_id is not None:
        q = q.filter(WarehouseStock.id != exclude_id)
    return q.first() is not None


def _owned_stock(stock_id, tenant_id):
    return get_owned_or_404(
        WarehouseStock.query.filter_by(id=stock_id, tenant_id=tenant_id), "stock_not_found"
    )


# -------------------- CREATE STOCK ENTRY --------------------
@bp.route("", methods=["POST"])
@validate_body(CREATE_STOCK_RULES)
@require_permission("create_warehouse_stock")
def create_stock():
    data = g.payload
    tenant_id = payload_tenant_id()
    warehouse_id = as_id(data["warehouse_id"])
    product_id = as_id(data["product_id"])

    if _stock_exists(tenant_id, warehouse_id, product_id):
        raise Conflict("stock_exists")
    _check_warehouse_and_product(warehouse_id, product_id, tenant_id)

    stock = WarehouseStock(
        tenant_id=tenant_id,
        warehouse_id=warehouse_id,
        product_id=product_id,
        quantity=as_decimal(data.get("quantity"), 0),
    )
    db.session.add(stock)
    db.session.commit()
    logger.info("Created stock entry %s in warehouse %s", stock.id, warehouse_id)
    return message("stock_created", 201, warehouse_stock_id=stock.id)


# -------------------- LIST STOCK --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_warehouse_stock", tenant_from="query")
def list_stock():
    q = WarehouseStock.query.join(
        Product, Product.id == WarehouseStock.product_id
    ).filter(WarehouseStock.tenant_id == query_tenant_id())
    return jsonify(paginated_list(
        q, request.args,
        search_columns=(Product.product_name, Product.product_name_ar),
        sort_columns=SORT_COLUMNS,
        default_sort=WarehouseStock.updated_at,
        filters=FILTERS,
    ))


# -------------------- DELETE STOCK ENTRIES --------------------
@bp.route("", methods=["DELETE"])
@id_list("warehouse_stock_ids", "missing_stock_ids", "invalid_stock_ids")
@require_permission("delete_warehouse_stock")
def delete_stocks():
    affected = WarehouseStock.query.filter(
        WarehouseStock.id.in_(g.ids), WarehouseStock.tenant_id == g.tenant_id
    ).delete(synchronize_session=False)
    return bulk_delete_response(affected, "no_stocks_found", "stocks_deleted", "warehouse stock")


# -------------------- GET STOCK ENTRY --------------------
@bp.route("/<int:stock_id>", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_warehouse_stock", tenant_from="query")
def get_stock(stock_id):
    return jsonify(_owned_stock(stock_id, query_tenant_id()).to_dict())


# -------------------- UPDATE STOCK ENTRY --------------------
@bp.route("/<int:stock_id>", methods=["PUT"])
@validate_body(UPDATE_STOCK_RULES)
@require_permission("edit_warehouse_stock")
def update_stock(stock_id):
    data = g.payload
    tenant_id = payload_tenant_id()
    stock = _owned_stock(stock_id, tenant_id)

    warehouse_id = as_id(data.get("warehouse_id")) or stock.warehouse_id
    product_id = as_id(data.get("product_id")) or stock.product_id
    if (warehouse_id, product_id) != (stock.warehouse_id, stock.product_id):
        _check_warehouse_and_product(warehouse_id, product_id, tenant_id)
        if _stock_exists(tenant_id, warehouse_id, product_id, exclude_id=stock.id):
            raise Conflict("stock_exists")
        stock.warehouse_id = warehouse_id
        stock.product_id = product_id

    if "quantity" in data:
        stock.quantity = as_decimal(data["quantity"], stock.quantity)
    db.session.commit()
    return message("stock_updated")


# -------------------- DELETE STOCK ENTRY --------------------
@bp.route("/<int:stock_id>", methods=["DELETE"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("delete_warehouse_stock", tenant_from="query")
def delete_stock(stock_id):
    affected = WarehouseStock.query.filter_by(
        id=stock_id, tenant_id=query_tenant_id()
    ).delete(synchronize_session=False)
    if not affected:
        raise NotFound("stock_not_found")
    db.session.commit()
    return message("stock_deleted")
