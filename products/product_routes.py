import logging
from flask import Blueprint, g, jsonify, request
from src.extensions import db
from src.errors import Conflict, NotFound
from src.listing import paginated_list
from src.resources import (
    as_decimal, apply_updates, bulk_delete_response, get_owned_or_404,
    message, payload_tenant_id, query_tenant_id,
)
from user.auth_middleware import require_permission
from validation import field, rules, validate_body, validate_query, id_list
from products.product import Product

logger = logging.getLogger(__name__)

bp = Blueprint("products", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

CREATE_PRODUCT_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    sku=field("SKU", "رمز SKU").required().min_length(1),
    product_name=field("Product Name", "اسم المنتج").required().min_length(2),
    product_name_ar=field("Product Name (Arabic)", "اسم المنتج بالعربية").required().min_length(2),
    category=field("Category", "الفئة").required().min_length(2),
    category_ar=field("Category (Arabic)", "الفئة بالعربية").required().min_length(2),
    barcode=field("Barcode", "الباركود").required().min_length(2),
    base_price=field("Base Price", "السعر الأساسي").required().number(),
)

UPDATE_PRODUCT_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    sku=field("SKU", "رمز SKU").optional().min_length(1),
    product_name=field("Product Name", "اسم المنتج").optional().min_length(2),
    product_name_ar=field("Product Name (Arabic)", "اسم المنتج بالعربية").optional().min_length(2),
    category=field("Category", "الفئة").optional().min_length(2),
    category_ar=field("Category (Arabic)", "الفئة بالعربية").optional().min_length(2),
    barcode=field("Barcode", "الباركود").optional().min_length(2),
    base_price=field("Base Price", "السعر الأساسي").optional().number(),
)

SEARCH_COLUMNS = (
    Product.product_name, Product.product_name_ar, Product.category,
    Product.category_ar, Product.sku, Product.barcode,
)
SORT_COLUMNS = {
    "product_name": Product.product_name,
    "product_name_ar": Product.product_name_ar,
    "sku": Product.sku,
    "category": Product.category,
    "base_price": Product.base_price,
    "created_at": Product.created_at,
}


def _sku_taken(tenant_id, sku, exclude_id=None):
    q = Product.query.filter(Product.tenant_id == tenant_id, Product.sku == sku)
    if exclude_id is not None:
        q = q.filter(Product.id != exclude_id)
    return q.first() is not None


def _owned_product(product_id, tenant_id):
    return get_owned_or_404(
        Product.active_in_tenant(tenant_id).filter(Product.id == product_id), "product_not_found"
    )


# -------------------- CREATE PRODUCT --------------------
@bp.route("", methods=["POST"])
@validate_body(CREATE_PRODUCT_RULES)
@require_permission("create_product")
def create_product():
    data = g.payload
    tenant_id = payload_tenant_id()

    if _sku_taken(tenant_id, data["sku"]):
        raise Conflict("sku_exists")

    product = Product(
        tenant_id=tenant_id,
        sku=data["sku"],
        barcode=data["barcode"],
        product_name=data["product_name"],
        product_name_ar=data["product_name_ar"],
        category=data["category"],
        category_ar=data["category_ar"],
        base_price=as_decimal(data["base_price"], 0),
    )
    db.session.add(product)
    db.session.commit()
    logger.info("Created product %s (%s) for tenant %s", product.id, product.sku, tenant_id)
    return message("product_created", 201, product_id=product.id)


# -------------------- LIST PRODUCTS --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_products", tenant_from="query")
def list_products():
    q = Product.active_in_tenant(query_tenant_id())
    return jsonify(paginated_list(
        q, request.args,
        search_columns=SEARCH_COLUMNS,
        sort_columns=SORT_COLUMNS,
        default_sort=Product.created_at,
        filters={"category": Product.category},
    ))


# -------------------- DELETE PRODUCTS (soft) --------------------
@bp.route("", methods=["DELETE"])
@id_list("product_ids", "missing_product_ids", "invalid_product_ids")
@require_permission("delete_product")
def delete_products():
    affected = Product.query.filter(
        Product.id.in_(g.ids),
        Product.tenant_id == g.tenant_id,
        Product.is_active.is_(True),
    ).update({Product.is_active: False}, synchronize_session=False)
    return bulk_delete_response(affected, "no_products_found", "products_deleted", "product")


# -------------------- GET PRODUCT --------------------
@bp.route("/<int:product_id>", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_products", tenant_from="query")
def get_product(product_id):
    return jsonify(_owned_product(product_id, query_tenant_id()).to_dict())


# -------------------- UPDATE PRODUCT --------------------
@bp.route("/<int:product_id>", methods=["PUT"])
@validate_body(UPDATE_PRODUCT_RULES)
@require_permission("edit_product")
def update_product(product_id):
    data = g.payload
    tenant_id = payload_tenant_id()
    product = _owned_product(product_id, tenant_id)

    if data.get("sku") and _sku_taken(tenant_id, data["sku"], exclude_id=product.id):
        raise Conflict("sku_exists")

    apply_updates(product, data, {
        "sku": None,
        "barcode": None,
        "product_name": None,
        "product_name_ar": None,
        "category": None,
        "category_ar": None,
        "base_price": lambda v: as_decimal(v, product.base_price),
    })
    db.session.commit()
    return message("product_updated")


# -------------------- DELETE PRODUCT (soft) --------------------
@bp.route("/<int:product_id>", methods=["DELETE"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("delete_product", tenant_from="query")
def delete_product(product_id):
    affected = Product.active_in_tenant(query_tenant_id()).filter(
        Product.id == product_id
    ).update({Product.is_active: False}, synchronize_session=False)
    if not affected:
        raise NotFound("product_not_found")
    db.session.commit()
    return message("product_deleted")
