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
from customers.customer import Customer
from customers.customer_pricing import CustomerPricing
from products.product import Product

logger = logging.getLogger(__name__)

bp = Blueprint("customer_pricing", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

CREATE_PRICING_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    customer_id=field("Customer ID", "معرف العميل").required().integer(),
    product_id=field("Product ID", "معرف المنتج").required().integer(),
    special_price=field("Special Price", "السعر الخاص").required().number(),
)

UPDATE_PRICING_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    customer_id=field("Customer ID", "معرف العميل").optional().integer(),
    product_id=field("Product ID", "معرف المنتج").optional().integer(),
    special_price=field("Special Price", "السعر الخاص").optional().number(),
)

SORT_COLUMNS = {
    "special_price": CustomerPricing.special_price,
    "created_at": CustomerPricing.created_at,
    "product_name": Product.product_name,
    "sku": Product.sku,
}


def _check_customer_and_product(customer_id, product_id, tenant_id):
    if not Customer.query.filter_by(id=customer_id, tenant_id=tenant_id).first():
        raise NotFound("customer_not_found")
    if not Product.active_in_tenant(tenant_id).filter(Product.id == product_id).first():
        raise NotFound("product_not_found")


def _pricing_exists(tenant_id, customer_id, product_id, exclude_id=None):
    q = CustomerPricing.query.filter_by(tenant_id=tenant_id, customer_id=customer_id, product_id=product_id)
    if exclude_id is not None:
        q = q.filter(CustomerPricing.id != exclude_id)
    return q.first() is not None


def _owned_pricing(pricing_id, tenant_id):
    return get_owned_or_404(
        CustomerPricing.query.filter_by(id=pricing_id, tenant_id=tenant_id), "customer_pricing_not_found"
    )


# -------------------- CREATE CUSTOMER PRICING --------------------
@bp.route("", methods=["POST"])
@validate_body(CREATE_PRICING_RULES)
@require_permission("create_customer_pricing")
def create_customer_pricing():
    data = g.payload
    tenant_id = payload_tenant_id()
    customer_id = as_id(data["customer_id"])
    product_id = as_id(data["product_id"])

    if _pricing_exists(tenant_id, customer_id, product_id):
        raise Conflict("customer_pricing_exists")
    _check_customer_and_product(customer_id, product_id, tenant_id)

    pricing = CustomerPricing(
        tenant_id=tenant_id,
        customer_id=customer_id,
        product_id=product_id,
        special_price=as_decimal(data["special_price"]),
    )
    db.session.add(pricing)
    db.session.commit()
    logger.info("Created special price %s for customer %s", pricing.id, customer_id)
    return message("customer_pricing_created", 201, customer_pricing_id=pricing.id)


# -------------------- LIST CUSTOMER PRICING --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_customer_pricing", tenant_from="query")
def list_customer_pricing():
    q = CustomerPricing.query.join(
        Product, Product.id == CustomerPricing.product_id
    ).filter(CustomerPricing.tenant_id == query_tenant_id())
    return jsonify(paginated_list(
        q, request.args,
        search_columns=(Product.product_name, Product.product_name_ar, Product.sku),
        sort_columns=SORT_COLUMNS,
        default_sort=CustomerPricing.created_at,
        filters={"customer_id": CustomerPricing.customer_id},
    ))


# -------------------- DELETE CUSTOMER PRICING --------------------
@bp.route("", methods=["DELETE"])
@id_list("customer_pricing_ids", "missing_customer_pricing_ids", "invalid_customer_pricing_ids")
@require_permission("delete_customer_pricing")
def delete_customer_pricing_entries():
    affected = CustomerPricing.query.filter(
        CustomerPricing.id.in_(g.ids), CustomerPricing.tenant_id == g.tenant_id
    ).delete(synchronize_session=False)
    return bulk_delete_response(
        affected, "no_customer_pricing_found", "customer_pricing_entries_deleted", "customer pricing"
    )


# -------------------- GET CUSTOMER PRICING --------------------
@bp.route("/<int:pricing_id>", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_customer_pricing", tenant_from="query")
def get_customer_pricing(pricing_id):
    return jsonify(_owned_pricing(pricing_id, query_tenant_id()).to_dict())


# -------------------- UPDATE CUSTOMER PRICING --------------------
@bp.route("/<int:pricing_id>", methods=["PUT"])
@validate_body(UPDATE_PRICING_RULES)
@require_permission("edit_customer_pricing")
def update_customer_pricing(pricing_id):
    data = g.payload
    tenant_id = payload_tenant_id()
    pricing = _owned_pricing(pricing_id, tenant_id)

    customer_id = as_id(data.get("customer_id")) or pricing.customer_id
    product_id = as_id(data.get("product_id")) or pricing.product_id
    if (customer_id, product_id) != (pricing.customer_id, pricing.product_id):
        if _pricing_exists(tenant_id, customer_id, product_id, exclude_id=pricing.id):
            raise Conflict("customer_pricing_exists")
        _check_customer_and_product(customer_id, product_id, tenant_id)
        pricing.customer_id = customer_id
        pricing.product_id = product_id

    if "special_price" in data:
        pricing.special_price = as_decimal(data["special_price"], pricing.special_price)
    db.session.commit()
    return message("customer_pricing_updated")


# -------------------- DELETE CUSTOMER PRICING (single) --------------------
@bp.route("/<int:pricing_id>", methods=["DELETE"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("delete_customer_pricing", tenant_from="query")
def delete_customer_pricing(pricing_id):
    affected = CustomerPricing.query.filter_by(
        id=pricing_id, tenant_id=query_tenant_id()
    ).delete(synchronize_session=False)
    if not affected:
        raise NotFound("customer_pricing_not_found")
    db.session.commit()
    return message("customer_pricing_deleted")
