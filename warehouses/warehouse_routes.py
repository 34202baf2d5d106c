import logging
from flask import Blueprint, g, jsonify, request
from src.extensions import db
from src.errors import Conflict, NotFound
from src.listing import paginated_list
from src.resources import (
    as_id, apply_updates, bulk_delete_response, get_owned_or_404,
    message, payload_tenant_id, query_tenant_id,
)
from user.auth_middleware import require_permission
from validation import field, rules, validate_body, validate_query, id_list
from branches.branch import Branch
from warehouses.warehouse import Warehouse, WarehouseStock

logger = logging.getLogger(__name__)

bp = Blueprint("warehouses", __name__)

TENANT_QUERY_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
)

WAREHOUSE_RULES = rules(
    tenant_id=field("Tenant ID", "معرف المنظمة").required().integer(),
    branch_id=field("Branch ID", "معرف الفرع").optional().integer(),
    name=field("Warehouse Name", "اسم المستودع").required().min_length(3).max_length(200),
    name_ar=field("Warehouse Name (Arabic)", "اسم المستودع بالعربية").optional().min_length(3).max_length(200),
)

SORT_COLUMNS = {
    "name": Warehouse.name,
    "name_ar": Warehouse.name_ar,
    "created_at": Warehouse.created_at,
}


def _branch_in_tenant(branch_id, tenant_id):
    if branch_id is not None and not Branch.query.filter_by(id=branch_id, tenant_id=tenant_id).first():
        raise NotFound("branch_not_found")
    return branch_id


def _name_taken(tenant_id, name, exclude_id=None):
    q = Warehouse.query.filter(Warehouse.tenant_id == tenant_id, Warehouse.name == name)
    if exclude_id is not None:
        q = q.filter(Warehouse.id != exclude_id)
    return q.first() is not None


def _owned_warehouse(warehouse_id, tenant_id):
    return get_owned_or_404(
        Warehouse.query.filter_by(id=warehouse_id, tenant_id=tenant_id), "warehouse_not_found"
    )


# -------------------- CREATE WAREHOUSE --------------------
@bp.route("", methods=["POST"])
@validate_body(WAREHOUSE_RULES)
@require_permission("create_warehouses")
def create_warehouse():
    data = g.payload
    tenant_id = payload_tenant_id()
    branch_id = _branch_in_tenant(as_id(data.get("branch_id")), tenant_id)

    if _name_taken(tenant_id, data["name"]):
        raise Conflict("warehouse_exists")

    warehouse = Warehouse(
        tenant_id=tenant_id,
        branch_id=branch_id,
        name=data["name"],
        name_ar=data.get("name_ar") or None,
    )
    db.session.add(warehouse)
    db.session.commit()
    logger.info("Created warehouse %s for tenant %s", warehouse.id, tenant_id)
    return message("warehouse_created", 201, warehouse_id=warehouse.id)


# -------------------- LIST WAREHOUSES --------------------
@bp.route("", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_warehouses", tenant_from="query")
def list_warehouses():
    q = Warehouse.query.filter(Warehouse.tenant_id == query_tenant_id())
    return jsonify(paginated_list(
        q, request.args,
        search_columns=(Warehouse.name, Warehouse.name_ar),
        sort_columns=SORT_COLUMNS,
        default_sort=Warehouse.created_at,
        filters={"branch_id": Warehouse.branch_id},
    ))


# -------------------- DELETE WAREHOUSES --------------------
@bp.route("", methods=["DELETE"])
@id_list("warehouse_ids", "missing_warehouse_ids", "invalid_warehouse_ids")
@require_permission("delete_warehouses")
def delete_warehouses():
    WarehouseStock.query.filter(
        WarehouseStock.warehouse_id.in_(g.ids), WarehouseStock.tenant_id == g.tenant_id
    ).delete(synchronize_session=False)
    affected = Warehouse.query.filter(
        Warehouse.id.in_(g.ids), Warehouse.tenant_id == g.tenant_id
    ).delete(synchronize_session=False)
    return bulk_delete_response(affected, "no_warehouses_found", "warehouses_deleted", "warehouse")


# -------------------- GET WAREHOUSE --------------------
@bp.route("/<int:warehouse_id>", methods=["GET"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("view_warehouses", tenant_from="query")
def get_warehouse(warehouse_id):
    return jsonify(_owned_warehouse(warehouse_id, query_tenant_id()).to_dict())


# -------------------- UPDATE WAREHOUSE --------------------
@bp.route("/<int:warehouse_id>", methods=["PUT"])
@validate_body(WAREHOUSE_RULES)
@require_permission("edit_warehouses")
def update_warehouse(warehouse_id):
    data = dict(g.payload)
    tenant_id = payload_tenant_id()
    warehouse = _owned_warehouse(warehouse_id, tenant_id)

    if "branch_id" in data:
        data["branch_id"] = _branch_in_tenant(as_id(data["branch_id"]), tenant_id)
    if _name_taken(tenant_id, data["name"], exclude_id=warehouse.id):
        raise Conflict("warehouse_exists")

    apply_updates(warehouse, data, {
        "name": None,
        "name_ar": lambda v: v or None,
        "branch_id": lambda v: v,
    })
    db.session.commit()
    return message("warehouse_updated")


# -------------------- DELETE WAREHOUSE --------------------
@bp.route("/<int:warehouse_id>", methods=["DELETE"])
@validate_query(TENANT_QUERY_RULES)
@require_permission("delete_warehouses", tenant_from="query")
def delete_warehouse(warehouse_id):
    warehouse = _owned_warehouse(warehouse_id, query_tenant_id())
    WarehouseStock.query.filter_by(warehouse_id=warehouse.id).delete(synchronize_session=False)
    db.session.delete(warehouse)
    db.session.commit()
    return message("warehouse_deleted")
