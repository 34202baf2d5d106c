import pytest

from branches.branch import Branch
from customers.customer import Customer
from products.product import Product
from src.extensions import db
from warehouses.warehouse import Warehouse, WarehouseStock

WAREHOUSES = "/api/v1/admin/warehouses"
STOCKS = "/api/v1/admin/warehouse-stocks"
PRICING = "/api/v1/admin/customer-pricing"


@pytest.fixture
def catalog(app):
    branch = Branch(tenant_id=1, name="Main Branch")
    product = Product(tenant_id=1, sku="RICE", product_name="Basmati Rice", base_price=40)
    foreign_product = Product(tenant_id=2, sku="RICE", product_name="Other Rice", base_price=30)
    customer = Customer(tenant_id=1, full_name="Grocer Ltd", email="grocer@example.com")
    db.session.add_all([branch, product, foreign_product, customer])
    db.session.commit()
    return {"branch": branch, "product": product, "foreign_product": foreign_product, "customer": customer}


def make_warehouse(client, **overrides):
    payload = {"tenant_id": 1, "name": "Central Store"}
    payload.update(overrides)
    return client.post(WAREHOUSES, json=payload)


def test_warehouse_lifecycle(client, catalog):
    resp = make_warehouse(client, branch_id=catalog["branch"].id)
    assert resp.status_code == 201
    warehouse_id = resp.get_json()["warehouse_id"]
    assert make_warehouse(client).status_code == 409

    body = client.get(WAREHOUSES, query_string={"tenant_id": 1, "branch_id": catalog["branch"].id}).get_json()
    assert body["data"][0]["branch_name"] == "Main Branch"

    resp = client.put(f"{WAREHOUSES}/{warehouse_id}", json={"tenant_id": 1, "name": "Central Depot"})
    assert resp.status_code == 200
    assert db.session.get(Warehouse, warehouse_id).name == "Central Depot"

    assert client.delete(f"{WAREHOUSES}/{warehouse_id}", query_string={"tenant_id": 1}).status_code == 200
    assert Warehouse.query.count() == 0


def test_warehouse_branch_must_belong_to_tenant(client, catalog):
    resp = make_warehouse(client, tenant_id=2, branch_id=catalog["branch"].id)
    assert resp.status_code == 404


def test_stock_entries(client, catalog):
    warehouse_id = make_warehouse(client).get_json()["warehouse_id"]
    payload = {"tenant_id": 1, "warehouse_id": warehouse_id, "product_id": catalog["product"].id}

    resp = client.post(STOCKS, json=payload)
    assert resp.status_code == 201
    stock_id = resp.get_json()["warehouse_stock_id"]
    assert float(db.session.get(WarehouseStock, stock_id).quantity) == 0
    assert client.post(STOCKS, json=payload).status_code == 409

    foreign = dict(payload, product_id=catalog["foreign_product"].id)
    assert client.post(STOCKS, json=foreign).get_json()["error"] == "Product not found for this tenant."

    resp = client.put(f"{STOCKS}/{stock_id}", json={"tenant_id": 1, "quantity": 12})
    assert resp.status_code == 200

    body = client.get(STOCKS, query_string={"tenant_id": 1, "search": "basmati"}).get_json()
    assert body["count"] == 1
    assert body["data"][0]["quantity"] == 12

    resp = client.delete(STOCKS, json={"tenant_id": 1, "warehouse_stock_ids": [stock_id]})
    assert resp.get_json()["message"] == "Deleted 1 stock entry(s)."


def test_customer_pricing(client, catalog):
    payload = {
        "tenant_id": 1,
        "customer_id": catalog["customer"].id,
        "product_id": catalog["product"].id,
        "special_price": "35.00",
    }
    resp = client.post(PRICING, json=payload)
    assert resp.status_code == 201
    pricing_id = resp.get_json()["customer_pricing_id"]
    assert client.post(PRICING, json=payload).status_code == 409

    body = client.get(PRICING, query_string={"tenant_id": 1, "search": "RICE"}).get_json()
    assert body["count"] == 1
    assert body["data"][0]["special_price"] == 35.0
    assert body["data"][0]["base_price"] == 40.0

    resp = client.put(f"{PRICING}/{pricing_id}", json={"tenant_id": 1, "special_price": 33})
    assert resp.status_code == 200
    detail = client.get(f"{PRICING}/{pricing_id}", query_string={"tenant_id": 1}).get_json()
    assert detail["special_price"] == 33.0

    assert client.get(f"{PRICING}/{pricing_id}", query_string={"tenant_id": 2}).status_code == 404
    resp = client.delete(PRICING, json={"tenant_id": 1, "customer_pricing_ids": [pricing_id, "oops"]})
    assert resp.status_code == 200


def test_customer_pricing_requires_tenant_customer(client, catalog):
    resp = client.post(PRICING, json={
        "tenant_id": 2,
        "customer_id": catalog["customer"].id,
        "product_id": catalog["foreign_product"].id,
        "special_price": 10,
    })
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Customer not found for this tenant."
