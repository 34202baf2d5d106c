import pytest

from branches.branch import Branch
from customers.customer import Customer
from products.product import Product
from sales.sales_order import SalesOrder, SalesOrderItem
from src.extensions import db
from conftest import make_user

ORDERS = "/api/v1/admin/sales-orders"
ITEMS = "/api/v1/admin/sales-order-items"


@pytest.fixture
def parties(app):
    customer = Customer(tenant_id=1, full_name="Buyer One", email="buyer@example.com")
    product = Product(tenant_id=1, sku="P-1", product_name="Dates", base_price=8)
    db.session.add_all([customer, product])
    db.session.commit()
    seller = make_user(1, "seller@example.com")
    return {"customer": customer, "product": product, "user": seller}


def create_order(client, parties, **overrides):
    payload = {
        "tenant_id": 1,
        "customer_id": parties["customer"].id,
        "user_id": parties["user"].id,
    }
    payload.update(overrides)
    return client.post(ORDERS, json=payload)


def test_create_order_defaults_to_draft(client, parties):
    resp = create_order(client, parties)
    assert resp.status_code == 201
    order = db.session.get(SalesOrder, resp.get_json()["sales_order_id"])
    assert order.order_status == "draft"
    assert float(order.total_amount) == 0


def test_create_order_requires_parties_in_tenant(client, parties):
    assert create_order(client, parties, tenant_id=2).status_code == 404
    resp = create_order(client, parties, customer_id=9999)
    assert resp.get_json()["error"] == "Customer not found for this tenant."
    foreign_branch = Branch(tenant_id=2, name="Far Away")
    db.session.add(foreign_branch)
    db.session.commit()
    resp = create_order(client, parties, branch_id=foreign_branch.id)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Branch not found for this tenant."


def test_add_item_computes_total(client, parties):
    order_id = create_order(client, parties).get_json()["sales_order_id"]
    resp = client.post(ITEMS, query_string={"tenant_id": 1}, json={
        "sales_order_id": order_id, "product_id": parties["product"].id, "quantity": 3, "price": 2.5,
    })
    assert resp.status_code == 201
    item = db.session.get(SalesOrderItem, resp.get_json()["sales_order_item_id"])
    assert float(item.total) == 7.5


def test_duplicate_item_is_rejected_without_insert(client, parties):
    order_id = create_order(client, parties).get_json()["sales_order_id"]
    item = {"sales_order_id": order_id, "product_id": parties["product"].id, "quantity": 1}
    assert client.post(ITEMS, query_string={"tenant_id": 1}, json=item).status_code == 201

    resp = client.post(ITEMS, query_string={"tenant_id": 1}, json=item)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "This product already exists in the sales order."
    assert SalesOrderItem.query.filter_by(sales_order_id=order_id).count() == 1


def test_item_for_foreign_order_is_not_found(client, parties):
    order_id = create_order(client, parties).get_json()["sales_order_id"]
    resp = client.post(ITEMS, query_string={"tenant_id": 2}, json={
        "sales_order_id": order_id, "product_id": parties["product"].id, "quantity": 1,
    })
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Sales order not found for this tenant."


def test_item_tenant_comes_from_query_string(client, parties):
    order_id = create_order(client, parties).get_json()["sales_order_id"]
    resp = client.post(ITEMS, json={
        "sales_order_id": order_id, "product_id": parties["product"].id, "quantity": 1,
    })
    assert resp.status_code == 400
    assert resp.get_json()["error"] == ["Tenant ID is required."]


def test_list_and_delete_items_scoped_by_order_tenant(client, parties):
    order_id = create_order(client, parties).get_json()["sales_order_id"]
    item_id = client.post(ITEMS, query_string={"tenant_id": 1}, json={
        "sales_order_id": order_id, "product_id": parties["product"].id, "quantity": 2,
    }).get_json()["sales_order_item_id"]

    body = client.get(ITEMS, query_string={"tenant_id": 1, "sales_order_id": order_id}).get_json()
    assert body["count"] == 1
    assert client.get(ITEMS, query_string={"tenant_id": 2}).get_json()["count"] == 0

    resp = client.delete(ITEMS, json={"tenant_id": 2, "sales_order_item_ids": [item_id]})
    assert resp.status_code == 404
    resp = client.delete(ITEMS, json={"tenant_id": 1, "sales_order_item_ids": [item_id]})
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Deleted 1 sales order item(s)."


def test_order_filters_and_item_routes(client, parties):
    first = create_order(client, parties, order_status="confirmed").get_json()["sales_order_id"]
    create_order(client, parties)

    body = client.get(ORDERS, query_string={"tenant_id": 1, "order_status": "confirmed"}).get_json()
    assert [row["sales_order_id"] for row in body["data"]] == [first]
    assert body["data"][0]["customer_name"] == "Buyer One"

    resp = client.put(f"{ORDERS}/{first}", json={"tenant_id": 1, "total_amount": 99.5})
    assert resp.status_code == 200
    detail = client.get(f"{ORDERS}/{first}", query_string={"tenant_id": 1}).get_json()
    assert detail["total_amount"] == 99.5
    assert detail["order_status"] == "confirmed"
    assert detail["items"] == []

    assert client.delete(f"{ORDERS}/{first}", query_string={"tenant_id": 1}).status_code == 200
    assert client.get(f"{ORDERS}/{first}", query_string={"tenant_id": 1}).status_code == 404


def test_bulk_delete_orders_removes_their_items(client, parties):
    order_id = create_order(client, parties).get_json()["sales_order_id"]
    client.post(ITEMS, query_string={"tenant_id": 1}, json={
        "sales_order_id": order_id, "product_id": parties["product"].id, "quantity": 1,
    })
    resp = client.delete(ORDERS, json={"tenant_id": 1, "sales_order_ids": [order_id]})
    assert resp.status_code == 200
    assert SalesOrderItem.query.count() == 0
