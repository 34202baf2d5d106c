from branches.branch import Branch, UserBranch
from src.extensions import db
from conftest import make_user

BRANCHES = "/api/v1/admin/branches"
USER_BRANCHES = "/api/v1/admin/user-branches"


def test_create_branch_with_coordinates(client):
    resp = client.post(BRANCHES, json={
        "tenant_id": 1, "name": "Riyadh Main", "name_ar": "الرياض الرئيسي",
        "latitude": "24.7136", "longitude": 46.6753,
    })
    assert resp.status_code == 201
    branch = db.session.get(Branch, resp.get_json()["branch_id"])
    assert round(float(branch.latitude), 4) == 24.7136


def test_branch_validation_and_conflict(client):
    resp = client.post(BRANCHES, json={"tenant_id": 1, "name": "AB", "latitude": "north"})
    assert resp.get_json()["error"] == [
        "Branch Name must be at least 3 characters.",
        "Latitude must be a decimal number.",
    ]
    assert client.post(BRANCHES, json={"tenant_id": 1, "name": "Jeddah"}).status_code == 201
    resp = client.post(BRANCHES, json={"tenant_id": 1, "name": "Jeddah"})
    assert resp.status_code == 409
    assert client.post(BRANCHES, json={"tenant_id": 2, "name": "Jeddah"}).status_code == 201


def test_list_and_delete_branches(client):
    for name in ("North Branch", "South Branch", "East Office"):
        client.post(BRANCHES, json={"tenant_id": 1, "name": name})
    body = client.get(BRANCHES, query_string={"tenant_id": 1, "search": "branch"}).get_json()
    assert body["count"] == 2

    ids = [row["branch_id"] for row in body["data"]]
    resp = client.delete(BRANCHES, json={"tenant_id": 1, "branch_ids": ids})
    assert resp.get_json()["message"] == "2 branch(es) deleted successfully."
    assert Branch.query.count() == 1


def _branch(tenant_id, name):
    branch = Branch(tenant_id=tenant_id, name=name)
    db.session.add(branch)
    db.session.commit()
    return branch


def test_assign_user_to_branch(client):
    user = make_user(1, "worker@example.com", full_name="Worker Bee")
    branch = _branch(1, "Dammam")
    payload = {"tenant_id": 1, "user_id": user.id, "branch_id": branch.id}

    resp = client.post(USER_BRANCHES, json=payload)
    assert resp.status_code == 201
    assert client.post(USER_BRANCHES, json=payload).status_code == 409

    body = client.get(USER_BRANCHES, query_string={
        "tenant_id": 1, "search": "worker", "sortBy": "branch_name",
    }).get_json()
    assert body["count"] == 1
    assert body["data"][0]["user_email"] == "worker@example.com"
    assert body["data"][0]["branch_name"] == "Dammam"


def test_deleted_or_foreign_users_cannot_be_assigned(client):
    gone = make_user(1, "gone@example.com", status="deleted")
    foreign = make_user(2, "foreign@example.com")
    branch = _branch(1, "Khobar")
    for user in (gone, foreign):
        resp = client.post(USER_BRANCHES, json={"tenant_id": 1, "user_id": user.id, "branch_id": branch.id})
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "User not found for this tenant."


def test_user_branch_item_routes_and_bulk_delete(client):
    user = make_user(1, "mover@example.com")
    first, second = _branch(1, "First"), _branch(1, "Second")
    other_tenant = _branch(2, "Elsewhere")
    assignment_id = client.post(USER_BRANCHES, json={
        "tenant_id": 1, "user_id": user.id, "branch_id": first.id,
    }).get_json()["user_branch_id"]

    resp = client.put(f"{USER_BRANCHES}/{assignment_id}", json={
        "tenant_id": 1, "user_id": user.id, "branch_id": second.id,
    })
    assert resp.status_code == 200
    detail = client.get(f"{USER_BRANCHES}/{assignment_id}", query_string={"tenant_id": 1}).get_json()
    assert detail["branch_id"] == second.id

    resp = client.put(f"{USER_BRANCHES}/{assignment_id}", json={
        "tenant_id": 1, "user_id": user.id, "branch_id": other_tenant.id,
    })
    assert resp.status_code == 404

    assert client.delete(USER_BRANCHES, json={"tenant_id": 2, "user_branch_ids": [assignment_id]}).status_code == 404
    resp = client.delete(USER_BRANCHES, json={"tenant_id": 1, "user_branch_ids": [assignment_id]})
    assert resp.status_code == 200
    assert UserBranch.query.count() == 0
