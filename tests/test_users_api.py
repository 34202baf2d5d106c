from src.extensions import db
from user.user import User
from conftest import make_role, make_user

USERS = "/api/v1/admin/users"
ROLES = "/api/v1/admin/roles/list"


def user_payload(role_id, **overrides):
    payload = {
        "tenant_id": 1,
        "username": "nora",
        "full_name": "Nora Saleh",
        "email": "nora@example.com",
        "password": "s3cret-pass",
        "role_id": role_id,
    }
    payload.update(overrides)
    return payload


def test_create_user_hashes_password(client):
    role = make_role(1)
    resp = client.post(USERS, json=user_payload(role.id))
    assert resp.status_code == 201
    user = db.session.get(User, resp.get_json()["user_id"])
    assert user.password != "s3cret-pass"
    assert user.check_password("s3cret-pass")


def test_create_user_conflicts_and_foreign_role(client):
    role = make_role(1)
    foreign_role = make_role(2, slug="other")
    assert client.post(USERS, json=user_payload(role.id)).status_code == 201
    assert client.post(USERS, json=user_payload(role.id)).status_code == 409
    resp = client.post(USERS, json=user_payload(foreign_role.id, email="x@example.com"))
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Role not found for this tenant."


def test_deleted_users_are_hidden(client):
    role = make_role(1)
    alive = make_user(1, "alive@example.com", role=role)
    gone = make_user(1, "gone@example.com", role=role)

    resp = client.delete(USERS, json={"tenant_id": 1, "user_ids": [gone.id]})
    assert resp.status_code == 200
    db.session.expire_all()
    assert db.session.get(User, gone.id).status == "deleted"

    body = client.get(USERS, query_string={"tenant_id": 1}).get_json()
    assert [row["id"] for row in body["data"]] == [alive.id]
    assert body["data"][0]["role_name"] == "Viewer"


def test_roles_list(client):
    make_role(1, slug="viewer")
    make_role(1, slug="clerk", name="Clerk")
    make_role(2, slug="hidden")
    body = client.get(ROLES, query_string={"tenant_id": 1}).get_json()
    assert sorted(role["slug"] for role in body["data"]) == ["clerk", "viewer"]
    assert client.get(ROLES).status_code == 400
