import pytest

from src.config import TestConfig
from src.extensions import db
from src.main import create_app
from user.authorizer import AuthorizationPolicy
from user.init_data import ensure_admin_role
from user.jwt_utils import generate_access_token
from user.user import User, Role


def _build_app(policy):
    app = create_app(TestConfig, policy=policy)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app():
    yield from _build_app(AuthorizationPolicy.BYPASSED)


@pytest.fixture
def enforced_app():
    yield from _build_app(AuthorizationPolicy.ENFORCED)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def enforced_client(enforced_app):
    return enforced_app.test_client()


def make_user(tenant_id, email, role=None, status="active", full_name="Test User"):
    user = User(
        tenant_id=tenant_id,
        role_id=role.id if role else None,
        username=email.split("@")[0],
        full_name=full_name,
        email=email,
        status=status,
    )
    user.set_password("password123")
    db.session.add(user)
    db.session.commit()
    return user


def make_admin(tenant_id, email=None):
    role = ensure_admin_role(tenant_id)
    return make_user(tenant_id, email or f"admin{tenant_id}@example.com", role=role)


def make_role(tenant_id, slug="viewer", name="Viewer"):
    role = Role(tenant_id=tenant_id, name=name, slug=slug)
    db.session.add(role)
    db.session.commit()
    return role


def bearer(user):
    return {"Authorization": f"Bearer {generate_access_token(user)}"}


@pytest.fixture
def tenant_admin(app):
    return make_admin(1)
