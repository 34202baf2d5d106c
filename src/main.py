import logging
from collections.abc import Mapping

import click
from flask import Flask, jsonify

from src.config import Config
from src.errors import register_error_handlers
from src.extensions import db, cors
from src.logging_config import configure_logging
from user.authorizer import Authorizer, AuthorizationPolicy
from user.permission_service import RolePermissionResolver, TenantMembershipResolver

# register blueprints dynamically
from routes import register_routes

logger = logging.getLogger(__name__)


def create_app(config=None, policy=None):
    """Build the API application.

    ``config`` may be a config class/object or a plain mapping of overrides.
    ``policy`` forces an ``AuthorizationPolicy``; otherwise it is derived
    once from ``AUTHORIZATION_POLICY`` / ``APP_ENV``.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(config, Mapping):
        app.config.update(config)
    elif config is not None:
        app.config.from_object(config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # initialize extensions
    db.init_app(app)
    cors.init_app(
        app,
        origins=app.config.get("CORS_ORIGINS", "*"),
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept-Language"],
    )

    policy = AuthorizationPolicy(policy) if policy else AuthorizationPolicy.from_config(app.config)
    app.extensions["authorizer"] = Authorizer(
        policy, RolePermissionResolver(), TenantMembershipResolver()
    )
    logger.info("Authorization policy: %s (APP_ENV=%s)", policy.value, app.config.get("APP_ENV"))

    # Import all models within app context to resolve relationships
    with app.app_context():
        import models  # noqa: F401

    register_error_handlers(app)
    register_routes(app)
    register_commands(app)

    @app.get("/")
    def index():
        return jsonify({"message": "Tenant Admin API"}), 200

    return app


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables and seed the capability catalogue."""
        from user.init_data import seed_capabilities
        db.create_all()
        permissions = seed_capabilities()
        click.echo(f"Tables created; {len(permissions)} capabilities available.")

    @app.cli.command("create-admin")
    @click.option("--tenant-id", type=int, required=True)
    @click.option("--email", required=True)
    @click.option("--password", required=True)
    @click.option("--username", default="admin")
    def create_admin(tenant_id, email, password, username):
        """Create the tenant's admin role and its first admin user."""
        from user.init_data import create_admin_user
        user = create_admin_user(tenant_id, email, password, username=username)
        click.echo(f"Admin user {user.email} (id {user.id}) ready for tenant {tenant_id}.")


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=app.config["DEBUG"])
