import logging
from .user import User, Role, Permission, RolePermission
from src.extensions import db

logger = logging.getLogger(__name__)

ADMIN_ROLE_SLUG = 'admin'

CAPABILITIES = [
    # Customers
    ('create_customers', 'Create customers'),
    ('view_customers', 'View customers'),
    ('edit_customer', 'Edit a customer'),
    ('delete_customers', 'Delete customers'),

    # Products
    ('create_product', 'Create products'),
    ('view_products', 'View products'),
    ('edit_product', 'Edit a product'),
    ('delete_product', 'Delete products'),

    # Branches
    ('create_branch', 'Create branches'),
    ('view_branches', 'View branches'),
    ('delete_branch', 'Delete branches'),

    # Sales orders and their items
    ('create_sales_orders', 'Create sales orders'),
    ('view_sales_orders', 'View sales orders'),
    ('edit_sales_orders', 'Edit sales orders'),
    ('delete_sales_orders', 'Delete sales orders'),

    # User branch assignments
    ('create_user_branch', 'Assign users to branches'),
    ('view_user_branches', 'View user branch assignments'),
    ('edit_user_branch', 'Edit user branch assignments'),
    ('delete_user_branch', 'Remove user branch assignments'),

    # Users and roles
    ('view_roles', 'View roles'),
    ('create_users', 'Create users'),
    ('view_users', 'View users'),
    ('delete_users', 'Delete users'),

    # Warehouses and stock
    ('create_warehouses', 'Create warehouses'),
    ('view_warehouses', 'View warehouses'),
    ('edit_warehouses', 'Edit warehouses'),
    ('delete_warehouses', 'Delete warehouses'),
    ('create_warehouse_stock', 'Create stock entries'),
    ('view_warehouse_stock', 'View stock entries'),
    ('edit_warehouse_stock', 'Edit stock entries'),
    ('delete_warehouse_stock', 'Delete stock entries'),

    # Customer pricing
    ('create_customer_pricing', 'Create customer special prices'),
    ('view_customer_pricing', 'View customer special prices'),
    ('edit_customer_pricing', 'Edit customer special prices'),
    ('delete_customer_pricing', 'Delete customer special prices'),
]


def seed_capabilities():
    """Insert any missing capability rows; returns the full catalogue."""
    existing = {p.slug for p in Permission.query.all()}
    for slug, description in CAPABILITIES:
        if slug not in existing:
            db.session.add(Permission(slug=slug, description=description))
    db.session.commit()
    return Permission.query.all()


def ensure_admin_role(tenant_id):
    """Create (or top up) the tenant's admin role so it holds every capability."""
    role = Role.query.filter_by(tenant_id=tenant_id, slug=ADMIN_ROLE_SLUG).first()
    if not role:
        role = Role(tenant_id=tenant_id, name='Admin', name_ar='مدير النظام', slug=ADMIN_ROLE_SLUG,
                    description='Full access to every admin resource of the tenant')
        db.session.add(role)
        db.session.flush()

    granted = {rp.permission_id for rp in RolePermission.query.filter_by(role_id=role.id).all()}
    for permission in seed_capabilities():
        if permission.id not in granted:
            db.session.add(RolePermission(role_id=role.id, permission_id=permission.id))
    db.session.commit()
    return role


def create_admin_user(tenant_id, email, password, username='admin', full_name='Administrator'):
    """Create the first admin user of a tenant; existing emails are left untouched."""
    role = ensure_admin_role(tenant_id)
    user = User.query.filter_by(email=email).first()
    if user:
        logger.info("Admin user %s already exists", email)
        return user

    user = User(
        tenant_id=tenant_id,
        role_id=role.id,
        username=username,
        full_name=full_name,
        email=email,
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info("Created admin user %s for tenant %s", email, tenant_id)
    return user
