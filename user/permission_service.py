from src.extensions import db
from validation.field_rules import as_id
from .user import User, Role, Permission, RolePermission, USER_STATUS_DELETED


class RolePermissionResolver:
    """Answers capability questions from the role/permission tables."""

    @staticmethod
    def has_permission(principal, capability):
        match = db.session.query(Permission.id).join(
            RolePermission, RolePermission.permission_id == Permission.id
        ).join(
            Role, Role.id == RolePermission.role_id
        ).join(
            User, User.role_id == Role.id
        ).filter(
            User.id == principal.user_id,
            User.status != USER_STATUS_DELETED,
            Permission.slug == capability,
        ).first()
        return match is not None

    @staticmethod
    def get_permissions_for_user(user_id):
        rows = db.session.query(Permission.slug).join(
            RolePermission, RolePermission.permission_id == Permission.id
        ).join(
            User, User.role_id == RolePermission.role_id
        ).filter(
            User.id == user_id,
            User.status != USER_STATUS_DELETED,
        ).all()
        return sorted(slug for (slug,) in rows)


class TenantMembershipResolver:
    """A principal may act on a tenant only when its stored user belongs to it."""

    @staticmethod
    def has_tenant_access(principal, tenant_id):
        tenant_id = as_id(tenant_id)
        if tenant_id is None:
            return False
        user = db.session.get(User, principal.user_id)
        if not user or user.status == USER_STATUS_DELETED:
            return False
        return user.tenant_id == tenant_id
