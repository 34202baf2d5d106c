from .user import User, Role, Permission, RolePermission, USER_STATUS_ACTIVE, USER_STATUS_DELETED

__all__ = [
    'User', 'Role', 'Permission', 'RolePermission',
    'USER_STATUS_ACTIVE', 'USER_STATUS_DELETED',
]
