from src.extensions import db
from datetime import datetime
from passlib.hash import pbkdf2_sha256

USER_STATUS_ACTIVE = 'active'
USER_STATUS_DELETED = 'deleted'

class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    tenant_id = db.Column(db.Integer, nullable=False, index=True)
    role_id = db.Column(db.Integer, db.ForeignKey('roles.id'), nullable=True)
    username = db.Column(db.String(80), nullable=False)
    full_name = db.Column(db.String(200), nullable=False)
    full_name_ar = db.Column(db.String(200), nullable=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    phone = db.Column(db.String(30), nullable=True)
    password = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(20), default=USER_STATUS_ACTIVE, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    role = db.relationship('Role', backref='users')

    def check_password(self, password):
        return pbkdf2_sha256.verify(password, self.password)

    def set_password(self, password):
        self.password = pbkdf2_sha256.hash(password)

    def to_dict(self, lang='en'):
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "username": self.username,
            "full_name": self.full_name,
            "full_name_ar": self.full_name_ar,
            "email": self.email,
            "phone": self.phone,
            "status": self.status,
            "role_id": self.role_id,
            "role_name": (self.role.name_ar if lang == 'ar' else self.role.name) if self.role else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

class Role(db.Model):
    __tablename__ = 'roles'
    id = db.Column(db.Integer, primary_key=True)
    tenant_id = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    name_ar = db.Column(db.String(100), nullable=True)
    slug = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    permissions = db.relationship('Permission', secondary='role_permissions', lazy='select')

    def to_dict(self):
        return {
            "role_id": self.id,
            "tenant_id": self.tenant_id,
            "name": self.name,
            "name_ar": self.name_ar,
            "slug": self.slug,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

class Permission(db.Model):
    __tablename__ = 'permissions'
    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.String(200))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

class RolePermission(db.Model):
    __tablename__ = 'role_permissions'
    role_id = db.Column(db.Integer, db.ForeignKey('roles.id'), primary_key=True)
    permission_id = db.Column(db.Integer, db.ForeignKey('permissions.id'), primary_key=True)
    granted_at = db.Column(db.DateTime, default=datetime.utcnow)
