from datetime import datetime
from src.extensions import db
from src.resources import as_float, iso

class Branch(db.Model):
    __tablename__ = "branches"
    __table_args__ = (db.UniqueConstraint("tenant_id", "name", name="uq_branch_tenant_name"),)

    # Branch ID (Primary key)
    id = db.Column(db.Integer, primary_key=True)

    # Owning tenant
    tenant_id = db.Column(db.Integer, nullable=False, index=True)

    # Name (English / Arabic)
    name = db.Column(db.String(200), nullable=False)
    name_ar = db.Column(db.String(200), nullable=True)

    # Address (English / Arabic)
    address = db.Column(db.String(255), nullable=True)
    address_ar = db.Column(db.String(255), nullable=True)

    # Coordinates
    latitude = db.Column(db.Numeric(10, 7), nullable=True)
    longitude = db.Column(db.Numeric(10, 7), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "branch_id": self.id,
            "tenant_id": self.tenant_id,
            "name": self.name,
            "name_ar": self.name_ar,
            "address": self.address,
            "address_ar": self.address_ar,
            "latitude": as_float(self.latitude),
            "longitude": as_float(self.longitude),
            "created_at": iso(self.created_at),
        }


class UserBranch(db.Model):
    """Assignment of a user to a branch; tenancy comes from the branch."""
    __tablename__ = "user_branches"
    __table_args__ = (db.UniqueConstraint("user_id", "branch_id", name="uq_user_branch"),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    branch_id = db.Column(db.Integer, db.ForeignKey("branches.id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship("User", lazy="joined")
    branch = db.relationship("Branch", lazy="joined")

    def to_dict(self):
        return {
            "user_branch_id": self.id,
            "user_id": self.user_id,
            "branch_id": self.branch_id,
            "tenant_id": self.branch.tenant_id if self.branch else None,
            "user_name": self.user.full_name if self.user else None,
            "user_email": self.user.email if self.user else None,
            "branch_name": self.branch.name if self.branch else None,
            "branch_name_ar": self.branch.name_ar if self.branch else None,
            "created_at": iso(self.created_at),
        }
