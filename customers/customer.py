from datetime import datetime
from src.extensions import db
from src.resources import as_float, iso

class Customer(db.Model):
    __tablename__ = "customers"

    # Customer ID (Primary key)
    id = db.Column(db.Integer, primary_key=True)

    # Owning tenant
    tenant_id = db.Column(db.Integer, nullable=False, index=True)

    # Home branch (optional)
    branch_id = db.Column(db.Integer, db.ForeignKey("branches.id", ondelete="SET NULL"), nullable=True)

    # Full Name (English / Arabic)
    full_name = db.Column(db.String(200), nullable=False)
    full_name_ar = db.Column(db.String(200), nullable=True)

    # Contact
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=True)

    # Address (English / Arabic)
    address = db.Column(db.String(255), nullable=True)
    address_ar = db.Column(db.String(255), nullable=True)

    # Credit Limit
    credit_limit = db.Column(db.Numeric(12, 2), default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    branch = db.relationship("Branch", lazy=True)

    def to_dict(self, lang="en"):
        return {
            "customer_id": self.id,
            "tenant_id": self.tenant_id,
            "branch_id": self.branch_id,
            "branch_name": (self.branch.name_ar if lang == "ar" and self.branch.name_ar else self.branch.name) if self.branch else None,
            "full_name": self.full_name,
            "full_name_ar": self.full_name_ar,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "address_ar": self.address_ar,
            "credit_limit": as_float(self.credit_limit),
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
