from datetime import datetime
from src.extensions import db
from src.resources import as_float, iso

class CustomerPricing(db.Model):
    """A special price one customer pays for one product."""
    __tablename__ = "customer_pricing"
    __table_args__ = (
        db.UniqueConstraint("tenant_id", "customer_id", "product_id", name="uq_customer_product_price"),
    )

    id = db.Column(db.Integer, primary_key=True)
    tenant_id = db.Column(db.Integer, nullable=False, index=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)

    # Special Price
    special_price = db.Column(db.Numeric(12, 2), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = db.relationship("Customer", lazy=True)
    product = db.relationship("Product", lazy=True)

    def to_dict(self):
        return {
            "customer_pricing_id": self.id,
            "tenant_id": self.tenant_id,
            "customer_id": self.customer_id,
            "customer_name": self.customer.full_name if self.customer else None,
            "product_id": self.product_id,
            "product_name": self.product.product_name if self.product else None,
            "product_name_ar": self.product.product_name_ar if self.product else None,
            "sku": self.product.sku if self.product else None,
            "base_price": as_float(self.product.base_price) if self.product else None,
            "special_price": as_float(self.special_price),
            "created_at": iso(self.created_at),
        }
