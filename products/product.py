from datetime import datetime
from src.extensions import db
from src.resources import as_float, iso

class Product(db.Model):
    __tablename__ = "products"
    __table_args__ = (db.UniqueConstraint("tenant_id", "sku", name="uq_product_tenant_sku"),)

    # Product ID (Primary key)
    id = db.Column(db.Integer, primary_key=True)

    # Owning tenant
    tenant_id = db.Column(db.Integer, nullable=False, index=True)

    # SKU / Item Code (unique per tenant)
    sku = db.Column(db.String(100), nullable=False)

    # Barcode / QR Code
    barcode = db.Column(db.String(200), nullable=True)

    # Product Name (English / Arabic)
    product_name = db.Column(db.String(255), nullable=False)
    product_name_ar = db.Column(db.String(255), nullable=True)

    # Category (English / Arabic)
    category = db.Column(db.String(120), nullable=True)
    category_ar = db.Column(db.String(120), nullable=True)

    # Base Price
    base_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)

    # Soft-delete flag; inactive products are hidden from every read
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def active_in_tenant(cls, tenant_id):
        return cls.query.filter(cls.tenant_id == tenant_id, cls.is_active.is_(True))

    def to_dict(self):
        return {
            "product_id": self.id,
            "tenant_id": self.tenant_id,
            "sku": self.sku,
            "barcode": self.barcode,
            "product_name": self.product_name,
            "product_name_ar": self.product_name_ar,
            "category": self.category,
            "category_ar": self.category_ar,
            "base_price": as_float(self.base_price),
            "created_at": iso(self.created_at),
        }
