from datetime import datetime
from src.extensions import db
from src.resources import as_float, iso

class Warehouse(db.Model):
    __tablename__ = "warehouses"
    __table_args__ = (db.UniqueConstraint("tenant_id", "name", name="uq_warehouse_tenant_name"),)

    # Warehouse ID (Primary key)
    id = db.Column(db.Integer, primary_key=True)

    # Owning tenant
    tenant_id = db.Column(db.Integer, nullable=False, index=True)

    # Branch the warehouse serves (optional)
    branch_id = db.Column(db.Integer, db.ForeignKey("branches.id", ondelete="SET NULL"), nullable=True)

    # Name (English / Arabic)
    name = db.Column(db.String(200), nullable=False)
    name_ar = db.Column(db.String(200), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    branch = db.relationship("Branch", lazy=True)

    def to_dict(self):
        return {
            "warehouse_id": self.id,
            "tenant_id": self.tenant_id,
            "branch_id": self.branch_id,
            "branch_name": self.branch.name if self.branch else None,
            "branch_name_ar": self.branch.name_ar if self.branch else None,
            "name": self.name,
            "name_ar": self.name_ar,
            "created_at": iso(self.created_at),
        }


class WarehouseStock(db.Model):
    """On-hand quantity of one product in one warehouse."""
    __tablename__ = "warehouse_stock"
    __table_args__ = (db.UniqueConstraint("warehouse_id", "product_id", name="uq_warehouse_product"),)

    id = db.Column(db.Integer, primary_key=True)
    tenant_id = db.Column(db.Integer, nullable=False, index=True)
    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    quantity = db.Column(db.Numeric(12, 3), nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    warehouse = db.relationship("Warehouse", lazy=True)
    product = db.relationship("Product", lazy=True)

    def to_dict(self):
        return {
            "warehouse_stock_id": self.id,
            "tenant_id": self.tenant_id,
            "warehouse_id": self.warehouse_id,
            "warehouse_name": self.warehouse.name if self.warehouse else None,
            "warehouse_name_ar": self.warehouse.name_ar if self.warehouse else None,
            "product_id": self.product_id,
            "product_name": self.product.product_name if self.product else None,
            "product_name_ar": self.product.product_name_ar if self.product else None,
            "quantity": as_float(self.quantity),
            "updated_at": iso(self.updated_at),
        }
