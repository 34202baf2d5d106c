from datetime import datetime
from src.extensions import db
from src.resources import as_float, iso

ORDER_STATUS_DRAFT = "draft"

class SalesOrder(db.Model):
    __tablename__ = "sales_orders"

    # Sales Order ID (Primary key)
    id = db.Column(db.Integer, primary_key=True)

    # Owning tenant
    tenant_id = db.Column(db.Integer, nullable=False, index=True)

    # Parties
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    branch_id = db.Column(db.Integer, db.ForeignKey("branches.id", ondelete="SET NULL"), nullable=True)

    # Status (draft, confirmed, delivered, cancelled, ...)
    order_status = db.Column(db.String(30), nullable=False, default=ORDER_STATUS_DRAFT)

    # Total Amount
    total_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = db.relationship("Customer", lazy=True)
    user = db.relationship("User", lazy=True)
    branch = db.relationship("Branch", lazy=True)
    items = db.relationship("SalesOrderItem", backref="sales_order", lazy=True,
                            cascade="all, delete-orphan")

    def to_dict(self, lang="en", include_items=False):
        arabic = lang == "ar"
        data = {
            "sales_order_id": self.id,
            "tenant_id": self.tenant_id,
            "customer_id": self.customer_id,
            "customer_name": _pick(self.customer, "full_name", arabic),
            "user_id": self.user_id,
            "user_name": _pick(self.user, "full_name", arabic),
            "branch_id": self.branch_id,
            "branch_name": _pick(self.branch, "name", arabic),
            "order_status": self.order_status,
            "total_amount": as_float(self.total_amount),
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
        if include_items:
            data["items"] = [item.to_dict(lang) for item in self.items]
        return data


class SalesOrderItem(db.Model):
    __tablename__ = "sales_order_items"
    __table_args__ = (db.UniqueConstraint("sales_order_id", "product_id", name="uq_sales_order_product"),)

    id = db.Column(db.Integer, primary_key=True)
    sales_order_id = db.Column(db.Integer, db.ForeignKey("sales_orders.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    quantity = db.Column(db.Numeric(12, 3), nullable=False)
    price = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    total = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    product = db.relationship("Product", lazy=True)

    def to_dict(self, lang="en"):
        return {
            "sales_order_item_id": self.id,
            "sales_order_id": self.sales_order_id,
            "product_id": self.product_id,
            "product_name": _pick(self.product, "product_name", lang == "ar"),
            "quantity": as_float(self.quantity),
            "price": as_float(self.price),
            "total": as_float(self.total),
            "created_at": iso(self.created_at),
        }


def _pick(row, attr, arabic):
    """Localized attribute of a related row, falling back to English"""
    if row is None:
        return None
    if arabic:
        return getattr(row, f"{attr}_ar", None) or getattr(row, attr)
    return getattr(row, attr)
