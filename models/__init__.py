from src.extensions import db

# Import all models so create_all and relationships see every table
from user.user import User, Role, Permission, RolePermission
from branches.branch import Branch, UserBranch
from customers.customer import Customer
from customers.customer_pricing import CustomerPricing
from products.product import Product
from sales.sales_order import SalesOrder, SalesOrderItem
from warehouses.warehouse import Warehouse, WarehouseStock


__all__ = [
    "db",
    "User",
    "Role",
    "Permission",
    "RolePermission",
    "Branch",
    "UserBranch",
    "Customer",
    "CustomerPricing",
    "Product",
    "SalesOrder",
    "SalesOrderItem",
    "Warehouse",
    "WarehouseStock",
]
