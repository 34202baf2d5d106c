ADMIN_PREFIX = "/api/v1/admin"


def register_routes(app):
    from customers.customer_routes import bp as customer_bp
    from customers.customer_pricing_routes import bp as customer_pricing_bp
    from products.product_routes import bp as product_bp
    from branches.branch_routes import bp as branch_bp
    from branches.user_branch_routes import bp as user_branch_bp
    from sales.sales_order_routes import bp as sales_order_bp
    from sales.sales_order_item_routes import bp as sales_order_item_bp
    from warehouses.warehouse_routes import bp as warehouse_bp
    from warehouses.warehouse_stock_routes import bp as warehouse_stock_bp
    from user.user_routes import bp as user_bp
    from user.role_routes import bp as role_bp

    app.register_blueprint(customer_bp, url_prefix=f"{ADMIN_PREFIX}/customers")
    app.register_blueprint(customer_pricing_bp, url_prefix=f"{ADMIN_PREFIX}/customer-pricing")
    app.register_blueprint(product_bp, url_prefix=f"{ADMIN_PREFIX}/products")
    app.register_blueprint(branch_bp, url_prefix=f"{ADMIN_PREFIX}/branches")
    app.register_blueprint(user_branch_bp, url_prefix=f"{ADMIN_PREFIX}/user-branches")
    app.register_blueprint(sales_order_bp, url_prefix=f"{ADMIN_PREFIX}/sales-orders")
    app.register_blueprint(sales_order_item_bp, url_prefix=f"{ADMIN_PREFIX}/sales-order-items")
    app.register_blueprint(warehouse_bp, url_prefix=f"{ADMIN_PREFIX}/warehouses")
    app.register_blueprint(warehouse_stock_bp, url_prefix=f"{ADMIN_PREFIX}/warehouse-stocks")
    app.register_blueprint(user_bp, url_prefix=f"{ADMIN_PREFIX}/users")
    app.register_blueprint(role_bp, url_prefix=f"{ADMIN_PREFIX}/roles")
