"""
Shared bilingual message table.

Every response text the API produces is looked up here by semantic key, so
"unauthorized" or "server_error" read the same on every resource. Both
language tables must define the same keys (enforced by the test-suite).
"""
from flask import has_request_context, request

SUPPORTED_LANGS = ("en", "ar")
DEFAULT_LANG = "en"

MESSAGES = {
    "en": {
        # generic
        "unauthorized": "Unauthorized access.",
        "server_error": "Internal server error.",
        "tenant_required": "Tenant ID is required.",
        "invalid_body": "Request body must be a JSON object.",
        "route_not_found": "Resource not found.",
        "method_not_allowed": "Method not allowed.",
        "record_conflict": "The request conflicts with existing data.",
        # field rules
        "rule_required": "is required.",
        "rule_number": "must be a number.",
        "rule_integer": "must be a whole number.",
        "rule_decimal": "must be a decimal number.",
        "rule_email": "must be a valid email address.",
        "rule_phone": "must be a valid phone number.",
        "rule_min_length": "must be at least {n} characters.",
        "rule_max_length": "must be at most {n} characters.",
        # branches
        "branch_created": "Branch created successfully.",
        "branch_exists": "Branch already exists.",
        "branch_not_found": "Branch not found for this tenant.",
        "missing_branch_ids": "Branch IDs are required.",
        "invalid_branch_ids": "Invalid branch IDs provided.",
        "no_branches_found": "No matching branches found.",
        "branches_deleted": "{count} branch(es) deleted successfully.",
        # customers
        "customer_created": "Customer created successfully.",
        "customer_updated": "Customer updated successfully.",
        "customer_deleted": "Customer deleted successfully.",
        "customer_not_found": "Customer not found for this tenant.",
        "missing_customer_ids": "Customer IDs are required.",
        "invalid_customer_ids": "Invalid customer IDs.",
        "no_customers_found": "No matching customers were found.",
        "customers_deleted": "Deleted {count} customer(s).",
        # products
        "product_created": "Product created successfully.",
        "product_updated": "Product updated successfully.",
        "product_deleted": "Product deleted successfully.",
        "product_not_found": "Product not found for this tenant.",
        "sku_exists": "SKU already exists.",
        "missing_product_ids": "Product IDs are required.",
        "invalid_product_ids": "Invalid product IDs.",
        "no_products_found": "No matching products were found.",
        "products_deleted": "Deleted {count} product(s).",
        # sales orders
        "sales_order_created": "Sales order created successfully.",
        "sales_order_updated": "Sales order updated successfully.",
        "sales_order_deleted": "Sales order deleted successfully.",
        "sales_order_not_found": "Sales order not found for this tenant.",
        "missing_sales_order_ids": "Sales order IDs are required.",
        "invalid_sales_order_ids": "Invalid sales order IDs.",
        "no_sales_orders_found": "No matching sales orders were found.",
        "sales_orders_deleted": "Deleted {count} sales order(s).",
        # sales order items
        "sales_order_item_created": "Sales order item created successfully.",
        "duplicate_item": "This product already exists in the sales order.",
        "missing_sales_order_item_ids": "Sales order item IDs are required.",
        "invalid_sales_order_item_ids": "Invalid sales order item IDs.",
        "no_sales_order_items_found": "No matching sales order items found.",
        "sales_order_items_deleted": "Deleted {count} sales order item(s).",
        # users
        "user_created": "User created successfully.",
        "user_not_found": "User not found for this tenant.",
        "email_exists": "A user with this email already exists.",
        "role_not_found": "Role not found for this tenant.",
        "missing_user_ids": "User IDs are required.",
        "invalid_user_ids": "Invalid user IDs.",
        "no_users_found": "No matching users were found.",
        "users_deleted": "Deleted {count} user(s).",
        # user branches
        "user_branch_created": "User assigned to branch successfully.",
        "user_branch_updated": "User branch assignment updated successfully.",
        "user_branch_deleted": "User unassigned from branch successfully.",
        "already_assigned": "User already assigned to this branch.",
        "user_branch_not_found": "User branch not found for this tenant.",
        "missing_user_branch_ids": "User branch IDs are required.",
        "invalid_user_branch_ids": "Invalid user branch IDs.",
        "no_user_branches_found": "No matching user branches were found.",
        "user_branches_deleted": "Unassigned {count} user branch assignment(s).",
        # warehouses
        "warehouse_created": "Warehouse created successfully.",
        "warehouse_updated": "Warehouse updated successfully.",
        "warehouse_deleted": "Warehouse deleted successfully.",
        "warehouse_exists": "Warehouse already exists.",
        "warehouse_not_found": "Warehouse not found for this tenant.",
        "missing_warehouse_ids": "Warehouse IDs are required.",
        "invalid_warehouse_ids": "Invalid warehouse IDs.",
        "no_warehouses_found": "No matching warehouses were found.",
        "warehouses_deleted": "Deleted {count} warehouse(s).",
        # warehouse stock
        "stock_created": "Stock entry created successfully.",
        "stock_updated": "Stock entry updated successfully.",
        "stock_deleted": "Stock entry deleted successfully.",
        "stock_exists": "Stock entry already exists.",
        "stock_not_found": "Stock entry not found for this tenant.",
        "missing_stock_ids": "Stock entry IDs are required.",
        "invalid_stock_ids": "Invalid stock entry IDs.",
        "no_stocks_found": "No matching stock entries were found.",
        "stocks_deleted": "Deleted {count} stock entry(s).",
        # customer pricing
        "customer_pricing_created": "Customer pricing created successfully.",
        "customer_pricing_updated": "Customer pricing updated successfully.",
        "customer_pricing_deleted": "Customer pricing deleted successfully.",
        "customer_pricing_exists": "Customer pricing already exists for this customer and product.",
        "customer_pricing_not_found": "Customer pricing not found for this tenant.",
        "missing_customer_pricing_ids": "Customer pricing IDs are required.",
        "invalid_customer_pricing_ids": "Invalid customer pricing IDs.",
        "no_customer_pricing_found": "No customer pricing entries found for the given criteria.",
        "customer_pricing_entries_deleted": "Deleted {count} customer pricing entry(s).",
    },
    "ar": {
        "unauthorized": "دخول غير مصرح به.",
        "server_error": "خطأ في الخادم الداخلي.",
        "tenant_required": "معرف المنظمة مطلوب.",
        "invalid_body": "يجب أن يكون جسم الطلب كائن JSON.",
        "route_not_found": "المورد غير موجود.",
        "method_not_allowed": "الطريقة غير مسموح بها.",
        "record_conflict": "الطلب يتعارض مع بيانات موجودة.",
        "rule_required": "مطلوب.",
        "rule_number": "يجب أن يكون رقماً.",
        "rule_integer": "يجب أن يكون رقماً صحيحاً.",
        "rule_decimal": "يجب أن يكون رقماً عشرياً.",
        "rule_email": "يجب أن يكون بريداً إلكترونياً صالحاً.",
        "rule_phone": "يجب أن يكون رقم هاتف صالحاً.",
        "rule_min_length": "يجب ألا يقل عن {n} أحرف.",
        "rule_max_length": "يجب ألا يزيد عن {n} حرفاً.",
        "branch_created": "تم إنشاء الفرع بنجاح.",
        "branch_exists": "الفرع موجود مسبقاً.",
        "branch_not_found": "الفرع غير موجود لهذه المنظمة.",
        "missing_branch_ids": "معرّفات الفروع مفقودة.",
        "invalid_branch_ids": "معرّفات الفروع غير صالحة.",
        "no_branches_found": "لم يتم العثور على أي فرع مطابق.",
        "branches_deleted": "تم حذف {count} فرع/فروع بنجاح.",
        "customer_created": "تم إنشاء العميل بنجاح.",
        "customer_updated": "تم تحديث بيانات العميل بنجاح.",
        "customer_deleted": "تم حذف بيانات العميل بنجاح.",
        "customer_not_found": "العميل غير موجود ضمن هذه المنظمة.",
        "missing_customer_ids": "يجب تزويد أرقام العملاء.",
        "invalid_customer_ids": "أرقام العملاء غير صالحة.",
        "no_customers_found": "لم يتم العثور على عملاء مطابقين.",
        "customers_deleted": "تم حذف {count} عميل/عملاء.",
        "product_created": "تم إنشاء المنتج بنجاح.",
        "product_updated": "تم تحديث المنتج بنجاح.",
        "product_deleted": "تم حذف المنتج بنجاح.",
        "product_not_found": "المنتج غير موجود ضمن هذه المنظمة.",
        "sku_exists": "الرمز SKU موجود مسبقاً.",
        "missing_product_ids": "معرفات المنتجات مطلوبة.",
        "invalid_product_ids": "قائمة المنتجات غير صالحة.",
        "no_products_found": "لم يتم العثور على أي منتجات.",
        "products_deleted": "تم حذف {count} منتج/منتجات.",
        "sales_order_created": "تم إنشاء طلب المبيعات بنجاح.",
        "sales_order_updated": "تم تحديث طلب المبيعات بنجاح.",
        "sales_order_deleted": "تم حذف طلب المبيعات بنجاح.",
        "sales_order_not_found": "طلب المبيعات غير موجود ضمن هذه المنظمة.",
        "missing_sales_order_ids": "معرفات طلبات المبيعات مطلوبة.",
        "invalid_sales_order_ids": "معرفات طلبات المبيعات غير صالحة.",
        "no_sales_orders_found": "لم يتم العثور على طلبات مبيعات مطابقة.",
        "sales_orders_deleted": "تم حذف {count} طلب/طلبات مبيعات.",
        "sales_order_item_created": "تم إنشاء عنصر طلب المبيعات بنجاح.",
        "duplicate_item": "هذا المنتج موجود مسبقًا ضمن طلب المبيعات.",
        "missing_sales_order_item_ids": "معرفات عناصر طلب المبيعات مطلوبة.",
        "invalid_sales_order_item_ids": "معرفات عناصر طلب المبيعات غير صالحة.",
        "no_sales_order_items_found": "لا يوجد عناصر طلب مبيعات مطابقة.",
        "sales_order_items_deleted": "تم حذف {count} عنصر/عناصر طلب مبيعات.",
        "user_created": "تم إنشاء المستخدم بنجاح.",
        "user_not_found": "المستخدم غير موجود ضمن هذه المنظمة.",
        "email_exists": "يوجد مستخدم بهذا البريد الإلكتروني مسبقاً.",
        "role_not_found": "الدور غير موجود ضمن هذه المنظمة.",
        "missing_user_ids": "معرفات المستخدمين مطلوبة.",
        "invalid_user_ids": "معرفات المستخدمين غير صالحة.",
        "no_users_found": "لم يتم العثور على مستخدمين مطابقين.",
        "users_deleted": "تم حذف {count} مستخدم/مستخدمين.",
        "user_branch_created": "تم ربط المستخدم بالفرع بنجاح.",
        "user_branch_updated": "تم تحديث ربط المستخدم بالفرع بنجاح.",
        "user_branch_deleted": "تم إزالة المستخدم من الفرع بنجاح.",
        "already_assigned": "المستخدم مرتبط بالفعل بهذا الفرع.",
        "user_branch_not_found": "المعرف غير موجود لهذه المنظمة.",
        "missing_user_branch_ids": "معرّفات مستخدمين الفروع مفقودة.",
        "invalid_user_branch_ids": "معرّفات مستخدمين الفروع غير صالحة.",
        "no_user_branches_found": "لم يتم العثور على ربط مطابق.",
        "user_branches_deleted": "تم إلغاء {count} ربط/روابط مستخدمين بالفروع.",
        "warehouse_created": "تم إنشاء المستودع بنجاح.",
        "warehouse_updated": "تم تحديث المستودع بنجاح.",
        "warehouse_deleted": "تم حذف المستودع بنجاح.",
        "warehouse_exists": "المستودع موجود مسبقاً.",
        "warehouse_not_found": "المخزن غير موجود لهذه المنظمة.",
        "missing_warehouse_ids": "معرفات المستودعات مطلوبة.",
        "invalid_warehouse_ids": "معرفات المستودعات غير صالحة.",
        "no_warehouses_found": "لم يتم العثور على مخازن مطابقة.",
        "warehouses_deleted": "تم حذف {count} مخزن/مخازن.",
        "stock_created": "تم إنشاء السجل بنجاح.",
        "stock_updated": "تم تحديث السجل بنجاح.",
        "stock_deleted": "تم حذف السجل بنجاح.",
        "stock_exists": "سجل المخزون موجود مسبقاً.",
        "stock_not_found": "سجل المخزون غير موجود لهذه المنظمة.",
        "missing_stock_ids": "معرفات سجلات المخزون مطلوبة.",
        "invalid_stock_ids": "معرفات سجلات المخزون غير صالحة.",
        "no_stocks_found": "لم يتم العثور على سجلات مطابقة.",
        "stocks_deleted": "تم حذف {count} سجل/سجلات.",
        "customer_pricing_created": "تم إنشاء السعر الخاص للزبون بنجاح.",
        "customer_pricing_updated": "تم تحديث السعر الخاص للزبون بنجاح.",
        "customer_pricing_deleted": "تم حذف السعر الخاص للزبون بنجاح.",
        "customer_pricing_exists": "تسعير العميل موجود مسبقًا لهذا العميل والمنتج.",
        "customer_pricing_not_found": "تسعير العميل غير موجود ضمن هذه المنظمة.",
        "missing_customer_pricing_ids": "معرفات اسعار العملاء مطلوبة.",
        "invalid_customer_pricing_ids": "معرف واحد أو أكثر غير صالح.",
        "no_customer_pricing_found": "لم يتم العثور على أي إدخالات لتسعير العملاء للمعايير المحددة.",
        "customer_pricing_entries_deleted": "تم حذف {count} إدخال/إدخالات تسعير للعملاء.",
    },
}


def resolve_lang(accept_language):
    """Map an accept-language header value to "ar" or "en"."""
    if accept_language and accept_language.strip().lower().startswith("ar"):
        return "ar"
    return DEFAULT_LANG


def request_lang():
    if not has_request_context():
        return DEFAULT_LANG
    return resolve_lang(request.headers.get("accept-language"))


def get_message(key, lang=DEFAULT_LANG, **params):
    table = MESSAGES.get(lang, MESSAGES[DEFAULT_LANG])
    text = table.get(key) or MESSAGES[DEFAULT_LANG][key]
    return text.format(**params) if params else text
