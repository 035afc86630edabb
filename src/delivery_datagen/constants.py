"""
Fixed enumerations and business rules for food-delivery data generation.

Contains:
- Closed value sets sampled by the generators (cuisines, vehicles, statuses...)
- Customer segment thresholds
- Earnings shares applied to order amounts
- Table column orders and the import order expected by the loader
"""

# =============================================================================
# Restaurants
# =============================================================================

CUISINES = [
    "Chinese",
    "Japanese",
    "Korean",
    "Thai",
    "Indian",
    "Western",
    "Italian",
    "Fast Food",
]

RESTAURANT_SUFFIXES = ["Restaurant", "Eatery", "Kitchen", "Cafe"]

WEEKDAYS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

CLOSED_DAY_PROBABILITY = 0.10
OPEN_HOUR_RANGE = (7, 11)  # Morning opening window (inclusive)
CLOSE_HOUR_RANGE = (20, 23)  # Late evening closing window (inclusive)

RESTAURANT_RATING_RANGE = (3.5, 5.0)
COMMISSION_RATE_RANGE = (15.0, 25.0)  # Percent

ACTIVE_PROBABILITY = 0.90

# =============================================================================
# Customers
# =============================================================================

CUSTOMER_ORDER_COUNT_RANGE = (1, 50)

# (minimum total_orders, label), checked top-down
SEGMENT_THRESHOLDS = [
    (40, "vip"),
    (20, "regular"),
    (0, "new"),
]

# =============================================================================
# Drivers
# =============================================================================

VEHICLE_TYPES = ["Motorcycle", "Car", "Bicycle", "Van"]

DRIVER_RATING_RANGE = (3.5, 5.0)
STATUS_UPDATE_LOOKBACK_DAYS = 1

# =============================================================================
# Orders
# =============================================================================

ORDER_STATUSES = [
    "placed",
    "accepted",
    "preparing",
    "picked_up",
    "delivered",
    "cancelled",
]
DELIVERED_STATUS = "delivered"

PAYMENT_METHODS = ["Credit Card", "Debit Card", "Cash", "Digital Wallet"]

ORDER_TOTAL_RANGE = (10.0, 100.0)
DELIVERY_FEE_RANGE = (2.0, 8.0)
ORDER_RATING_RANGE = (1, 5)
DELIVERY_HORIZON_HOURS = 24

# Shares do not sum to 100%: the financial model is not reconciled
PLATFORM_FEE_SHARE = 0.15
RESTAURANT_EARNINGS_SHARE = 0.70
DRIVER_EARNINGS_SHARE = 0.80

# =============================================================================
# Promotions
# =============================================================================

DISCOUNT_PERCENTAGE = "percentage"
DISCOUNT_FIXED_AMOUNT = "fixed_amount"
DISCOUNT_TYPES = [DISCOUNT_PERCENTAGE, DISCOUNT_FIXED_AMOUNT]

DISCOUNT_VALUE_RANGES = {
    DISCOUNT_PERCENTAGE: (5, 30),
    DISCOUNT_FIXED_AMOUNT: (5, 20),
}

PROMOTION_MAX_DAYS = 30
PROMOTION_CODE_LENGTH = 8
PROMOTION_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
USAGE_COUNT_RANGE = (0, 1000)
MAX_USAGE_RANGE = (1000, 5000)
MIN_ORDER_VALUE_RANGE = (10, 50)

# =============================================================================
# Order details (items and tracking pings)
# =============================================================================

MENU_ITEMS = {
    "Chinese": ["Fried Rice", "Kung Pao Chicken", "Dim Sum Platter", "Wonton Soup"],
    "Japanese": ["Salmon Sushi Set", "Chicken Katsu Don", "Tonkotsu Ramen", "Gyoza"],
    "Korean": ["Bibimbap", "Kimchi Jjigae", "Bulgogi Rice", "Fried Chicken"],
    "Thai": ["Pad Thai", "Green Curry", "Tom Yum Soup", "Basil Pork Rice"],
    "Indian": ["Butter Chicken", "Biryani", "Garlic Naan", "Palak Paneer"],
    "Western": ["Grilled Chicken Chop", "Fish & Chips", "Caesar Salad", "Ribeye Steak"],
    "Italian": ["Margherita Pizza", "Carbonara", "Lasagna", "Tiramisu"],
    "Fast Food": ["Cheeseburger", "Chicken Nuggets", "Fries", "Hot Dog"],
}

ITEMS_PER_ORDER_RANGE = (1, 4)
ITEM_QUANTITY_RANGE = (1, 4)
ITEM_UNIT_PRICE_RANGE = (3.0, 30.0)
SPECIAL_INSTRUCTIONS_PROBABILITY = 0.15
SPECIAL_INSTRUCTIONS = [
    "No onions",
    "Extra spicy",
    "Less salt",
    "Sauce on the side",
    "No cutlery, thanks",
    "Chef's special request: don't add peanuts",
]

# Status pings emitted per order, in lifecycle order
TRACKING_STATUSES = ["assigned", "arrived_at_restaurant", "picked_up", "en_route", "delivered"]
UNDELIVERED_TRACKING_WINDOW_HOURS = 2

# =============================================================================
# SQL output
# =============================================================================

TABLE_COLUMNS: dict[str, list[str]] = {
    "restaurants": [
        "id", "name", "cuisine_type", "address", "latitude", "longitude",
        "rating", "onboarding_date", "operating_hours", "commission_rate",
        "is_active",
    ],
    "customers": [
        "id", "name", "email", "phone", "address", "latitude", "longitude",
        "registration_date", "last_order_date", "total_orders",
        "customer_segment",
    ],
    "drivers": [
        "id", "name", "email", "phone", "vehicle_type", "joining_date",
        "rating", "is_active", "current_latitude", "current_longitude",
        "last_status_update",
    ],
    "orders": [
        "id", "customer_id", "restaurant_id", "driver_id", "order_datetime",
        "delivery_datetime", "status", "total_amount", "delivery_fee",
        "restaurant_earnings", "driver_earnings", "platform_fee",
        "payment_method", "rating_restaurant", "rating_driver",
        "rating_overall",
    ],
    "promotions": [
        "id", "code", "discount_type", "discount_value", "start_date",
        "end_date", "usage_count", "max_usage", "min_order_value",
    ],
    "order_promotions": ["order_id", "promotion_id", "discount_amount"],
    "order_items": [
        "id", "order_id", "item_name", "quantity", "unit_price",
        "total_price", "special_instructions",
    ],
    "delivery_tracking": [
        "id", "order_id", "driver_id", "status", "latitude", "longitude",
        "timestamp",
    ],
}

# Order the external import step applies the files in
CORE_IMPORT_ORDER = [
    "restaurants",
    "customers",
    "drivers",
    "orders",
    "promotions",
    "order_promotions",
]
DETAIL_IMPORT_ORDER = ["order_items", "delivery_tracking"]

# Tables whose id column is backed by a SERIAL sequence
SERIAL_TABLES = {
    "restaurants",
    "customers",
    "drivers",
    "orders",
    "promotions",
    "order_items",
    "delivery_tracking",
}
