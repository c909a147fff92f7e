"""Domain constants shared by models, schemas and services."""

INGREDIENT_GENRES = ["meat", "vegetable", "seasoning", "sauce", "frozen", "drink"]

DEFAULT_DISH_GENRE = "main"

# How a completed food consumes a dish. Both multiply the dish total cost by
# usage_quantity; the unit is kept for display.
USAGE_UNITS = ["ratio", "serving"]

# Sort allow-lists per entity
INGREDIENT_SORT_FIELDS = [
    "name", "store", "genre", "quantity", "price", "unit_price", "created_at", "updated_at",
]
DISH_SORT_FIELDS = ["name", "genre", "total_cost", "created_at", "updated_at"]
COMPLETED_FOOD_SORT_FIELDS = ["name", "price", "total_cost", "created_at", "updated_at"]
MEMO_SORT_FIELDS = ["created_at", "updated_at"]

DEFAULT_SORT_FIELD = "created_at"
DEFAULT_SORT_ORDER = "DESC"

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Profit-rate buckets: (label, inclusive lower bound %, exclusive upper bound %)
PROFITABILITY_BUCKETS = [
    ("excellent", 50, None),
    ("good", 30, 50),
    ("fair", 20, 30),
    ("low", 10, 20),
    ("poor", None, 10),
]
UNSET_PROFITABILITY_BUCKET = "unset"

TREND_PERIODS = ["daily", "weekly", "monthly"]
