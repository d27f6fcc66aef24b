CHANNEL_TYPE_MANUAL = "manual"
CHANNEL_TYPES = ("shopify", "woocommerce", "amazon", "ebay", CHANNEL_TYPE_MANUAL)

SYNC_STATUS_IDLE = "idle"
SYNC_STATUS_SYNCING = "syncing"
SYNC_STATUS_SUCCESS = "success"
SYNC_STATUS_ERROR = "error"
SYNC_STATUSES = (SYNC_STATUS_IDLE, SYNC_STATUS_SYNCING, SYNC_STATUS_SUCCESS, SYNC_STATUS_ERROR)

MOVEMENT_REPLENISHMENT = "replenishment"
MOVEMENT_SALE = "sale"
MOVEMENT_CORRECTION = "correction"
MOVEMENT_TRANSFER = "transfer"
MOVEMENT_RETURN = "return"
MOVEMENT_TYPES = (
    MOVEMENT_REPLENISHMENT,
    MOVEMENT_SALE,
    MOVEMENT_CORRECTION,
    MOVEMENT_TRANSFER,
    MOVEMENT_RETURN,
)

MOVEMENT_TYPE_ALIASES = {
    "replenishment": MOVEMENT_REPLENISHMENT,
    "purchase": MOVEMENT_REPLENISHMENT,
    "restock": MOVEMENT_REPLENISHMENT,
    "sale": MOVEMENT_SALE,
    "correction": MOVEMENT_CORRECTION,
    "adjustment": MOVEMENT_CORRECTION,
    "transfer": MOVEMENT_TRANSFER,
    "inter_location_transfer": MOVEMENT_TRANSFER,
    "return": MOVEMENT_RETURN,
    "customer_return": MOVEMENT_RETURN,
}

STOCK_OUT_OF_STOCK = "out_of_stock"
STOCK_LOW = "low_stock"
STOCK_IN_STOCK = "in_stock"
STOCK_OVERSTOCKED = "overstocked"
STOCK_STATUSES = (STOCK_OUT_OF_STOCK, STOCK_LOW, STOCK_IN_STOCK, STOCK_OVERSTOCKED)

ID_PREFIX_PRODUCT = "prod"
ID_PREFIX_INVENTORY = "inv"
ID_PREFIX_CHANNEL = "chan"
ID_PREFIX_MOVEMENT = "mov"

INITIAL_STOCK_REASON = "Initial stock"
