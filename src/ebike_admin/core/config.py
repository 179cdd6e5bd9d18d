import os

# In a real deployment, load these from the environment or a secrets store
SECRET_KEY: str = os.getenv(
    "SECRET_KEY", "ebike-admin-dev-secret-!ChangeMe!"
)  # TODO: Refuse to start with the default secret outside local development
ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./ebike_admin.sqlite3")

# When enabled, request fulfillment and sale recording run inside a single
# transaction guarded by a conditional update. Off by default, which keeps the
# ledgers as independent writes.
STRICT_CONSISTENCY: bool = os.getenv("STRICT_CONSISTENCY", "False").lower() in ("true", "1", "t")

LOW_STOCK_THRESHOLD: int = int(os.getenv("LOW_STOCK_THRESHOLD", "5"))
TOP_LIST_LIMIT: int = int(os.getenv("TOP_LIST_LIMIT", "5"))

MODEL_MODULES = [
    "ebike_admin.features.auth.models",
    "ebike_admin.features.catalog.models",
    "ebike_admin.features.inventory_requests.models",
    "ebike_admin.features.shop_inventory.models",
    "ebike_admin.features.sales.models",
]

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {  # App label referenced by "models.<Model>" relations
            "models": [*MODEL_MODULES, "aerich.models"],
            "default_connection": "default",
        }
    },
}
