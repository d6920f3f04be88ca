import os

# In a real deployment these come from the environment or a secrets manager
SECRET_KEY: str = os.getenv(
    "SECRET_KEY", "your-secret-key-for-jwt-!ChangeMe!"
)
ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./sales_reports.sqlite3")
PORT: int = int(os.getenv("PORT", "5006"))

CORS_ORIGINS: list[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_NAMESPACES: list[str] = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]

MODEL_MODULES: list[str] = [
    "sales_reports.features.auth.models",
    "sales_reports.features.customers.models",
    "sales_reports.features.inventory.models",
    "sales_reports.features.orders.models",
    "aerich.models",  # For Aerich migrations
]


def build_tortoise_config(db_url: str) -> dict:
    """Tortoise config shared by the API, the CLI, aerich and the test suite."""
    return {
        "connections": {"default": db_url},
        "apps": {
            "models": {  # This is an app label, can be anything
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
        # Day and month buckets are computed in UTC
        "use_tz": True,
        "timezone": "UTC",
    }


TORTOISE_ORM_CONFIG = build_tortoise_config(DATABASE_URL)
