import os
from dotenv import load_dotenv

load_dotenv()


def env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Catalog
DEFAULT_WAREHOUSE = os.getenv("DEFAULT_WAREHOUSE", "Cikarang")
DEFAULT_LIST_LIMIT = 3

# Conversation expiry sweep
CONVERSATION_MAX_AGE_DAYS = int(os.getenv("CONVERSATION_MAX_AGE_DAYS", "1"))
CONVERSATION_CLEANUP_INTERVAL_SECONDS = float(os.getenv("CONVERSATION_CLEANUP_INTERVAL_SECONDS", "3600"))
CONVERSATION_CLEANUP_ENABLED = env_flag("CONVERSATION_CLEANUP_ENABLED", "true")

# Error envelopes: include driver detail in 500 responses (dev only)
EXPOSE_ERROR_DETAIL = env_flag("EXPOSE_ERROR_DETAIL", "false")

# Observability
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT")
