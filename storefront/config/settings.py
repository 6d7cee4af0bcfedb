# storefront/config/settings.py

"""Central configuration for the storefront client."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the storefront client."""

    # --- Backend (hosted PostgREST / Supabase project) ---
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    PRODUCTS_TABLE: str = os.getenv("STOREFRONT_PRODUCTS_TABLE", "products")

    # --- Requests ---
    REQUEST_TIMEOUT: int = int(
        os.getenv("STOREFRONT_REQUEST_TIMEOUT", "15")
    )                                   # Seconds before a request times out
    HEALTH_SLOW_MS: float = 2000.0      # Latency above this reports "slow"

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Catalog presentation ---
    ALL_CATEGORIES: str = "all"         # Reserved category selector value
    PLACEHOLDER_IMAGE: str = "/placeholder.svg"
    CURRENCY_SYMBOL: str = "$"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
