import os
from dataclasses import dataclass, field
from typing import Optional


class Config:
    # --- PRIMARY API (ClawFi) ---
    API_KEY = os.getenv("CLAWFI_API_KEY", "")
    BASE_URL = os.getenv("CLAWFI_BASE_URL", "https://api.clawfi.ai")
    TIMEOUT_MS = int(os.getenv("CLAWFI_TIMEOUT_MS", "30000"))

    # --- FALLBACK SOURCES ---
    # Public endpoints, no key needed.
    DEXSCREENER_API_URL = os.getenv("DEXSCREENER_API_URL", "https://api.dexscreener.com")
    GOPLUS_API_URL = os.getenv("GOPLUS_API_URL", "https://api.gopluslabs.io/api/v1")

    # --- LISTS ---
    SEARCH_LIMIT = 20
    TRENDING_LIMIT = 20
    RECENT_SIGNALS_LIMIT = 50

    # --- SYSTEM ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


@dataclass
class ClientConfig:
    """
    Per-client settings. Anything left unset falls back to Config.
    timeout is in milliseconds.
    """
    api_key: Optional[str] = field(default_factory=lambda: Config.API_KEY or None)
    base_url: str = field(default_factory=lambda: Config.BASE_URL)
    timeout: int = field(default_factory=lambda: Config.TIMEOUT_MS)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000
