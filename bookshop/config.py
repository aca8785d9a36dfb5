"""
Runtime configuration.

Every setting can be overridden through an environment variable; the
defaults target a backend running locally on port 8080.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_CONTACT_FILE = Path(__file__).resolve().parents[1] / "data" / "contact_messages.json"


class Settings(BaseModel):
    api_url: str = "http://localhost:8080/api"
    api_timeout: float = 10.0
    api_token: Optional[str] = None
    # Seconds a GET result stays cached; 0 disables the read cache.
    cache_ttl: float = 30.0
    contact_file: Path = DEFAULT_CONTACT_FILE
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``BOOKSHOP_*`` environment variables."""
        values = {}
        env_map = {
            "api_url": "BOOKSHOP_API_URL",
            "api_timeout": "BOOKSHOP_API_TIMEOUT",
            "api_token": "BOOKSHOP_API_TOKEN",
            "cache_ttl": "BOOKSHOP_CACHE_TTL",
            "contact_file": "BOOKSHOP_CONTACT_FILE",
            "log_level": "BOOKSHOP_LOG_LEVEL",
            "log_file": "BOOKSHOP_LOG_FILE",
        }
        for field, var in env_map.items():
            raw = os.getenv(var)
            if raw:
                values[field] = raw
        origins = os.getenv("CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
