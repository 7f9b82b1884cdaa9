"""Centralized configuration loading.

Loads environment variables once and provides a typed Settings object
for the rest of the codebase. Entry points (gui, CLI) call get_settings()
after import so a local .env is respected.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv


# Load .env once at import time
load_dotenv()

DEFAULT_API_BASE = "http://localhost:9393/api"


@dataclass
class Settings:
    # Users API
    api_base: str = field(
        default_factory=lambda: os.getenv("USERMGMT_API_BASE", DEFAULT_API_BASE)
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("USERMGMT_TIMEOUT", "10"))
    )

    # Logging
    log_level: str = field(
        default_factory=lambda: os.getenv("USERMGMT_LOG_LEVEL", "INFO")
    )


def get_settings() -> Settings:
    """Return a new Settings instance (cheap dataclass construction)."""
    return Settings()
