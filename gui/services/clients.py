"""Client factories for the GUI layer."""

from __future__ import annotations

from typing import Optional

from usermgmt.api_client import UserApiClient
from usermgmt.config import get_settings


def get_user_api_client(base_url: Optional[str] = None) -> UserApiClient:
    """Return a Users API client configured from settings."""

    settings = get_settings()
    return UserApiClient(
        base_url=base_url or settings.api_base,
        timeout=settings.request_timeout,
    )
