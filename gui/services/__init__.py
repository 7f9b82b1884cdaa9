from .clients import get_user_api_client  # noqa: F401
