"""API key resolution for the PrintNode client."""

from printnode_cli.api.exceptions import NotConfiguredError
from printnode_cli.auth.credential_store import (
    clear_api_key,
    get_stored_api_key,
    has_stored_api_key,
    store_api_key,
)
from printnode_cli.config import get_settings


def resolve_api_key(api_key: str | None = None, profile: str | None = None) -> str:
    """Find the API key to use.

    Order: explicit argument, settings (env / .env / config file), keyring.

    Raises:
        NotConfiguredError: If no key is found anywhere
    """
    if api_key:
        return api_key

    settings = get_settings()
    if settings.api_key:
        return settings.api_key

    profile = profile or settings.profile
    stored = get_stored_api_key(profile)
    if stored:
        return stored

    raise NotConfiguredError(profile)


__all__ = [
    "resolve_api_key",
    "store_api_key",
    "get_stored_api_key",
    "clear_api_key",
    "has_stored_api_key",
]
