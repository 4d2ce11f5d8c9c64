"""API key storage in the OS keyring.

Keys are stored per profile so one machine can hold the Integrator key
next to keys for other PrintNode accounts.
"""

import logging

import keyring
import keyring.errors

logger = logging.getLogger(__name__)

CREDENTIAL_SERVICE = "printnode-cli"


def store_api_key(api_key: str, profile: str = "default") -> None:
    """Store an API key in the OS keyring.

    Args:
        api_key: PrintNode API key
        profile: Name to store it under
    """
    keyring.set_password(CREDENTIAL_SERVICE, f"{profile}:api_key", api_key)
    logger.debug(f"API key stored for profile: {profile}")


def get_stored_api_key(profile: str = "default") -> str | None:
    """Retrieve a stored API key.

    Returns:
        The key, or None if not stored
    """
    return keyring.get_password(CREDENTIAL_SERVICE, f"{profile}:api_key") or None


def clear_api_key(profile: str = "default") -> bool:
    """Remove a stored API key.

    Returns:
        True if a key was removed, False if none was stored
    """
    try:
        keyring.delete_password(CREDENTIAL_SERVICE, f"{profile}:api_key")
    except keyring.errors.PasswordDeleteError:
        return False

    logger.debug(f"API key cleared for profile: {profile}")
    return True


def has_stored_api_key(profile: str = "default") -> bool:
    return get_stored_api_key(profile) is not None
