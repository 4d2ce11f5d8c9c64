"""API services."""

from printnode_cli.api.services.account import AccountService
from printnode_cli.api.services.base import BaseService
from printnode_cli.api.services.whoami import WhoamiService

__all__ = [
    "AccountService",
    "BaseService",
    "WhoamiService",
]
