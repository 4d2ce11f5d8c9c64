"""Resource and value models."""

from printnode_cli.api.models.account import (
    ACCOUNT_STATES,
    STATE_ACTIVE,
    STATE_SUSPENDED,
    UNLIMITED,
    Account,
    ApiKey,
    StatsSummary,
    Unlimited,
)
from printnode_cli.api.models.base import PrintNodeModel
from printnode_cli.api.models.resource import ApiResource

__all__ = [
    # Base
    "ApiResource",
    "PrintNodeModel",
    # Account
    "ACCOUNT_STATES",
    "Account",
    "ApiKey",
    "STATE_ACTIVE",
    "STATE_SUSPENDED",
    "StatsSummary",
    "UNLIMITED",
    "Unlimited",
]
