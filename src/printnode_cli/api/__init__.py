"""API module for the PrintNode client."""

from printnode_cli.api.bag import AttributeBag
from printnode_cli.api.client import PrintNodeClient
from printnode_cli.api.exceptions import (
    AuthenticationError,
    DecodeError,
    NotConfiguredError,
    NotFoundError,
    PrintNodeError,
    RateLimitError,
    RequestError,
    TransportError,
    ValidationError,
)
from printnode_cli.api.models import (
    UNLIMITED,
    Account,
    ApiKey,
    ApiResource,
    PrintNodeModel,
    StatsSummary,
)
from printnode_cli.api.options import RequestOptions
from printnode_cli.api.requests import AccountRequestBuilder
from printnode_cli.api.services import AccountService, WhoamiService
from printnode_cli.api.transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    # Client
    "PrintNodeClient",
    "RequestOptions",
    # Transport
    "HttpxTransport",
    "Transport",
    "TransportResponse",
    # Exceptions
    "PrintNodeError",
    "ValidationError",
    "RequestError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "DecodeError",
    "TransportError",
    "NotConfiguredError",
    # Models
    "AttributeBag",
    "ApiResource",
    "PrintNodeModel",
    "Account",
    "ApiKey",
    "StatsSummary",
    "UNLIMITED",
    # Requests
    "AccountRequestBuilder",
    # Services
    "AccountService",
    "WhoamiService",
]
