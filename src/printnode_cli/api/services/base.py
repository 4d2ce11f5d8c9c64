"""Base class for API services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from printnode_cli.api.exceptions import DecodeError
from printnode_cli.api.models import ApiResource

if TYPE_CHECKING:
    from printnode_cli.api.client import PrintNodeClient


class BaseService:
    """Base class for a group of related endpoints.

    All service classes should inherit from this to get:
    - Access to the shared client
    - Path building and result checking helpers
    """

    def __init__(self, client: PrintNodeClient):
        """Initialize the service.

        Args:
            client: Client that dispatches the requests
        """
        self._client = client

    @property
    def client(self) -> PrintNodeClient:
        return self._client

    def _path(self, template: str, *ids: Any) -> str:
        return self._client.build_path(template, *ids)

    @staticmethod
    def _expect(result: Any, resource_type: type[ApiResource], path: str) -> Any:
        """Require the server to have answered with one resource."""
        if not isinstance(result, resource_type):
            raise DecodeError(
                f"Expected {resource_type.OBJECT_NAME or resource_type.__name__} "
                f"from {path}, got {type(result).__name__}",
                path,
            )
        return result

    @staticmethod
    def _succeeded(result: Any) -> bool:
        """Success flag for delete-style calls."""
        return result is not False
