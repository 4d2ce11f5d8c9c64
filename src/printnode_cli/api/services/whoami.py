"""Service for the authenticated account."""

from printnode_cli.api.models import Account
from printnode_cli.api.options import RequestOptions
from printnode_cli.api.services.base import BaseService


class WhoamiService(BaseService):
    """Information about the account the API key belongs to."""

    def check(self, options: RequestOptions | dict | None = None) -> Account:
        """Get the authenticated account (or the impersonated child)."""
        result = self._client.request("GET", "/whoami", options=options, resource_type=Account)
        return self._expect(result, Account, "/whoami")
