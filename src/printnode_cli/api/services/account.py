"""Service for managing Integrator and child accounts."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from printnode_cli.api.exceptions import DecodeError, ValidationError
from printnode_cli.api.models import (
    ACCOUNT_STATES,
    STATE_ACTIVE,
    STATE_SUSPENDED,
    Account,
    ApiKey,
)
from printnode_cli.api.options import (
    HEADER_CHILD_BY_CREATOR_REF,
    HEADER_CHILD_BY_EMAIL,
    HEADER_CHILD_BY_ID,
    IMPERSONATION_HEADERS,
    RequestOptions,
)
from printnode_cli.api.requests import AccountRequestBuilder
from printnode_cli.api.services.base import BaseService

logger = logging.getLogger(__name__)

Options = RequestOptions | Mapping | None


class AccountService(BaseService):
    """Create, inspect and manage child accounts of an Integrator account.

    Every method takes an optional ``options`` argument. Passing
    ``RequestOptions(child_account_by_id=...)`` there scopes impersonation to
    that one call. The ``act_as_child_account*`` methods instead change a
    default header on the shared client (see ``PrintNodeClient``).
    """

    def create(self, data: AccountRequestBuilder | Mapping[str, Any], options: Options = None) -> Account:
        """Create a child account.

        Args:
            data: A builder, or a flat or nested mapping accepted by it

        Raises:
            ValidationError: If the payload is incomplete; nothing is sent
        """
        if not isinstance(data, AccountRequestBuilder):
            data = AccountRequestBuilder(data)
        payload = data.to_dict()

        path = Account.class_url()
        result = self._client.request("POST", path, payload, options, Account)
        return self._expect(result, Account, path)

    def retrieve(self, account_id: int, options: Options = None) -> Account:
        """Get one child account."""
        path = self._path("/account/{}", account_id)
        result = self._client.request("GET", path, options=options, resource_type=Account)
        return self._expect(result, Account, path)

    def all(self, options: Options = None) -> list[Account]:
        """Get all child accounts of the Integrator account."""
        return self._client.request_collection(
            "GET", Account.class_url(), options=options, resource_type=Account
        )

    def update(self, account_id: int, data: Mapping[str, Any], options: Options = None) -> Account:
        """Patch a child account and return the account as the server now sees it."""
        if not data:
            raise ValidationError("Nothing to update")
        path = self._path("/account/{}", account_id)
        result = self._client.request("PATCH", path, dict(data), options, Account)
        return self._expect(result, Account, path)

    def delete(self, account_id: int, options: Options = None) -> bool:
        """Delete one child account.

        Returns:
            True if the server reports the account as deleted
        """
        path = self._path("/account/{}", account_id)
        result = self._client.request("DELETE", path, options=options)
        if isinstance(result, list):
            return any(str(affected) == str(account_id) for affected in result)
        return self._succeeded(result)

    def delete_many(self, account_ids: Sequence[int], options: Options = None) -> list[Any]:
        """Delete several child accounts in one call.

        Returns:
            The ids the server reports as deleted, which may be fewer than requested
        """
        if not account_ids:
            raise ValidationError("At least one account id is required")
        path = self._path("/account/{}", list(account_ids))
        result = self._client.request("DELETE", path, options=options)
        if not isinstance(result, list):
            raise DecodeError(f"Expected a list of deleted ids from {path}", path)
        return result

    # State

    def suspend(self, account_id: int, options: Options = None) -> Account:
        """Ask the server to suspend an account; check ``is_suspended()`` on the result."""
        return self.update(account_id, {"Account[state]": STATE_SUSPENDED}, options)

    def activate(self, account_id: int, options: Options = None) -> Account:
        """Ask the server to reactivate an account; check ``is_active()`` on the result."""
        return self.update(account_id, {"Account[state]": STATE_ACTIVE}, options)

    def set_state(self, state: str, options: Options = None) -> Any:
        """Set the state of the current (or impersonated) account.

        The body is the bare JSON string, e.g. ``"suspended"``.
        """
        if state not in ACCOUNT_STATES:
            raise ValidationError(
                f"Invalid account state '{state}' (expected one of: {', '.join(ACCOUNT_STATES)})"
            )
        return self._client.request("PUT", "/account/state", state, options)

    # Credits

    def add_credits(self, account_id: int, credits: int, options: Options = None) -> Account:
        """Add print credits to a child account."""
        if isinstance(credits, bool) or not isinstance(credits, int) or credits <= 0:
            raise ValidationError(f"Credits must be a positive whole number, got {credits!r}")
        return self.update(account_id, {"Account[credits]": credits}, options)

    # Statistics and export

    def stats(self, account_id: int | None = None, options: Options = None) -> dict[str, Any]:
        """Usage statistics for one child account, or for all of them."""
        if account_id is None:
            path = "/account/stats"
        else:
            path = self._path("/account/{}/stats", account_id)
        result = self._client.request("GET", path, options=options)
        if not isinstance(result, dict):
            raise DecodeError(f"Expected statistics object from {path}", path)
        return result

    def download(self, account_id: int, options: Options = None) -> Any:
        """Download all data held for a child account."""
        path = self._path("/account/{}/download", account_id)
        return self._client.request("GET", path, options=options)

    # Tags

    def tags(self, account_id: int, options: Options = None) -> dict[str, Any]:
        """Get the tags of a child account."""
        path = self._path("/account/{}/tags", account_id)
        result = self._client.request("GET", path, options=options)
        return _tag_mapping(result, path)

    def add_tags(self, account_id: int, tags: Mapping[str, Any], options: Options = None) -> dict[str, Any]:
        """Add or overwrite tags; tags not named are kept."""
        if not tags:
            raise ValidationError("At least one tag is required")
        path = self._path("/account/{}/tags", account_id)
        result = self._client.request("PATCH", path, dict(tags), options)
        return _tag_mapping(result, path)

    def delete_tag(self, account_id: int, name: str, options: Options = None) -> bool:
        """Remove one tag from a child account."""
        path = self._path("/account/{}/tag/{}", account_id, name)
        return self._succeeded(self._client.request("DELETE", path, options=options))

    # API keys

    def api_keys(self, account_id: int, options: Options = None) -> list[ApiKey]:
        """List the API keys of a child account."""
        path = self._path("/account/{}/apikeys", account_id)
        items = self._client.request_collection("GET", path, options=options)
        if not all(isinstance(item, Mapping) for item in items):
            raise DecodeError(f"Expected a list of API key objects from {path}", path)
        return [ApiKey.model_validate(item) for item in items]

    def generate_api_keys(
        self,
        account_id: int,
        descriptions: str | Sequence[str],
        options: Options = None,
    ) -> Account:
        """Generate additional API keys; existing keys are kept."""
        if isinstance(descriptions, str):
            descriptions = [descriptions]
        if not descriptions:
            raise ValidationError("At least one API key description is required")
        path = self._path("/account/{}/apikeys", account_id)
        result = self._client.request("POST", path, {"ApiKeys": list(descriptions)}, options, Account)
        return self._expect(result, Account, path)

    def create_api_key(self, account_id: int, description: str, options: Options = None) -> ApiKey:
        """Generate one API key and return it."""
        path = self._path("/account/{}/apikey", account_id)
        result = self._client.request("POST", path, {"description": description}, options)
        if not isinstance(result, Mapping):
            raise DecodeError(f"Expected an API key object from {path}", path)
        return ApiKey.model_validate(result)

    def delete_api_key(self, account_id: int, api_key: str, options: Options = None) -> bool:
        """Revoke one API key of a child account."""
        path = self._path("/account/{}/apikey/{}", account_id, api_key)
        return self._succeeded(self._client.request("DELETE", path, options=options))

    # Impersonation through the shared client

    def act_as_child_account(self, account_id: int) -> "AccountService":
        """Send every following call as the child account with this id.

        Not safe while other threads use the same client; prefer
        ``RequestOptions(child_account_by_id=...)`` per call.
        """
        self._client.set_default_header(HEADER_CHILD_BY_ID, str(account_id))
        logger.debug(f"Acting as child account {account_id}")
        return self

    def act_as_child_account_by_ref(self, creator_ref: str) -> "AccountService":
        """Like ``act_as_child_account`` but selects the child by creator reference."""
        self._client.set_default_header(HEADER_CHILD_BY_CREATOR_REF, creator_ref)
        logger.debug(f"Acting as child account with creatorRef {creator_ref}")
        return self

    def act_as_child_account_by_email(self, email: str) -> "AccountService":
        """Like ``act_as_child_account`` but selects the child by email."""
        self._client.set_default_header(HEADER_CHILD_BY_EMAIL, email)
        logger.debug("Acting as child account selected by email")
        return self

    def stop_acting_as_child_account(self) -> "AccountService":
        """Remove every impersonation default header."""
        for name in IMPERSONATION_HEADERS:
            self._client.remove_default_header(name)
        return self


def _tag_mapping(result: Any, path: str) -> dict[str, Any]:
    # The API sends [] rather than {} for an empty tag set
    if result is True or result == []:
        return {}
    if not isinstance(result, dict):
        raise DecodeError(f"Expected a tag object from {path}", path)
    return result
