"""HTTP client and request dispatcher for the PrintNode API."""

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from printnode_cli.api.exceptions import (
    AuthenticationError,
    DecodeError,
    NotFoundError,
    RateLimitError,
    RequestError,
)
from printnode_cli.api.models import ApiResource
from printnode_cli.api.options import IMPERSONATION_HEADERS, RequestOptions
from printnode_cli.api.services import AccountService, WhoamiService
from printnode_cli.api.transport import HttpxTransport, Transport, TransportResponse
from printnode_cli.config import get_settings

logger = logging.getLogger(__name__)


class PrintNodeClient:
    """Synchronous client for the PrintNode API.

    Every call is a single round trip through the transport. The client does
    not retry, cache or batch; connection-level retries belong to the
    transport.

    Default headers set with ``set_default_header`` (which is what the
    ``act_as_child_account`` helpers use) are shared by every call made
    through this instance. Do not toggle them while other threads use the
    same client; pass ``RequestOptions`` per call instead.
    """

    # Wire contract this client speaks: ``state`` strings for suspension,
    # nested {Account, ApiKeys, Tags} create payloads and
    # ``Account[field]`` keys for single-field patches.
    SCHEMA_VERSION = "2"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        transport: Transport | None = None,
        default_options: RequestOptions | Mapping | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key
        self._base_url = (base_url or settings.base_url).rstrip("/")
        self._timeout = timeout or settings.timeout
        self._connect_retries = settings.connect_retries
        self._transport: Transport | None = transport
        self._owns_transport = transport is None
        self._base_options = RequestOptions.parse(default_options)
        self._default_headers: dict[str, str] = {}
        self._accounts: AccountService | None = None
        self._whoami: WhoamiService | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def __enter__(self) -> "PrintNodeClient":
        """Enter context manager, creating the HTTP transport if needed."""
        if self._transport is None:
            # Deferred: printnode_cli.auth imports this package
            from printnode_cli.auth import resolve_api_key

            self._transport = HttpxTransport(
                resolve_api_key(self.api_key),
                timeout=self._timeout,
                connect_retries=self._connect_retries,
            )
        return self

    def __exit__(self, *args) -> None:
        """Exit context manager, closing a transport this client created."""
        if self._transport is not None and self._owns_transport:
            self._transport.close()
            self._transport = None

    def _check_transport(self) -> Transport:
        if self._transport is None:
            raise RuntimeError("Client not initialized - use 'with' context manager")
        return self._transport

    # Services

    @property
    def accounts(self) -> AccountService:
        if self._accounts is None:
            self._accounts = AccountService(self)
        return self._accounts

    @property
    def whoami(self) -> WhoamiService:
        if self._whoami is None:
            self._whoami = WhoamiService(self)
        return self._whoami

    # Default headers

    def set_default_header(self, name: str, value: str) -> "PrintNodeClient":
        self._default_headers[name] = value
        return self

    def remove_default_header(self, name: str) -> "PrintNodeClient":
        self._default_headers.pop(name, None)
        return self

    @property
    def default_headers(self) -> dict[str, str]:
        return dict(self._default_headers)

    @property
    def default_options(self) -> RequestOptions:
        """Client-wide options, including headers set at runtime."""
        return self._base_options.merge(RequestOptions(headers=self._default_headers))

    def _build_headers(
        self,
        options: RequestOptions | Mapping | None,
        headers: Mapping[str, str] | None,
    ) -> dict[str, str]:
        call_options = RequestOptions.parse(options)
        defaults = self.default_options
        merged = defaults.merge(call_options)

        result = dict(defaults.headers)
        if call_options.has_impersonation:
            # A per-call selector replaces any impersonation default
            for name in IMPERSONATION_HEADERS:
                result.pop(name, None)
        result.update(merged.impersonation_headers())
        # Explicit per-call headers win over any selector
        result.update(call_options.headers)
        if headers:
            result.update(headers)
        return result

    # Paths and bodies

    @staticmethod
    def build_path(template: str, *ids: Any) -> str:
        """Fill ``{}`` placeholders in ``template`` with escaped identifiers.

        A list or tuple fills one placeholder with its items joined by ``,``,
        e.g. ``build_path("/account/{}", [1, 2])`` gives ``/account/1,2``.
        """
        segments = []
        for value in ids:
            if isinstance(value, (list, tuple)):
                if not value:
                    raise ValueError("Cannot build a path from an empty id list")
                segments.append(",".join(quote(str(item), safe="") for item in value))
            else:
                segments.append(quote(str(value), safe=""))
        return template.format(*segments)

    @staticmethod
    def serialize_body(body: Any) -> bytes | None:
        """Encode a request body as JSON.

        Mappings and lists become JSON documents; a bare scalar is sent as a
        JSON scalar literal (``"suspended"`` with its quotes), never wrapped.
        """
        if body is None:
            return None
        return json.dumps(body, separators=(",", ":")).encode("utf-8")

    # Dispatch

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: RequestOptions | Mapping | None = None,
        resource_type: type[ApiResource] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Perform one API call and decode the response.

        Returns a resource (or list of resources for an array body) when
        ``resource_type`` is given, the decoded JSON otherwise, and ``True``
        for an empty or ``null`` body.
        """
        data = self._send(method, path, body, options, headers)
        return self._decode(data, resource_type, path)

    def request_collection(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: RequestOptions | Mapping | None = None,
        resource_type: type[ApiResource] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> list[Any]:
        """Perform one API call that must answer with a JSON array."""
        data = self._send(method, path, body, options, headers)
        if data is None:
            return []
        if not isinstance(data, list):
            raise DecodeError(
                f"Expected a JSON array from {path}, got {type(data).__name__}",
                path,
            )
        if resource_type is None:
            return data
        return [self._construct(resource_type, item, path) for item in data]

    def _send(
        self,
        method: str,
        path: str,
        body: Any,
        options: RequestOptions | Mapping | None,
        headers: Mapping[str, str] | None,
    ) -> Any:
        transport = self._check_transport()
        send_headers = self._build_headers(options, headers)
        payload = self.serialize_body(body)
        if payload is not None:
            send_headers.setdefault("Content-Type", "application/json")

        acting_as = [name for name in IMPERSONATION_HEADERS if name in send_headers]
        logger.debug(
            f"{method} {path}" + (f" acting as child via {', '.join(acting_as)}" if acting_as else "")
        )

        response = transport.send(method.upper(), f"{self._base_url}{path}", send_headers, payload)
        return self._handle_response(response, path)

    def _handle_response(self, response: TransportResponse, path: str) -> Any:
        """Handle API response, raising appropriate errors."""
        status = response.status_code
        if status < 200 or status >= 300:
            text = response.text
            logger.error(f"API error: {status} on {path}")
            if status == 401:
                raise AuthenticationError("Authentication failed (401)", 401, text, path)
            if status == 404:
                raise NotFoundError(f"Not found: {path}", 404, text, path)
            if status == 429:
                retry_after = _header(response.headers, "Retry-After") or "60"
                raise RateLimitError(
                    "Rate limit exceeded",
                    int(retry_after) if retry_after.isdigit() else 60,
                    text,
                    path,
                )
            raise RequestError(f"API request failed ({status})", status, text, path)

        if not response.body.strip():
            return None
        try:
            return json.loads(response.body)
        except ValueError as e:
            raise DecodeError(f"Response from {path} is not valid JSON: {e}", path) from e

    def _decode(self, data: Any, resource_type: type[ApiResource] | None, path: str) -> Any:
        if data is None:
            return True
        if isinstance(data, bool):
            return data
        if resource_type is None:
            return data
        if isinstance(data, list):
            return [self._construct(resource_type, item, path) for item in data]
        return self._construct(resource_type, data, path)

    @staticmethod
    def _construct(resource_type: type[ApiResource], item: Any, path: str) -> ApiResource:
        try:
            return resource_type.construct_from(item)
        except DecodeError as e:
            e.path = path
            raise


def _header(headers: Mapping[str, str], name: str) -> str | None:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None
