"""HTTP transport used by the PrintNode client."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from printnode_cli.api.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """Raw HTTP response as seen by the client."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(Protocol):
    """Anything that can perform one HTTP exchange."""

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        ...

    def close(self) -> None:
        ...


class HttpxTransport:
    """httpx-backed transport with Basic auth and reconnect retries.

    The API key is sent as the Basic auth username with an empty password.
    Connection failures and timeouts are retried with exponential back-off;
    HTTP error statuses are returned untouched.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 30,
        connect_retries: int = 3,
        user_agent: str = "PrintNode-CLI/0.1.0",
    ):
        self._client = httpx.Client(
            auth=httpx.BasicAuth(api_key, ""),
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent,
            },
            timeout=timeout,
        )
        self._send_with_retry = retry(
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
            stop=stop_after_attempt(connect_retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )(self._send_once)

    def _send_once(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
    ) -> httpx.Response:
        return self._client.request(method, url, headers=headers, content=body)

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        try:
            response = self._send_with_retry(method, url, headers, body)
        except httpx.HTTPError as e:
            logger.error(f"Transport failure for {method} {url}: {e}")
            raise TransportError(f"Could not reach PrintNode: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    def close(self) -> None:
        self._client.close()
