"""Per-request options and impersonation headers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

HEADER_CHILD_BY_ID = "X-Child-Account-By-Id"
HEADER_CHILD_BY_CREATOR_REF = "X-Child-Account-By-CreatorRef"
HEADER_CHILD_BY_EMAIL = "X-Child-Account-By-Email"

IMPERSONATION_HEADERS = (
    HEADER_CHILD_BY_ID,
    HEADER_CHILD_BY_CREATOR_REF,
    HEADER_CHILD_BY_EMAIL,
)


def _freeze(headers: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(headers or {}))


@dataclass(frozen=True)
class RequestOptions:
    """Cross-cutting parameters for a single call.

    Passing impersonation through ``RequestOptions`` on every call is the
    safe way to act for a child account when one client is shared between
    threads. The ``act_as_child_account`` helpers change a default on the
    client itself and affect every call in flight.

    Only one selector is normally meaningful. If several are set, each is
    sent as its own header and the API applies its own precedence.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    child_account_by_id: int | str | None = None
    child_account_by_creator_ref: str | None = None
    child_account_by_email: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze(self.headers))

    @classmethod
    def parse(cls, value: RequestOptions | Mapping | None) -> RequestOptions:
        """Accept an options instance, a plain dict of option keys, or None."""
        if value is None:
            return cls()
        if isinstance(value, RequestOptions):
            return value
        if isinstance(value, Mapping):
            unknown = set(value) - {
                "headers",
                "child_account_by_id",
                "child_account_by_creator_ref",
                "child_account_by_email",
            }
            if unknown:
                raise TypeError(f"Unknown request options: {', '.join(sorted(unknown))}")
            return cls(**value)
        raise TypeError(f"Cannot use {type(value).__name__} as request options")

    @property
    def has_impersonation(self) -> bool:
        return any(
            selector is not None
            for selector in (
                self.child_account_by_id,
                self.child_account_by_creator_ref,
                self.child_account_by_email,
            )
        )

    def merge(self, overrides: RequestOptions | Mapping | None) -> RequestOptions:
        """Layer ``overrides`` on top of these options.

        Headers are a shallow union where the override wins per key.
        Impersonation selectors come from the overrides when they set any,
        otherwise from these options. Neither input is changed.
        """
        overrides = RequestOptions.parse(overrides)
        headers = {**self.headers, **overrides.headers}
        source = overrides if overrides.has_impersonation else self
        return RequestOptions(
            headers=headers,
            child_account_by_id=source.child_account_by_id,
            child_account_by_creator_ref=source.child_account_by_creator_ref,
            child_account_by_email=source.child_account_by_email,
        )

    def impersonation_headers(self) -> dict[str, str]:
        headers = {}
        if self.child_account_by_id is not None:
            headers[HEADER_CHILD_BY_ID] = str(self.child_account_by_id)
        if self.child_account_by_creator_ref is not None:
            headers[HEADER_CHILD_BY_CREATOR_REF] = self.child_account_by_creator_ref
        if self.child_account_by_email is not None:
            headers[HEADER_CHILD_BY_EMAIL] = self.child_account_by_email
        return headers

    def to_headers(self) -> dict[str, str]:
        """Headers to send, explicit headers first then impersonation."""
        return {**self.headers, **self.impersonation_headers()}
