"""Account-related models."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from printnode_cli.api.exceptions import DecodeError
from printnode_cli.api.models.base import PrintNodeModel
from printnode_cli.api.models.resource import ApiResource, int_field

STATE_ACTIVE = "active"
STATE_SUSPENDED = "suspended"
ACCOUNT_STATES = (STATE_ACTIVE, STATE_SUSPENDED)

_DATETIME = TypeAdapter(datetime)


class Unlimited(enum.Enum):
    """Marker for a sub-account allowance without an upper bound."""

    UNLIMITED = "unlimited"

    def __repr__(self) -> str:
        return "UNLIMITED"


UNLIMITED = Unlimited.UNLIMITED


class ApiKey(PrintNodeModel):
    """One API key attached to an account."""

    description: str | None = None
    key: str | None = None


class StatsSummary(PrintNodeModel):
    """Usage counters of an account, every counter defaulting to zero."""

    computers: int = 0
    printers: int = 0
    print_jobs: int = 0
    total_prints: int = 0
    child_accounts: int = 0
    connected_clients: int = 0


class Account(ApiResource):
    """An Integrator or child account.

    The ``state`` string is the canonical activity flag. Payloads from API
    versions that send a boolean ``suspended`` instead are translated into
    ``state`` when they are merged, so the two can never disagree.

    A child account only knows its creator through ``creatorEmail`` and
    ``creatorRef``; it never holds the parent object.
    """

    OBJECT_NAME = "Account"
    CLASS_PATH = "/account"

    @classmethod
    def _check_shape(cls, payload: Mapping[str, Any]) -> None:
        super()._check_shape(payload)
        tags = payload.get("Tags")
        if tags is not None and not isinstance(tags, (Mapping, list)):
            raise DecodeError(f"Field 'Tags' must be an object, got {type(tags).__name__}")
        api_keys = payload.get("ApiKeys")
        if api_keys is not None:
            if not isinstance(api_keys, list) or not all(
                isinstance(entry, Mapping) for entry in api_keys
            ):
                raise DecodeError("Field 'ApiKeys' must be a list of objects")
        state = payload.get("state")
        if state is not None and not isinstance(state, str):
            raise DecodeError(f"Field 'state' must be a string, got {state!r}")
        for key in ("maxSubAccounts", "credits"):
            if payload.get(key) is not None:
                int_field(key, payload[key])

    def _normalize(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        data = dict(payload)
        if "suspended" in data:
            suspended = data.pop("suspended")
            if "state" not in data and suspended is not None:
                data["state"] = STATE_SUSPENDED if suspended else STATE_ACTIVE
        return data

    # Identity and relationships

    @property
    def email(self) -> str | None:
        return self._get_str("email")

    @property
    def creator_email(self) -> str | None:
        return self._get_str("creatorEmail")

    @property
    def creator_ref(self) -> str | None:
        return self._get_str("creatorRef")

    def is_child_account(self) -> bool:
        """True when a creator email or creator reference is present."""
        return bool(self.creator_email) or bool(self.creator_ref)

    def is_integrator(self) -> bool:
        return bool(self.get("integrator"))

    # State

    @property
    def state(self) -> str:
        """Account state; an account is active unless marked otherwise."""
        return self._get_str("state") or STATE_ACTIVE

    def is_suspended(self) -> bool:
        return self.state == STATE_SUSPENDED

    def is_active(self) -> bool:
        return not self.is_suspended()

    # Sub-accounts

    def can_create_sub_accounts(self) -> bool:
        """Integrator capability flag, False when absent."""
        return self._get_bool("canCreateSubAccounts", False)

    @property
    def max_sub_accounts(self) -> int | None:
        return self._get_optional_int("maxSubAccounts")

    @property
    def child_accounts(self) -> list[Any]:
        """Child accounts when the API sends a list, empty when it sends a count."""
        return self._get_list("childAccounts")

    @property
    def child_account_count(self) -> int:
        value = self.get("childAccounts")
        if isinstance(value, list):
            return len(value)
        return self._get_int("childAccounts")

    def has_child_accounts(self) -> bool:
        return self.child_account_count > 0

    def remaining_sub_accounts(self) -> int | Unlimited:
        """How many more child accounts may be created.

        Returns 0 without the integrator capability, ``UNLIMITED`` when no
        maximum is set, and never a negative number.
        """
        if not self.can_create_sub_accounts():
            return 0
        maximum = self.max_sub_accounts
        if maximum is None:
            return UNLIMITED
        return max(0, maximum - self.child_account_count)

    # Credits and usage

    @property
    def credits(self) -> int | None:
        return self._get_optional_int("credits")

    @property
    def num_computers(self) -> int:
        return self._get_int("numComputers")

    @property
    def total_prints(self) -> int:
        return self._get_int("totalPrints")

    def get_stats_summary(self) -> dict[str, int]:
        """Fixed-shape usage summary; missing counters are reported as 0."""
        return StatsSummary(
            computers=self._get_int("numComputers"),
            printers=self._get_int("numPrinters"),
            print_jobs=self._get_int("numPrintJobs"),
            total_prints=self._get_int("totalPrints"),
            child_accounts=self.child_account_count,
            connected_clients=self._get_int("connectedClients"),
        ).model_dump()

    # Tags

    @property
    def tags(self) -> dict[str, Any]:
        # An empty tag set comes back as [] from the API
        return self._get_mapping("Tags")

    def has_tag(self, name: str) -> bool:
        return name in self.tags

    def get_tag(self, name: str, default: Any = None) -> Any:
        return self.tags.get(name, default)

    # API keys

    @property
    def api_keys(self) -> list[ApiKey]:
        return [ApiKey.model_validate(entry) for entry in self._get_list("ApiKeys")]

    def has_api_keys(self) -> bool:
        return bool(self._get_list("ApiKeys"))

    def get_api_key(self, description: str) -> ApiKey | None:
        """First key whose description matches exactly, or None."""
        for api_key in self.api_keys:
            if api_key.description == description:
                return api_key
        return None

    # Timestamps

    def created_at(self) -> datetime | None:
        raw = self.get("createTimestamp")
        if not raw:
            return None
        try:
            return _DATETIME.validate_python(raw)
        except PydanticValidationError:
            return None

