"""Request payload builders."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic.networks import validate_email

from printnode_cli.api.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 8

# Positional placeholder the API still requires for the retired name fields
NAME_PLACEHOLDER = "-"


class AccountRequestBuilder:
    """Fluent builder for account create/update payloads.

    Setters validate their own argument and return the builder. The
    payload-level checks (email and password present) only run in
    ``validate``, which ``to_dict``/``build`` call before returning::

        payload = (
            AccountRequestBuilder()
            .email("child@example.com")
            .password("securepassword123")
            .creator_ref("customer-123")
            .add_tag("plan", "premium")
            .build()
        )

    The result is shaped ``{"Account": {...}, "ApiKeys": [...], "Tags": {...}}``.
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = {}
        if data:
            self.set_from_dict(data)

    @classmethod
    def make(cls, data: Mapping[str, Any] | None = None) -> AccountRequestBuilder:
        return cls(data)

    def _account(self) -> dict[str, Any]:
        return self._data.setdefault("Account", {})

    def firstname(self, firstname: str = NAME_PLACEHOLDER) -> AccountRequestBuilder:
        """Set the first name (no longer used by the API, defaults to "-")."""
        self._account()["firstname"] = firstname
        return self

    def lastname(self, lastname: str = NAME_PLACEHOLDER) -> AccountRequestBuilder:
        """Set the last name (no longer used by the API, defaults to "-")."""
        self._account()["lastname"] = lastname
        return self

    def email(self, email: str) -> AccountRequestBuilder:
        """Set the login email.

        Raises:
            ValidationError: If the address is not syntactically valid
        """
        if not isinstance(email, str):
            raise ValidationError(f"Invalid email address: {email!r}")
        try:
            _, address = validate_email(email)
        except ValueError:
            raise ValidationError(f"Invalid email address: {email}") from None
        # validate_email also accepts "Name <address>"; only a bare address is allowed
        if address.casefold() != email.casefold():
            raise ValidationError(f"Invalid email address: {email}")
        self._account()["email"] = email
        return self

    def password(self, password: str) -> AccountRequestBuilder:
        """Set the password.

        Raises:
            ValidationError: If shorter than 8 characters
        """
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        self._account()["password"] = password
        return self

    def creator_ref(self, creator_ref: str) -> AccountRequestBuilder:
        """Set your own unique identifier for the account."""
        self._account()["creatorRef"] = creator_ref
        return self

    def api_keys(self, api_keys: str | list[str]) -> AccountRequestBuilder:
        """Replace the API keys to generate. A single string becomes a one-item list."""
        if isinstance(api_keys, str):
            api_keys = [api_keys]
        self._data["ApiKeys"] = list(api_keys)
        return self

    def add_api_key(self, description: str) -> AccountRequestBuilder:
        """Append one API key to generate."""
        self._data.setdefault("ApiKeys", []).append(description)
        return self

    def tags(self, tags: Mapping[str, Any]) -> AccountRequestBuilder:
        """Replace all tags."""
        self._data["Tags"] = dict(tags)
        return self

    def add_tag(self, name: str, value: Any) -> AccountRequestBuilder:
        """Add or overwrite one tag, keeping the others."""
        self._data.setdefault("Tags", {})[name] = value
        return self

    def set_from_dict(self, data: Mapping[str, Any]) -> AccountRequestBuilder:
        """Fold a flat or nested (API-shaped) mapping through the setters.

        Precedence is fixed and does not depend on the key order of ``data``:
        flat keys are applied first, then the nested ``Account``, ``ApiKeys``
        and ``Tags`` keys, so the nested form always wins when both are present.
        """
        flat_setters = (
            ("email", self.email),
            ("password", self.password),
            ("firstname", self.firstname),
            ("lastname", self.lastname),
            ("creatorRef", self.creator_ref),
            ("apiKeys", self.api_keys),
            ("tags", self.tags),
        )
        for key, setter in flat_setters:
            if data.get(key) is not None:
                setter(data[key])

        account = data.get("Account")
        if isinstance(account, Mapping):
            for key, setter in flat_setters[:5]:
                if account.get(key) is not None:
                    setter(account[key])

        if data.get("ApiKeys") is not None:
            self.api_keys(data["ApiKeys"])
        if data.get("Tags") is not None:
            self.tags(data["Tags"])

        return self

    def validate(self) -> None:
        """Check required fields and fill in the name placeholders.

        Raises:
            ValidationError: If email or password is missing
        """
        account = self._data.get("Account", {})
        if "email" not in account:
            raise ValidationError("Email is required for creating an account")
        if "password" not in account:
            raise ValidationError("Password is required for creating an account")

        if "firstname" not in account:
            self.firstname()
        if "lastname" not in account:
            self.lastname()

    def to_dict(self) -> dict[str, Any]:
        """Validate and return the API payload."""
        self.validate()
        payload = dict(self._data)
        account = dict(payload["Account"])
        # Key order of the API's documented example
        ordered = {
            key: account.pop(key)
            for key in ("firstname", "lastname", "email", "password", "creatorRef")
            if key in account
        }
        ordered.update(account)
        payload["Account"] = ordered
        if "ApiKeys" in payload:
            payload["ApiKeys"] = list(payload["ApiKeys"])
        if "Tags" in payload:
            payload["Tags"] = dict(payload["Tags"])
        return payload

    build = to_dict
