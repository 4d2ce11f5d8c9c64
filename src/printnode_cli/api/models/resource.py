"""Base type for all server-returned entities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from printnode_cli.api.bag import AttributeBag
from printnode_cli.api.exceptions import DecodeError

R = TypeVar("R", bound="ApiResource")


def int_field(key: str, value: Any) -> int:
    """Read an integer field value, raising DecodeError for anything else."""
    if isinstance(value, bool):
        raise DecodeError(f"Field '{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DecodeError(f"Field '{key}' must be an integer, got {value!r}") from None


class ApiResource:
    """A typed wrapper around one JSON object returned by the API.

    Subclasses set ``OBJECT_NAME`` and ``CLASS_PATH`` and add typed
    accessors on top of the attribute bag. Fields without an accessor stay
    reachable through ``get``.
    """

    OBJECT_NAME: ClassVar[str] = ""
    CLASS_PATH: ClassVar[str] = ""

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._bag = AttributeBag()
        if values:
            self.refresh_from(values)

    @classmethod
    def class_url(cls) -> str:
        """Collection path for this resource type."""
        if not cls.CLASS_PATH:
            raise NotImplementedError(f"{cls.__name__} has no collection path")
        return cls.CLASS_PATH

    @classmethod
    def resource_url(cls, resource_id: int | str | None = None) -> str:
        """Collection path, or the path of one item when an id is given."""
        if resource_id is None:
            return cls.class_url()
        return f"{cls.class_url()}/{resource_id}"

    @classmethod
    def construct_from(cls: type[R], payload: Any) -> R:
        """Build a resource from a decoded JSON value.

        Raises:
            DecodeError: If the payload is not an object or has badly typed fields
        """
        if not isinstance(payload, Mapping):
            raise DecodeError(
                f"Expected a JSON object for {cls.OBJECT_NAME or cls.__name__}, "
                f"got {type(payload).__name__}"
            )
        cls._check_shape(payload)
        return cls(payload)

    @classmethod
    def _check_shape(cls, payload: Mapping[str, Any]) -> None:
        """Reject payloads whose known fields carry the wrong JSON type."""
        resource_id = payload.get("id")
        if resource_id is not None and (
            isinstance(resource_id, bool) or not isinstance(resource_id, int)
        ):
            raise DecodeError(f"Field 'id' must be an integer, got {resource_id!r}")

    def refresh_from(self, partial: Mapping[str, Any]) -> None:
        """Merge a partial payload from the server into this resource."""
        self._bag.refresh(self._normalize(partial))

    def _normalize(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Translate alternate wire shapes to the canonical one."""
        return dict(payload)

    def get(self, key: str, default: Any = None) -> Any:
        """Read any field, including ones without a typed accessor."""
        return self._bag.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        return self._bag.to_dict()

    @property
    def id(self) -> int | None:
        return self._bag.get("id")

    def _get_bool(self, key: str, default: bool) -> bool:
        value = self._bag.get(key)
        if value is None:
            return default
        return bool(value)

    def _get_int(self, key: str, default: int = 0) -> int:
        value = self._bag.get(key)
        if value is None or isinstance(value, bool):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _get_optional_int(self, key: str) -> int | None:
        """Integer field that may be null; a non-integer value is a decode error."""
        value = self._bag.get(key)
        if value is None:
            return None
        return int_field(key, value)

    def _get_str(self, key: str) -> str | None:
        value = self._bag.get(key)
        if value is None:
            return None
        return str(value)

    def _get_mapping(self, key: str) -> dict[str, Any]:
        value = self._bag.get(key)
        return dict(value) if isinstance(value, Mapping) else {}

    def _get_list(self, key: str) -> list[Any]:
        value = self._bag.get(key)
        return list(value) if isinstance(value, list) else []

    def __contains__(self, key: object) -> bool:
        return key in self._bag

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiResource):
            return NotImplemented
        return type(self) is type(other) and self._bag == other._bag

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
