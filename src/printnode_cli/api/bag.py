"""Key/value store backing every API resource."""

from collections.abc import Iterator, Mapping
from typing import Any

_MISSING = object()


class AttributeBag:
    """Ordered mapping of server-returned fields.

    Keys are kept exactly as the server sent them (case-sensitive). The
    only way to change the contents is ``refresh``, which merges a partial
    payload: keys present in the payload are overwritten, every other key
    is left alone. Nested values are replaced wholesale, never deep-merged.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values: dict[str, Any] = {}
        if values:
            self.refresh(values)

    def refresh(self, partial: Mapping[str, Any]) -> None:
        """Merge ``partial`` into the bag."""
        if not isinstance(partial, Mapping):
            raise TypeError(f"Expected a mapping, got {type(partial).__name__}")
        # Copy first so a failing iteration leaves the bag untouched
        updates = dict(partial)
        self._values.update(updates)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, including an explicit ``None``, else ``default``."""
        value = self._values.get(key, _MISSING)
        if value is _MISSING:
            return default
        return value

    def keys(self) -> list[str]:
        return list(self._values)

    def to_dict(self) -> dict[str, Any]:
        """Shallow copy of the current values."""
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeBag):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeBag({self._values!r})"
