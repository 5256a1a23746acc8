"""An ordered map whose values are references or inline items."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from .reference import as_item, ref_or_from_dict, ref_or_to_dict


class RefMap(dict):
    """Ordered mapping of names to :class:`Reference` objects or items."""

    def get_item(self, key: str) -> Any:
        """Return the inline item under ``key``, or None if absent or a reference."""
        return as_item(self.get(key))

    def item(self, key: str) -> Any:
        """Return the inline item under ``key``, raising KeyError if there is none."""
        found = self.get_item(key)
        if found is None:
            raise KeyError(f"key not found: {key}")
        return found

    def insert(self, key: str, value: Any) -> Any:
        """Store ``value`` under ``key`` and return the value it replaced, if any."""
        previous = self.get(key)
        self[key] = value
        return previous

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None, parse: Callable[[Any], Any]) -> RefMap:
        """Build a map whose values are read with :func:`ref_or_from_dict`."""
        return cls((key, ref_or_from_dict(value, parse)) for key, value in (data or {}).items())

    def to_dict(self) -> dict[str, Any]:
        return {key: ref_or_to_dict(value) for key, value in self.items()}