"""Shared helpers: extension extraction, open-ended enum values and HTTP status codes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any, Callable, Mapping, TypeVar

E = TypeVar("E", bound=Enum)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_EXPECTING = "number between 100 and 999 (as string or integer) or a string that matches `\\dXX`"


class InvalidStatusCode(ValueError):
    """Raised when a value is neither a status code nor a status code range."""


def _invalid(value: Any, expected: str) -> InvalidStatusCode:
    return InvalidStatusCode(f"invalid value: {value!r}, expected {expected}")


@total_ordering
@dataclass(frozen=True)
class StatusCode:
    """An HTTP status code such as ``200`` or a range such as ``2XX``."""

    number: int
    is_range: bool = False

    @classmethod
    def parse(cls, value: Any) -> StatusCode:
        """Build a status code from an integer or a three-character string."""
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise InvalidStatusCode(f"invalid type: {value!r}, expected {_EXPECTING}")
        if isinstance(value, int):
            return cls._from_number(value)
        if len(value.encode("utf-8")) != 3:
            raise _invalid(value, "length 3")
        if _INTEGER.fullmatch(value):
            return cls._from_number(int(value))
        if not value.isascii():
            raise _invalid(value, "ascii, format `\\dXX`")
        upper = value.upper()
        if upper[0].isdigit() and upper[1:] == "XX":
            return cls(int(upper[0]), is_range=True)
        raise _invalid(value, "format `\\dXX`")

    @classmethod
    def _from_number(cls, number: int) -> StatusCode:
        if 100 <= number < 1000:
            return cls(number)
        raise _invalid(number, _EXPECTING)

    def _sort_key(self) -> tuple[bool, int]:
        return (self.is_range, self.number)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, StatusCode):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return f"{self.number}XX" if self.is_range else str(self.number)


def select_keys(data: Mapping[Any, Any], predicate: Callable[[Any], bool]) -> dict[Any, Any]:
    """Return the entries of ``data`` whose keys satisfy ``predicate``, in order."""
    return {key: value for key, value in data.items() if predicate(key)}


def extract_extensions(data: Mapping[Any, Any]) -> dict[str, Any]:
    """Return the ``x-`` prefixed specification extensions found in ``data``."""
    return select_keys(data, lambda key: isinstance(key, str) and key.startswith("x-"))


def parse_variant(value: Any, enum_type: type[E]) -> E | str | None:
    """Read a value that is a known enum member, an unknown string, or absent."""
    if value is None:
        return None
    if isinstance(value, enum_type):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a string or null, got {value!r}")
    try:
        return enum_type(value)
    except ValueError:
        return value


def variant_str(value: Enum | str | None) -> str:
    """Return the textual form of a value read by :func:`parse_variant`."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return value