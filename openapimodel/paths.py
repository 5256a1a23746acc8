"""Path items, the paths map and callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from .info import Server
from .operation import Operation
from .parameter import Parameter
from .reference import as_item, ref_or_from_dict, ref_or_to_dict
from .util import extract_extensions, select_keys

METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

Callback = dict
"""A map of runtime expressions to the :class:`PathItem` each one calls back."""


def _bad(key: str, value: Any, expected: str) -> ValueError:
    return ValueError(f"invalid type for `{key}`: {value!r}, expected {expected}")


def _mapping(data: Any, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"invalid type: {data!r}, expected {owner} object")
    return data


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise _bad(key, value, "a string")
    return value


def _list(data: Mapping[str, Any], key: str) -> list[Any]:
    if key not in data:
        return []
    value = data[key]
    if not isinstance(value, list):
        raise _bad(key, value, "a list")
    return value


@dataclass
class PathItem:
    """The operations available on a single path."""

    summary: str | None = None
    description: str | None = None
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None
    servers: list[Server] = field(default_factory=list)
    parameters: list[Any] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)

    def operations(self) -> Iterator[tuple[str, Operation]]:
        """Yield ``(method, operation)`` for each operation present, in method order."""
        for method in METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation

    def __iter__(self) -> Iterator[tuple[str, Operation]]:
        return self.operations()

    @classmethod
    def for_get(cls, operation: Operation) -> PathItem:
        return cls(get=operation)

    @classmethod
    def for_post(cls, operation: Operation) -> PathItem:
        return cls(post=operation)

    @classmethod
    def from_dict(cls, data: Any) -> PathItem:
        data = _mapping(data, "PathItem")
        operations = {
            method: Operation.from_dict(data[method])
            for method in METHODS
            if data.get(method) is not None
        }
        return cls(
            summary=_optional_str(data, "summary"),
            description=_optional_str(data, "description"),
            servers=[Server.from_dict(item) for item in _list(data, "servers")],
            parameters=[
                ref_or_from_dict(item, Parameter.from_dict) for item in _list(data, "parameters")
            ],
            extensions=extract_extensions(data),
            **operations,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.summary is not None:
            out["summary"] = self.summary
        if self.description is not None:
            out["description"] = self.description
        for method, operation in self.operations():
            out[method] = operation.to_dict()
        if self.servers:
            out["servers"] = [server.to_dict() for server in self.servers]
        if self.parameters:
            out["parameters"] = [ref_or_to_dict(item) for item in self.parameters]
        out.update(self.extensions)
        return out


@dataclass
class Paths:
    """Relative endpoint paths mapped to path items or references to them."""

    paths: dict[str, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.paths[key]

    def __contains__(self, key: object) -> bool:
        return key in self.paths

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def insert(self, key: str, path_item: PathItem) -> Any:
        """Store ``path_item`` under ``key`` and return what it replaced, if anything."""
        previous = self.paths.get(key)
        self.paths[key] = path_item
        return previous

    def insert_operation(self, path: str, method: str, operation: Operation) -> Operation | None:
        """Set the operation for ``method`` on ``path``; return the one it replaced."""
        item = as_item(self.paths.setdefault(path, PathItem()))
        if item is None:
            raise ValueError("Currently don't support references for PathItem")
        name = method.lower()
        if name not in METHODS:
            raise ValueError(f"Unsupported method: {method}")
        previous = getattr(item, name)
        setattr(item, name, operation)
        return previous

    @classmethod
    def from_dict(cls, data: Any) -> Paths:
        data = _mapping(data, "Paths")
        selected = select_keys(data, lambda key: isinstance(key, str) and key.startswith("/"))
        return cls(
            paths={
                path: ref_or_from_dict(value, PathItem.from_dict)
                for path, value in selected.items()
            },
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out = {path: ref_or_to_dict(value) for path, value in self.paths.items()}
        out.update(self.extensions)
        return out


def callback_from_dict(data: Any) -> dict[str, PathItem]:
    """Read a callback: runtime expressions mapped to path items."""
    data = _mapping(data, "Callback")
    return {expression: PathItem.from_dict(value) for expression, value in data.items()}


def callback_to_dict(callback: Mapping[str, PathItem]) -> dict[str, Any]:
    return {expression: item.to_dict() for expression, item in callback.items()}