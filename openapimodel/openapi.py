"""The root document object, merging of documents, and reading and writing."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, TypeVar

import yaml

from .components import Components
from .info import ExternalDocumentation, Info, SecurityRequirement, Server, Tag
from .operation import Operation, parse_security
from .paths import METHODS, PathItem, Paths
from .reference import as_item
from .refmap import RefMap
from .util import extract_extensions

T = TypeVar("T")

DEFAULT_VERSION = "3.0.3"

_PATH_ITEM_REFS = (
    "PathItem references are not yet supported. "
    "Please open an issue if you need this feature."
)
_PARAMETER_REFS = (
    "Parameter references are not yet supported. "
    "Please open an issue if you need this feature."
)


class MergeError(Exception):
    """Raised when two documents cannot be merged."""


def _bad(key: str, value: Any, expected: str) -> ValueError:
    return ValueError(f"invalid type for `{key}`: {value!r}, expected {expected}")


def _required(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _list(data: Mapping[str, Any], key: str) -> list[Any]:
    if key not in data:
        return []
    value = data[key]
    if not isinstance(value, list):
        raise _bad(key, value, "a list")
    return value


def _merge_map(original: dict[Any, Any], other: Mapping[Any, Any]) -> None:
    """Add the entries of ``other`` whose keys ``original`` does not have."""
    for key, value in other.items():
        original.setdefault(key, value)


def _merge_list(original: list[T], other: list[T], same: Callable[[T, T], bool]) -> None:
    """Append the items of ``other`` that match no item already in ``original``."""
    original.extend([item for item in other if not any(same(item, o) for o in original)])


def _same_requirement(a: SecurityRequirement, b: SecurityRequirement) -> bool:
    return len(a) == len(b) and all(name in b for name in a)


@dataclass
class OpenAPI:
    """An OpenAPI 3.0 document."""

    openapi: str = DEFAULT_VERSION
    info: Info = field(default_factory=lambda: Info(title="", version=""))
    servers: list[Server] = field(default_factory=list)
    paths: Paths = field(default_factory=Paths)
    components: Components = field(default_factory=Components)
    security: list[SecurityRequirement] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    external_docs: ExternalDocumentation | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    # Shortcuts to the reusable objects held in ``components``.

    @property
    def schemas(self) -> RefMap:
        return self.components.schemas

    @property
    def responses(self) -> RefMap:
        return self.components.responses

    @property
    def parameters(self) -> RefMap:
        return self.components.parameters

    @property
    def examples(self) -> RefMap:
        return self.components.examples

    @property
    def request_bodies(self) -> RefMap:
        return self.components.request_bodies

    @property
    def headers(self) -> RefMap:
        return self.components.headers

    @property
    def security_schemes(self) -> RefMap:
        return self.components.security_schemes

    @property
    def links(self) -> RefMap:
        return self.components.links

    @property
    def callbacks(self) -> RefMap:
        return self.components.callbacks

    def operations(self) -> Iterator[tuple[str, str, Operation, PathItem]]:
        """Yield ``(path, method, operation, path_item)`` for every operation.

        Path items given as references are skipped.
        """
        for path, value in self.paths.paths.items():
            item = as_item(value)
            if item is None:
                continue
            for method, operation in item.operations():
                yield path, method, operation, item

    def get_operation(self, operation_id: str) -> tuple[Operation, PathItem] | None:
        """Return the operation with ``operation_id`` and its path item, if any."""
        return next(
            (
                (operation, item)
                for _, _, operation, item in self.operations()
                if operation.operation_id == operation_id
            ),
            None,
        )

    def merge(self, other: OpenAPI) -> OpenAPI:
        """Return a document holding everything of both, keeping ``self`` on conflict."""
        merged = copy.deepcopy(self)
        other = copy.deepcopy(other)

        _merge_map(merged.info.extensions, other.info.extensions)
        _merge_list(merged.servers, other.servers, lambda a, b: a.url == b.url)

        for path, value in other.paths.paths.items():
            item = as_item(value)
            if item is None:
                raise MergeError(_PATH_ITEM_REFS)
            if path not in merged.paths.paths:
                merged.paths.paths[path] = item
                continue
            own = as_item(merged.paths.paths[path])
            if own is None:
                raise MergeError(_PATH_ITEM_REFS)
            for method in METHODS:
                if getattr(own, method) is None:
                    setattr(own, method, getattr(item, method))
            _merge_list(own.servers, item.servers, lambda a, b: a.url == b.url)
            _merge_map(own.extensions, item.extensions)
            if len(own.parameters) != len(item.parameters):
                raise MergeError(f"PathItem {path} parameters do not have the same length")
            for mine, theirs in zip(own.parameters, item.parameters):
                a, b = as_item(mine), as_item(theirs)
                if a is None or b is None:
                    raise MergeError(_PARAMETER_REFS)
                if a.name != b.name:
                    raise MergeError(
                        f"PathItem {path} parameter {a.name} does not have the same name as {b.name}"
                    )

        mine_c, theirs_c = merged.components, other.components
        _merge_map(mine_c.extensions, theirs_c.extensions)
        for name in (
            "schemas",
            "responses",
            "parameters",
            "examples",
            "request_bodies",
            "headers",
            "security_schemes",
            "links",
            "callbacks",
        ):
            _merge_map(getattr(mine_c, name), getattr(theirs_c, name))

        _merge_list(merged.security, other.security, _same_requirement)
        _merge_list(merged.tags, other.tags, lambda a, b: a.name == b.name)

        if merged.external_docs is None:
            merged.external_docs = other.external_docs
        elif other.external_docs is not None:
            _merge_map(merged.external_docs.extensions, other.external_docs.extensions)

        _merge_map(merged.extensions, other.extensions)
        return merged

    def merge_overwrite(self, other: OpenAPI) -> OpenAPI:
        """Return a document holding everything of both, keeping ``other`` on conflict."""
        return other.merge(self)

    @classmethod
    def from_dict(cls, data: Any) -> OpenAPI:
        if not isinstance(data, Mapping):
            raise ValueError(f"invalid type: {data!r}, expected OpenAPI object")
        version = _required(data, "openapi")
        if not isinstance(version, str):
            raise _bad("openapi", version, "a string")
        components = data.get("components")
        docs = data.get("externalDocs")
        return cls(
            openapi=version,
            info=Info.from_dict(_required(data, "info")),
            servers=[Server.from_dict(item) for item in _list(data, "servers")],
            paths=Paths.from_dict(_required(data, "paths")),
            components=Components() if components is None else Components.from_dict(components),
            security=parse_security(data) or [],
            tags=[Tag.from_dict(item) for item in _list(data, "tags")],
            external_docs=None if docs is None else ExternalDocumentation.from_dict(docs),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"openapi": self.openapi, "info": self.info.to_dict()}
        if self.servers:
            out["servers"] = [server.to_dict() for server in self.servers]
        out["paths"] = self.paths.to_dict()
        if not self.components.is_empty():
            out["components"] = self.components.to_dict()
        if self.security:
            out["security"] = [
                {name: list(scopes) for name, scopes in req.items()} for req in self.security
            ]
        if self.tags:
            out["tags"] = [tag.to_dict() for tag in self.tags]
        if self.external_docs is not None:
            out["externalDocs"] = self.external_docs.to_dict()
        out.update(self.extensions)
        return out

    @classmethod
    def from_yaml(cls, text: str) -> OpenAPI:
        return cls.from_dict(yaml.safe_load(text))

    @classmethod
    def from_json(cls, text: str) -> OpenAPI:
        return cls.from_dict(json.loads(text))

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)