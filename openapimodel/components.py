"""Reusable objects referenced from elsewhere in the document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .info import Example
from .link import Link
from .parameter import Header, Parameter, RequestBody
from .paths import callback_from_dict, callback_to_dict
from .reference import as_item, ref_or_to_dict
from .refmap import RefMap
from .responses import Response
from .schema import Schema
from .util import extract_extensions


def _raw(value: Any) -> Any:
    if not isinstance(value, Mapping):
        raise ValueError(f"invalid type: {value!r}, expected SecurityScheme object")
    return dict(value)


def _sub_map(data: Mapping[str, Any], key: str, parse: Callable[[Any], Any]) -> RefMap:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"invalid type for `{key}`: {value!r}, expected a map")
    return RefMap.from_dict(value, parse)


def _map_to_dict(values: Mapping[str, Any], write: Callable[[Any], Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, value in values.items():
        item = as_item(value)
        out[name] = ref_or_to_dict(value) if item is None else write(item)
    return out


@dataclass
class Components:
    """Reusable schemas, responses, parameters and other objects.

    Security schemes are kept as plain mappings.
    """

    security_schemes: RefMap = field(default_factory=RefMap)
    responses: RefMap = field(default_factory=RefMap)
    parameters: RefMap = field(default_factory=RefMap)
    examples: RefMap = field(default_factory=RefMap)
    request_bodies: RefMap = field(default_factory=RefMap)
    headers: RefMap = field(default_factory=RefMap)
    schemas: RefMap = field(default_factory=RefMap)
    links: RefMap = field(default_factory=RefMap)
    callbacks: RefMap = field(default_factory=RefMap)
    extensions: dict[str, Any] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not any(
            (
                self.security_schemes,
                self.responses,
                self.parameters,
                self.examples,
                self.request_bodies,
                self.headers,
                self.schemas,
                self.links,
                self.callbacks,
                self.extensions,
            )
        )

    @classmethod
    def from_dict(cls, data: Any) -> Components:
        if not isinstance(data, Mapping):
            raise ValueError(f"invalid type: {data!r}, expected Components object")
        return cls(
            security_schemes=_sub_map(data, "securitySchemes", _raw),
            responses=_sub_map(data, "responses", Response.from_dict),
            parameters=_sub_map(data, "parameters", Parameter.from_dict),
            examples=_sub_map(data, "examples", Example.from_dict),
            request_bodies=_sub_map(data, "requestBodies", RequestBody.from_dict),
            headers=_sub_map(data, "headers", Header.from_dict),
            schemas=_sub_map(data, "schemas", Schema.from_dict),
            links=_sub_map(data, "links", Link.from_dict),
            callbacks=_sub_map(data, "callbacks", callback_from_dict),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.security_schemes:
            out["securitySchemes"] = _map_to_dict(self.security_schemes, dict)
        for key, values in (
            ("responses", self.responses),
            ("parameters", self.parameters),
            ("examples", self.examples),
            ("requestBodies", self.request_bodies),
            ("headers", self.headers),
            ("schemas", self.schemas),
            ("links", self.links),
        ):
            if values:
                out[key] = _map_to_dict(values, lambda item: item.to_dict())
        if self.callbacks:
            out["callbacks"] = _map_to_dict(self.callbacks, callback_to_dict)
        out.update(self.extensions)
        return out