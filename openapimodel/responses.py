"""Responses of an operation, keyed by HTTP status code."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .link import Link
from .parameter import Header, MediaType
from .reference import ref_or_from_dict, ref_or_to_dict
from .util import InvalidStatusCode, StatusCode, extract_extensions


def _mapping(data: Any, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"invalid type: {data!r}, expected {owner} object")
    return data


def _sub_mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"invalid type for `{key}`: {value!r}, expected a map")
    return value


@dataclass
class Response:
    """A single response from an operation."""

    description: str = ""
    headers: dict[str, Any] = field(default_factory=dict)
    content: dict[str, MediaType] = field(default_factory=dict)
    links: dict[str, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Response:
        data = _mapping(data, "Response")
        if "description" not in data:
            raise ValueError("missing field `description`")
        description = data["description"]
        if not isinstance(description, str):
            raise ValueError(
                f"invalid type for `description`: {description!r}, expected a string"
            )
        return cls(
            description=description,
            headers={
                name: ref_or_from_dict(value, Header.from_dict)
                for name, value in _sub_mapping(data, "headers").items()
            },
            content={
                media: MediaType.from_dict(value)
                for media, value in _sub_mapping(data, "content").items()
            },
            links={
                name: ref_or_from_dict(value, Link.from_dict)
                for name, value in _sub_mapping(data, "links").items()
            },
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"description": self.description}
        if self.headers:
            out["headers"] = {name: ref_or_to_dict(v) for name, v in self.headers.items()}
        if self.content:
            out["content"] = {media: v.to_dict() for media, v in self.content.items()}
        if self.links:
            out["links"] = {name: ref_or_to_dict(v) for name, v in self.links.items()}
        out.update(self.extensions)
        return out


@dataclass
class Responses:
    """The possible responses of an operation.

    Keys that are neither ``default``, a status code, a status range nor an
    ``x-`` extension are ignored when reading.
    """

    default: Any = None
    responses: dict[StatusCode, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Responses:
        data = _mapping(data, "Responses")
        default = data.get("default")
        responses: dict[StatusCode, Any] = {}
        for key, value in data.items():
            if key == "default":
                continue
            try:
                code = StatusCode.parse(key)
            except InvalidStatusCode:
                continue
            responses[code] = ref_or_from_dict(value, Response.from_dict)
        return cls(
            default=None if default is None else ref_or_from_dict(default, Response.from_dict),
            responses=responses,
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.default is not None:
            out["default"] = ref_or_to_dict(self.default)
        for code, value in self.responses.items():
            out[str(code)] = ref_or_to_dict(value)
        out.update(self.extensions)
        return out