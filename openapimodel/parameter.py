"""Parameters, headers, media types, encodings and request bodies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from .info import Example
from .reference import ref_or_from_dict, ref_or_to_dict
from .schema import Schema
from .util import extract_extensions


class PathStyle(Enum):
    MATRIX = "matrix"
    LABEL = "label"
    SIMPLE = "simple"


class QueryStyle(Enum):
    FORM = "form"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"


class CookieStyle(Enum):
    FORM = "form"


class HeaderStyle(Enum):
    SIMPLE = "simple"


def _mapping(data: Any, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"invalid type: {data!r}, expected {owner} object")
    return data


def _bad(key: str, value: Any, expected: str) -> ValueError:
    return ValueError(f"invalid type for `{key}`: {value!r}, expected {expected}")


def _required_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise _bad(key, value, "a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise _bad(key, value, "a string")
    return value


def _optional_bool(data: Mapping[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise _bad(key, value, "a boolean")
    return value


def _flag(data: Mapping[str, Any], key: str) -> bool:
    if key not in data:
        return False
    value = data[key]
    if not isinstance(value, bool):
        raise _bad(key, value, "a boolean")
    return value


def _style(data: Mapping[str, Any], enum_type: type[Enum], default: Enum | None) -> Any:
    value = data.get("style")
    if value is None:
        return default
    try:
        return enum_type(value)
    except ValueError:
        raise ValueError(f"unknown variant for `style`: {value!r}") from None


def _sub_mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise _bad(key, value, "a map")
    return value


def _examples(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        name: ref_or_from_dict(value, Example.from_dict)
        for name, value in _sub_mapping(data, "examples").items()
    }


def _content(data: Mapping[str, Any], key: str = "content") -> dict[str, MediaType]:
    return {
        media: MediaType.from_dict(value) for media, value in _sub_mapping(data, key).items()
    }


def _headers(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        name: ref_or_from_dict(value, Header.from_dict)
        for name, value in _sub_mapping(data, "headers").items()
    }


def _refs_to_dict(values: Mapping[str, Any]) -> dict[str, Any]:
    return {name: ref_or_to_dict(value) for name, value in values.items()}


def _format_from_dict(data: Mapping[str, Any]) -> Any:
    for key in data:
        if key == "schema":
            return ref_or_from_dict(data[key], Schema.from_dict)
        if key == "content":
            return _content(data)
    raise ValueError("no variant of enum ParameterSchemaOrContent found in flattened data")


def _format_to_dict(fmt: Any, out: dict[str, Any]) -> None:
    if isinstance(fmt, Mapping):
        out["content"] = {media: value.to_dict() for media, value in fmt.items()}
    else:
        out["schema"] = ref_or_to_dict(fmt)


Content = dict  # media type name -> MediaType


@dataclass
class Encoding:
    """How a single schema property is encoded in a request body."""

    content_type: str | None = None
    headers: dict[str, Any] = field(default_factory=dict)
    style: QueryStyle | None = None
    explode: bool = False
    allow_reserved: bool = False
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Encoding:
        data = _mapping(data, "Encoding")
        return cls(
            content_type=_optional_str(data, "contentType"),
            headers=_headers(data),
            style=_style(data, QueryStyle, None),
            explode=_flag(data, "explode"),
            allow_reserved=_flag(data, "allowReserved"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        # The content type is always written, as null when absent.
        out: dict[str, Any] = {"contentType": self.content_type}
        if self.headers:
            out["headers"] = _refs_to_dict(self.headers)
        if self.style is not None:
            out["style"] = self.style.value
        if self.explode:
            out["explode"] = True
        if self.allow_reserved:
            out["allowReserved"] = True
        out.update(self.extensions)
        return out


@dataclass
class MediaType:
    """A schema and examples for one media type."""

    schema: Any = None
    example: Any = None
    examples: dict[str, Any] = field(default_factory=dict)
    encoding: dict[str, Encoding] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> MediaType:
        data = _mapping(data, "MediaType")
        schema = data.get("schema")
        return cls(
            schema=None if schema is None else ref_or_from_dict(schema, Schema.from_dict),
            example=data.get("example"),
            examples=_examples(data),
            encoding={
                name: Encoding.from_dict(value)
                for name, value in _sub_mapping(data, "encoding").items()
            },
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.schema is not None:
            out["schema"] = ref_or_to_dict(self.schema)
        if self.example is not None:
            out["example"] = self.example
        if self.examples:
            out["examples"] = _refs_to_dict(self.examples)
        if self.encoding:
            out["encoding"] = {name: enc.to_dict() for name, enc in self.encoding.items()}
        out.update(self.extensions)
        return out


@dataclass
class Header:
    """A header definition: a parameter without name and location."""

    format: Any
    description: str | None = None
    style: HeaderStyle = HeaderStyle.SIMPLE
    required: bool = False
    deprecated: bool | None = None
    example: Any = None
    examples: dict[str, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Header:
        data = _mapping(data, "Header")
        return cls(
            format=_format_from_dict(data),
            description=_optional_str(data, "description"),
            style=_style(data, HeaderStyle, HeaderStyle.SIMPLE),
            required=_flag(data, "required"),
            deprecated=_optional_bool(data, "deprecated"),
            example=data.get("example"),
            examples=_examples(data),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.description is not None:
            out["description"] = self.description
        out["style"] = self.style.value
        if self.required:
            out["required"] = True
        if self.deprecated is not None:
            out["deprecated"] = self.deprecated
        _format_to_dict(self.format, out)
        if self.example is not None:
            out["example"] = self.example
        if self.examples:
            out["examples"] = _refs_to_dict(self.examples)
        out.update(self.extensions)
        return out


@dataclass
class RequestBody:
    """The body of a request, keyed by media type."""

    description: str | None = None
    content: dict[str, MediaType] = field(default_factory=dict)
    required: bool = False
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> RequestBody:
        data = _mapping(data, "RequestBody")
        return cls(
            description=_optional_str(data, "description"),
            content=_content(data),
            required=_flag(data, "required"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.description is not None:
            out["description"] = self.description
        if self.content:
            out["content"] = {media: value.to_dict() for media, value in self.content.items()}
        if self.required:
            out["required"] = True
        out.update(self.extensions)
        return out


@dataclass
class ParameterData:
    """The location-independent part of a parameter.

    ``format`` is either a schema (or reference to one) or a content map of
    media type names to :class:`MediaType`.
    """

    name: str
    format: Any
    description: str | None = None
    required: bool = False
    deprecated: bool | None = None
    example: Any = None
    examples: dict[str, Any] = field(default_factory=dict)
    explode: bool | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def get_schema(self) -> Any:
        """Return the parameter schema, or None when it is described by content."""
        return None if isinstance(self.format, Mapping) else self.format

    @classmethod
    def from_dict(cls, data: Any) -> ParameterData:
        data = _mapping(data, "Parameter")
        return cls(
            name=_required_str(data, "name"),
            format=_format_from_dict(data),
            description=_optional_str(data, "description"),
            required=_flag(data, "required"),
            deprecated=_optional_bool(data, "deprecated"),
            example=data.get("example"),
            examples=_examples(data),
            explode=_optional_bool(data, "explode"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            out["description"] = self.description
        if self.required:
            out["required"] = True
        if self.deprecated is not None:
            out["deprecated"] = self.deprecated
        _format_to_dict(self.format, out)
        if self.example is not None:
            out["example"] = self.example
        if self.examples:
            out["examples"] = _refs_to_dict(self.examples)
        if self.explode is not None:
            out["explode"] = self.explode
        out.update(self.extensions)
        return out


@dataclass
class QueryKind:
    allow_reserved: bool = False
    style: QueryStyle = QueryStyle.FORM
    allow_empty_value: bool | None = None


@dataclass
class HeaderKind:
    style: HeaderStyle = HeaderStyle.SIMPLE


@dataclass
class PathKind:
    style: PathStyle = PathStyle.SIMPLE


@dataclass
class CookieKind:
    style: CookieStyle = CookieStyle.FORM


ParameterKind = Union[QueryKind, HeaderKind, PathKind, CookieKind]


def _kind_from_dict(data: Mapping[str, Any]) -> ParameterKind:
    if "in" not in data:
        raise ValueError("missing field `in`")
    location = data["in"]
    if location == "query":
        return QueryKind(
            allow_reserved=_flag(data, "allowReserved"),
            style=_style(data, QueryStyle, QueryStyle.FORM),
            allow_empty_value=_optional_bool(data, "allowEmptyValue"),
        )
    if location == "header":
        return HeaderKind(_style(data, HeaderStyle, HeaderStyle.SIMPLE))
    if location == "path":
        return PathKind(_style(data, PathStyle, PathStyle.SIMPLE))
    if location == "cookie":
        return CookieKind(_style(data, CookieStyle, CookieStyle.FORM))
    raise ValueError(f"unknown variant `{location}`, expected one of query, header, path, cookie")


def _kind_to_dict(kind: ParameterKind) -> dict[str, Any]:
    if isinstance(kind, QueryKind):
        out: dict[str, Any] = {"in": "query"}
        if kind.allow_reserved:
            out["allowReserved"] = True
        out["style"] = kind.style.value
        if kind.allow_empty_value is not None:
            out["allowEmptyValue"] = kind.allow_empty_value
        return out
    locations = {HeaderKind: "header", PathKind: "path", CookieKind: "cookie"}
    location = locations.get(type(kind))
    if location is None:
        raise TypeError(f"not a parameter kind: {kind!r}")
    return {"in": location, "style": kind.style.value}


@dataclass
class Parameter:
    """A single operation parameter: shared data plus its location."""

    data: ParameterData
    kind: ParameterKind

    @property
    def name(self) -> str:
        return self.data.name

    def get_schema(self) -> Any:
        return self.data.get_schema()

    @classmethod
    def query(cls, name: str, schema: Any) -> Parameter:
        """Create a query parameter with the form style."""
        return cls(ParameterData(name, schema), QueryKind())

    @classmethod
    def path(cls, name: str, schema: Any) -> Parameter:
        """Create a path parameter with the simple style."""
        return cls(ParameterData(name, schema), PathKind())

    @classmethod
    def from_dict(cls, data: Any) -> Parameter:
        parameter_data = ParameterData.from_dict(data)
        return cls(parameter_data, _kind_from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        out = self.data.to_dict()
        out.update(_kind_to_dict(self.kind))
        return out