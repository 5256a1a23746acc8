"""Schema objects: typed schemas, compositions and the catch-all form."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Mapping, Union

from .info import Discriminator, ExternalDocumentation
from .reference import Reference, ref_or_from_dict, ref_or_to_dict, resolve_schema
from .refmap import RefMap
from .util import extract_extensions, parse_variant, variant_str


class StringFormat(Enum):
    DATE = "date"
    DATE_TIME = "date-time"
    PASSWORD = "password"
    BYTE = "byte"
    BINARY = "binary"


class NumberFormat(Enum):
    FLOAT = "float"
    DOUBLE = "double"


class IntegerFormat(Enum):
    INT32 = "int32"
    INT64 = "int64"


def format_str(value: StringFormat | str | None) -> str:
    """Return the textual form of a string format; empty when there is none."""
    return variant_str(value)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_usize(value: Any) -> bool:
    return _is_int(value) and value >= 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _bad(key: str, value: Any, expected: str) -> ValueError:
    return ValueError(f"invalid type for `{key}`: {value!r}, expected {expected}")


def _flag(data: Mapping[str, Any], key: str) -> bool:
    if key not in data:
        return False
    value = data[key]
    if not _is_bool(value):
        raise _bad(key, value, "a boolean")
    return value


def _optional(
    data: Mapping[str, Any], key: str, check: Callable[[Any], bool], expected: str
) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if not check(value):
        raise _bad(key, value, expected)
    return value


def _optional_float(data: Mapping[str, Any], key: str) -> float | None:
    value = _optional(data, key, _is_number, "a number")
    return None if value is None else float(value)


def _list(
    data: Mapping[str, Any], key: str, check: Callable[[Any], bool], expected: str
) -> list[Any]:
    if key not in data:
        return []
    value = data[key]
    if not isinstance(value, list) or not all(check(item) for item in value):
        raise _bad(key, value, expected)
    return list(value)


def _format(data: Mapping[str, Any], enum_type: type[Enum]) -> Any:
    if "format" not in data:
        return None
    return parse_variant(data["format"], enum_type)


def _schema_or_ref(value: Any) -> Any:
    return ref_or_from_dict(value, Schema.from_dict)


def _schema_list(data: Mapping[str, Any], key: str, required: bool) -> list[Any]:
    if key not in data:
        if required:
            raise ValueError(f"missing field `{key}`")
        return []
    value = data[key]
    if not isinstance(value, list):
        raise _bad(key, value, "a list of schemas")
    return [_schema_or_ref(item) for item in value]


def _optional_schema(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    return None if value is None else _schema_or_ref(value)


def _properties(data: Mapping[str, Any]) -> RefMap:
    if "properties" not in data:
        return RefMap()
    value = data["properties"]
    if not isinstance(value, Mapping):
        raise _bad("properties", value, "a map of schemas")
    return RefMap.from_dict(value, Schema.from_dict)


def _additional_properties(data: Mapping[str, Any]) -> Any:
    value = data.get("additionalProperties")
    if value is None or _is_bool(value):
        return value
    return _schema_or_ref(value)


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        out[key] = value


@dataclass
class SchemaData:
    """Properties shared by every kind of schema."""

    nullable: bool = False
    read_only: bool = False
    write_only: bool = False
    deprecated: bool = False
    external_docs: ExternalDocumentation | None = None
    example: Any = None
    title: str | None = None
    description: str | None = None
    discriminator: Discriminator | None = None
    default: Any = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> SchemaData:
        if not isinstance(data, Mapping):
            raise ValueError(f"invalid type: {data!r}, expected Schema object")
        docs = data.get("externalDocs")
        discriminator = data.get("discriminator")
        return cls(
            nullable=_flag(data, "nullable"),
            read_only=_flag(data, "readOnly"),
            write_only=_flag(data, "writeOnly"),
            deprecated=_flag(data, "deprecated"),
            external_docs=ExternalDocumentation.from_dict(docs) if docs is not None else None,
            example=data.get("example"),
            title=_optional(data, "title", _is_str, "a string"),
            description=_optional(data, "description", _is_str, "a string"),
            discriminator=(
                Discriminator.from_dict(discriminator) if discriminator is not None else None
            ),
            default=data.get("default"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, flag in (
            ("nullable", self.nullable),
            ("readOnly", self.read_only),
            ("writeOnly", self.write_only),
            ("deprecated", self.deprecated),
        ):
            if flag:
                out[key] = True
        if self.external_docs is not None:
            out["externalDocs"] = self.external_docs.to_dict()
        _put(out, "example", self.example)
        _put(out, "title", self.title)
        _put(out, "description", self.description)
        if self.discriminator is not None:
            out["discriminator"] = self.discriminator.to_dict()
        _put(out, "default", self.default)
        out.update(self.extensions)
        return out


@dataclass
class StringType:
    format: StringFormat | str | None = None
    pattern: str | None = None
    enumeration: list[str] = field(default_factory=list)
    min_length: int | None = None
    max_length: int | None = None


@dataclass
class NumberType:
    format: NumberFormat | str | None = None
    multiple_of: float | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    minimum: float | None = None
    maximum: float | None = None
    enumeration: list[float | None] = field(default_factory=list)


@dataclass
class IntegerType:
    format: IntegerFormat | str | None = None
    multiple_of: int | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    minimum: int | None = None
    maximum: int | None = None
    enumeration: list[int | None] = field(default_factory=list)


@dataclass
class ObjectType:
    properties: RefMap = field(default_factory=RefMap)
    required: list[str] = field(default_factory=list)
    additional_properties: Any = None
    min_properties: int | None = None
    max_properties: int | None = None


@dataclass
class ArrayType:
    items: Any = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False


@dataclass
class BooleanType:
    """The boolean type; it carries no further constraints."""


@dataclass
class OneOf:
    one_of: list[Any] = field(default_factory=list)


@dataclass
class AllOf:
    all_of: list[Any] = field(default_factory=list)


@dataclass
class AnyOf:
    any_of: list[Any] = field(default_factory=list)


@dataclass
class Not:
    not_: Any = None


@dataclass
class AnySchema:
    """Catch-all for any combination of properties not matching a specific kind."""

    typ: str | None = None
    pattern: str | None = None
    multiple_of: float | None = None
    exclusive_minimum: bool | None = None
    exclusive_maximum: bool | None = None
    minimum: float | None = None
    maximum: float | None = None
    properties: RefMap = field(default_factory=RefMap)
    required: list[str] = field(default_factory=list)
    additional_properties: Any = None
    min_properties: int | None = None
    max_properties: int | None = None
    items: Any = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool | None = None
    enumeration: list[Any] = field(default_factory=list)
    format: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    one_of: list[Any] = field(default_factory=list)
    all_of: list[Any] = field(default_factory=list)
    any_of: list[Any] = field(default_factory=list)
    not_: Any = None


SchemaKind = Union[
    StringType, NumberType, IntegerType, ObjectType, ArrayType, BooleanType,
    OneOf, AllOf, AnyOf, Not, AnySchema,
]


def _parse_string(data: Mapping[str, Any]) -> StringType:
    return StringType(
        format=_format(data, StringFormat),
        pattern=_optional(data, "pattern", _is_str, "a string"),
        enumeration=_list(data, "enum", _is_str, "a list of strings"),
        min_length=_optional(data, "minLength", _is_usize, "a non-negative integer"),
        max_length=_optional(data, "maxLength", _is_usize, "a non-negative integer"),
    )


def _parse_number(data: Mapping[str, Any]) -> NumberType:
    enumeration = _list(
        data, "enum", lambda v: v is None or _is_number(v), "a list of numbers or nulls"
    )
    return NumberType(
        format=_format(data, NumberFormat),
        multiple_of=_optional_float(data, "multipleOf"),
        exclusive_minimum=_flag(data, "exclusiveMinimum"),
        exclusive_maximum=_flag(data, "exclusiveMaximum"),
        minimum=_optional_float(data, "minimum"),
        maximum=_optional_float(data, "maximum"),
        enumeration=[None if v is None else float(v) for v in enumeration],
    )


def _parse_integer(data: Mapping[str, Any]) -> IntegerType:
    return IntegerType(
        format=_format(data, IntegerFormat),
        multiple_of=_optional(data, "multipleOf", _is_int, "an integer"),
        exclusive_minimum=_flag(data, "exclusiveMinimum"),
        exclusive_maximum=_flag(data, "exclusiveMaximum"),
        minimum=_optional(data, "minimum", _is_int, "an integer"),
        maximum=_optional(data, "maximum", _is_int, "an integer"),
        enumeration=_list(
            data, "enum", lambda v: v is None or _is_int(v), "a list of integers or nulls"
        ),
    )


def _parse_object(data: Mapping[str, Any]) -> ObjectType:
    return ObjectType(
        properties=_properties(data),
        required=_list(data, "required", _is_str, "a list of strings"),
        additional_properties=_additional_properties(data),
        min_properties=_optional(data, "minProperties", _is_usize, "a non-negative integer"),
        max_properties=_optional(data, "maxProperties", _is_usize, "a non-negative integer"),
    )


def _parse_array(data: Mapping[str, Any]) -> ArrayType:
    return ArrayType(
        items=_optional_schema(data, "items"),
        min_items=_optional(data, "minItems", _is_usize, "a non-negative integer"),
        max_items=_optional(data, "maxItems", _is_usize, "a non-negative integer"),
        unique_items=_flag(data, "uniqueItems"),
    )


_TYPE_PARSERS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "string": _parse_string,
    "number": _parse_number,
    "integer": _parse_integer,
    "object": _parse_object,
    "array": _parse_array,
    "boolean": lambda data: BooleanType(),
}


def _parse_type(data: Mapping[str, Any]) -> Any:
    typ = data.get("type")
    parser = _TYPE_PARSERS.get(typ) if isinstance(typ, str) else None
    if parser is None:
        raise ValueError(f"unknown or missing schema type: {typ!r}")
    return parser(data)


def _parse_not(data: Mapping[str, Any]) -> Not:
    if "not" not in data:
        raise ValueError("missing field `not`")
    return Not(_schema_or_ref(data["not"]))


def _parse_any(data: Mapping[str, Any]) -> AnySchema:
    return AnySchema(
        typ=_optional(data, "type", _is_str, "a string"),
        pattern=_optional(data, "pattern", _is_str, "a string"),
        multiple_of=_optional_float(data, "multipleOf"),
        exclusive_minimum=_optional(data, "exclusiveMinimum", _is_bool, "a boolean"),
        exclusive_maximum=_optional(data, "exclusiveMaximum", _is_bool, "a boolean"),
        minimum=_optional_float(data, "minimum"),
        maximum=_optional_float(data, "maximum"),
        properties=_properties(data),
        required=_list(data, "required", _is_str, "a list of strings"),
        additional_properties=_additional_properties(data),
        min_properties=_optional(data, "minProperties", _is_usize, "a non-negative integer"),
        max_properties=_optional(data, "maxProperties", _is_usize, "a non-negative integer"),
        items=_optional_schema(data, "items"),
        min_items=_optional(data, "minItems", _is_usize, "a non-negative integer"),
        max_items=_optional(data, "maxItems", _is_usize, "a non-negative integer"),
        unique_items=_optional(data, "uniqueItems", _is_bool, "a boolean"),
        enumeration=_list(data, "enum", lambda v: True, "a list"),
        format=_optional(data, "format", _is_str, "a string"),
        min_length=_optional(data, "minLength", _is_usize, "a non-negative integer"),
        max_length=_optional(data, "maxLength", _is_usize, "a non-negative integer"),
        one_of=_schema_list(data, "oneOf", required=False),
        all_of=_schema_list(data, "allOf", required=False),
        any_of=_schema_list(data, "anyOf", required=False),
        not_=_optional_schema(data, "not"),
    )


_KIND_PARSERS: tuple[Callable[[Mapping[str, Any]], Any], ...] = (
    _parse_type,
    lambda data: OneOf(_schema_list(data, "oneOf", required=True)),
    lambda data: AllOf(_schema_list(data, "allOf", required=True)),
    lambda data: AnyOf(_schema_list(data, "anyOf", required=True)),
    _parse_not,
    _parse_any,
)


def _kind_from_dict(data: Mapping[str, Any]) -> Any:
    for parser in _KIND_PARSERS:
        try:
            return parser(data)
        except ValueError:
            continue
    raise ValueError("data did not match any variant of untagged enum SchemaKind")


def _numeric_to_dict(kind: NumberType | IntegerType, out: dict[str, Any]) -> None:
    if kind.format is not None:
        out["format"] = variant_str(kind.format)
    _put(out, "multipleOf", kind.multiple_of)
    if kind.exclusive_minimum:
        out["exclusiveMinimum"] = True
    if kind.exclusive_maximum:
        out["exclusiveMaximum"] = True
    _put(out, "minimum", kind.minimum)
    _put(out, "maximum", kind.maximum)
    if kind.enumeration:
        out["enum"] = list(kind.enumeration)


def _object_to_dict(kind: ObjectType | AnySchema, out: dict[str, Any]) -> None:
    if kind.properties:
        out["properties"] = RefMap(kind.properties).to_dict()
    if kind.required:
        out["required"] = list(kind.required)
    if kind.additional_properties is not None:
        out["additionalProperties"] = ref_or_to_dict(kind.additional_properties)
    _put(out, "minProperties", kind.min_properties)
    _put(out, "maxProperties", kind.max_properties)


def _schemas_to_list(schemas: list[Any]) -> list[Any]:
    return [ref_or_to_dict(item) for item in schemas]


def _kind_to_dict(kind: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if isinstance(kind, StringType):
        out["type"] = "string"
        if kind.format is not None:
            out["format"] = variant_str(kind.format)
        _put(out, "pattern", kind.pattern)
        if kind.enumeration:
            out["enum"] = list(kind.enumeration)
        _put(out, "minLength", kind.min_length)
        _put(out, "maxLength", kind.max_length)
    elif isinstance(kind, NumberType):
        out["type"] = "number"
        _numeric_to_dict(kind, out)
    elif isinstance(kind, IntegerType):
        out["type"] = "integer"
        _numeric_to_dict(kind, out)
    elif isinstance(kind, ObjectType):
        out["type"] = "object"
        _object_to_dict(kind, out)
    elif isinstance(kind, ArrayType):
        out["type"] = "array"
        if kind.items is not None:
            out["items"] = ref_or_to_dict(kind.items)
        _put(out, "minItems", kind.min_items)
        _put(out, "maxItems", kind.max_items)
        if kind.unique_items:
            out["uniqueItems"] = True
    elif isinstance(kind, BooleanType):
        out["type"] = "boolean"
    elif isinstance(kind, OneOf):
        out["oneOf"] = _schemas_to_list(kind.one_of)
    elif isinstance(kind, AllOf):
        out["allOf"] = _schemas_to_list(kind.all_of)
    elif isinstance(kind, AnyOf):
        out["anyOf"] = _schemas_to_list(kind.any_of)
    elif isinstance(kind, Not):
        out["not"] = ref_or_to_dict(kind.not_)
    elif isinstance(kind, AnySchema):
        _put(out, "type", kind.typ)
        _put(out, "pattern", kind.pattern)
        _put(out, "multipleOf", kind.multiple_of)
        _put(out, "exclusiveMinimum", kind.exclusive_minimum)
        _put(out, "exclusiveMaximum", kind.exclusive_maximum)
        _put(out, "minimum", kind.minimum)
        _put(out, "maximum", kind.maximum)
        _object_to_dict(kind, out)
        if kind.items is not None:
            out["items"] = ref_or_to_dict(kind.items)
        _put(out, "minItems", kind.min_items)
        _put(out, "maxItems", kind.max_items)
        _put(out, "uniqueItems", kind.unique_items)
        if kind.enumeration:
            out["enum"] = list(kind.enumeration)
        _put(out, "format", kind.format)
        _put(out, "minLength", kind.min_length)
        _put(out, "maxLength", kind.max_length)
        if kind.one_of:
            out["oneOf"] = _schemas_to_list(kind.one_of)
        if kind.all_of:
            out["allOf"] = _schemas_to_list(kind.all_of)
        if kind.any_of:
            out["anyOf"] = _schemas_to_list(kind.any_of)
        if kind.not_ is not None:
            out["not"] = ref_or_to_dict(kind.not_)
    else:
        raise TypeError(f"not a schema kind: {kind!r}")
    return out


@dataclass
class Schema:
    """A schema: shared data plus one specific kind."""

    kind: SchemaKind
    data: SchemaData = field(default_factory=SchemaData)

    @classmethod
    def from_dict(cls, data: Any) -> Schema:
        schema_data = SchemaData.from_dict(data)
        return cls(kind=_kind_from_dict(data), data=schema_data)

    def to_dict(self) -> dict[str, Any]:
        out = self.data.to_dict()
        out.update(_kind_to_dict(self.kind))
        return out

    @classmethod
    def new_number(cls) -> Schema:
        return cls(NumberType())

    @classmethod
    def new_integer(cls) -> Schema:
        return cls(IntegerType())

    @classmethod
    def new_bool(cls) -> Schema:
        return cls(BooleanType())

    @classmethod
    def new_str_enum(cls, enumeration: list[str]) -> Schema:
        return cls(StringType(enumeration=list(enumeration)))

    @classmethod
    def new_string(cls) -> Schema:
        return cls(StringType())

    @classmethod
    def new_object(cls) -> Schema:
        """Create an object schema with no declared properties."""
        return cls(ObjectType())

    @classmethod
    def new_map(cls, inner: Any) -> Schema:
        """Create a map schema whose values follow ``inner``."""
        return cls(ObjectType(additional_properties=inner))

    @classmethod
    def new_map_any(cls) -> Schema:
        """Create a map schema with values of any type."""
        return cls(ObjectType(additional_properties=True))

    @classmethod
    def new_array_any(cls) -> Schema:
        return cls(ArrayType())

    @classmethod
    def new_array(cls, inner: Any) -> Schema:
        """Create an array schema whose items follow ``inner``."""
        return cls(ArrayType(items=inner))

    @classmethod
    def new_one_of(cls, one_of: list[Any]) -> Schema:
        return cls(OneOf(list(one_of)))

    @classmethod
    def new_all_of(cls, all_of: list[Any]) -> Schema:
        return cls(AllOf(list(all_of)))

    @classmethod
    def new_any_of(cls, any_of: list[Any]) -> Schema:
        return cls(AnyOf(list(any_of)))

    @classmethod
    def new_any(cls) -> Schema:
        return cls(AnySchema())

    def with_format(self, format: str) -> Schema:
        """Set the format of a string schema; other kinds are left unchanged."""
        if isinstance(self.kind, StringType):
            self.kind.format = parse_variant(format, StringFormat)
        return self

    def is_empty(self) -> bool:
        kind = self.kind
        return (
            isinstance(kind, ObjectType)
            and not kind.properties
            and kind.additional_properties is None
        )

    def get_properties(self) -> RefMap | None:
        if isinstance(self.kind, (ObjectType, AnySchema)):
            return self.kind.properties
        return None

    def properties(self) -> RefMap:
        found = self.get_properties()
        if found is None:
            raise TypeError("Schema is not an object")
        return found

    def properties_iter(self, spec: Any) -> Iterator[tuple[str, Any]]:
        """Yield the properties, following ``allOf`` parts through ``spec``."""
        kind = self.kind
        if isinstance(kind, (ObjectType, AnySchema)):
            yield from kind.properties.items()
        elif isinstance(kind, AllOf):
            for part in kind.all_of:
                yield from resolve_schema(part, spec).properties_iter(spec)

    def is_required(self, field: str) -> bool:
        required = self.get_required()
        return True if required is None else field in required

    def get_required(self) -> list[str] | None:
        if isinstance(self.kind, (ObjectType, AnySchema)):
            return self.kind.required
        return None

    def required(self) -> list[str]:
        found = self.get_required()
        if found is None:
            raise TypeError("Schema is not an object")
        return found

    def add_required(self, field: str) -> None:
        required = self.get_required()
        if required is not None and field not in required:
            required.append(field)

    def remove_required(self, field: str) -> None:
        required = self.get_required()
        if required is not None:
            required[:] = [name for name in required if name != field]

    def is_anonymous_object(self) -> bool:
        return isinstance(self.kind, ObjectType) and not self.kind.properties