"""References (``$ref``) and their resolution against a document's components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar, Union

T = TypeVar("T")

SCHEMA_PREFIX = "#/components/schemas/"


class ResolveError(ValueError):
    """Raised when a reference cannot be parsed or resolved."""


class CircularReferenceError(ResolveError):
    """Raised when schema references form a cycle."""


@dataclass(frozen=True)
class Reference:
    """A ``$ref`` pointer to an object defined elsewhere."""

    reference: str

    def to_dict(self) -> dict[str, str]:
        return {"$ref": self.reference}


RefOr = Union[Reference, T]


@dataclass(frozen=True)
class SchemaReference:
    """A structured reference to a schema, or to a property of a schema."""

    schema: str
    property: str | None = None

    @classmethod
    def parse(cls, reference: str) -> SchemaReference:
        """Parse ``#/components/schemas/A`` or ``#/components/schemas/A/properties/b``."""
        parts = reference.split("/")
        if len(parts) >= 2:
            name, kind = parts[-1], parts[-2]
            if kind == "schemas":
                return cls(name)
            if kind == "properties" and len(parts) >= 3:
                return cls(parts[-3], name)
        raise ResolveError(f"Unknown reference: {reference}")

    def __str__(self) -> str:
        if self.property is None:
            return f"{SCHEMA_PREFIX}{self.schema}"
        return f"{SCHEMA_PREFIX}{self.schema}/properties/{self.property}"


def schema_ref(name: str) -> Reference:
    """Return a reference to the named component schema."""
    return Reference(f"{SCHEMA_PREFIX}{name}")


def as_item(value: Any) -> Any:
    """Return the item itself, or None if ``value`` is a reference."""
    return None if isinstance(value, Reference) else value


def as_ref_str(value: Any) -> str | None:
    """Return the reference string, or None if ``value`` is an item."""
    return value.reference if isinstance(value, Reference) else None


def ref_or_from_dict(data: Any, parse: Callable[[Any], T]) -> RefOr[T]:
    """Read either a ``$ref`` object or an item built by ``parse``."""
    if isinstance(data, Mapping) and isinstance(data.get("$ref"), str):
        return Reference(data["$ref"])
    return parse(data)


def ref_or_to_dict(value: Any) -> Any:
    """Serialize a reference or an item; items without ``to_dict`` pass through."""
    to_dict = getattr(value, "to_dict", None)
    return to_dict() if callable(to_dict) else value


def parse_reference(reference: str, group: str) -> str:
    """Return the component name of a ``#/components/<group>/<name>`` reference."""
    prefix, sep, name = reference.rpartition("/")
    if sep and prefix == f"#/components/{group}":
        return name
    raise ResolveError(f"Invalid {group} reference: {reference}")


def get_response_name(reference: str) -> str:
    return parse_reference(reference, "responses")


def get_request_body_name(reference: str) -> str:
    return parse_reference(reference, "requestBodies")


def get_parameter_name(reference: str) -> str:
    return parse_reference(reference, "parameters")


def _resolve_schema_reference(reference: str, spec: Any, seen: set[str]) -> Any:
    if reference in seen:
        raise CircularReferenceError(f"Circular reference: {reference}")
    seen.add(reference)
    parsed = SchemaReference.parse(reference)
    schemas = spec.components.schemas
    target = schemas.get(parsed.schema)
    if target is None:
        raise ResolveError(f"Schema {parsed.schema} not found in OpenAPI spec.")
    if parsed.property is None:
        if isinstance(target, Reference):
            return _resolve_schema_reference(target.reference, spec, seen)
        return target
    if isinstance(target, Reference):
        raise ResolveError(
            f"The schema {parsed.schema} was used in a reference, "
            "but that schema is itself a reference to another schema."
        )
    prop = target.properties().get(parsed.property)
    if prop is None:
        raise ResolveError(f"Schema {parsed.schema} does not have property {parsed.property}.")
    return resolve_schema(prop, spec)


def resolve_schema(value: Any, spec: Any) -> Any:
    """Follow schema references until an inline schema is reached."""
    if isinstance(value, Reference):
        return _resolve_schema_reference(value.reference, spec, set())
    return value


def _resolve_component(
    value: Any, spec: Any, attribute: str, name_of: Callable[[str], str]
) -> Any:
    if not isinstance(value, Reference):
        return value
    reference = value.reference
    name = name_of(reference)
    found = getattr(spec.components, attribute).get(name)
    if found is None:
        raise ResolveError(f"{reference} not found in OpenAPI spec.")
    if isinstance(found, Reference):
        raise ResolveError(f"{reference} is circular.")
    return found


def resolve_parameter(value: Any, spec: Any) -> Any:
    """Resolve a parameter reference one level against the components."""
    return _resolve_component(value, spec, "parameters", get_parameter_name)


def resolve_response(value: Any, spec: Any) -> Any:
    """Resolve a response reference one level against the components."""
    return _resolve_component(value, spec, "responses", get_response_name)


def resolve_request_body(value: Any, spec: Any) -> Any:
    """Resolve a request body reference one level against the components."""
    return _resolve_component(value, spec, "request_bodies", get_request_body_name)