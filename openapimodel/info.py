"""Document metadata: info, contact, licence, tags, servers, discriminators and examples."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .util import extract_extensions

SecurityRequirement = dict[str, list[str]]
"""Names of required security schemes mapped to the scopes each one needs."""


def _as_mapping(data: Any, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"invalid type: {data!r}, expected {owner} object")
    return data


def _required_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: {value!r}, expected a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: {value!r}, expected a string")
    return value


def _str_map(data: Mapping[str, Any], key: str) -> dict[str, str]:
    value = data.get(key, {})
    if not isinstance(value, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ValueError(f"invalid type for `{key}`: {value!r}, expected a map of strings")
    return dict(value)


def _str_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"invalid type for `{key}`: {value!r}, expected a list of strings")
    return list(value)


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        out[key] = value


@dataclass
class Contact:
    """Contact information for the exposed API."""

    name: str | None = None
    url: str | None = None
    email: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Contact:
        data = _as_mapping(data, "Contact")
        return cls(
            name=_optional_str(data, "name"),
            url=_optional_str(data, "url"),
            email=_optional_str(data, "email"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        _put(out, "url", self.url)
        _put(out, "email", self.email)
        out.update(self.extensions)
        return out


@dataclass
class License:
    """Licence information for the exposed API."""

    name: str = ""
    url: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> License:
        data = _as_mapping(data, "License")
        return cls(
            name=_required_str(data, "name"),
            url=_optional_str(data, "url"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        _put(out, "url", self.url)
        out.update(self.extensions)
        return out


@dataclass
class Info:
    """Metadata about the API."""

    title: str = ""
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None
    version: str = ""
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Info:
        data = _as_mapping(data, "Info")
        contact = data.get("contact")
        license_ = data.get("license")
        return cls(
            title=_required_str(data, "title"),
            description=_optional_str(data, "description"),
            terms_of_service=_optional_str(data, "termsOfService"),
            contact=Contact.from_dict(contact) if contact is not None else None,
            license=License.from_dict(license_) if license_ is not None else None,
            version=_required_str(data, "version"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"title": self.title}
        _put(out, "description", self.description)
        _put(out, "termsOfService", self.terms_of_service)
        if self.contact is not None:
            out["contact"] = self.contact.to_dict()
        if self.license is not None:
            out["license"] = self.license.to_dict()
        out["version"] = self.version
        out.update(self.extensions)
        return out


@dataclass
class ExternalDocumentation:
    """A reference to an external resource for extended documentation."""

    description: str | None = None
    url: str = ""
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> ExternalDocumentation:
        data = _as_mapping(data, "ExternalDocumentation")
        return cls(
            description=_optional_str(data, "description"),
            url=_required_str(data, "url"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "description", self.description)
        out["url"] = self.url
        out.update(self.extensions)
        return out


@dataclass
class Tag:
    """Metadata for a tag used by operations."""

    name: str = ""
    description: str | None = None
    external_docs: ExternalDocumentation | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Tag:
        data = _as_mapping(data, "Tag")
        docs = data.get("externalDocs")
        return cls(
            name=_required_str(data, "name"),
            description=_optional_str(data, "description"),
            external_docs=ExternalDocumentation.from_dict(docs) if docs is not None else None,
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        _put(out, "description", self.description)
        if self.external_docs is not None:
            out["externalDocs"] = self.external_docs.to_dict()
        out.update(self.extensions)
        return out


@dataclass
class ServerVariable:
    """A variable substituted into a server URL template."""

    enumeration: list[str] = field(default_factory=list)
    default: str = ""
    description: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> ServerVariable:
        data = _as_mapping(data, "ServerVariable")
        return cls(
            enumeration=_str_list(data, "enum"),
            default=_required_str(data, "default"),
            description=_optional_str(data, "description"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.enumeration:
            out["enum"] = list(self.enumeration)
        out["default"] = self.default
        # The description is always written, as null when absent.
        out["description"] = self.description
        out.update(self.extensions)
        return out


@dataclass
class Server:
    """A server hosting the API."""

    url: str = ""
    description: str | None = None
    variables: dict[str, ServerVariable] | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Server:
        data = _as_mapping(data, "Server")
        raw_variables = data.get("variables")
        variables = None
        if raw_variables is not None:
            raw_variables = _as_mapping(raw_variables, "variables")
            variables = {
                name: ServerVariable.from_dict(value) for name, value in raw_variables.items()
            }
        return cls(
            url=_required_str(data, "url"),
            description=_optional_str(data, "description"),
            variables=variables,
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"url": self.url}
        _put(out, "description", self.description)
        if self.variables is not None:
            out["variables"] = {name: var.to_dict() for name, var in self.variables.items()}
        out.update(self.extensions)
        return out


@dataclass
class Discriminator:
    """Names the payload property that selects between alternative schemas."""

    property_name: str = ""
    mapping: dict[str, str] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Discriminator:
        data = _as_mapping(data, "Discriminator")
        return cls(
            property_name=_required_str(data, "propertyName"),
            mapping=_str_map(data, "mapping"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"propertyName": self.property_name}
        if self.mapping:
            out["mapping"] = dict(self.mapping)
        out.update(self.extensions)
        return out


@dataclass
class Example:
    """An example value, given inline or by URL."""

    summary: str | None = None
    description: str | None = None
    value: Any = None
    external_value: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Example:
        data = _as_mapping(data, "Example")
        return cls(
            summary=_optional_str(data, "summary"),
            description=_optional_str(data, "description"),
            value=data.get("value"),
            external_value=_optional_str(data, "externalValue"),
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "summary", self.summary)
        _put(out, "description", self.description)
        _put(out, "value", self.value)
        _put(out, "externalValue", self.external_value)
        out.update(self.extensions)
        return out