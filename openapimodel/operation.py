"""A single API operation on a path."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .info import ExternalDocumentation, SecurityRequirement, Server
from .parameter import MediaType, Parameter, RequestBody
from .reference import ref_or_from_dict, ref_or_to_dict
from .responses import Response, Responses
from .util import StatusCode, extract_extensions


def _bad(key: str, value: Any, expected: str) -> ValueError:
    return ValueError(f"invalid type for `{key}`: {value!r}, expected {expected}")


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


def _security_requirement(value: Any) -> SecurityRequirement:
    if not isinstance(value, Mapping) or not all(
        isinstance(name, str)
        and isinstance(scopes, list)
        and all(isinstance(scope, str) for scope in scopes)
        for name, scopes in value.items()
    ):
        raise _bad("security", value, "a map of scheme names to lists of scopes")
    return {name: list(scopes) for name, scopes in value.items()}


def parse_security(data: Mapping[str, Any]) -> list[SecurityRequirement] | None:
    """Read an optional list of security requirements; an empty list is kept."""
    value = data.get("security")
    if value is None:
        return None
    if not isinstance(value, list):
        raise _bad("security", value, "a list of security requirements")
    return [_security_requirement(item) for item in value]


def _json_content(schema: Any, content_type: str) -> dict[str, MediaType]:
    return {content_type: MediaType(schema=schema)}


@dataclass
class Operation:
    """Describes a single API operation on a path."""

    tags: list[str] = field(default_factory=list)
    summary: str | None = None
    description: str | None = None
    external_docs: ExternalDocumentation | None = None
    operation_id: str | None = None
    parameters: list[Any] = field(default_factory=list)
    request_body: Any = None
    responses: Responses = field(default_factory=Responses)
    deprecated: bool = False
    security: list[SecurityRequirement] | None = None
    servers: list[Server] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)

    def add_response_success(self, schema: Any, content_type: str) -> None:
        """Declare a 200 response whose body of ``content_type`` follows ``schema``."""
        self.responses.responses[StatusCode(200)] = Response(
            content=_json_content(schema, content_type)
        )

    def add_request_body(self, schema: Any, content_type: str) -> None:
        """Set a required request body of ``content_type`` following ``schema``."""
        self.request_body = RequestBody(
            content=_json_content(schema, content_type), required=True
        )

    @classmethod
    def from_dict(cls, data: Any) -> Operation:
        if not isinstance(data, Mapping):
            raise ValueError(f"invalid type: {data!r}, expected Operation object")
        if "responses" not in data:
            raise ValueError("missing field `responses`")
        tags = _list(data, "tags")
        if not all(isinstance(tag, str) for tag in tags):
            raise _bad("tags", tags, "a list of strings")
        deprecated = data.get("deprecated", False)
        if not isinstance(deprecated, bool):
            raise _bad("deprecated", deprecated, "a boolean")
        docs = data.get("externalDocs")
        body = data.get("requestBody")
        return cls(
            tags=list(tags),
            summary=_optional_str(data, "summary"),
            description=_optional_str(data, "description"),
            external_docs=ExternalDocumentation.from_dict(docs) if docs is not None else None,
            operation_id=_optional_str(data, "operationId"),
            parameters=[
                ref_or_from_dict(item, Parameter.from_dict) for item in _list(data, "parameters")
            ],
            request_body=None if body is None else ref_or_from_dict(body, RequestBody.from_dict),
            responses=Responses.from_dict(data["responses"]),
            deprecated=deprecated,
            security=parse_security(data),
            servers=[Server.from_dict(item) for item in _list(data, "servers")],
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.tags:
            out["tags"] = list(self.tags)
        if self.summary is not None:
            out["summary"] = self.summary
        if self.description is not None:
            out["description"] = self.description
        if self.external_docs is not None:
            out["externalDocs"] = self.external_docs.to_dict()
        if self.operation_id is not None:
            out["operationId"] = self.operation_id
        if self.parameters:
            out["parameters"] = [ref_or_to_dict(item) for item in self.parameters]
        if self.request_body is not None:
            out["requestBody"] = ref_or_to_dict(self.request_body)
        out["responses"] = self.responses.to_dict()
        if self.deprecated:
            out["deprecated"] = True
        if self.security is not None:
            out["security"] = [
                {name: list(scopes) for name, scopes in req.items()} for req in self.security
            ]
        if self.servers:
            out["servers"] = [server.to_dict() for server in self.servers]
        out.update(self.extensions)
        return out