"""Design-time links between a response and another operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .info import Server
from .util import extract_extensions

_OPERATION_KEYS = ("operationRef", "operationId")


@dataclass
class Link:
    """A link to an operation, given by ``operationRef`` or by ``operationId``."""

    operation_ref: str | None = None
    operation_id: str | None = None
    description: str | None = None
    request_body: Any = None
    parameters: dict[str, Any] = field(default_factory=dict)
    server: Server | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if (self.operation_ref is None) == (self.operation_id is None):
            raise ValueError("a link needs exactly one of operationRef and operationId")

    @classmethod
    def from_dict(cls, data: Any) -> Link:
        if not isinstance(data, Mapping):
            raise ValueError(f"invalid type: {data!r}, expected Link object")
        key = next((k for k in data if k in _OPERATION_KEYS), None)
        if key is None:
            raise ValueError("no variant of enum LinkOperation found in flattened data")
        target = data[key]
        if not isinstance(target, str):
            raise ValueError(f"invalid type for `{key}`: {target!r}, expected a string")
        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise ValueError(f"invalid type for `description`: {description!r}, expected a string")
        parameters = data.get("parameters", {})
        if not isinstance(parameters, Mapping):
            raise ValueError(f"invalid type for `parameters`: {parameters!r}, expected a map")
        server = data.get("server")
        return cls(
            operation_ref=target if key == "operationRef" else None,
            operation_id=target if key == "operationId" else None,
            description=description,
            request_body=data.get("requestBody"),
            parameters=dict(parameters),
            server=Server.from_dict(server) if server is not None else None,
            extensions=extract_extensions(data),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.description is not None:
            out["description"] = self.description
        if self.operation_ref is not None:
            out["operationRef"] = self.operation_ref
        else:
            out["operationId"] = self.operation_id
        if self.request_body is not None:
            out["requestBody"] = self.request_body
        if self.parameters:
            out["parameters"] = dict(self.parameters)
        if self.server is not None:
            out["server"] = self.server.to_dict()
        out.update(self.extensions)
        return out