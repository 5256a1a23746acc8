from dataclasses import dataclass, field
from types import SimpleNamespace

import pytest

from openapimodel.reference import (
    CircularReferenceError,
    Reference,
    ResolveError,
    SchemaReference,
    as_item,
    as_ref_str,
    get_parameter_name,
    get_request_body_name,
    get_response_name,
    parse_reference,
    ref_or_from_dict,
    ref_or_to_dict,
    resolve_parameter,
    resolve_request_body,
    resolve_response,
    resolve_schema,
    schema_ref,
)
from openapimodel.refmap import RefMap


@dataclass
class FakeSchema:
    kind: str
    props: dict = field(default_factory=dict)

    def properties(self):
        return self.props

    def to_dict(self):
        return {"type": self.kind}


def make_spec(schemas=None, parameters=None, responses=None, request_bodies=None):
    return SimpleNamespace(
        components=SimpleNamespace(
            schemas=RefMap(schemas or {}),
            parameters=RefMap(parameters or {}),
            responses=RefMap(responses or {}),
            request_bodies=RefMap(request_bodies or {}),
        )
    )


def test_get_request_body_name():
    assert get_request_body_name("#/components/requestBodies/Foo") == "Foo"
    with pytest.raises(ResolveError):
        get_request_body_name("#/components/schemas/Foo")


def test_other_component_names():
    assert get_response_name("#/components/responses/NotFound") == "NotFound"
    assert get_parameter_name("#/components/parameters/limit") == "limit"
    with pytest.raises(ResolveError, match="Invalid parameters reference: limit"):
        get_parameter_name("limit")


def test_parse_reference_requires_exact_prefix():
    assert parse_reference("#/components/links/A", "links") == "A"
    with pytest.raises(ResolveError):
        parse_reference("#/components/links/nested/A", "links")


def test_reference_to_dict_and_helpers():
    ref = schema_ref("Pet")
    assert ref.to_dict() == {"$ref": "#/components/schemas/Pet"}
    assert as_ref_str(ref) == "#/components/schemas/Pet"
    assert as_item(ref) is None
    assert as_item(1) == 1
    assert as_ref_str(1) is None


def test_ref_or_from_dict():
    assert ref_or_from_dict({"$ref": "test"}, FakeSchema) == Reference("test")
    assert ref_or_from_dict("string", FakeSchema) == FakeSchema("string")


def test_ref_or_to_dict():
    assert ref_or_to_dict(Reference("demo")) == {"$ref": "demo"}
    assert ref_or_to_dict(FakeSchema("boolean")) == {"type": "boolean"}
    assert ref_or_to_dict(7) == 7


def test_schema_reference_parse_and_display():
    plain = SchemaReference.parse("#/components/schemas/Account")
    assert plain == SchemaReference("Account")
    assert str(plain) == "#/components/schemas/Account"
    prop = SchemaReference.parse("#/components/schemas/Account/properties/name")
    assert prop == SchemaReference("Account", "name")
    assert str(prop) == "#/components/schemas/Account/properties/name"


@pytest.mark.parametrize("bad", ["Account", "#/components/things/A", "properties/x"])
def test_schema_reference_parse_unknown(bad):
    with pytest.raises(ResolveError, match="Unknown reference"):
        SchemaReference.parse(bad)


def test_resolve_inline_schema_returns_it():
    item = FakeSchema("string")
    assert resolve_schema(item, make_spec()) is item


def test_nested_refs_resolve():
    target = FakeSchema("string")
    spec = make_spec(
        schemas={
            "UserId": Reference("#/components/schemas/Id"),
            "Id": target,
        }
    )
    assert resolve_schema(schema_ref("UserId"), spec) is target


def test_nested_refs_circular():
    spec = make_spec(
        schemas={
            "UserId": Reference("#/components/schemas/Id"),
            "Id": Reference("#/components/schemas/UserId"),
        }
    )
    with pytest.raises(CircularReferenceError, match="Circular reference: #/components/schemas/UserId"):
        resolve_schema(schema_ref("UserId"), spec)


def test_resolve_missing_schema():
    with pytest.raises(ResolveError, match="Schema Nope not found"):
        resolve_schema(schema_ref("Nope"), make_spec())


def test_resolve_property_reference():
    name_schema = FakeSchema("string")
    spec = make_spec(schemas={"Account": FakeSchema("object", {"name": name_schema})})
    ref = Reference("#/components/schemas/Account/properties/name")
    assert resolve_schema(ref, spec) is name_schema


def test_resolve_property_missing():
    spec = make_spec(schemas={"Account": FakeSchema("object", {})})
    ref = Reference("#/components/schemas/Account/properties/name")
    with pytest.raises(ResolveError, match="does not have property name"):
        resolve_schema(ref, spec)


def test_resolve_property_of_reference_schema():
    spec = make_spec(schemas={"Account": Reference("#/components/schemas/Other")})
    ref = Reference("#/components/schemas/Account/properties/name")
    with pytest.raises(ResolveError, match="itself a reference"):
        resolve_schema(ref, spec)


def test_resolve_parameter():
    param = object()
    spec = make_spec(parameters={"limit": param, "loop": Reference("#/components/parameters/limit")})
    assert resolve_parameter(Reference("#/components/parameters/limit"), spec) is param
    assert resolve_parameter(param, spec) is param
    with pytest.raises(ResolveError, match="is circular"):
        resolve_parameter(Reference("#/components/parameters/loop"), spec)
    with pytest.raises(ResolveError, match="not found in OpenAPI spec"):
        resolve_parameter(Reference("#/components/parameters/missing"), spec)


def test_resolve_response_and_request_body():
    response = object()
    body = object()
    spec = make_spec(responses={"Ok": response}, request_bodies={"Pet": body})
    assert resolve_response(Reference("#/components/responses/Ok"), spec) is response
    assert resolve_request_body(Reference("#/components/requestBodies/Pet"), spec) is body
    with pytest.raises(ResolveError, match="Invalid responses reference"):
        resolve_response(Reference("#/components/requestBodies/Pet"), spec)