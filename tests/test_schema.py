from types import SimpleNamespace

import pytest
import yaml

from openapimodel.reference import Reference, as_ref_str, schema_ref
from openapimodel.refmap import RefMap
from openapimodel.schema import (
    AllOf,
    AnySchema,
    ArrayType,
    BooleanType,
    IntegerFormat,
    IntegerType,
    Not,
    NumberType,
    ObjectType,
    OneOf,
    Schema,
    StringFormat,
    StringType,
    format_str,
)


def test_schema_with_extensions():
    schema = Schema.from_dict({"type": "boolean", "x-foo": "bar"})
    assert schema.data.extensions.get("x-foo") == "bar"
    assert schema.kind == BooleanType()


def test_any():
    assert Schema.from_dict({}).kind == AnySchema()


def test_not():
    schema = Schema.from_dict({"not": {}})
    assert isinstance(schema.kind, Not)
    assert schema.kind.not_ == Schema(AnySchema())


def test_null():
    schema = Schema.from_dict({"nullable": True, "enum": [None]})
    assert schema.data.nullable is True
    assert isinstance(schema.kind, AnySchema)
    assert schema.kind.enumeration[0] is None


DEFAULT_TO_OBJECT = """
required:
  - definition
properties:
  definition:
    type: string
    description: >
      Serialized definition of the version. This should be an OpenAPI 2.x, 3.x or AsyncAPI 2.x file
      serialized as a string, in YAML or JSON.
    example: |
      {asyncapi: "2.0", "info": { "title: … }}
  references:
    type: array
    description: Import external references used by `definition`. It's usually resources not accessible by Bump servers, like local files or internal URLs.
    items:
      $ref: "#/components/schemas/Reference"
""".strip()


def test_default_to_object():
    schema = Schema.from_dict(yaml.safe_load(DEFAULT_TO_OBJECT))
    assert isinstance(schema.kind, AnySchema)
    assert len(schema.kind.properties) == 2
    assert schema.kind.required == ["definition"]
    references = schema.kind.properties["references"]
    assert references.kind.items == Reference("#/components/schemas/Reference")


def test_all_of():
    text = """
allOf:
  - $ref: "#/components/schemas/DocumentationRequest"
  - $ref: "#/components/schemas/PreviewRequest"
""".strip()
    schema = Schema.from_dict(yaml.safe_load(text))
    assert isinstance(schema.kind, AllOf)
    assert len(schema.kind.all_of) == 2
    assert as_ref_str(schema.kind.all_of[0]) == "#/components/schemas/DocumentationRequest"
    assert as_ref_str(schema.kind.all_of[1]) == "#/components/schemas/PreviewRequest"


def test_with_format():
    schema = Schema.new_string().with_format("date-time")
    assert schema.kind.format is StringFormat.DATE_TIME
    schema = Schema.new_string().with_format("uuid")
    assert schema.kind.format == "uuid"


def test_with_format_ignored_for_non_strings():
    assert Schema.new_integer().with_format("date").kind == IntegerType()


def test_format_str():
    assert format_str(StringFormat.DATE_TIME) == "date-time"
    assert format_str("uuid") == "uuid"
    assert format_str(None) == ""


def test_string_enum_with_null_falls_back_to_any():
    schema = Schema.from_dict({"type": "string", "enum": [None]})
    assert isinstance(schema.kind, AnySchema)
    assert schema.kind.typ == "string"


def test_integer_with_fractional_minimum_falls_back_to_any():
    schema = Schema.from_dict({"type": "integer", "minimum": 1.5})
    assert isinstance(schema.kind, AnySchema)
    assert schema.kind.minimum == 1.5


def test_integer_format_parsed():
    schema = Schema.from_dict({"type": "integer", "format": "int32", "minimum": 0})
    assert schema.kind == IntegerType(format=IntegerFormat.INT32, minimum=0)


def test_type_list_is_rejected():
    with pytest.raises(ValueError):
        Schema.from_dict({"type": ["string", "null"]})


def test_non_mapping_is_rejected():
    with pytest.raises(ValueError):
        Schema.from_dict("string")


def test_one_of_parsed():
    schema = Schema.from_dict({"oneOf": [{"type": "string"}, {"$ref": "#/x"}]})
    assert schema.kind == OneOf([Schema.new_string(), Reference("#/x")])


def test_new_map_to_dict():
    assert Schema.new_map(Schema.new_string()).to_dict() == {
        "type": "object",
        "additionalProperties": {"type": "string"},
    }


def test_new_map_any_to_dict():
    assert Schema.new_map_any().to_dict() == {"type": "object", "additionalProperties": True}


def test_new_array_to_dict():
    assert Schema.new_array(schema_ref("Pet")).to_dict() == {
        "type": "array",
        "items": {"$ref": "#/components/schemas/Pet"},
    }


def test_str_enum_to_dict():
    assert Schema.new_str_enum(["a", "b"]).to_dict() == {"type": "string", "enum": ["a", "b"]}


@pytest.mark.parametrize(
    "document",
    [
        {"type": "number", "minimum": 1.5, "exclusiveMaximum": True, "maximum": 9.0},
        {"description": "pet", "type": "object", "properties": {"id": {"type": "integer"}},
         "required": ["id"]},
        {"nullable": True, "allOf": [{"$ref": "#/components/schemas/A"}]},
        {"type": "string", "format": "uuid", "x-extra": 1},
        {"type": "array", "items": {"type": "boolean"}, "uniqueItems": True},
        {"type": "null", "enum": [None, 1]},
    ],
)
def test_round_trip(document):
    schema = Schema.from_dict(document)
    assert schema.to_dict() == document
    assert Schema.from_dict(schema.to_dict()) == schema


def test_number_type_floats():
    schema = Schema.from_dict({"type": "number", "minimum": 1})
    assert schema.kind == NumberType(minimum=1.0)


def test_is_empty():
    assert Schema.new_object().is_empty() is True
    assert Schema.new_map_any().is_empty() is False
    assert Schema.new_string().is_empty() is False


def test_is_anonymous_object():
    assert Schema.new_object().is_anonymous_object() is True
    obj = Schema(ObjectType(properties=RefMap(a=Schema.new_string())))
    assert obj.is_anonymous_object() is False
    assert Schema.new_any().is_anonymous_object() is False


def test_properties_on_non_object_raises():
    with pytest.raises(TypeError):
        Schema.new_string().properties()
    assert Schema.new_string().get_properties() is None


def test_required_management():
    schema = Schema.new_object()
    schema.add_required("a")
    schema.add_required("a")
    schema.add_required("b")
    assert schema.required() == ["a", "b"]
    assert schema.is_required("a") is True
    schema.remove_required("a")
    assert schema.required() == ["b"]
    assert schema.is_required("a") is False


def test_required_on_non_object():
    schema = Schema.new_string()
    assert schema.is_required("anything") is True
    assert schema.get_required() is None
    schema.add_required("x")
    assert schema.get_required() is None
    with pytest.raises(TypeError):
        schema.required()


def test_properties_are_mutable_in_place():
    schema = Schema.new_object()
    schema.properties().insert("name", Schema.new_string())
    assert schema.to_dict() == {"type": "object", "properties": {"name": {"type": "string"}}}


def test_properties_iter_follows_all_of():
    base = Schema(ObjectType(properties=RefMap(id=Schema.new_integer())))
    spec = SimpleNamespace(components=SimpleNamespace(schemas=RefMap(Base=base)))
    extra = Schema(ObjectType(properties=RefMap(name=Schema.new_string())))
    combined = Schema.new_all_of([schema_ref("Base"), extra])
    names = [name for name, _ in combined.properties_iter(spec)]
    assert names == ["id", "name"]
    assert list(Schema.new_string().properties_iter(spec)) == []


def test_array_any():
    assert Schema.new_array_any().kind == ArrayType()
    assert Schema.new_array_any().to_dict() == {"type": "array"}


def test_string_type_default():
    assert Schema.new_string().kind == StringType()
    assert Schema.new_bool().to_dict() == {"type": "boolean"}