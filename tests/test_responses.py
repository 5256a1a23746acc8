import json

import pytest
import yaml

from openapimodel.link import Link
from openapimodel.parameter import Header, MediaType
from openapimodel.reference import Reference
from openapimodel.responses import Response, Responses
from openapimodel.util import StatusCode


def test_responses_from_json():
    responses = Responses.from_dict(
        json.loads(
            """{
            "404": {
                "description": "xxx"
            },
            "x-foo": "bar",
            "ignored": "wat"
         }"""
        )
    )
    assert responses.responses.get(StatusCode(404)) == Response(description="xxx")
    assert responses.extensions.get("x-foo") == "bar"
    assert list(responses.responses) == [StatusCode(404)]


def test_integer_key_reference():
    responses = Responses.from_dict(yaml.safe_load("{ 200: { $ref: 'test' } }"))
    assert responses.default is None
    assert responses.responses == {StatusCode(200): Reference("test")}


def test_string_key_reference():
    responses = Responses.from_dict(yaml.safe_load("{ \"666\": { $ref: 'demo' } }"))
    assert responses.default is None
    assert responses.responses == {StatusCode(666): Reference("demo")}


def test_default_and_codes_keep_order():
    responses = Responses.from_dict(
        yaml.safe_load(
            "{ default: { $ref: 'def' }, \"666\": { $ref: 'demo' }, 418: { $ref: 'demo' } }"
        )
    )
    assert responses.default == Reference("def")
    assert list(responses.responses.items()) == [
        (StatusCode(666), Reference("demo")),
        (StatusCode(418), Reference("demo")),
    ]


def test_range_key_round_trip():
    responses = Responses.from_dict({"2XX": {"description": "ok"}})
    assert list(responses.responses) == [StatusCode(2, is_range=True)]
    assert responses.to_dict() == {"2XX": {"description": "ok"}}


def test_responses_to_dict_round_trip():
    raw = {
        "default": {"description": "error"},
        "200": {"$ref": "#/components/responses/Ok"},
        "x-foo": "bar",
    }
    responses = Responses.from_dict(raw)
    assert responses.to_dict() == raw
    assert list(responses.to_dict())[0] == "default"


def test_invalid_response_value_raises():
    with pytest.raises(ValueError, match="description"):
        Responses.from_dict({"200": {"headers": {}}})


def test_response_missing_description_raises():
    with pytest.raises(ValueError, match="missing field `description`"):
        Response.from_dict({})


def test_response_round_trip():
    raw = {
        "description": "A user",
        "headers": {"X-Rate": {"style": "simple", "schema": {"type": "integer"}}},
        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/User"}}},
        "links": {
            "self": {"operationId": "getUser", "parameters": {"id": "$response.body#/id"}},
            "other": {"$ref": "#/components/links/Other"},
        },
        "x-extra": True,
    }
    response = Response.from_dict(raw)
    assert isinstance(response.headers["X-Rate"], Header)
    assert isinstance(response.content["application/json"], MediaType)
    assert isinstance(response.links["self"], Link)
    assert response.links["other"] == Reference("#/components/links/Other")
    assert response.to_dict() == raw


def test_empty_responses():
    responses = Responses.from_dict({})
    assert responses == Responses()
    assert responses.to_dict() == {}