import pytest

from openapimodel.info import Server
from openapimodel.link import Link


def test_link_with_operation_id_round_trip():
    data = {
        "description": "Get the user",
        "operationId": "getUser",
        "requestBody": "$request.body#/user",
        "parameters": {"userId": "$response.body#/id"},
        "x-note": "kept",
    }
    link = Link.from_dict(data)
    assert link.operation_id == "getUser"
    assert link.operation_ref is None
    assert link.parameters == {"userId": "$response.body#/id"}
    assert link.extensions == {"x-note": "kept"}
    assert link.to_dict() == data


def test_link_with_operation_ref_and_server():
    data = {
        "operationRef": "#/paths/~1users/get",
        "server": {"url": "https://api.example.com"},
    }
    link = Link.from_dict(data)
    assert link.operation_ref == "#/paths/~1users/get"
    assert link.server == Server(url="https://api.example.com")
    assert link.to_dict() == data


def test_link_without_operation_is_rejected():
    with pytest.raises(ValueError, match="LinkOperation"):
        Link.from_dict({"description": "nowhere"})


def test_link_takes_first_operation_key():
    link = Link.from_dict({"operationId": "first", "operationRef": "#/second"})
    assert link.operation_id == "first"
    assert link.operation_ref is None


def test_link_constructor_requires_exactly_one_operation():
    with pytest.raises(ValueError):
        Link()
    with pytest.raises(ValueError):
        Link(operation_ref="#/a", operation_id="b")


def test_link_rejects_non_string_operation():
    with pytest.raises(ValueError):
        Link.from_dict({"operationId": 3})


def test_link_drops_unknown_keys():
    link = Link.from_dict({"operationId": "op", "unknown": True})
    assert link.extensions == {}
    assert link.to_dict() == {"operationId": "op"}