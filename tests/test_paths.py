import pytest

from openapimodel.operation import Operation
from openapimodel.paths import (
    PathItem,
    Paths,
    callback_from_dict,
    callback_to_dict,
)
from openapimodel.reference import as_item, as_ref_str, ref_or_from_dict


def test_path_item_iterators():
    operation = Operation()
    path_item = PathItem(get=operation, post=operation, delete=operation)
    expected = [("get", operation), ("post", operation), ("delete", operation)]
    assert list(path_item.operations()) == expected
    assert list(path_item) == expected


def test_operations_follow_method_order():
    item = PathItem(trace=Operation(summary="t"), get=Operation(summary="g"))
    assert [method for method, _ in item.operations()] == ["get", "trace"]


def test_for_get_and_for_post():
    op = Operation(operation_id="a")
    assert PathItem.for_get(op).get is op
    assert PathItem.for_get(op).post is None
    assert PathItem.for_post(op).post is op


def test_path_item_round_trip():
    item = PathItem(
        summary="s",
        get=Operation(operation_id="getIt"),
        patch=Operation(operation_id="patchIt"),
        extensions={"x-a": 1},
    )
    assert PathItem.from_dict(item.to_dict()) == item


def test_paths_from_dict_keeps_slash_keys_and_extensions():
    paths = Paths.from_dict(
        {
            "/pets": {"get": {"responses": {}}},
            "/ref": {"$ref": "#/other"},
            "x-note": "kept",
            "ignored": {"get": {"responses": {}}},
        }
    )
    assert list(paths.paths) == ["/pets", "/ref"]
    assert paths.extensions == {"x-note": "kept"}
    assert as_ref_str(paths["/ref"]) == "#/other"
    assert as_item(paths["/pets"]).get == Operation()
    assert "ignored" not in paths


def test_paths_round_trip():
    paths = Paths()
    paths.insert("/a", PathItem.for_get(Operation(operation_id="a")))
    paths.extensions["x-b"] = True
    assert Paths.from_dict(paths.to_dict()) == paths


def test_insert_returns_previous():
    paths = Paths()
    first = PathItem(summary="first")
    assert paths.insert("/a", first) is None
    assert paths.insert("/a", PathItem(summary="second")) is first
    assert len(paths) == 1


def test_insert_operation_creates_and_replaces():
    paths = Paths()
    first = Operation(operation_id="one")
    second = Operation(operation_id="two")
    assert paths.insert_operation("/a", "GET", first) is None
    assert paths.insert_operation("/a", "get", second) is first
    assert paths["/a"].get is second
    assert paths.insert_operation("/a", "DELETE", first) is None
    assert paths["/a"].delete is first


def test_insert_operation_unsupported_method():
    with pytest.raises(ValueError, match="Unsupported method"):
        Paths().insert_operation("/a", "CONNECT", Operation())


def test_insert_operation_into_reference_fails():
    paths = Paths()
    paths.paths["/a"] = ref_or_from_dict({"$ref": "#/x"}, PathItem.from_dict)
    with pytest.raises(ValueError, match="references"):
        paths.insert_operation("/a", "GET", Operation())


def test_callback_round_trip():
    data = {"{$request.body#/url}": {"post": {"responses": {"200": {"description": "ok"}}}}}
    callback = callback_from_dict(data)
    assert list(callback) == ["{$request.body#/url}"]
    assert callback_to_dict(callback) == data