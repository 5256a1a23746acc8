import pytest

from openapimodel.reference import Reference
from openapimodel.refmap import RefMap


def test_insert_coercion():
    refs = RefMap()
    assert refs.insert("a", 1) is None
    assert refs.get_item("a") == 1


def test_insert_returns_previous():
    refs = RefMap()
    refs.insert("a", 1)
    assert refs.insert("a", Reference("x")) == 1
    assert refs["a"] == Reference("x")


def test_get_item_skips_references():
    refs = RefMap({"a": Reference("#/components/schemas/A"), "b": 2})
    assert refs.get_item("a") is None
    assert refs.get_item("b") == 2
    assert refs.get_item("missing") is None


def test_item_raises_when_absent_or_reference():
    refs = RefMap({"a": Reference("r"), "b": 3})
    assert refs.item("b") == 3
    with pytest.raises(KeyError):
        refs.item("a")
    with pytest.raises(KeyError):
        refs.item("missing")


def test_preserves_insertion_order():
    refs = RefMap()
    for key in ["z", "a", "m"]:
        refs.insert(key, key.upper())
    assert list(refs) == ["z", "a", "m"]


def test_from_dict_to_dict_round_trip():
    data = {"a": {"$ref": "#/components/schemas/A"}, "b": 5}
    refs = RefMap.from_dict(data, int)
    assert refs == {"a": Reference("#/components/schemas/A"), "b": 5}
    assert refs.to_dict() == data


def test_from_dict_accepts_none():
    assert RefMap.from_dict(None, int) == {}
    assert RefMap.from_dict(None, int).to_dict() == {}