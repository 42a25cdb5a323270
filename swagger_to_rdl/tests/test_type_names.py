"""
Tests for use-site type name resolution.
"""

import pytest

from swagger_to_rdl.importer.type_names import import_type_name, normalize_type_name, requires_type_def
from swagger_to_rdl.swagger import CONSTRAINT_KEYS, SwaggerParser
from swagger_to_rdl.utils import camelize


def fragment(schema):
    return SwaggerParser().parse_type(schema)


@pytest.mark.parametrize("name", ["Pet", "pet owner", "Order_Line"])
def test_local_ref_resolves_to_camelized_name(name):
    f = fragment({"$ref": f"#/definitions/{name}", "type": "string", "description": "ignored"})
    assert import_type_name(f, "integer") == camelize(name)


def test_explicit_type_is_canonicalized():
    assert import_type_name(fragment({"type": "integer"}), "string") == "Int32"
    assert import_type_name(fragment({"type": "boolean"}), None) == "Bool"


def test_fallback_hint_is_camelized_and_canonicalized():
    assert import_type_name(fragment({}), "integer") == "Int32"
    assert import_type_name(fragment({}), "boolean") == "Bool"
    assert import_type_name(fragment({}), "?") == "?"
    assert import_type_name(fragment({}), None) == "?"


def test_other_ref_shapes_fall_back():
    f = fragment({"$ref": "other.json#/definitions/Pet", "type": "object"})
    assert import_type_name(f, "?") == "Struct"

    f = fragment({"$ref": "#/parameters/Pet"})
    assert import_type_name(f, "string") == "String"


def test_normalize_type_name_returns_base_kind():
    assert normalize_type_name(fragment({"type": "string"})) == ("String", "String")
    assert normalize_type_name(fragment({"type": "number"})) == ("Float64", "Float64")
    assert normalize_type_name(fragment({"$ref": "#/definitions/Pet"})) == ("Pet", "Any")
    assert normalize_type_name(fragment({"properties": {}})) == ("Struct", "Struct")
    assert normalize_type_name(fragment({"items": {"type": "string"}})) == ("Array", "Array")
    assert normalize_type_name(fragment({})) == ("Any", "Any")


@pytest.mark.parametrize("key", CONSTRAINT_KEYS)
def test_each_constraint_requires_type_def(key):
    values = {"x-constraint": {"positive": True}, "x-format": {"case": "upper"}, "enum": ["A"], "pattern": "^a$"}
    f = fragment({"type": "string", key: values.get(key, 3)})
    assert requires_type_def(f)


def test_plain_fragment_does_not_require_type_def():
    assert not requires_type_def(fragment({"type": "string", "description": "a name", "example": "Rex", "default": "x"}))
    assert not requires_type_def(fragment({"$ref": "#/definitions/Pet"}))
