"""
Unit tests for identifier normalization.
"""

import unittest

from swagger_to_rdl.utils import camelize, canonical_type_name, capitalize


class TestCapitalize(unittest.TestCase):
    def test_capitalize_keeps_tail(self):
        self.assertEqual(capitalize("petId"), "PetId")
        self.assertEqual(capitalize("x"), "X")
        self.assertEqual(capitalize("Name"), "Name")

    def test_capitalize_empty_token(self):
        with self.assertRaises(ValueError):
            capitalize("")


class TestCamelize(unittest.TestCase):
    def test_primitive_keywords(self):
        self.assertEqual(camelize("string"), "String")
        self.assertEqual(camelize("integer"), "Int32")
        self.assertEqual(camelize("number"), "Float64")
        self.assertEqual(camelize("array"), "Array")
        self.assertEqual(camelize("object"), "Struct")

    def test_boolean_is_not_a_camelize_keyword(self):
        self.assertEqual(camelize("boolean"), "boolean")

    def test_single_segment_is_unchanged(self):
        self.assertEqual(camelize("pet"), "pet")
        self.assertEqual(camelize("Pet_Name"), "Pet_Name")

    def test_segments_are_capitalized_and_joined(self):
        self.assertEqual(camelize("pet owner"), "PetOwner")
        self.assertEqual(camelize("the big  pet"), "TheBigPet")


class TestCanonicalTypeName(unittest.TestCase):
    def test_primitives(self):
        expected = {
            "string": "String",
            "integer": "Int32",
            "number": "Float64",
            "boolean": "Bool",
            "object": "Struct",
            "array": "Array",
        }
        for tname, canonical in expected.items():
            self.assertEqual(canonical_type_name(tname), canonical)

    def test_unknown_passes_through(self):
        self.assertEqual(canonical_type_name("file"), "file")
        self.assertEqual(canonical_type_name("Pet"), "Pet")
        self.assertEqual(canonical_type_name("?"), "?")


if __name__ == "__main__":
    unittest.main()
