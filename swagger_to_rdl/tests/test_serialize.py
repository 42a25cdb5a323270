"""
Tests for JSON and RDL serialization of a schema.
"""

import json

import pytest

from swagger_to_rdl.config import OutputFormat
from swagger_to_rdl.rdl import (
    EnumElementDef,
    ExceptionDef,
    RdlRenderer,
    SchemaBuilder,
    new_array_type,
    new_enum_type,
    new_number_type,
    new_resource,
    new_resource_input,
    new_string_type,
    new_struct_field,
    new_struct_type,
    status_name,
    to_json,
)
from swagger_to_rdl.writer import AtomicWriter


@pytest.fixture
def schema():
    builder = SchemaBuilder("petstore", comment="A sample pet store.", version=1, base="/v1")
    builder.add_type(new_string_type("Pet_Name", max_size=30))
    builder.add_type(new_enum_type("Pet_Status", [EnumElementDef(symbol="available"), EnumElementDef(symbol="sold")]))
    builder.add_type(
        new_struct_type(
            "Pet",
            [
                new_struct_field("id", "Int32", comment="Unique id"),
                new_struct_field("name", "Pet_Name", optional=True, annotations=(("x_example", "Rex"),)),
                new_struct_field("status", "Pet_Status", optional=True),
                new_struct_field("vaccinated", "Bool", optional=True, default=False),
            ],
            comment="A pet in the store.",
        )
    )
    builder.add_type(new_array_type("Pets", "Pet", annotations=(("x_minItems", "0"),)))
    builder.add_type(new_number_type("Float64", "Ratio", min=0, max=1))
    builder.add_type(new_struct_type("Error", [new_struct_field("message", "String", optional=True)]))
    builder.add_resource(
        new_resource(
            "Pet",
            "GET",
            "/pets/{petId}",
            inputs=[
                new_resource_input("petId", "Int32", path_param=True),
                new_resource_input("verbose", "Bool", query_param="verbose", optional=True, default=False),
                new_resource_input("X_Request_Id", "String", header="X-Request-Id", optional=True),
            ],
            comment="Get a pet",
            name="getPet",
            alternatives=["200"],
            exceptions={"404": ExceptionDef(type="Error", comment="Not found")},
            annotations=(("x_tags", "pets"),),
        )
    )
    return builder.build_paranoid()


class TestJson:
    def test_layout(self, schema):
        out = to_json(schema)
        assert out.startswith('{\n    "name": "petstore",\n')
        d = json.loads(out)
        assert list(d) == ["name", "comment", "version", "base", "types", "resources"]
        assert [list(t)[0] for t in d["types"]] == [
            "StringTypeDef",
            "EnumTypeDef",
            "StructTypeDef",
            "ArrayTypeDef",
            "NumberTypeDef",
            "StructTypeDef",
        ]

    def test_falsy_defaults_are_kept(self, schema):
        d = json.loads(to_json(schema))
        vaccinated = d["types"][2]["StructTypeDef"]["fields"][3]
        assert vaccinated == {"name": "vaccinated", "type": "Bool", "optional": True, "default": False}

        verbose = d["resources"][0]["inputs"][1]
        assert verbose == {"name": "verbose", "type": "Bool", "queryParam": "verbose", "optional": True, "default": False}

    def test_resource(self, schema):
        r = json.loads(to_json(schema))["resources"][0]
        assert list(r) == [
            "type",
            "method",
            "path",
            "comment",
            "inputs",
            "expected",
            "alternatives",
            "exceptions",
            "name",
            "annotations",
        ]
        assert r["inputs"][0] == {"name": "petId", "type": "Int32", "pathParam": True}
        assert r["inputs"][2] == {"name": "X_Request_Id", "type": "String", "header": "X-Request-Id", "optional": True}
        assert r["exceptions"] == {"404": {"type": "Error", "comment": "Not found"}}
        assert r["annotations"] == {"x_tags": "pets"}

    def test_number_zero_bound(self, schema):
        ratio = json.loads(to_json(schema))["types"][4]["NumberTypeDef"]
        assert (ratio["min"], ratio["max"]) == (0, 1)


class TestRdl:
    def test_render(self, schema):
        lines = RdlRenderer().render(schema, generation_comment="Generated by swagger_to_rdl").splitlines()

        assert lines[:5] == [
            "// Generated by swagger_to_rdl",
            "// A sample pet store.",
            "name petstore;",
            "version 1;",
            'base "/v1";',
        ]
        assert "type Pet_Name String (maxsize=30);" in lines
        assert "type Pets Array<Pet> (x_minItems=\"0\");" in lines
        assert "type Ratio Float64 (min=0, max=1);" in lines

        start = lines.index("type Pet_Status Enum {")
        assert lines[start : start + 4] == ["type Pet_Status Enum {", "    available", "    sold", "}"]

        start = lines.index("// A pet in the store.")
        assert lines[start : start + 7] == [
            "// A pet in the store.",
            "type Pet Struct {",
            "    Int32 id; // Unique id",
            '    Pet_Name name (optional, x_example="Rex");',
            "    Pet_Status status (optional);",
            "    Bool vaccinated (optional, default=false);",
            "}",
        ]

    def test_render_resource(self, schema):
        lines = RdlRenderer().render(schema).splitlines()
        start = lines.index("// Get a pet")
        assert lines[start:] == [
            "// Get a pet",
            'resource Pet GET "/pets/{petId}?verbose={verbose}" (name=getPet, x_tags="pets") {',
            "    Int32 petId;",
            "    Bool verbose (optional, default=false);",
            '    String X_Request_Id (optional, header="X-Request-Id");',
            "    expected OK, OK;",
            "    exceptions {",
            "        Error NOT_FOUND; // Not found",
            "    }",
            "}",
        ]

    def test_multi_line_exception_comment_stays_on_one_line(self):
        builder = SchemaBuilder("test")
        builder.add_resource(
            new_resource(
                "Any",
                "GET",
                "/pets",
                exceptions={"404": ExceptionDef(type="String", comment="Not found.\nSee {docs for details")},
            )
        )
        out = RdlRenderer().render(builder.build_paranoid())
        assert "        String NOT_FOUND; // Not found. See {docs for details" in out.splitlines()
        AtomicWriter().validate(out, OutputFormat.RDL)

    def test_render_without_header_options(self):
        out = RdlRenderer().render(SchemaBuilder("empty").build_paranoid())
        assert out == "name empty;\n"


def test_status_name():
    assert status_name("404") == "NOT_FOUND"
    assert status_name("201") == "CREATED"
    assert status_name("299") == "299"
    assert status_name("2XX") == "2XX"
