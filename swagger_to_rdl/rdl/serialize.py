"""
Serialization of an imported schema.

JSON output follows the RDL schema JSON layout. RDL source output is
rendered from the Jinja2 templates in ``swagger_to_rdl/templates``.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from pathlib import Path
from typing import Any

import jinja2

from .nodes import (
    AliasTypeDef,
    Annotations,
    ArrayTypeDef,
    EnumTypeDef,
    NumberTypeDef,
    Resource,
    Schema,
    StringTypeDef,
    StructTypeDef,
    TypeDef,
)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


def to_json(schema: Schema) -> str:
    """Pretty-print the schema as JSON with a stable 4-space indentation."""
    return json.dumps(schema.to_dict(), indent=4, ensure_ascii=False)


def status_name(code: str) -> str:
    """Map an HTTP status code to its symbolic name ("404" -> "NOT_FOUND")."""
    try:
        return HTTPStatus(int(code)).name
    except ValueError:
        return code


def _literal(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _options(options: list[str]) -> str:
    return f" ({', '.join(options)})" if options else ""


def _annotation_options(annotations: Annotations) -> list[str]:
    return [f"{k}={_literal(v)}" for k, v in annotations]


class RdlRenderer:
    """Renders a Schema as RDL source text."""

    def __init__(self):
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.prefix_template = self.jinja_env.get_template("prefix.rdl.jinja2")
        self.type_template = self.jinja_env.get_template("type.rdl.jinja2")
        self.resource_template = self.jinja_env.get_template("resource.rdl.jinja2")

    def render(self, schema: Schema, generation_comment: str | None = None) -> str:
        """
        Render the schema.

        Args:
            schema: The built schema
            generation_comment: Optional first comment line, e.g. the command that produced the file

        Returns:
            RDL source text
        """
        out = self.prefix_template.render(
            generation_comment=generation_comment,
            comment_lines=self._comment_lines(schema.comment),
            name=schema.name,
            version=schema.version,
            base=_literal(schema.base) if schema.base else None,
        )
        for t in schema.types:
            out += "\n" + self.type_template.render(self._prepare_type_context(t))
        for r in schema.resources:
            out += "\n" + self.resource_template.render(self._prepare_resource_context(r))
        return out

    def _comment_lines(self, comment: str | None) -> list[str]:
        return comment.splitlines() if comment else []

    def _prepare_type_context(self, t: TypeDef) -> dict[str, Any]:
        options = []
        fields = []
        elements = []
        supertype = t.type
        if isinstance(t, StructTypeDef):
            for f in t.fields:
                field_options = []
                if f.optional:
                    field_options.append("optional")
                if f.default is not None:
                    field_options.append(f"default={_literal(f.default)}")
                field_options.extend(_annotation_options(f.annotations))
                fields.append(
                    {
                        "type": f.type,
                        "name": f.name,
                        "options": _options(field_options),
                        "comment": " ".join(self._comment_lines(f.comment)),
                    }
                )
        elif isinstance(t, ArrayTypeDef):
            if t.items:
                supertype = f"Array<{t.items}>"
        elif isinstance(t, EnumTypeDef):
            elements = [{"symbol": e.symbol, "comment": " ".join(self._comment_lines(e.comment))} for e in t.elements]
        elif isinstance(t, StringTypeDef):
            if t.pattern is not None:
                options.append(f"pattern={_literal(t.pattern)}")
            if t.min_size is not None:
                options.append(f"minsize={t.min_size}")
            if t.max_size is not None:
                options.append(f"maxsize={t.max_size}")
        elif isinstance(t, NumberTypeDef):
            if t.min is not None:
                options.append(f"min={t.min}")
            if t.max is not None:
                options.append(f"max={t.max}")
        elif not isinstance(t, AliasTypeDef):
            raise ValueError(f"Cannot render type {t.name} of kind {t.variant}")
        options.extend(_annotation_options(t.annotations))
        return {
            "comment_lines": self._comment_lines(t.comment),
            "name": t.name,
            "supertype": supertype,
            "options": _options(options),
            "is_struct": isinstance(t, StructTypeDef),
            "is_enum": isinstance(t, EnumTypeDef),
            "fields": fields,
            "elements": elements,
        }

    def _prepare_resource_context(self, r: Resource) -> dict[str, Any]:
        path = r.path
        queries = [f"{i.query_param}={{{i.name}}}" for i in r.inputs if i.query_param]
        if queries:
            path += "?" + "&".join(queries)

        options = []
        if r.name:
            options.append(f"name={r.name}")
        options.extend(_annotation_options(r.annotations))

        inputs = []
        for i in r.inputs:
            input_options = []
            if i.optional:
                input_options.append("optional")
            if i.default is not None:
                input_options.append(f"default={_literal(i.default)}")
            if i.header:
                input_options.append(f"header={_literal(i.header)}")
            inputs.append(
                {
                    "type": i.type,
                    "name": i.name,
                    "options": _options(input_options),
                    "comment": " ".join(self._comment_lines(i.comment)),
                }
            )

        return {
            "comment_lines": self._comment_lines(r.comment),
            "type": r.type,
            "method": r.method,
            "path": _literal(path),
            "options": _options(options),
            "inputs": inputs,
            "expected": r.expected,
            "alternatives": [status_name(code) for code in r.alternatives],
            "exceptions": [
                {"type": e.type, "status": status_name(code), "comment": " ".join(self._comment_lines(e.comment))}
                for code, e in r.exceptions.items()
            ],
        }
