"""
Type importer: turns Swagger definitions into named RDL types.

Struct properties that carry constraints get a synthesized type of their
own, named ``<Parent>_<Field>``, which is registered before the struct
that references it.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from ..config import ImporterConfig
from ..errors import SchemaBuildError
from ..rdl.builder import (
    SchemaBuilder,
    new_array_type,
    new_enum_type,
    new_number_type,
    new_string_type,
    new_struct_field,
    new_struct_type,
)
from ..rdl.nodes import EnumElementDef, StructFieldDef, TypeDef
from ..swagger.nodes import TypeFragment
from ..utils import camelize, capitalize
from .type_names import normalize_type_name, requires_type_def

logger = logging.getLogger(__name__)

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")


def annotation_value(value: Any) -> str:
    """Format an annotation value: strings as-is, booleans as true/false, the rest as JSON with sorted keys."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


def enum_symbol(value: Any) -> str:
    """Turn an enum value into an identifier: other characters become "_", a leading digit gets a "_" prefix."""
    symbol = _NON_IDENTIFIER.sub("_", str(value))
    if not symbol or symbol[0].isdigit():
        symbol = "_" + symbol
    return symbol


def add_annotation(annotations: list[tuple[str, str]], name: str, value: Any) -> None:
    if value is not None:
        annotations.append((name, annotation_value(value)))


def add_prefixed_annotations(annotations: list[tuple[str, str]], prefix: str, entries: dict[str, Any] | None) -> None:
    """Add one ``<prefix><key>`` annotation per entry, in key order."""
    for k, v in sorted((entries or {}).items()):
        add_annotation(annotations, prefix + k, v)


def effective_kind(fragment: TypeFragment) -> str | None:
    """The explicit type, else object/array inferred from properties/items, else None."""
    if fragment.type is not None:
        return fragment.type
    if fragment.properties is not None:
        return "object"
    if fragment.items is not None:
        return "array"
    return None


class TypeImporter:
    """Imports Swagger type definitions into a SchemaBuilder."""

    def __init__(self, builder: SchemaBuilder, config: ImporterConfig):
        """
        Initialize the importer.

        Args:
            builder: The schema builder receiving the types
            config: Importer configuration
        """
        self.builder = builder
        self.config = config

    def import_type(self, name: str, fragment: TypeFragment, from_field_spec: bool = False) -> TypeDef | None:
        """
        Import one type definition, and the types synthesized for its fields.

        Args:
            name: The definition name (camelized before use)
            fragment: The definition
            from_field_spec: Whether this type is synthesized from a struct property

        Returns:
            The registered type, or None if the definition was skipped
        """
        if name in self.config.reserved_types or name in self.config.ignore_types:
            logger.debug("Skipping reserved or ignored type %s", name)
            return None
        name = camelize(name)

        kind = effective_kind(fragment)
        if kind == "object":
            t = self._import_struct(name, fragment, from_field_spec)
        elif kind == "array":
            t = self._import_array(name, fragment, from_field_spec)
        elif kind == "string" and fragment.enum is not None:
            t = self._import_enum(name, fragment, from_field_spec)
        elif kind == "string":
            t = self._import_string(name, fragment, from_field_spec)
        elif kind in ("integer", "number"):
            t = self._import_number(name, fragment, kind, from_field_spec)
        else:
            logger.warning("Unsupported top level type %s: %s", name, kind or "no type")
            return None

        self.builder.add_type(t)
        return t

    def _comment(self, fragment: TypeFragment, from_field_spec: bool) -> str | None:
        # The property's own field already carries the description
        return None if from_field_spec else fragment.description

    def _type_annotations(self, fragment: TypeFragment, from_field_spec: bool) -> list[tuple[str, str]]:
        annotations: list[tuple[str, str]] = []
        if not from_field_spec:
            add_annotation(annotations, "x_example", fragment.example)
        return annotations

    def _import_struct(self, name: str, fragment: TypeFragment, from_field_spec: bool) -> TypeDef:
        required = set(fragment.required)
        fields = [self._import_field(name, fname, fdef, required) for fname, fdef in sorted((fragment.properties or {}).items())]
        return new_struct_type(
            name,
            fields,
            comment=fragment.description,
            annotations=tuple(self._type_annotations(fragment, from_field_spec)),
        )

    def _import_field(self, struct_name: str, fname: str, fdef: TypeFragment, required: set[str]) -> StructFieldDef:
        if not fname:
            raise SchemaBuildError(f"Empty property name in {struct_name}")
        ftype, fbase = normalize_type_name(fdef)
        if requires_type_def(fdef):
            synthesized = self.import_type(f"{struct_name}_{capitalize(fname)}", fdef, from_field_spec=True)
            if synthesized is not None:
                ftype = synthesized.name
            else:
                logger.warning("Constraints on %s.%s (%s) are dropped, keeping type %s", struct_name, fname, fbase, ftype)

        annotations: list[tuple[str, str]] = []
        add_annotation(annotations, "x_example", fdef.example)
        return new_struct_field(
            fname,
            ftype,
            optional=fname not in required,
            default=fdef.default,
            comment=fdef.description,
            annotations=tuple(annotations),
        )

    def _import_array(self, name: str, fragment: TypeFragment, from_field_spec: bool) -> TypeDef:
        items = normalize_type_name(fragment.items)[0] if fragment.items is not None else None

        annotations: list[tuple[str, str]] = []
        add_annotation(annotations, "x_minItems", fragment.min_items)
        annotations.extend(self._type_annotations(fragment, from_field_spec))
        add_prefixed_annotations(annotations, "x_constraint_", fragment.x_constraint)

        return new_array_type(
            name,
            items,
            comment=self._comment(fragment, from_field_spec),
            annotations=tuple(annotations),
        )

    def _import_enum(self, name: str, fragment: TypeFragment, from_field_spec: bool) -> TypeDef:
        elements = []
        for value in fragment.enum or ():
            symbol = enum_symbol(value)
            # The raw value is kept as the comment of a rewritten symbol
            elements.append(EnumElementDef(symbol=symbol, comment=None if symbol == str(value) else str(value)))
        return new_enum_type(name, elements, comment=self._comment(fragment, from_field_spec))

    def _import_string(self, name: str, fragment: TypeFragment, from_field_spec: bool) -> TypeDef:
        annotations = self._type_annotations(fragment, from_field_spec)
        add_prefixed_annotations(annotations, "x_format_", fragment.x_format)
        add_prefixed_annotations(annotations, "x_constraint_", fragment.x_constraint)

        return new_string_type(
            name,
            pattern=fragment.pattern or None,
            min_size=fragment.min_length if fragment.min_length >= 0 else None,
            max_size=fragment.max_length if fragment.max_length >= 0 else None,
            comment=self._comment(fragment, from_field_spec),
            annotations=tuple(annotations),
        )

    def _import_number(self, name: str, fragment: TypeFragment, kind: str, from_field_spec: bool) -> TypeDef:
        minimum = fragment.minimum
        for k, v in sorted((fragment.x_constraint or {}).items()):
            if k == "positive":
                if v is True and minimum is None:
                    minimum = 0
            elif kind == "number":
                logger.warning("Unknown constraint on %s: %s=%r", name, k, v)

        return new_number_type(
            "Int32" if kind == "integer" else "Float64",
            name,
            min=minimum,
            max=fragment.maximum,
            comment=self._comment(fragment, from_field_spec),
            annotations=tuple(self._type_annotations(fragment, from_field_spec)),
        )
