"""
Validated factory functions for RDL schema nodes, and the schema builder.

Each ``new_*`` function takes the complete description of one entity and
returns the frozen node, or raises SchemaBuildError. SchemaBuilder only
accumulates finished nodes; ``build_paranoid`` performs the schema-wide
checks that no single node can do on its own.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from ..errors import SchemaBuildError
from .nodes import (
    BASE_TYPES,
    AliasTypeDef,
    Annotations,
    ArrayTypeDef,
    EnumElementDef,
    EnumTypeDef,
    ExceptionDef,
    NumberTypeDef,
    Resource,
    ResourceInput,
    Schema,
    StringTypeDef,
    StructFieldDef,
    StructTypeDef,
    TypeDef,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TYPE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")

NUMBER_TYPES = ("Int8", "Int16", "Int32", "Int64", "Float32", "Float64")
HTTP_VERBS = ("GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH")


def _check_type_name(name: str) -> None:
    if not _TYPE_NAME.match(name or ""):
        raise SchemaBuildError(f"Invalid type name: {name!r}")
    if name in BASE_TYPES:
        raise SchemaBuildError(f"Type name {name!r} redefines a base type")


def _check_identifier(name: str, what: str) -> None:
    if not _IDENTIFIER.match(name or ""):
        raise SchemaBuildError(f"Invalid {what} name: {name!r}")


def _check_type_ref(type_name: str, context: str) -> None:
    if not type_name:
        raise SchemaBuildError(f"Missing type in {context}")


def new_struct_field(
    name: str,
    type_name: str,
    optional: bool = False,
    default: Any = None,
    comment: str | None = None,
    annotations: Annotations = (),
) -> StructFieldDef:
    _check_identifier(name, "field")
    _check_type_ref(type_name, f"field {name}")
    return StructFieldDef(
        name=name,
        type=type_name,
        optional=optional,
        default=default,
        comment=comment or None,
        annotations=tuple(annotations),
    )


def new_struct_type(
    name: str,
    fields: Iterable[StructFieldDef],
    comment: str | None = None,
    annotations: Annotations = (),
) -> StructTypeDef:
    """Create a struct type. An empty ``fields`` still yields an explicit empty field list."""
    _check_type_name(name)
    fields = tuple(fields)
    seen = set()
    for f in fields:
        if f.name in seen:
            raise SchemaBuildError(f"Duplicate field {f.name!r} in struct {name}")
        seen.add(f.name)
    return StructTypeDef(type="Struct", name=name, comment=comment or None, annotations=tuple(annotations), fields=fields)


def new_array_type(
    name: str,
    items: str | None = None,
    comment: str | None = None,
    annotations: Annotations = (),
) -> ArrayTypeDef:
    _check_type_name(name)
    return ArrayTypeDef(type="Array", name=name, comment=comment or None, annotations=tuple(annotations), items=items or None)


def new_enum_type(
    name: str,
    elements: Iterable[EnumElementDef],
    comment: str | None = None,
    annotations: Annotations = (),
) -> EnumTypeDef:
    _check_type_name(name)
    elements = tuple(elements)
    if not elements:
        raise SchemaBuildError(f"Enum {name} has no elements")
    seen = set()
    for e in elements:
        _check_identifier(e.symbol, f"enum {name} symbol")
        if e.symbol in seen:
            raise SchemaBuildError(f"Duplicate symbol {e.symbol!r} in enum {name}")
        seen.add(e.symbol)
    return EnumTypeDef(type="Enum", name=name, comment=comment or None, annotations=tuple(annotations), elements=elements)


def new_string_type(
    name: str,
    pattern: str | None = None,
    min_size: int | None = None,
    max_size: int | None = None,
    comment: str | None = None,
    annotations: Annotations = (),
) -> StringTypeDef | AliasTypeDef:
    """Create a restricted string type, or an alias of String when nothing restricts it."""
    _check_type_name(name)
    if min_size is not None and max_size is not None and min_size > max_size:
        raise SchemaBuildError(f"String type {name} has minSize {min_size} > maxSize {max_size}")
    if pattern is None and min_size is None and max_size is None:
        return AliasTypeDef(type="String", name=name, comment=comment or None, annotations=tuple(annotations))
    return StringTypeDef(
        type="String",
        name=name,
        comment=comment or None,
        annotations=tuple(annotations),
        pattern=pattern,
        min_size=min_size,
        max_size=max_size,
    )


def new_number_type(
    base: str,
    name: str,
    min: int | float | None = None,
    max: int | float | None = None,
    comment: str | None = None,
    annotations: Annotations = (),
) -> NumberTypeDef:
    if base not in NUMBER_TYPES:
        raise SchemaBuildError(f"Invalid number base type {base!r} for {name}")
    _check_type_name(name)
    if min is not None and max is not None and min > max:
        raise SchemaBuildError(f"Number type {name} has min {min} > max {max}")
    return NumberTypeDef(type=base, name=name, comment=comment or None, annotations=tuple(annotations), min=min, max=max)


def new_resource_input(
    name: str,
    type_name: str,
    path_param: bool = False,
    query_param: str | None = None,
    header: str | None = None,
    optional: bool = False,
    default: Any = None,
    comment: str | None = None,
) -> ResourceInput:
    _check_identifier(name, "input")
    _check_type_ref(type_name, f"input {name}")
    return ResourceInput(
        name=name,
        type=type_name,
        path_param=path_param,
        query_param=query_param or None,
        header=header or None,
        optional=optional,
        default=default,
        comment=comment or None,
    )


def new_resource(
    type_name: str,
    method: str,
    path: str,
    inputs: Iterable[ResourceInput] = (),
    comment: str | None = None,
    name: str | None = None,
    expected: str = "OK",
    alternatives: Iterable[str] = (),
    exceptions: dict[str, ExceptionDef] | None = None,
    annotations: Annotations = (),
) -> Resource:
    if method not in HTTP_VERBS:
        raise SchemaBuildError(f"Invalid HTTP method {method!r} for {path}")
    _check_type_ref(type_name, f"resource {method} {path}")
    inputs = tuple(inputs)
    seen = set()
    for i in inputs:
        if i.name in seen:
            raise SchemaBuildError(f"Duplicate input {i.name!r} in {method} {path}")
        seen.add(i.name)
    return Resource(
        type=type_name,
        method=method,
        path=path,
        comment=comment or None,
        name=name or None,
        expected=expected,
        alternatives=tuple(alternatives),
        exceptions=dict(exceptions or {}),
        inputs=inputs,
        annotations=tuple(annotations),
    )


class SchemaBuilder:
    """Accumulates finished types and resources into a Schema."""

    def __init__(self, name: str, comment: str | None = None, version: int | None = None, base: str | None = None):
        self.name = name
        self.comment = comment
        self.version = version
        self.base = base
        self._types: list[TypeDef] = []
        self._type_names: set[str] = set()
        self._resources: list[Resource] = []

    def has_type(self, name: str) -> bool:
        return name in self._type_names

    def add_type(self, t: TypeDef) -> None:
        if t.name in self._type_names:
            raise SchemaBuildError(f"Duplicate type: {t.name}")
        self._types.append(t)
        self._type_names.add(t.name)

    def add_resource(self, r: Resource) -> None:
        for other in self._resources:
            if other.method == r.method and other.path == r.path:
                raise SchemaBuildError(f"Duplicate resource: {r.method} {r.path}")
        self._resources.append(r)

    def build_paranoid(self) -> Schema:
        """
        Validate cross references and build the schema.

        Types are ordered so that every type follows the types it refers to,
        keeping registration order wherever it already satisfies that.

        Raises:
            SchemaBuildError: If any type or resource refers to an undefined type
        """
        for t in self._types:
            for ref in t.references():
                self._check_defined(ref, f"type {t.name}")
        for r in self._resources:
            for ref in r.references():
                self._check_defined(ref, f"resource {r.method} {r.path}")

        return Schema(
            name=self.name,
            comment=self.comment or None,
            version=self.version,
            base=self.base or None,
            types=tuple(self._ordered_types()),
            resources=tuple(self._resources),
        )

    def _check_defined(self, ref: str, context: str) -> None:
        if ref not in BASE_TYPES and ref not in self._type_names:
            raise SchemaBuildError(f"Undefined type {ref!r} referenced by {context}")

    def _ordered_types(self) -> list[TypeDef]:
        by_name = {t.name: t for t in self._types}
        ordered: list[TypeDef] = []
        state: dict[str, bool] = {}  # False while visiting, True when placed

        def visit(t: TypeDef) -> None:
            if t.name in state:
                # Already placed, or part of a reference cycle
                return
            state[t.name] = False
            for ref in t.references():
                if ref in by_name:
                    visit(by_name[ref])
            state[t.name] = True
            ordered.append(t)

        for t in self._types:
            visit(t)
        return ordered
