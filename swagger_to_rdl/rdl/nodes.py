"""
RDL schema node definitions.

These nodes represent the imported schema: named types and HTTP
resources. They are frozen; every member, annotations included, is set
when the node is constructed through the factory functions in
``builder``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

# Ordered (key, value) extension annotations, e.g. (("x_example", "42"),)
Annotations = tuple[tuple[str, str], ...]

# Types every schema can reference without declaring them
BASE_TYPES = frozenset(
    {
        "Any",
        "Bool",
        "Int8",
        "Int16",
        "Int32",
        "Int64",
        "Float32",
        "Float64",
        "Bytes",
        "String",
        "Timestamp",
        "Symbol",
        "UUID",
        "Array",
        "Map",
        "Struct",
        "Enum",
        "Union",
    }
)


def _annotations_dict(annotations: Annotations) -> dict[str, str]:
    return {k: v for k, v in annotations}


def _compact(d: dict[str, Any]) -> dict[str, Any]:
    """Drop members that are None, False or empty, as the RDL JSON form omits them."""
    return {k: v for k, v in d.items() if v is not None and v is not False and v != {} and v != [] and v != ""}


def _with_default(d: dict[str, Any], default: Any) -> dict[str, Any]:
    # Falsy defaults (0, false, "") are real values and must survive compaction
    if default is not None:
        d["default"] = default
    return d


@dataclass(frozen=True)
class TypeDef:
    """Base class for all named types."""

    variant: ClassVar[str] = ""

    type: str = ""  # Supertype, e.g. "Struct", "String", "Int32"
    name: str = ""
    comment: str | None = None
    annotations: Annotations = ()

    def references(self) -> list[str]:
        """Names of the types this type depends on."""
        return [self.type]

    def body(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to the RDL JSON form, wrapped in its variant key."""
        d = {
            "type": self.type,
            "name": self.name,
            "comment": self.comment,
            "annotations": _annotations_dict(self.annotations),
        }
        d = _compact(d)
        d.update(self.body())
        return {self.variant: d}


@dataclass(frozen=True)
class StructFieldDef:
    """A field of a struct type."""

    name: str = ""
    type: str = ""
    optional: bool = False
    default: Any = None
    comment: str | None = None
    annotations: Annotations = ()

    def to_dict(self) -> dict[str, Any]:
        d = _compact(
            {
                "name": self.name,
                "type": self.type,
                "optional": self.optional,
                "comment": self.comment,
                "annotations": _annotations_dict(self.annotations),
            }
        )
        return _with_default(d, self.default)


@dataclass(frozen=True)
class StructTypeDef(TypeDef):
    variant: ClassVar[str] = "StructTypeDef"

    fields: tuple[StructFieldDef, ...] = ()

    def references(self) -> list[str]:
        return [self.type] + [f.type for f in self.fields]

    def body(self) -> dict[str, Any]:
        # A struct always lists its fields, even when there are none
        return {"fields": [f.to_dict() for f in self.fields]}


@dataclass(frozen=True)
class ArrayTypeDef(TypeDef):
    variant: ClassVar[str] = "ArrayTypeDef"

    items: str | None = None

    def references(self) -> list[str]:
        return [self.type] + ([self.items] if self.items else [])

    def body(self) -> dict[str, Any]:
        return _compact({"items": self.items})


@dataclass(frozen=True)
class EnumElementDef:
    symbol: str = ""
    comment: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"symbol": self.symbol, "comment": self.comment})


@dataclass(frozen=True)
class EnumTypeDef(TypeDef):
    variant: ClassVar[str] = "EnumTypeDef"

    elements: tuple[EnumElementDef, ...] = ()

    def body(self) -> dict[str, Any]:
        return {"elements": [e.to_dict() for e in self.elements]}


@dataclass(frozen=True)
class StringTypeDef(TypeDef):
    variant: ClassVar[str] = "StringTypeDef"

    pattern: str | None = None
    min_size: int | None = None
    max_size: int | None = None

    def body(self) -> dict[str, Any]:
        return _compact({"pattern": self.pattern, "minSize": self.min_size, "maxSize": self.max_size})


@dataclass(frozen=True)
class NumberTypeDef(TypeDef):
    variant: ClassVar[str] = "NumberTypeDef"

    min: int | float | None = None
    max: int | float | None = None

    def body(self) -> dict[str, Any]:
        return _compact({"min": self.min, "max": self.max})


@dataclass(frozen=True)
class AliasTypeDef(TypeDef):
    """A new name for an existing type, with no restriction of its own."""

    variant: ClassVar[str] = "AliasTypeDef"


@dataclass(frozen=True)
class ExceptionDef:
    type: str = ""
    comment: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"type": self.type, "comment": self.comment})


@dataclass(frozen=True)
class ResourceInput:
    """A resource input: path parameter, query parameter, header or body."""

    name: str = ""
    type: str = ""
    path_param: bool = False
    query_param: str | None = None
    header: str | None = None
    optional: bool = False
    default: Any = None
    comment: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = _compact(
            {
                "name": self.name,
                "type": self.type,
                "comment": self.comment,
                "pathParam": self.path_param,
                "queryParam": self.query_param,
                "header": self.header,
                "optional": self.optional,
            }
        )
        return _with_default(d, self.default)


@dataclass(frozen=True)
class Resource:
    """An HTTP resource: one method on one path template."""

    type: str = ""  # Result type
    method: str = ""
    path: str = ""
    comment: str | None = None
    name: str | None = None
    expected: str = "OK"
    alternatives: tuple[str, ...] = ()
    exceptions: dict[str, ExceptionDef] = field(default_factory=dict)
    inputs: tuple[ResourceInput, ...] = ()
    annotations: Annotations = ()

    def references(self) -> list[str]:
        return [self.type] + [i.type for i in self.inputs] + [e.type for e in self.exceptions.values()]

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "type": self.type,
                "method": self.method,
                "path": self.path,
                "comment": self.comment,
                "inputs": [i.to_dict() for i in self.inputs],
                "expected": self.expected,
                "alternatives": list(self.alternatives),
                "exceptions": {code: e.to_dict() for code, e in self.exceptions.items()},
                "name": self.name,
                "annotations": _annotations_dict(self.annotations),
            }
        )


@dataclass(frozen=True)
class Schema:
    """The complete imported schema."""

    name: str = ""
    comment: str | None = None
    version: int | None = None
    base: str | None = None
    types: tuple[TypeDef, ...] = ()
    resources: tuple[Resource, ...] = ()

    def get_type(self, name: str) -> TypeDef | None:
        for t in self.types:
            if t.name == name:
                return t
        return None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "name": self.name,
                "comment": self.comment,
                "version": self.version,
                "base": self.base,
                "types": [t.to_dict() for t in self.types],
                "resources": [r.to_dict() for r in self.resources],
            }
        )
