"""
Node definitions for a parsed Swagger 2.0 document.

These records hold only what the importer reads. Every optional member
is explicit: an absent key is ``None`` (or ``-1`` for integer limits),
never a missing attribute.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Keys whose presence on a struct property calls for a dedicated named type
CONSTRAINT_KEYS = (
    "pattern",
    "x-constraint",
    "x-format",
    "maxLength",
    "maximum",
    "minLength",
    "minimum",
    "minItems",
    "maxItems",
    "enum",
)

# HTTP verbs of a path item, in import order
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


@dataclass(frozen=True)
class TypeFragment:
    """A JSON-schema-like type description (definition, property, items, schema)."""

    type: str | None = None  # "object", "array", "string", "integer", "number", "boolean"
    properties: dict[str, TypeFragment] | None = None
    items: TypeFragment | None = None
    ref: str | None = None  # "$ref"
    required: tuple[str, ...] = ()
    enum: tuple[Any, ...] | None = None

    # Constraints
    pattern: str | None = None
    max_length: int = -1
    min_length: int = -1
    maximum: float | None = None
    minimum: float | None = None
    min_items: Any = None
    max_items: Any = None

    # Metadata
    example: Any = None
    default: Any = None
    description: str | None = None
    x_constraint: dict[str, Any] | None = None
    x_format: dict[str, Any] | None = None

    # Raw keys present in the source mapping
    keys: frozenset[str] = field(default_factory=frozenset)

    def has(self, key: str) -> bool:
        """Whether the source mapping carried ``key`` with a non-null value."""
        return key in self.keys

    def has_constraints(self) -> bool:
        """Whether any constraint or metadata key that needs its own type is present."""
        return any(self.has(key) for key in CONSTRAINT_KEYS)


@dataclass(frozen=True)
class Parameter:
    """An operation parameter."""

    name: str = ""
    location: str = ""  # "in": path / query / header / body / formData
    type: str | None = None
    schema: TypeFragment = field(default_factory=TypeFragment)
    description: str | None = None
    required: bool = False
    default: Any = None


@dataclass(frozen=True)
class Response:
    """A response entry, keyed by status code or "default" in its operation."""

    description: str | None = None
    schema: TypeFragment = field(default_factory=TypeFragment)


@dataclass(frozen=True)
class Operation:
    """An HTTP operation bound to a path and verb."""

    operation_id: str | None = None
    summary: str | None = None
    tags: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()
    parameters: tuple[Parameter, ...] = ()
    responses: dict[str, Response] = field(default_factory=dict)


@dataclass(frozen=True)
class PathItem:
    """All operations bound to one path template, keyed by lowercase verb."""

    operations: dict[str, Operation] = field(default_factory=dict)


@dataclass(frozen=True)
class Info:
    """The document's ``info`` section."""

    title: str = ""
    description: str = ""
    version: str = ""


@dataclass(frozen=True)
class SwaggerDoc:
    """A parsed Swagger 2.0 document."""

    swagger: str = "2.0"
    info: Info = field(default_factory=Info)
    base_path: str = ""
    definitions: dict[str, TypeFragment] = field(default_factory=dict)
    paths: dict[str, PathItem] = field(default_factory=dict)
