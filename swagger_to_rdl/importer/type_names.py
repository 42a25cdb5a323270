"""
Type name resolution for use-sites (fields, items, responses, parameters).

These functions only compute the name another entity should reference;
they never register a type.
"""

from __future__ import annotations

from ..swagger.nodes import TypeFragment
from ..utils import camelize, canonical_type_name

DEFINITIONS_PREFIX = "#/definitions/"

# Placeholder name for a fragment with no type information at all
UNKNOWN_TYPE = "?"


def local_ref_name(fragment: TypeFragment) -> str | None:
    """Return the camelized target of a ``#/definitions/`` ref, or None for any other ref shape."""
    if fragment.ref is not None and fragment.ref.startswith(DEFINITIONS_PREFIX):
        return camelize(fragment.ref[len(DEFINITIONS_PREFIX) :])
    return None


def import_type_name(fragment: TypeFragment, simple_type: str | None) -> str:
    """
    Resolve the type name to reference for a fragment.

    Args:
        fragment: The inline type fragment (a schema, items, ...)
        simple_type: Fallback type hint, e.g. a parameter's ``type``

    Returns:
        A resolved definition name, a canonical primitive name, or the
        camelized fallback hint
    """
    ref_name = local_ref_name(fragment)
    if ref_name is not None:
        return ref_name
    if fragment.type is not None:
        return canonical_type_name(fragment.type)
    return canonical_type_name(camelize(simple_type or UNKNOWN_TYPE))


def base_kind(fragment: TypeFragment) -> str:
    """The canonical primitive a fragment is built on ("Any" when nothing says)."""
    if fragment.type is not None:
        return canonical_type_name(fragment.type)
    if fragment.properties is not None:
        return "Struct"
    if fragment.items is not None:
        return "Array"
    return "Any"


def normalize_type_name(fragment: TypeFragment) -> tuple[str, str]:
    """
    Resolve a struct field's type name together with its base kind.

    The base kind is the primitive the field is built on, or Struct, Array
    or Any when the fragment has no explicit type.

    Returns:
        (type_name, base_kind)
    """
    kind = base_kind(fragment)
    ref_name = local_ref_name(fragment)
    return (ref_name if ref_name is not None else kind), kind


def requires_type_def(fragment: TypeFragment) -> bool:
    """Whether a struct field needs a dedicated named type to carry its constraints."""
    return fragment.has_constraints()
