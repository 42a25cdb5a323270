"""
Utility functions for turning Swagger names into RDL identifiers.
"""

# Swagger primitive keywords that camelize to a fixed RDL base type
_CAMELIZED_PRIMITIVES = {
    "string": "String",
    "integer": "Int32",
    "number": "Float64",
    "array": "Array",
    "object": "Struct",
}

# JSON schema primitive types and their canonical RDL type names
CANONICAL_TYPE_NAMES = {
    "string": "String",
    "integer": "Int32",
    "number": "Float64",
    "boolean": "Bool",
    "object": "Struct",
    "array": "Array",
}


def capitalize(token: str) -> str:
    """Uppercase the first character of a token, leaving the rest alone.

    Unlike ``str.capitalize`` the tail is not lowercased, so ``"petId"``
    becomes ``"PetId"``.
    """
    if not token:
        raise ValueError("Cannot capitalize an empty token")
    return token[0].upper() + token[1:]


def camelize(raw: str) -> str:
    """Convert a Swagger name into an RDL type name.

    Examples:
        "string" -> "String"
        "integer" -> "Int32"
        "pet owner" -> "PetOwner"
        "pet" -> "pet"

    Args:
        raw: The raw name, possibly space-separated

    Returns:
        The camelized name
    """
    if raw in _CAMELIZED_PRIMITIVES:
        return _CAMELIZED_PRIMITIVES[raw]
    segments = raw.split(" ")
    if len(segments) == 1:
        return segments[0]
    return "".join(capitalize(segment) for segment in segments if segment)


def canonical_type_name(tname: str) -> str:
    """Map a JSON schema primitive to its RDL type name; pass others through."""
    return CANONICAL_TYPE_NAMES.get(tname, tname)
