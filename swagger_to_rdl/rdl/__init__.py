"""
RDL schema module.

Contains the schema node definitions, their validated factory functions,
the schema builder and the JSON / RDL serializers.
"""

from __future__ import annotations

from .builder import (
    SchemaBuilder,
    new_array_type,
    new_enum_type,
    new_number_type,
    new_resource,
    new_resource_input,
    new_string_type,
    new_struct_field,
    new_struct_type,
)
from .nodes import (
    BASE_TYPES,
    AliasTypeDef,
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
from .serialize import RdlRenderer, status_name, to_json

__all__ = [
    "BASE_TYPES",
    "AliasTypeDef",
    "ArrayTypeDef",
    "EnumElementDef",
    "EnumTypeDef",
    "ExceptionDef",
    "NumberTypeDef",
    "Resource",
    "ResourceInput",
    "Schema",
    "StringTypeDef",
    "StructFieldDef",
    "StructTypeDef",
    "TypeDef",
    "SchemaBuilder",
    "new_array_type",
    "new_enum_type",
    "new_number_type",
    "new_resource",
    "new_resource_input",
    "new_string_type",
    "new_struct_field",
    "new_struct_type",
    "RdlRenderer",
    "status_name",
    "to_json",
]
