"""
Importer module.

Maps Swagger definitions and operations onto RDL types and resources.
"""

from __future__ import annotations

from .importer import SwaggerImporter, swagger_to_schema
from .resources import ResourceImporter, validate_path_template
from .type_names import import_type_name, normalize_type_name, requires_type_def
from .types import TypeImporter

__all__ = [
    "SwaggerImporter",
    "swagger_to_schema",
    "ResourceImporter",
    "validate_path_template",
    "TypeImporter",
    "import_type_name",
    "normalize_type_name",
    "requires_type_def",
]
