"""Swagger to RDL importer

A Python package for translating Swagger/OpenAPI 2.0 documents into
RDL schemas: named types and HTTP resources, serialized as JSON or as
RDL source.
"""

__version__ = "1.0.0"

from .config import ImporterConfig, OutputConfig, OutputFormat, OutputMode
from .errors import PathTemplateError, SchemaBuildError, SwaggerParseError, SwaggerToRdlError
from .importer import SwaggerImporter, swagger_to_schema
from .rdl import RdlRenderer, Schema, to_json
from .swagger import SwaggerDoc, SwaggerParser

__all__ = [
    "SwaggerImporter",
    "swagger_to_schema",
    "SwaggerParser",
    "SwaggerDoc",
    "Schema",
    "RdlRenderer",
    "to_json",
    "ImporterConfig",
    "OutputConfig",
    "OutputFormat",
    "OutputMode",
    "SwaggerToRdlError",
    "SwaggerParseError",
    "PathTemplateError",
    "SchemaBuildError",
]
