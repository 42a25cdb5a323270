"""
Swagger importer that builds an RDL schema.

Phase 2 of the import: map every definition to a type and every
operation to a resource, then let the schema builder validate the whole.
"""

from __future__ import annotations

import logging

from ..config import ImporterConfig
from ..rdl.builder import SchemaBuilder
from ..rdl.nodes import Schema
from ..swagger.nodes import HTTP_METHODS, SwaggerDoc
from .resources import ResourceImporter
from .types import TypeImporter

logger = logging.getLogger(__name__)


def schema_name(name: str, title: str) -> str:
    """Use ``X`` from a title of the form "The X API", else ``name``."""
    if title.startswith("The ") and title.endswith(" API") and len(title) > len("The  API"):
        return title[4:-4]
    return name


def schema_version(version: str) -> int | None:
    try:
        return int(version)
    except ValueError:
        return None


class SwaggerImporter:
    """Imports a parsed Swagger document into an RDL schema."""

    def __init__(self, config: ImporterConfig | None = None):
        self.config = config or ImporterConfig()

    def import_doc(self, name: str, doc: SwaggerDoc) -> Schema:
        """
        Import a document.

        Definitions, paths and verbs are visited in a fixed order so that
        identical input always yields identical output.

        Args:
            name: Schema name, used unless the title is "The <X> API"
            doc: The parsed document

        Returns:
            The validated schema

        Raises:
            PathTemplateError: If a path template does not match its inputs
            SchemaBuildError: If the schema fails structural validation
        """
        builder = SchemaBuilder(
            schema_name(name, doc.info.title),
            comment=doc.info.description or None,
            version=schema_version(doc.info.version),
            base=doc.base_path or None,
        )
        types = TypeImporter(builder, self.config)
        resources = ResourceImporter(builder, self.config)

        for def_name, definition in sorted(doc.definitions.items()):
            types.import_type(def_name, definition)

        for path, item in sorted(doc.paths.items()):
            for method in HTTP_METHODS:
                if method in item.operations:
                    resources.import_resource(path, method, item.operations[method])

        schema = builder.build_paranoid()
        logger.info("Imported %d types and %d resources into %s", len(schema.types), len(schema.resources), schema.name)
        return schema


def swagger_to_schema(name: str, doc: SwaggerDoc, config: ImporterConfig | None = None) -> Schema:
    """Import a parsed Swagger document as an RDL schema."""
    return SwaggerImporter(config).import_doc(name, doc)
