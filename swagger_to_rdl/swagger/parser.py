"""
Swagger parser that builds the document nodes.

Phase 1 of the import: turn the decoded JSON document into typed records
without interpreting types or operations.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import SwaggerParseError
from .nodes import HTTP_METHODS, Info, Operation, Parameter, PathItem, Response, SwaggerDoc, TypeFragment

logger = logging.getLogger(__name__)

PARAMETERS_PREFIX = "#/parameters/"
RESPONSES_PREFIX = "#/responses/"


def get_string(m: dict[str, Any], k: str) -> str | None:
    """Return ``m[k]`` if it is a string, else None."""
    value = m.get(k)
    return value if isinstance(value, str) else None


def get_int(m: dict[str, Any], k: str) -> int:
    """Return ``m[k]`` as an int if it is numeric, else -1."""
    value = m.get(k)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return -1
    return int(value)


def get_number(m: dict[str, Any], k: str) -> int | float | None:
    """Return ``m[k]`` if it is numeric, else None."""
    value = m.get(k)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def get_mapping(m: dict[str, Any], k: str) -> dict[str, Any] | None:
    value = m.get(k)
    return value if isinstance(value, dict) else None


def get_list(m: dict[str, Any], k: str) -> list[Any] | None:
    value = m.get(k)
    return value if isinstance(value, list) else None


class SwaggerParser:
    """Parses a decoded Swagger 2.0 document into a SwaggerDoc."""

    def __init__(self):
        self._shared_parameters: dict[str, Any] = {}
        self._shared_responses: dict[str, Any] = {}

    def parse(self, doc: Any) -> SwaggerDoc:
        """
        Parse a Swagger document.

        Args:
            doc: The decoded JSON document

        Returns:
            SwaggerDoc with typed definitions and paths

        Raises:
            SwaggerParseError: If the document is not a Swagger 2.0 mapping
        """
        if not isinstance(doc, dict):
            raise SwaggerParseError(f"Expected a JSON object at the top level, got {type(doc).__name__}")
        if "openapi" in doc:
            raise SwaggerParseError(f"OpenAPI {doc['openapi']} documents are not supported, only Swagger 2.0")
        version = doc.get("swagger")
        if version is not None and not str(version).startswith("2"):
            raise SwaggerParseError(f"Unsupported swagger version: {version}")

        self._shared_parameters = get_mapping(doc, "parameters") or {}
        self._shared_responses = get_mapping(doc, "responses") or {}

        definitions = {}
        for name, def_schema in (get_mapping(doc, "definitions") or {}).items():
            if not isinstance(def_schema, dict):
                logger.warning("Ignoring definition %s: not an object", name)
                continue
            definitions[name] = self.parse_type(def_schema)

        paths = {}
        for path, item in (get_mapping(doc, "paths") or {}).items():
            if not isinstance(item, dict):
                logger.warning("Ignoring path %s: not an object", path)
                continue
            paths[path] = self._parse_path_item(item)

        return SwaggerDoc(
            swagger=str(version) if version is not None else "2.0",
            info=self._parse_info(get_mapping(doc, "info") or {}),
            base_path=get_string(doc, "basePath") or "",
            definitions=definitions,
            paths=paths,
        )

    def parse_type(self, schema: dict[str, Any]) -> TypeFragment:
        """Parse a type fragment recursively."""
        properties = None
        raw_properties = get_mapping(schema, "properties")
        if raw_properties is not None:
            properties = {name: self.parse_type(prop) for name, prop in raw_properties.items() if isinstance(prop, dict)}

        items = None
        raw_items = get_mapping(schema, "items")
        if raw_items is not None:
            items = self.parse_type(raw_items)

        required = tuple(r for r in get_list(schema, "required") or [] if isinstance(r, str))
        enum = get_list(schema, "enum")

        return TypeFragment(
            type=get_string(schema, "type"),
            properties=properties,
            items=items,
            ref=get_string(schema, "$ref"),
            required=required,
            enum=tuple(enum) if enum is not None else None,
            pattern=get_string(schema, "pattern"),
            max_length=get_int(schema, "maxLength"),
            min_length=get_int(schema, "minLength"),
            maximum=get_number(schema, "maximum"),
            minimum=get_number(schema, "minimum"),
            min_items=schema.get("minItems"),
            max_items=schema.get("maxItems"),
            example=schema.get("example"),
            default=schema.get("default"),
            description=get_string(schema, "description"),
            x_constraint=get_mapping(schema, "x-constraint"),
            x_format=get_mapping(schema, "x-format"),
            keys=frozenset(k for k, v in schema.items() if v is not None),
        )

    def _parse_info(self, info: dict[str, Any]) -> Info:
        version = info.get("version")
        if isinstance(version, (int, float)) and not isinstance(version, bool):
            version = str(version)
        return Info(
            title=get_string(info, "title") or "",
            description=get_string(info, "description") or "",
            version=version if isinstance(version, str) else "",
        )

    def _parse_path_item(self, item: dict[str, Any]) -> PathItem:
        """Parse the operations of a path item, merging in path-level parameters."""
        shared = self._parse_parameters(get_list(item, "parameters") or [])
        operations = {}
        for method in HTTP_METHODS:
            op = get_mapping(item, method)
            if op is not None:
                operations[method] = self._parse_operation(op, shared)
        return PathItem(operations=operations)

    def _parse_operation(self, op: dict[str, Any], shared: list[Parameter]) -> Operation:
        own = self._parse_parameters(get_list(op, "parameters") or [])
        # Operation-level parameters override path-level ones with the same name and location
        overridden = {(p.name, p.location) for p in own}
        parameters = [p for p in shared if (p.name, p.location) not in overridden] + own

        responses = {}
        for code, resp in (get_mapping(op, "responses") or {}).items():
            if isinstance(resp, dict):
                responses[str(code)] = self._parse_response(resp)

        return Operation(
            operation_id=get_string(op, "operationId"),
            summary=get_string(op, "summary"),
            tags=tuple(t for t in get_list(op, "tags") or [] if isinstance(t, str)),
            produces=tuple(p for p in get_list(op, "produces") or [] if isinstance(p, str)),
            parameters=tuple(parameters),
            responses=responses,
        )

    def _parse_parameters(self, params: list[Any]) -> list[Parameter]:
        result = []
        for p in params:
            if not isinstance(p, dict):
                continue
            p = self._resolve_shared(p, PARAMETERS_PREFIX, self._shared_parameters)
            if p is None:
                continue
            schema = get_mapping(p, "schema")
            result.append(
                Parameter(
                    name=get_string(p, "name") or "",
                    location=get_string(p, "in") or "",
                    type=get_string(p, "type"),
                    schema=self.parse_type(schema) if schema is not None else TypeFragment(),
                    description=get_string(p, "description"),
                    required=p.get("required") is True,
                    default=p.get("default"),
                )
            )
        return result

    def _parse_response(self, resp: dict[str, Any]) -> Response:
        resolved = self._resolve_shared(resp, RESPONSES_PREFIX, self._shared_responses)
        if resolved is None:
            return Response()
        schema = get_mapping(resolved, "schema")
        return Response(
            description=get_string(resolved, "description"),
            schema=self.parse_type(schema) if schema is not None else TypeFragment(),
        )

    def _resolve_shared(self, value: dict[str, Any], prefix: str, shared: dict[str, Any]) -> dict[str, Any] | None:
        """Resolve a ``$ref`` into the document's shared parameters or responses."""
        ref = get_string(value, "$ref")
        if ref is None:
            return value
        if ref.startswith(prefix) and isinstance(shared.get(ref[len(prefix) :]), dict):
            return shared[ref[len(prefix) :]]
        logger.warning("Ignoring unresolvable reference: %s", ref)
        return None
