"""
Resource importer: turns Swagger operations into RDL resources.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from ..config import ImporterConfig
from ..errors import PathTemplateError
from ..rdl.builder import SchemaBuilder, new_resource, new_resource_input
from ..rdl.nodes import ExceptionDef, Resource, ResourceInput
from ..swagger.nodes import Operation, Parameter
from .type_names import UNKNOWN_TYPE, import_type_name

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE = "default"


def validate_path_template(resource: Resource) -> None:
    """
    Check that every ``{name}`` or ``{name:pattern}`` segment of the path names an input.

    Raises:
        PathTemplateError: On an unmatched name, an empty name or an unterminated brace
    """
    path = resource.path
    names = {i.name for i in resource.inputs}
    i = path.find("{")
    while i >= 0:
        j = path.find("}", i)
        if j < 0:
            raise PathTemplateError(f"Bad path template syntax: {path}", resource.method, path)
        name = path[i + 1 : j].partition(":")[0]
        if not name:
            raise PathTemplateError(f"Bad path template syntax: {path}", resource.method, path)
        if name not in names:
            raise PathTemplateError(
                f"Resource input '{name}' in '{resource.method} {path}' has no corresponding type declaration.",
                resource.method,
                path,
            )
        i = path.find("{", j + 1)


class ResourceImporter:
    """Imports Swagger operations into a SchemaBuilder."""

    def __init__(self, builder: SchemaBuilder, config: ImporterConfig):
        self.builder = builder
        self.config = config

    def import_resource(self, path: str, method: str, op: Operation) -> Resource:
        """
        Import one operation as a resource.

        Args:
            path: The path template, e.g. "/pet/{id}"
            method: The HTTP verb, any case
            op: The operation

        Returns:
            The registered resource

        Raises:
            PathTemplateError: If the path template does not match the inputs
        """
        method = method.upper()
        result_type, expected, alternatives, exceptions = self._classify_responses(path, method, op)

        for prod in op.produces:
            if prod != self.config.json_media_type:
                logger.warning("%s %s is expected to produce something other than %s: %s", method, path, self.config.json_media_type, prod)

        inputs = [i for i in (self._import_input(param) for param in op.parameters) if i is not None]

        name = method.lower() + result_type
        if op.operation_id and op.operation_id != name:
            name = op.operation_id

        annotations = []
        if op.tags:
            annotations.append(("x_tags", ",".join(op.tags)))

        resource = new_resource(
            result_type,
            method,
            path,
            inputs=inputs,
            comment=op.summary,
            name=name,
            expected=expected,
            alternatives=alternatives,
            exceptions=exceptions,
            annotations=tuple(annotations),
        )
        validate_path_template(resource)
        self.builder.add_resource(resource)
        return resource

    def _classify_responses(self, path: str, method: str, op: Operation) -> tuple[str, str, list[str], dict[str, ExceptionDef]]:
        """
        Split responses into the result type, alternative success codes and exceptions.

        The "default" response gives the result type. Without one, the first
        status code in lexicographic order does, and its status becomes the
        expected one.

        Returns:
            (result_type, expected, alternatives, exceptions)
        """
        result_type = None
        expected = self.config.default_expected
        if DEFAULT_RESPONSE in op.responses:
            result_type = import_type_name(op.responses[DEFAULT_RESPONSE].schema, UNKNOWN_TYPE)

        alternatives: list[str] = []
        exceptions: dict[str, ExceptionDef] = {}
        for code, resp in sorted(op.responses.items()):
            if code == DEFAULT_RESPONSE:
                continue
            rtype = import_type_name(resp.schema, UNKNOWN_TYPE)
            if result_type is None:
                result_type = rtype
                expected = self._status_name(code)
            elif rtype == result_type:
                alternatives.append(code)
            else:
                exceptions[code] = ExceptionDef(type=self._known_type(rtype, f"{method} {path} response {code}"), comment=resp.description or None)

        known_result = self._known_type(result_type or UNKNOWN_TYPE, f"{method} {path} result")
        return known_result, expected, alternatives, exceptions

    def _status_name(self, code: str) -> str:
        try:
            return HTTPStatus(int(code)).name
        except ValueError:
            return self.config.default_expected

    def _known_type(self, type_name: str, context: str) -> str:
        """Replace the placeholder of an untyped fragment by the configured fallback type."""
        if type_name and type_name != UNKNOWN_TYPE:
            return type_name
        logger.warning("No type declared for %s, using %s", context, self.config.fallback_type)
        return self.config.fallback_type

    def _import_input(self, param: Parameter) -> ResourceInput | None:
        path_param = False
        query_param = None
        header = None
        if param.location == "path":
            path_param = True
        elif param.location == "query":
            query_param = param.name
        elif param.location == "header":
            # An HTTP header name is a general string, not an identifier
            header = param.name
        elif param.location != "body":
            logger.debug("Dropping unsupported %s parameter %s", param.location or "untyped", param.name)
            return None

        identifier = param.name.replace("-", "_")
        ptype = self._known_type(import_type_name(param.schema, param.type), f"parameter {param.name}")
        return new_resource_input(
            identifier,
            ptype,
            path_param=path_param,
            query_param=query_param,
            header=header,
            optional=not path_param and not param.required,
            default=param.default,
            comment=param.description,
        )
