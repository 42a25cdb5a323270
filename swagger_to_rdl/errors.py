"""
Exceptions raised while importing a Swagger document.
"""

from __future__ import annotations


class SwaggerToRdlError(Exception):
    """Base class for all import failures."""

    pass


class SwaggerParseError(SwaggerToRdlError):
    """Raised when the input is not shaped like a Swagger 2.0 document."""

    pass


class PathTemplateError(SwaggerToRdlError):
    """Raised when a resource path template is inconsistent with its inputs.

    This can happen when:
    - A ``{name}`` segment has no corresponding declared input
    - A ``{`` is never closed
    - A segment has an empty name (e.g. ``{:pattern}``)
    """

    def __init__(self, message: str, method: str = "", path: str = ""):
        super().__init__(message)
        self.method = method
        self.path = path


class SchemaBuildError(SwaggerToRdlError):
    """Raised when a schema entity fails structural validation.

    This can happen when:
    - A type or field name is not a legal identifier
    - A type, field or enum symbol is declared twice
    - A type references a name that is never defined
    """

    pass
