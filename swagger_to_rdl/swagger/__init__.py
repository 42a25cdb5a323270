"""
Swagger document module.

Contains the document node definitions and the parser for Swagger 2.0.
"""

from __future__ import annotations

from .nodes import (
    CONSTRAINT_KEYS,
    HTTP_METHODS,
    Info,
    Operation,
    Parameter,
    PathItem,
    Response,
    SwaggerDoc,
    TypeFragment,
)
from .parser import SwaggerParser

__all__ = [
    "CONSTRAINT_KEYS",
    "HTTP_METHODS",
    "Info",
    "Operation",
    "Parameter",
    "PathItem",
    "Response",
    "SwaggerDoc",
    "TypeFragment",
    "SwaggerParser",
]
