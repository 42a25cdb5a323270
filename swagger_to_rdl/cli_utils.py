"""
Helpers for describing a swagger_to_rdl invocation.
"""

from __future__ import annotations

from pathlib import Path

import click

PROGRAM_NAME = "swagger_to_rdl"

# Options that change the imported schema, shown in declaration order
SCHEMA_OPTIONS = ("name", "config", "output_format")


def generation_command(ctx: click.Context | None = None) -> str:
    """
    Describe the command that produced a schema, for the header of RDL output.

    Only the input document and the options that change the schema are
    shown. Files appear by name alone so the header does not depend on the
    working directory; the output file and flags such as --force are left out.

    Args:
        ctx: Click context of the running command (defaults to the current one)

    Returns:
        e.g. "swagger_to_rdl petstore.json --name store --format rdl"
    """
    if ctx is None:
        ctx = click.get_current_context(silent=True)
    if ctx is None:
        return PROGRAM_NAME

    parts = [PROGRAM_NAME]
    if ctx.params.get("path"):
        parts.append(Path(ctx.params["path"]).name)

    for param in ctx.command.params:
        if param.name not in SCHEMA_OPTIONS:
            continue
        value = ctx.params.get(param.name)
        if value is None or value == param.default:
            continue
        if param.name == "config":
            value = Path(value).name
        parts.extend([param.opts[0], str(value)])

    return " ".join(parts)
