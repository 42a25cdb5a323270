"""
Atomic file writer for schema output.

Ensures that file writes are atomic, so an interrupted run never leaves
a truncated schema behind.
"""

from __future__ import annotations

import json
import re
import tempfile
from pathlib import Path

from .config import OutputFormat
from .errors import SwaggerToRdlError

# String literals and line comments, which may hold unbalanced braces
_STRINGS_AND_COMMENTS = re.compile(r'"(?:\\.|[^"\\])*"|//[^\n]*')


class OutputValidationError(SwaggerToRdlError):
    """Raised when the rendered output is not well formed."""

    pass



class AtomicWriter:
    """Writes a serialized schema so the target is either the old file or the complete new one.

    The rendered schema is checked in memory first, then written to a hidden
    sibling file (``.<name>.<random>.tmp``) that is renamed over the target.
    A rejected or interrupted write leaves no partial schema behind.
    """

    def write(self, path: Path, content: str, output_format: OutputFormat, validate: bool = True) -> None:
        """Write a serialized schema to ``path``, replacing any existing file.

        Args:
            path: Target schema file; missing parent directories are created
            content: The JSON or RDL text
            output_format: Serialization of ``content``, used by validation
            validate: Whether to check ``content`` before touching the disk

        Raises:
            OutputValidationError: If the schema text is not well formed
            OSError: If the directory or file cannot be written
        """
        if validate:
            self.validate(content, output_format)

        path.parent.mkdir(parents=True, exist_ok=True)
        temp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        temp_path = Path(temp.name)
        try:
            with temp:
                temp.write(content)
            temp_path.replace(path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(self, path: Path, content: str, output_format: OutputFormat, validate: bool = True) -> None:
        """Write a new schema file, refusing to overwrite one from an earlier run.

        Raises:
            FileExistsError: If ``path`` already exists (the CLI's --force skips this check)
            OutputValidationError: If the schema text is not well formed
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")
        self.write(path, content, output_format, validate)

    def validate(self, content: str, output_format: OutputFormat) -> None:
        """Check that JSON output parses and that RDL output declares a name and balances its braces."""
        if output_format == OutputFormat.JSON:
            try:
                json.loads(content)
            except json.JSONDecodeError as e:
                raise OutputValidationError(f"Generated JSON is not valid: {e}") from e
        elif output_format == OutputFormat.RDL:
            if "\nname " not in "\n" + content:
                raise OutputValidationError("Generated RDL is missing the schema name declaration")
            code = _STRINGS_AND_COMMENTS.sub("", content)
            open_braces = code.count("{")
            close_braces = code.count("}")
            if open_braces != close_braces:
                raise OutputValidationError(f"Generated RDL has unbalanced braces: {open_braces} open, {close_braces} close")
