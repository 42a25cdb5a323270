import json
import logging
import sys
from pathlib import Path

import click

from .cli_utils import generation_command
from .config import ImporterConfig, OutputConfig, OutputFormat, OutputMode
from .errors import SwaggerToRdlError
from .importer import swagger_to_schema
from .rdl import RdlRenderer, to_json
from .swagger import SwaggerParser
from .writer import AtomicWriter


def _fail(message: str) -> None:
    click.echo(f"*** {message}", err=True)
    sys.exit(1)


def _load_json(path: str):
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (ValueError, OSError) as e:
        # ValueError covers both malformed JSON and undecodable bytes
        _fail(f"{path}: {e}")


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Schema name (defaults to the input file name)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--format", "-f", "output_format", default="json", type=click.Choice(["json", "rdl"]))
@click.option("--force", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug diagnostics")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
def swagger_to_rdl(name, config, output_format, force, verbose, path, output):
    """Convert a Swagger 2.0 JSON document at PATH into an RDL schema."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    doc = _load_json(path)

    if config is not None:
        settings = _load_json(config)
        if not isinstance(settings, dict):
            _fail(f"{config}: expected a JSON object of importer options")
        config = ImporterConfig.from_dict(settings)
    else:
        config = ImporterConfig()

    if name is None:
        name = Path(path).stem

    output_config = OutputConfig(
        mode=OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS,
        format=OutputFormat(output_format),
    )

    try:
        schema = swagger_to_schema(name, SwaggerParser().parse(doc), config)
    except SwaggerToRdlError as e:
        _fail(str(e))

    if output_config.format == OutputFormat.RDL:
        out = RdlRenderer().render(schema, generation_comment=f"Generated by {generation_command()}")
    else:
        out = to_json(schema) + "\n"

    if output is None:
        click.echo(out, nl=False)
        return

    writer = AtomicWriter()
    try:
        if output_config.mode == OutputMode.FORCE:
            writer.write(Path(output), out, output_config.format)
        else:
            writer.write_if_not_exists(Path(output), out, output_config.format)
    except (OSError, SwaggerToRdlError) as e:
        _fail(str(e))
