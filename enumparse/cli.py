"""Command line interface for generating enumeration parsers.

Generate a python module from a schema document:

  enumparse generate enums.json --output enums.py

Print the strings each enumeration would accept:

  enumparse table enums.json --enum Method
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from . import compat
from .codegen import derive, generate_module
from .exceptions import GenerationError, GenerationFailed
from .schema import SchemaDocument, load_schema

_LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Generate string parsers for enumerations")


def _report(err: GenerationError) -> None:
    """Print a generation error as a diagnostic."""
    typer.echo(f"error: {err}", err=True)
    if err.detailed_error:
        typer.echo(f"  {err.detailed_error}", err=True)


def _load(schema: Path) -> SchemaDocument:
    try:
        return load_schema(schema.read_text())
    except GenerationError as err:
        _report(err)
        raise typer.Exit(code=1) from err


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """Generate string parsers for enumerations."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@app.command("generate")
def generate(
    schema: Path = typer.Argument(
        ..., help="Schema document (JSON)", exists=True, dir_okay=False
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="File to write (default: stdout)"
    ),
    allow_ambiguous_aliases: bool = typer.Option(
        False,
        "--allow-ambiguous-aliases",
        help="Let the first variant win when truncated aliases collide",
    ),
) -> None:
    """Generate a python module with a parser for each enumeration."""
    document = _load(schema)
    try:
        if allow_ambiguous_aliases:
            with compat.enable_first_match_aliases():
                source = generate_module(document)
        else:
            source = generate_module(document)
    except GenerationFailed as err:
        for error in err.errors:
            _report(error)
        typer.echo(str(err), err=True)
        raise typer.Exit(code=1) from err

    if output is None:
        typer.echo(source, nl=False)
        return
    output.write_text(source)
    _LOGGER.debug("Wrote %s", output)
    typer.echo(f"Generated {len(document.enums)} parser(s) in {output}", err=True)


@app.command("table")
def table(
    schema: Path = typer.Argument(
        ..., help="Schema document (JSON)", exists=True, dir_okay=False
    ),
    enum: str | None = typer.Option(
        None, "--enum", "-e", help="Only show this enumeration"
    ),
) -> None:
    """Print the strings matched by each enumeration's parser."""
    document = _load(schema)
    declarations = [
        declaration
        for declaration in document.enums
        if enum is None or declaration.name == enum
    ]
    if not declarations:
        typer.echo(f"No enumeration named '{enum}'", err=True)
        raise typer.Exit(code=1)

    failed = False
    for declaration in declarations:
        try:
            generated = derive(declaration)
        except GenerationError as err:
            _report(err)
            failed = True
            continue
        typer.echo(f"{generated.name} ({generated.normalization.value}):")
        for entry in generated.table:
            kind = "alias" if entry.alias else "name"
            typer.echo(f"  {entry.pattern!r} -> {entry.variant} [{kind}]")
    if failed:
        raise typer.Exit(code=1)
