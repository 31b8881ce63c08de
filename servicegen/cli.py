"""Command-line interface for servicegen.

Usage::

    servicegen generate build/declarations.json
    servicegen generate declarations.json --platform JVM --output build -v

"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from servicegen import config
from servicegen.loader import DeclarationError, load_dump
from servicegen.processor import GenerationError, run

app = typer.Typer(
    name="servicegen",
    help="Generate Kotlin service bindings from a declaration dump.",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def _main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every decision to stderr")] = False,
) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def generate(
    dump_path: Annotated[Path, typer.Argument(help="Declaration dump (JSON)", exists=True, dir_okay=False)],
    platform: Annotated[
        str | None,
        typer.Option("--platform", "-p", help="Target platform name"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Build directory for declarations without a source path"),
    ] = None,
) -> None:
    """Write common and client artifacts for every remote service."""
    try:
        dump = load_dump(dump_path)
        run(dump, platform or dump.platform or config.DEFAULT_PLATFORM, output)
    except (DeclarationError, GenerationError, json.JSONDecodeError, UnicodeDecodeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
