"""Generate command -- write a typed TypeScript client for an OpenAPI document.

Implements ``fetchgen generate``. The input document, the output file and the
client module to import from are resolved through
:func:`~fetchgen.config.resolve_config`, so each can come from a flag, an
environment variable or ``./fetchgen.json``.
"""

from __future__ import annotations

from typing import Optional

import typer

from fetchgen.exceptions import FetchgenError, InvalidUsageError
from fetchgen.output import debug, error, success, suggest, warning


def generate_command(
    input: Optional[str] = typer.Option(
        None,
        "--input",
        "-i",
        help="OpenAPI document path or URL (use '-' for stdin).",
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="TypeScript file to write."
    ),
    instance: Optional[str] = typer.Option(
        None,
        "--instance",
        help="Module to import FetchClient from (default: @fgrzl/fetch).",
    ),
) -> None:
    """Generate a typed fetch client from an OpenAPI document.

    Skipped operations (for example those without an ``operationId``) are
    reported as warnings; they never fail the run.

    Example::

        fetchgen generate --input openapi.yaml --output src/api.ts
        curl -s https://api.example.com/openapi.json | fetchgen generate -i - -o api.ts
    """
    try:
        _run(input, output, instance)
    except FetchgenError as exc:
        error(str(exc))
        if isinstance(exc, InvalidUsageError):
            suggest("Pass --input/--output, set FETCHGEN_INPUT/FETCHGEN_OUTPUT, or run: fetchgen init")
        raise typer.Exit(code=exc.exit_code) from None


def _run(
    cli_input: Optional[str],
    cli_output: Optional[str],
    cli_instance: Optional[str],
) -> None:
    from fetchgen.config import resolve_config
    from fetchgen.generator import build_model, generate
    from fetchgen.parser import load_spec, parse_document

    config = resolve_config(cli_input, cli_output, cli_instance)
    if not config.input:
        raise InvalidUsageError("No input document given")
    if not config.output:
        raise InvalidUsageError("No output file given")

    debug(f"Loading spec from: {config.input}")
    document = parse_document(load_spec(config.input))
    model = build_model(document)

    for diagnostic in model.diagnostics:
        warning(diagnostic.message)

    path = generate(model, config.output, config.instance)
    success(
        f"Generated fetch client: {path} "
        f"({len(model.operations)} operations, {len(model.schemas)} schemas)"
    )
