"""Inspect command -- show the resolved model for an OpenAPI document.

``fetchgen inspect SOURCE`` prints the operations the generator would emit,
with their client method and resolved response type. ``--schemas`` lists
the named schemas instead. With the global ``--json`` flag the whole
:class:`~fetchgen.models.ApiModel` is dumped, every type spelled as its
TypeScript text.
"""

from __future__ import annotations

import typer

from fetchgen.exceptions import FetchgenError
from fetchgen.output import OutputFormat, debug, error, get_output, warning


def inspect_command(
    source: str = typer.Argument(
        ..., help="OpenAPI document path or URL (use '-' for stdin)."
    ),
    schemas: bool = typer.Option(
        False, "--schemas", "-s", help="List named schemas instead of operations."
    ),
) -> None:
    """Show the resolved operations (or schemas) of an OpenAPI document.

    Example::

        fetchgen inspect openapi.yaml
        fetchgen inspect openapi.yaml --schemas
        fetchgen --json inspect https://api.example.com/openapi.json
    """
    from fetchgen.generator import build_model
    from fetchgen.parser import load_spec, parse_document

    try:
        debug(f"Loading spec from: {source}")
        document = parse_document(load_spec(source))
    except FetchgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    model = build_model(document)
    output = get_output()

    if output.format == OutputFormat.JSON:
        output.print_json(model.model_dump(mode="json"))
        return

    for diagnostic in model.diagnostics:
        warning(diagnostic.message)

    title = document.info.title
    if schemas:
        rows = [
            [schema.name, "type" if schema.is_alias else "interface", schema.type.render()]
            for schema in model.schemas
        ]
        output.print_table(
            ["Name", "Kind", "Type"], rows, title=f"{title} -- Schemas ({len(rows)})"
        )
        return

    rows = [
        [op.method.upper(), op.id, op.display_path, op.response_type.render()]
        for op in model.operations
    ]
    output.print_table(
        ["Method", "Operation", "Path", "Response"],
        rows,
        title=f"{title} -- Operations ({len(rows)})",
    )
