"""Init command -- write a project-local ``fetchgen.json``.

``fetchgen init`` records the input document, output file and client module
for the current project so that later runs only need ``fetchgen generate``.
The document is loaded once to make sure it parses before it is pinned.
"""

from __future__ import annotations

from typing import Optional

import typer

from fetchgen.exceptions import FetchgenError
from fetchgen.exit_codes import EXIT_INVALID_USAGE
from fetchgen.output import error, info, success, suggest


def init_command(
    input: str = typer.Option(
        ..., "--input", "-i", help="OpenAPI document path or URL."
    ),
    output: str = typer.Option(
        ..., "--output", "-o", help="TypeScript file to write."
    ),
    instance: Optional[str] = typer.Option(
        None, "--instance", help="Module to import FetchClient from."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing fetchgen.json."
    ),
) -> None:
    """Create ``fetchgen.json`` in the current directory.

    Example::

        fetchgen init --input openapi.yaml --output src/api.ts
    """
    from fetchgen.config import project_config_path, save_project_config
    from fetchgen.models import GeneratorConfig
    from fetchgen.parser import load_spec, parse_document

    path = project_config_path()
    if path.exists() and not force:
        error(f"{path.name} already exists (use --force to overwrite)")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    if input == "-":
        error("--input cannot be stdin when saved to fetchgen.json")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    info(f"Checking spec: {input}")
    try:
        document = parse_document(load_spec(input))
        values = {"input": input, "output": output}
        if instance is not None:
            values["instance"] = instance
        written = save_project_config(GeneratorConfig.model_validate(values))
    except FetchgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Found: {document.info.title} v{document.info.version}")
    success(f"Wrote {written.name}")
    suggest("Generate the client: fetchgen generate")
