"""fetchgen -- Generate typed TypeScript fetch clients from OpenAPI 3.0/3.1 specs.

This package turns an OpenAPI document into a deterministic, fully-resolved
intermediate model (typed operation signatures and typed entity declarations)
and renders that model into a TypeScript module built around a
``createAdapter(client)`` factory.

Typical workflow::

    fetchgen generate --input openapi.yaml --output ./src/api.ts
    fetchgen inspect openapi.yaml --schemas

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for the input document and the resolved model.
    type_expr: The resolved type algebra and its TypeScript spelling.
    ordering: Canonical ordering of operations, schemas, and properties.
    diagnostics: Collector for skipped, non-fatal data defects.
    config: Project config and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
