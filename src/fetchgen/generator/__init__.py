"""Model assembly and TypeScript rendering.

This sub-package covers the second half of the pipeline:

* :mod:`~fetchgen.generator.assembly` -- sorts resolved operations, resolves
  the named schemas and wraps both into an :class:`~fetchgen.models.ApiModel`.
* :mod:`~fetchgen.generator.renderer` -- renders that model through the
  ``api.ts.j2`` template and writes the result atomically.
"""

from fetchgen.generator.assembly import (
    assemble_model,
    build_model,
    is_alias,
    resolve_named_schema,
)
from fetchgen.generator.renderer import generate, render_typescript

__all__ = [
    "assemble_model",
    "build_model",
    "generate",
    "is_alias",
    "render_typescript",
    "resolve_named_schema",
]
