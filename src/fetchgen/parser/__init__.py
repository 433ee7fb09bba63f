"""OpenAPI document parser -- load documents, resolve types, extract operations.

This sub-package is responsible for the first half of the fetchgen pipeline:
turning a raw OpenAPI 3.x document (JSON or YAML, local file, remote URL or
stdin) into resolved operations and type expressions that the generator can
assemble and render.

Typical usage::

    from fetchgen.diagnostics import Diagnostics
    from fetchgen.parser import extract_operations, load_spec, parse_document

    document = parse_document(load_spec("openapi.yaml"))
    operations = extract_operations(document, Diagnostics())

Sub-modules:

* :mod:`~fetchgen.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and validation into the typed document model.
* :mod:`~fetchgen.parser.resolver` -- Schema node to type expression.
* :mod:`~fetchgen.parser.extractor` -- Walks the paths object and produces
  :class:`~fetchgen.models.ResolvedOperation` records.
"""

from fetchgen.parser.extractor import extract_operations
from fetchgen.parser.loader import load_spec, parse_document
from fetchgen.parser.resolver import resolve_type

__all__ = ["load_spec", "parse_document", "extract_operations", "resolve_type"]
