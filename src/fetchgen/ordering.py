"""Canonical ordering of operations, named schemas and object properties.

The input document is built from unordered mappings (paths, schema tables,
property maps), so the only thing that makes generated output reproducible
across runs is the ordering applied here:

* operations -- ascending by ``(display_path, id)``;
* named schemas -- ascending by name;
* diagnostics -- ascending by ``(path, method, code, message)``;
* properties -- ascending by name within every schema and record type.

All sorts are plain lexicographic string comparisons and Python's sort is
stable, so ties keep the order they arrived in.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from fetchgen.models import Diagnostic, ResolvedOperation, Schema


def sort_operations(operations: Iterable[ResolvedOperation]) -> list[ResolvedOperation]:
    """Return *operations* sorted by display path, then operation id.

    Example::

        >>> [op.id for op in sort_operations(ops)]
        ['listUsers', 'getUser']   # "/users" < "/users/${id}"
    """
    return sorted(operations, key=lambda op: (op.display_path, op.id))


def sort_named_schemas(
    schemas: Mapping[str, Optional[Schema]],
) -> list[tuple[str, Optional[Schema]]]:
    """Return the ``(name, schema)`` pairs of a schema table sorted by name."""
    return sorted(schemas.items(), key=lambda item: item[0])


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Return *diagnostics* in an order independent of how paths were walked."""
    return sorted(
        diagnostics,
        key=lambda d: (d.path or "", d.method or "", d.code, d.message),
    )


def sorted_property_names(schema: Optional[Schema]) -> list[str]:
    """Return the declared property names of *schema* in ascending order."""
    if schema is None:
        return []
    return sorted(schema.properties)
