"""Collector for skippable data defects found while building the model.

Resolution never fails on bad data: an operation without an ``operationId``
is dropped and the run continues. Each such defect is recorded here as a
:class:`~fetchgen.models.Diagnostic` so that callers (the CLI, tests) can
report or assert on it. A collector is created per run and passed through
extraction explicitly; there is no module-level state.
"""

from __future__ import annotations

from typing import Iterator, Optional

from fetchgen.models import Diagnostic

MISSING_OPERATION_ID = "missing-operation-id"


class Diagnostics:
    """An append-only list of :class:`~fetchgen.models.Diagnostic` records."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def add(
        self,
        code: str,
        message: str,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(code=code, message=message, method=method, path=path)
        self._items.append(diagnostic)
        return diagnostic

    def missing_operation_id(self, method: str, path: str) -> Diagnostic:
        """Record an operation skipped because it has no ``operationId``."""
        return self.add(
            MISSING_OPERATION_ID,
            f"missing operation id for {method.upper()} {path}",
            method=method,
            path=path,
        )

    def freeze(self) -> tuple[Diagnostic, ...]:
        """Return the records collected so far as an immutable tuple."""
        return tuple(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
