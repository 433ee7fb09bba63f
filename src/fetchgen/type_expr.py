"""Resolved type expressions and their TypeScript spelling.

The schema resolver (:func:`fetchgen.parser.resolver.resolve_type`) maps every
schema node onto one of the small, immutable value types defined here:

* :class:`Unknown` -- the permissive fallback, spelled ``any``.
* :class:`Primitive` -- ``string``, ``number``, ``boolean`` or ``null``.
* :class:`Literal` -- a single pre-formatted literal (enum member).
* :class:`Reference` -- a named schema from ``components.schemas``.
* :class:`ArrayOf` -- ``Array<T>``.
* :class:`MapOf` -- an open string-keyed map, ``Record<string, T>``.
* :class:`EmptyMap` -- a map that cannot hold any key, ``Record<string, never>``.
* :class:`Record` -- a fixed set of named members, ``{ a: T; b?: U }``.
* :class:`Union` / :class:`Intersection` -- ``A | B`` and ``A & B``.

Expressions compare by value, so two resolutions of the same schema are
equal, and :meth:`TypeExpr.render` is the only place that knows about
TypeScript syntax.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

# Member names that can be written bare in a TypeScript object type.
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class TypeExpr:
    """Base class for every resolved type expression."""

    __slots__ = ()

    def render(self) -> str:
        """Return the TypeScript spelling of this expression."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Unknown(TypeExpr):
    """The permissive fallback for empty or unrecognised shapes."""

    def render(self) -> str:
        return "any"


@dataclass(frozen=True)
class Primitive(TypeExpr):
    """A scalar type: ``string``, ``number``, ``boolean`` or ``null``."""

    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class Literal(TypeExpr):
    """A literal type whose TypeScript text is already formatted."""

    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Reference(TypeExpr):
    """A reference to a named schema, resolved by name and never inlined."""

    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class ArrayOf(TypeExpr):
    item: TypeExpr

    def render(self) -> str:
        return f"Array<{self.item.render()}>"


@dataclass(frozen=True)
class MapOf(TypeExpr):
    """An open map with string keys and values of type ``value``."""

    value: TypeExpr

    def render(self) -> str:
        return f"Record<string, {self.value.render()}>"


@dataclass(frozen=True)
class EmptyMap(TypeExpr):
    def render(self) -> str:
        return "Record<string, never>"


@dataclass(frozen=True)
class RecordMember:
    """One named member of a :class:`Record`."""

    name: str
    type: TypeExpr
    optional: bool = False

    def render(self) -> str:
        marker = "?" if self.optional else ""
        return f"{property_key(self.name)}{marker}: {self.type.render()}"


@dataclass(frozen=True)
class Record(TypeExpr):
    """A fixed record type; members are kept in the order given."""

    members: tuple[RecordMember, ...] = ()

    def render(self) -> str:
        if not self.members:
            return "{}"
        return "{ " + "; ".join(m.render() for m in self.members) + " }"


@dataclass(frozen=True)
class Union(TypeExpr):
    members: tuple[TypeExpr, ...] = ()

    def render(self) -> str:
        if not self.members:
            return "never"
        return " | ".join(m.render() for m in self.members)


@dataclass(frozen=True)
class Intersection(TypeExpr):
    members: tuple[TypeExpr, ...] = ()

    def render(self) -> str:
        if not self.members:
            return "unknown"
        return " & ".join(_intersection_operand(m) for m in self.members)


def _intersection_operand(expr: TypeExpr) -> str:
    """Parenthesize multi-member unions so ``&`` does not bind into them."""
    if isinstance(expr, Union) and len(expr.members) > 1:
        return f"({expr.render()})"
    return expr.render()


def property_key(name: str) -> str:
    """Return *name* as a TypeScript property key, quoting it when needed.

    Example::

        >>> property_key("userId")
        'userId'
        >>> property_key("content-type")
        '"content-type"'
    """
    if _IDENTIFIER_RE.match(name):
        return name
    return json.dumps(name)


UNKNOWN = Unknown()
STRING = Primitive("string")
NUMBER = Primitive("number")
BOOLEAN = Primitive("boolean")
NULL = Primitive("null")
