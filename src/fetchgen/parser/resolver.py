"""Resolve OpenAPI schema nodes into type expressions.

The single public entry point is :func:`resolve_type`, a total function: it
never raises, and shapes it cannot make sense of degrade to
:data:`~fetchgen.type_expr.UNKNOWN` (``any``). The rules are evaluated in a
fixed order and the first one that applies wins; they are never merged:

1. ``$ref`` -- a :class:`~fetchgen.type_expr.Reference` to the last segment
   of the pointer. The target is never inlined, so cyclic schemas resolve
   to a symbolic name instead of recursing forever.
2. ``enum`` -- a union of literals in declaration order (see
   :func:`format_enum_literal`).
3. ``allOf`` -- an intersection of the resolved members.
4. ``oneOf``, else ``anyOf`` -- a union of the resolved members.
5. ``type`` -- each tag mapped on its own, several tags forming a union.
   A missing ``type`` with ``properties`` or ``additionalProperties`` is
   treated as ``object``. Legacy ``nullable: true`` appends ``null`` unless
   a ``null`` tag is already present.
6. Anything else -- ``any``.

Only internal, name-based references are understood. The pointer is never
dereferenced, so external references simply resolve to their last segment.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from fetchgen.models import Schema
from fetchgen.ordering import sorted_property_names
from fetchgen.type_expr import (
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    UNKNOWN,
    ArrayOf,
    EmptyMap,
    Intersection,
    Literal,
    MapOf,
    Record,
    RecordMember,
    Reference,
    TypeExpr,
    Union,
)

_SCALAR_TAGS: dict[str, TypeExpr] = {
    "string": STRING,
    "integer": NUMBER,
    "number": NUMBER,
    "boolean": BOOLEAN,
    "null": NULL,
}


def resolve_type(schema: Optional[Schema]) -> TypeExpr:
    """Resolve one schema node into a type expression.

    Args:
        schema: The schema to resolve. ``None`` (an absent schema) resolves
            to ``any``.

    Returns:
        The resolved :class:`~fetchgen.type_expr.TypeExpr`.

    Example::

        >>> resolve_type(Schema.model_validate({"type": ["string", "null"]})).render()
        'string | null'
        >>> resolve_type(Schema.model_validate({"$ref": "#/components/schemas/User"})).render()
        'User'
    """
    if schema is None:
        return UNKNOWN

    if schema.ref:
        return Reference(ref_name(schema.ref))

    if schema.enum:
        return Union(tuple(Literal(format_enum_literal(v)) for v in schema.enum))

    if schema.all_of:
        return Intersection(tuple(resolve_type(sub) for sub in schema.all_of))

    # oneOf wins when both are present; anyOf is only used when oneOf is empty.
    union_members = schema.one_of or schema.any_of
    if union_members:
        return Union(tuple(resolve_type(sub) for sub in union_members))

    tags = schema.type_tags
    if not tags and (schema.properties or schema.additional_properties is not None):
        tags = ("object",)

    if not tags:
        return UNKNOWN

    parts = [_resolve_tag(tag, schema) for tag in tags]
    if schema.nullable and NULL not in parts:
        parts.append(NULL)

    if len(parts) == 1:
        return parts[0]
    return Union(tuple(parts))


def ref_name(ref: str) -> str:
    """Return the referenced name: the last ``/``-separated segment of *ref*.

    Example::

        >>> ref_name("#/components/schemas/Pet")
        'Pet'
    """
    return ref.rsplit("/", 1)[-1]


def format_enum_literal(value: Any) -> str:
    """Format one enum value as a TypeScript literal type.

    * ``None`` -> ``null``
    * ``bool`` -> ``true`` / ``false``
    * ``int`` -> decimal digits
    * ``float`` -> fixed-point with trailing zeros, then a trailing ``.``,
      stripped (``2.50`` -> ``2.5``, ``3.0`` -> ``3``)
    * ``str`` -> a double-quoted string literal
    * anything else -> its ``str()`` form, quoted

    Example::

        >>> [format_enum_literal(v) for v in ["a", 1, 2.5, 3.0, True, None]]
        ['"a"', '1', '2.5', '3', 'true', 'null']
    """
    if value is None:
        return "null"
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:f}".rstrip("0").rstrip(".")
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(str(value), ensure_ascii=False)


def _resolve_tag(tag: str, schema: Schema) -> TypeExpr:
    """Map a single ``type`` tag of *schema* onto a type expression."""
    scalar = _SCALAR_TAGS.get(tag)
    if scalar is not None:
        return scalar
    if tag == "array":
        return ArrayOf(resolve_type(schema.items))
    if tag == "object":
        return _resolve_object(schema)
    return UNKNOWN


def _resolve_object(schema: Schema) -> TypeExpr:
    """Apply the ``additionalProperties`` rules to an object schema.

    * ``true`` -- an open map of ``any``.
    * ``false`` with no properties -- a map that cannot hold any key.
    * a sub-schema -- an open map of that schema's type; declared
      properties are not merged in.
    * absent with no properties -- an open map of ``any``.
    * otherwise -- a record of the declared properties, sorted by name,
      each optional unless listed in ``required``.
    """
    extra = schema.additional_properties
    if extra is True:
        return MapOf(UNKNOWN)
    if extra is False:
        if not schema.properties:
            return EmptyMap()
    elif isinstance(extra, Schema):
        return MapOf(resolve_type(extra))
    elif not schema.properties:
        return MapOf(UNKNOWN)

    required = set(schema.required_names)
    members = tuple(
        RecordMember(
            name=name,
            type=resolve_type(schema.properties[name]),
            optional=name not in required,
        )
        for name in sorted_property_names(schema)
    )
    return Record(members)
