"""Assemble the resolved intermediate model handed to the renderer.

:func:`assemble_model` is pure aggregation: it puts operations, named
schemas and the diagnostics gathered during extraction into canonical order
(see :mod:`fetchgen.ordering`) and wraps them into an
:class:`~fetchgen.models.ApiModel`. :func:`build_model` runs the whole
pipeline on a typed document.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from fetchgen.diagnostics import Diagnostics
from fetchgen.models import (
    ApiModel,
    OpenAPIDocument,
    ResolvedOperation,
    ResolvedProperty,
    ResolvedSchema,
    Schema,
)
from fetchgen.ordering import (
    sort_diagnostics,
    sort_named_schemas,
    sort_operations,
    sorted_property_names,
)
from fetchgen.parser.extractor import extract_operations
from fetchgen.parser.resolver import resolve_type


def build_model(document: OpenAPIDocument) -> ApiModel:
    """Extract, resolve and order everything in *document*.

    A fresh :class:`~fetchgen.diagnostics.Diagnostics` collector is used for
    every call, so repeated builds of the same document are independent and
    produce equal models.
    """
    diagnostics = Diagnostics()
    operations = extract_operations(document, diagnostics)
    return assemble_model(operations, document.components.schemas, diagnostics)


def assemble_model(
    operations: Iterable[ResolvedOperation],
    schemas: Mapping[str, Optional[Schema]],
    diagnostics: Optional[Diagnostics] = None,
) -> ApiModel:
    """Wrap sorted operations and sorted resolved schemas into an ApiModel.

    Args:
        operations: Resolved operations in any order.
        schemas: The named-schema table (``components.schemas``).
        diagnostics: The collector used during extraction, if any.

    Returns:
        The immutable :class:`~fetchgen.models.ApiModel`.
    """
    return ApiModel(
        operations=tuple(sort_operations(operations)),
        schemas=tuple(
            resolve_named_schema(name, schema)
            for name, schema in sort_named_schemas(schemas)
        ),
        diagnostics=(
            tuple(sort_diagnostics(diagnostics.freeze())) if diagnostics is not None else ()
        ),
    )


def resolve_named_schema(name: str, schema: Optional[Schema]) -> ResolvedSchema:
    """Resolve one entry of the named-schema table.

    A ``null`` entry resolves to ``any`` with no properties.

    Example::

        >>> user = Schema.model_validate(
        ...     {"type": "object", "properties": {"name": {"type": "string"}, "id": {"type": "integer"}}}
        ... )
        >>> resolve_named_schema("User", user).property_names
        ('id', 'name')
    """
    names = tuple(sorted_property_names(schema))
    properties: tuple[ResolvedProperty, ...] = ()
    if schema is not None:
        required = set(schema.required_names)
        properties = tuple(
            ResolvedProperty(
                name=prop_name,
                type=resolve_type(schema.properties[prop_name]),
                required=prop_name in required,
                description=_description_of(schema.properties[prop_name]),
            )
            for prop_name in names
        )

    return ResolvedSchema(
        name=name,
        description=schema.description if schema is not None else None,
        type=resolve_type(schema),
        property_names=names,
        properties=properties,
        is_alias=is_alias(schema),
    )


def is_alias(schema: Optional[Schema]) -> bool:
    """Return ``True`` when *schema* renders as ``export type`` rather than an interface.

    References, enums and compositions are always aliases. An explicit
    ``object`` becomes an interface only when it declares properties and no
    ``additionalProperties``. Any other explicit type set is an alias; a
    schema without type tags is an interface.
    """
    if schema is None:
        return True
    if schema.ref or schema.enum:
        return True
    if schema.all_of or schema.one_of or schema.any_of:
        return True
    if "object" in schema.type_tags:
        if schema.additional_properties is not None:
            return True
        return not schema.properties
    return bool(schema.type_tags)


def _description_of(schema: Optional[Schema]) -> Optional[str]:
    return schema.description if schema is not None else None
