"""Extract resolved operations from an OpenAPI document.

This module walks the ``paths`` object of an
:class:`~fetchgen.models.OpenAPIDocument` and builds one
:class:`~fetchgen.models.ResolvedOperation` per valid path + HTTP method
pair, resolving every parameter, request body and response schema through
:func:`~fetchgen.parser.resolver.resolve_type`.

The public entry point is :func:`extract_operations`. Internally it
delegates to helpers that each handle one part of an operation:

* ``_merge_parameters`` -- path-level parameters merged with
  operation-level ones.
* :func:`build_display_path` -- ``{name}`` placeholders rewritten to
  ``${name}`` interpolation.
* :func:`resolve_request_type` -- the ``application/json`` request body.
* :func:`resolve_response_type` -- the preferred success (or redirect)
  response.

Operations without an ``operationId`` are skipped: a warning is logged and a
diagnostic recorded, and extraction carries on. Nothing here raises on bad
data.
"""

from __future__ import annotations

import logging
from typing import Optional

from fetchgen.diagnostics import Diagnostics
from fetchgen.models import (
    HTTPMethod,
    OpenAPIDocument,
    Operation,
    Parameter,
    ParameterLocation,
    RequestBody,
    ResolvedOperation,
    ResolvedParameter,
    Response,
)
from fetchgen.parser.resolver import resolve_type
from fetchgen.type_expr import BOOLEAN, UNKNOWN, TypeExpr

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"

# Preference order when choosing the response that defines the return type.
SUCCESS_STATUS_CODES = ("200", "201", "202", "203", "204", "206", "default")
REDIRECT_STATUS_CODES = ("300", "301", "302", "303", "304", "307", "308")

# Client method names that would collide with reserved words.
_METHOD_ALIASES: dict[str, str] = {
    HTTPMethod.DELETE.value: "del",
}


def extract_operations(
    document: OpenAPIDocument,
    diagnostics: Diagnostics,
) -> list[ResolvedOperation]:
    """Extract every valid operation from the document's ``paths`` object.

    Iterates over every path and recognised HTTP method. Operations without
    an ``operationId`` are skipped and recorded in *diagnostics*.

    The result is in document order; use
    :func:`~fetchgen.ordering.sort_operations` for the canonical order.

    Args:
        document: The typed OpenAPI document.
        diagnostics: Collector receiving one record per skipped operation.

    Returns:
        A list of :class:`~fetchgen.models.ResolvedOperation` instances.
    """
    operations: list[ResolvedOperation] = []

    for path, path_item in document.paths.items():
        if path_item is None:
            continue

        for method, operation in path_item.operations():
            if not operation.operation_id:
                logger.warning(
                    "missing operation id for %s %s, skipping",
                    method.value.upper(),
                    path,
                )
                diagnostics.missing_operation_id(method.value, path)
                continue

            parameters = _merge_parameters(path_item.parameters, operation.parameters)
            operations.append(resolve_operation(path, method.value, operation, parameters))

    return operations


def resolve_operation(
    path: str,
    method: str,
    operation: Operation,
    parameters: Optional[list[Parameter]] = None,
) -> ResolvedOperation:
    """Build the :class:`~fetchgen.models.ResolvedOperation` for one entry.

    Args:
        path: The path template as declared (e.g. ``"/users/{id}"``).
        method: The HTTP verb, in any case.
        operation: The operation object. Its ``operation_id`` must be set.
        parameters: The effective parameter list. Defaults to the
            operation's own parameters.

    Returns:
        The resolved, immutable operation record.
    """
    if parameters is None:
        parameters = operation.parameters

    path_params: list[Parameter] = []
    query_params: list[Parameter] = []
    for param in parameters:
        if param.location == ParameterLocation.PATH.value:
            path_params.append(param)
        elif param.location == ParameterLocation.QUERY.value:
            query_params.append(param)

    return ResolvedOperation(
        id=operation.operation_id or "",
        method=client_method_name(method),
        path=path,
        display_path=build_display_path(path, [p.name for p in path_params]),
        path_params=tuple(_resolve_parameter(p) for p in path_params),
        query_params=tuple(_resolve_parameter(p) for p in query_params),
        has_body=operation.request_body is not None,
        request_type=resolve_request_type(operation.request_body),
        response_type=resolve_response_type(operation.responses),
        description=operation.summary or operation.description or "",
    )


def client_method_name(method: str) -> str:
    """Return the client method name for an HTTP verb.

    The verb is lowercased; ``delete`` becomes ``del``.

    Example::

        >>> client_method_name("GET")
        'get'
        >>> client_method_name("DELETE")
        'del'
    """
    lowered = method.lower()
    return _METHOD_ALIASES.get(lowered, lowered)


def build_display_path(path: str, path_param_names: list[str]) -> str:
    """Rewrite ``{name}`` placeholders to ``${name}`` for declared parameters.

    Placeholders without a matching declared parameter are left untouched.

    Example::

        >>> build_display_path("/users/{id}/posts/{postId}", ["id"])
        '/users/${id}/posts/{postId}'
    """
    display = path
    for name in path_param_names:
        display = display.replace("{" + name + "}", "${" + name + "}")
    return display


def resolve_request_type(body: Optional[RequestBody]) -> Optional[TypeExpr]:
    """Resolve the request type from the ``application/json`` media type only.

    Returns ``None`` when there is no body, no JSON media type, or the JSON
    entry is empty.
    """
    if body is None:
        return None
    media = body.content.get(JSON_MEDIA_TYPE)
    if media is None:
        return None
    return resolve_type(media.schema_)


def resolve_response_type(responses: dict[str, Response]) -> TypeExpr:
    """Resolve the return type from the preferred declared response.

    Success codes are scanned first, in the order of
    :data:`SUCCESS_STATUS_CODES`:

    * ``204`` always yields ``boolean``.
    * any other code matches only if it declares ``application/json``
      content with a schema.

    Only when no success code matched are :data:`REDIRECT_STATUS_CODES`
    scanned:

    * no content -> ``boolean``;
    * JSON content with a schema -> that schema's type (JSON wins over any
      other media type declared alongside it);
    * JSON content without a schema -> keep scanning;
    * only non-JSON content -> ``boolean``.

    Nothing matched -> ``any``.
    """
    for code in SUCCESS_STATUS_CODES:
        response = responses.get(code)
        if response is None:
            continue
        if code == "204":
            return BOOLEAN
        media = response.content.get(JSON_MEDIA_TYPE)
        if media is not None and media.schema_ is not None:
            return resolve_type(media.schema_)

    for code in REDIRECT_STATUS_CODES:
        response = responses.get(code)
        if response is None:
            continue
        if not response.content:
            return BOOLEAN
        if JSON_MEDIA_TYPE in response.content:
            media = response.content[JSON_MEDIA_TYPE]
            if media is not None and media.schema_ is not None:
                return resolve_type(media.schema_)
        else:
            return BOOLEAN

    return UNKNOWN


def _merge_parameters(
    path_params: list[Parameter],
    op_params: list[Parameter],
) -> list[Parameter]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    ``name`` and location, per the OpenAPI specification. Path-level
    parameters come first, followed by the operation's own in their declared
    order.
    """
    overridden = {(p.name, p.location) for p in op_params}
    merged = [p for p in path_params if (p.name, p.location) not in overridden]
    merged.extend(op_params)
    return merged


def _resolve_parameter(param: Parameter) -> ResolvedParameter:
    return ResolvedParameter(
        name=param.name,
        required=param.required,
        type=resolve_type(param.schema_),
        description=param.description,
    )
