"""Render an :class:`~fetchgen.models.ApiModel` as a TypeScript client module.

The output is a single ``.ts`` file built from the ``api.ts.j2`` Jinja2
template in ``generator/templates/``. It contains:

* A ``createAdapter(client)`` factory with one typed method per operation,
  declared first as a signature block and then implemented.
* One ``export type`` or ``export interface`` per named schema.

Signature details that are awkward to express in the template (argument
lists, the client call for each verb) are computed by small helpers
registered as template filters.

Example::

    from fetchgen.generator import build_model, generate

    model = build_model(document)
    generate(model, "src/api.ts", instance="@fgrzl/fetch")
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from fetchgen.config import atomic_write
from fetchgen.exceptions import RenderError
from fetchgen.models import DEFAULT_INSTANCE, ApiModel, ResolvedOperation
from fetchgen.type_expr import property_key

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""

TEMPLATE_NAME = "api.ts.j2"

OPTIONS_ARG = "options?: { signal?: AbortSignal; timeout?: number; operationId?: string }"

# Verbs whose client methods take (url, params?, options?).
_PARAMS_METHODS = frozenset({"get", "del", "head"})
# Verbs whose client methods take (url, body?, headers?, options?).
_BODY_METHODS = frozenset({"post", "put", "patch"})


def render_typescript(model: ApiModel, instance: str = DEFAULT_INSTANCE) -> str:
    """Render *model* into the text of a TypeScript module.

    Args:
        model: The assembled model. Its operations and schemas are rendered
            in the order they appear, which is already canonical.
        instance: The module to import ``FetchClient`` and
            ``buildQueryParams`` from. A trailing ``.ts`` is stripped.

    Returns:
        The generated source text.

    Raises:
        RenderError: If the template cannot be loaded or rendered.
    """
    if instance.endswith(".ts"):
        instance = instance[: -len(".ts")]

    env = _create_jinja_env()
    try:
        template = env.get_template(TEMPLATE_NAME)
        return template.render(
            instance=instance,
            operations=model.operations,
            schemas=model.schemas,
        )
    except TemplateError as exc:
        raise RenderError(f"Failed to render {TEMPLATE_NAME}: {exc}") from exc


def generate(
    model: ApiModel,
    output_path: str | Path,
    instance: str = DEFAULT_INSTANCE,
) -> Path:
    """Render *model* and write it atomically to *output_path*.

    Parent directories are created as needed. An existing file is replaced
    only once the new content has been fully written.

    Returns:
        The :class:`~pathlib.Path` that was written.

    Raises:
        RenderError: If rendering fails or the file cannot be written.
    """
    path = Path(output_path)
    source = render_typescript(model, instance)
    try:
        atomic_write(path, source)
    except OSError as exc:
        raise RenderError(f"Failed to write {path}: {exc}") from exc

    logger.debug(
        "wrote %s (%d operations, %d schemas)",
        path,
        len(model.operations),
        len(model.schemas),
    )
    return path


def arg_list(op: ResolvedOperation) -> str:
    """Return the parameter list of the generated method for *op*.

    Path parameters come first (``name: T``, widened with ``| undefined``
    when not required), then the query parameters folded into one optional
    ``query`` object, then ``body`` when a request body is declared, and
    finally the ``options`` bag every method accepts.

    Example::

        >>> arg_list(get_user)
        'id: number, options?: { signal?: AbortSignal; timeout?: number; operationId?: string }'
    """
    args: list[str] = []
    for param in op.path_params:
        param_type = param.type.render()
        if not param.required:
            param_type += " | undefined"
        args.append(f"{param.name}: {param_type}")

    if op.query_params:
        members = "; ".join(
            f"{property_key(p.name)}{'' if p.required else '?'}: {p.type.render()}"
            for p in op.query_params
        )
        args.append(f"query?: {{ {members} }}")

    if op.has_body:
        body_type = op.request_type.render() if op.request_type is not None else "any"
        args.append(f"body: {body_type}")

    args.append(OPTIONS_ARG)
    return ", ".join(args)


def client_call(op: ResolvedOperation, url_expr: str) -> str:
    """Return the ``return client.<method>(...)`` statement for *op*.

    The argument shape follows the client's method signatures:

    * ``get`` / ``del`` / ``head`` -- ``(url, undefined, options)``
    * ``post`` / ``put`` / ``patch`` -- ``(url, body, undefined, options)``
    * anything else -- ``(url, body, options)``

    ``body`` is ``undefined`` when the operation declares no request body.
    """
    body_arg = "body" if op.has_body else "undefined"
    if op.method in _PARAMS_METHODS:
        return f"return client.{op.method}({url_expr}, undefined, options);"
    if op.method in _BODY_METHODS:
        return f"return client.{op.method}({url_expr}, {body_arg}, undefined, options);"
    return f"return client.{op.method}({url_expr}, {body_arg}, options);"


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for the TypeScript template.

    Autoescape is disabled for ``.ts.j2`` templates since they produce
    source code, not HTML. Block trimming and lstrip keep the template
    readable without leaking whitespace into the output.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["arg_list"] = arg_list
    env.filters["client_call"] = client_call
    env.filters["property_key"] = property_key
    return env
