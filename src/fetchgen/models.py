"""Canonical Pydantic models shared across all fetchgen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Document models** -- the typed view of a deserialized OpenAPI document,
produced by :func:`~fetchgen.parser.loader.parse_document`:
    :class:`Schema`, :class:`Parameter`, :class:`MediaType`,
    :class:`RequestBody`, :class:`Response`, :class:`Operation`,
    :class:`PathItem`, :class:`Components`, :class:`APIInfo` and
    :class:`OpenAPIDocument`.

**Resolved models** -- the immutable intermediate model handed to the
renderer:
    :class:`ResolvedParameter`, :class:`ResolvedOperation`,
    :class:`ResolvedProperty`, :class:`ResolvedSchema`, :class:`Diagnostic`
    and :class:`ApiModel`.

**Configuration** -- :class:`GeneratorConfig`.

Document models are lenient: unknown keys are ignored, ``null`` collections
decode as empty, and fields the OpenAPI object model allows in several shapes
(``type``, ``additionalProperties``) are normalised on the way in so that
downstream code never sees the ambiguity.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    StrictBool,
    field_validator,
)

from fetchgen.type_expr import TypeExpr

DEFAULT_INSTANCE = "@fgrzl/fetch"
"""Module the generated client imports ``FetchClient`` from by default."""


# --- Document models ---


def _stringify_keys(value: Any) -> Any:
    """Decode a null map as empty and turn scalar keys into strings.

    YAML reads unquoted keys such as ``200:`` as integers.
    """
    if value is None:
        return {}
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    return value


def _stringify_scalar(value: Any) -> Any:
    # ``operationId: 123`` or ``openapi: 3.0`` unquoted in YAML.
    return value if value is None or isinstance(value, (str, dict, list)) else str(value)


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised on an OpenAPI *Path Item Object*."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class Schema(BaseModel):
    """A node in the schema tree (an OpenAPI / JSON Schema *Schema Object*).

    ``type`` is decoded into ``type_tags``, an ordered tuple of type names:
    a single string becomes a one-element tuple, a list of strings is kept
    in order, and any other shape (including an empty string) decodes as
    the empty tuple.

    ``additionalProperties`` is a three-way variant: ``None`` (absent), a
    ``bool``, or a nested :class:`Schema`.

    ``$ref`` is kept as a plain string. References are never followed while
    building the model; the resolver emits the referenced name instead, so
    cyclic schemas are safe.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    type_tags: tuple[str, ...] = Field(default=(), alias="type")
    properties: dict[str, Optional[Schema]] = Field(default_factory=dict)
    items: Optional[Schema] = None
    enum: Optional[list[Any]] = None
    ref: Optional[str] = Field(default=None, alias="$ref")
    required_names: tuple[str, ...] = Field(default=(), alias="required")
    nullable: Optional[bool] = None
    all_of: list[Optional[Schema]] = Field(default_factory=list, alias="allOf")
    one_of: list[Optional[Schema]] = Field(default_factory=list, alias="oneOf")
    any_of: list[Optional[Schema]] = Field(default_factory=list, alias="anyOf")
    additional_properties: Union[StrictBool, Schema, None] = Field(
        default=None, alias="additionalProperties"
    )
    description: Optional[str] = None

    @field_validator("type_tags", mode="before")
    @classmethod
    def _decode_type_tags(cls, value: Any) -> tuple[str, ...]:
        """Accept ``"string"`` or ``["string", "null"]``; anything else is unset."""
        if isinstance(value, str):
            return (value,) if value else ()
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return tuple(value)
        return ()

    @field_validator("required_names", mode="before")
    @classmethod
    def _decode_required(cls, value: Any) -> tuple[str, ...]:
        # Swagger-style ``required: true`` on a property carries no names.
        if isinstance(value, (list, tuple)):
            return tuple(str(v) for v in value)
        return ()

    @field_validator("enum", mode="before")
    @classmethod
    def _decode_enum(cls, value: Any) -> Optional[list[Any]]:
        if isinstance(value, (list, tuple)):
            return list(value)
        return None

    @field_validator("properties", mode="before")
    @classmethod
    def _decode_properties(cls, value: Any) -> Any:
        return _stringify_keys(value)

    @field_validator("all_of", "one_of", "any_of", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value


class Parameter(BaseModel):
    """An OpenAPI *Parameter Object*.

    ``location`` is kept as a raw string so that documents using locations
    this tool does not care about still load; compare it against
    :class:`ParameterLocation`.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    name: str = ""
    location: str = Field(default="", alias="in")
    required: bool = False
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _stringify_name(cls, value: Any) -> Any:
        return _stringify_scalar(value)


class MediaType(BaseModel):
    """One entry of a ``content`` map (e.g. ``application/json``)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    schema_: Optional[Schema] = Field(default=None, alias="schema")


class RequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    description: Optional[str] = None
    required: bool = False
    content: dict[str, Optional[MediaType]] = Field(default_factory=dict)

    @field_validator("content", mode="before")
    @classmethod
    def _decode_content(cls, value: Any) -> Any:
        return _stringify_keys(value)


class Response(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    description: Optional[str] = None
    content: dict[str, Optional[MediaType]] = Field(default_factory=dict)

    @field_validator("content", mode="before")
    @classmethod
    def _decode_content(cls, value: Any) -> Any:
        return _stringify_keys(value)


class Operation(BaseModel):
    """An OpenAPI *Operation Object* (one verb on one path)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=dict)

    @field_validator("operation_id", "summary", "description", mode="before")
    @classmethod
    def _stringify_text(cls, value: Any) -> Any:
        return _stringify_scalar(value)

    @field_validator("parameters", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value: Any) -> Any:
        return _stringify_keys(value)


class PathItem(BaseModel):
    """An OpenAPI *Path Item Object*: one optional operation per HTTP verb.

    Path-level ``parameters`` apply to every operation under the path.
    Other path-level keys (``summary``, ``servers``, ...) are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    parameters: list[Parameter] = Field(default_factory=list)

    @field_validator("parameters", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    def operations(self) -> list[tuple[HTTPMethod, Operation]]:
        """Return the declared ``(method, operation)`` pairs."""
        found: list[tuple[HTTPMethod, Operation]] = []
        for method in HTTPMethod:
            operation = getattr(self, method.value)
            if operation is not None:
                found.append((method, operation))
        return found


class Components(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    schemas: dict[str, Optional[Schema]] = Field(default_factory=dict)

    @field_validator("schemas", mode="before")
    @classmethod
    def _decode_schemas(cls, value: Any) -> Any:
        return _stringify_keys(value)


class APIInfo(BaseModel):
    """API metadata extracted from the document's *Info Object*."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = "Untitled API"
    version: str = "0.0.0"

    @field_validator("title", "version", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        return _stringify_scalar(value)


class OpenAPIDocument(BaseModel):
    """The typed view of a deserialized OpenAPI document.

    Only what the generator consumes is modelled: ``paths`` and
    ``components.schemas`` (plus ``info`` for display).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    openapi: Optional[str] = None
    info: APIInfo = Field(default_factory=APIInfo)
    paths: dict[str, Optional[PathItem]] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)

    @field_validator("openapi", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        return _stringify_scalar(value)

    @field_validator("info", "components", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("paths", mode="before")
    @classmethod
    def _decode_paths(cls, value: Any) -> Any:
        return _stringify_keys(value)


# --- Resolved models ---


TypeField = Annotated[TypeExpr, PlainSerializer(lambda t: t.render(), return_type=str)]
"""A resolved type expression; serialises to its TypeScript spelling."""


class ResolvedParameter(BaseModel):
    """A path or query parameter with its resolved type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    required: bool = False
    type: TypeField
    description: Optional[str] = None


class ResolvedOperation(BaseModel):
    """One operation, fully resolved and ready for rendering.

    ``method`` is the client method name: the lowercase verb, with
    ``delete`` renamed to ``del`` because ``delete`` is a reserved word in
    the target language. ``display_path`` is the path template with every
    declared path parameter rewritten to ``${name}`` interpolation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    method: str
    path: str
    display_path: str
    path_params: tuple[ResolvedParameter, ...] = ()
    query_params: tuple[ResolvedParameter, ...] = ()
    has_body: bool = False
    request_type: Optional[TypeField] = None
    response_type: TypeField
    description: str = ""


class ResolvedProperty(BaseModel):
    """One declared property of a named schema."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    type: TypeField
    required: bool = False
    description: Optional[str] = None


class ResolvedSchema(BaseModel):
    """A named schema with its resolved type and sorted property list.

    ``is_alias`` tells the renderer whether to emit ``export type Name = ...``
    or an ``export interface`` built from ``properties``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: Optional[str] = None
    type: TypeField
    property_names: tuple[str, ...] = ()
    properties: tuple[ResolvedProperty, ...] = ()
    is_alias: bool = True


class Diagnostic(BaseModel):
    """A skipped, non-fatal data defect found while building the model."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    method: Optional[str] = None
    path: Optional[str] = None


class ApiModel(BaseModel):
    """The assembled intermediate model handed to the renderer.

    Operations and schemas are already in canonical order (see
    :mod:`fetchgen.ordering`), so iterating them is deterministic.
    """

    model_config = ConfigDict(frozen=True)

    operations: tuple[ResolvedOperation, ...] = ()
    schemas: tuple[ResolvedSchema, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


# --- Configuration ---


class GeneratorConfig(BaseModel):
    """Effective settings for one ``fetchgen generate`` run.

    Produced by :func:`~fetchgen.config.resolve_config` from CLI flags,
    environment variables and the project-local ``fetchgen.json``.
    """

    model_config = ConfigDict(extra="ignore")

    input: Optional[str] = Field(
        default=None, description="Path, URL or '-' for the OpenAPI document"
    )
    output: Optional[str] = Field(
        default=None, description="Path of the TypeScript file to write"
    )
    instance: str = Field(
        default=DEFAULT_INSTANCE,
        description="Module to import FetchClient and buildQueryParams from",
    )

    @field_validator("instance")
    @classmethod
    def _strip_ts_suffix(cls, value: str) -> str:
        return value[: -len(".ts")] if value.endswith(".ts") else value
