"""Tests for fetchgen.generator.renderer."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from fetchgen.exceptions import RenderError
from fetchgen.generator import build_model
from fetchgen.generator.renderer import (
    OPTIONS_ARG,
    arg_list,
    client_call,
    generate,
    render_typescript,
)
from fetchgen.models import ApiModel, OpenAPIDocument, ResolvedOperation, ResolvedParameter
from fetchgen.type_expr import NUMBER, STRING, UNKNOWN, Reference


def _op(**fields) -> ResolvedOperation:
    defaults = dict(
        id="op",
        method="get",
        path="/x",
        display_path="/x",
        response_type=UNKNOWN,
    )
    defaults.update(fields)
    return ResolvedOperation(**defaults)


# ---------------------------------------------------------------------------
# arg_list
# ---------------------------------------------------------------------------


class TestArgList:
    def test_only_options(self) -> None:
        assert arg_list(_op()) == OPTIONS_ARG

    def test_path_params(self) -> None:
        op = _op(
            path_params=(
                ResolvedParameter(name="id", required=True, type=STRING),
                ResolvedParameter(name="rev", required=False, type=NUMBER),
            )
        )
        assert arg_list(op) == f"id: string, rev: number | undefined, {OPTIONS_ARG}"

    def test_query_params_folded(self) -> None:
        op = _op(
            query_params=(
                ResolvedParameter(name="q", required=True, type=STRING),
                ResolvedParameter(name="page-size", type=NUMBER),
            )
        )
        assert arg_list(op) == f'query?: {{ q: string; "page-size"?: number }}, {OPTIONS_ARG}'

    def test_body_with_type(self) -> None:
        op = _op(method="post", has_body=True, request_type=Reference("User"))
        assert arg_list(op) == f"body: User, {OPTIONS_ARG}"

    def test_body_without_json_type(self) -> None:
        op = _op(method="post", has_body=True)
        assert arg_list(op) == f"body: any, {OPTIONS_ARG}"

    def test_order(self) -> None:
        op = _op(
            method="put",
            has_body=True,
            request_type=Reference("User"),
            path_params=(ResolvedParameter(name="id", required=True, type=STRING),),
            query_params=(ResolvedParameter(name="dryRun", type=UNKNOWN),),
        )
        assert arg_list(op) == f"id: string, query?: {{ dryRun?: any }}, body: User, {OPTIONS_ARG}"


# ---------------------------------------------------------------------------
# client_call
# ---------------------------------------------------------------------------


class TestClientCall:
    @pytest.mark.parametrize("method", ["get", "del", "head"])
    def test_params_methods(self, method: str) -> None:
        assert client_call(_op(method=method), "url") == f"return client.{method}(url, undefined, options);"

    @pytest.mark.parametrize("method", ["post", "put", "patch"])
    def test_body_methods(self, method: str) -> None:
        op = _op(method=method, has_body=True)
        assert client_call(op, "url") == f"return client.{method}(url, body, undefined, options);"

    def test_body_method_without_body(self) -> None:
        assert (
            client_call(_op(method="post"), "url")
            == "return client.post(url, undefined, undefined, options);"
        )

    @pytest.mark.parametrize("method", ["options", "trace"])
    def test_other_methods(self, method: str) -> None:
        assert client_call(_op(method=method), "url") == f"return client.{method}(url, undefined, options);"
        with_body = _op(method=method, has_body=True)
        assert client_call(with_body, "url") == f"return client.{method}(url, body, options);"


# ---------------------------------------------------------------------------
# render_typescript
# ---------------------------------------------------------------------------


class TestRenderTypescript:
    def test_header_and_imports(self) -> None:
        code = render_typescript(ApiModel(), instance="@acme/fetch")
        assert code.startswith("// Auto-generated by fetch-gen\n")
        assert "import type { FetchClient, FetchResponse } from '@acme/fetch';" in code
        assert "import { buildQueryParams } from '@acme/fetch';" in code
        assert "export function createAdapter(client: FetchClient): {" in code

    def test_default_instance(self) -> None:
        assert "from '@fgrzl/fetch';" in render_typescript(ApiModel())

    def test_instance_ts_suffix_stripped(self) -> None:
        code = render_typescript(ApiModel(), instance="./lib/client.ts")
        assert "from './lib/client';" in code

    def test_complex_api(self, complex_api: OpenAPIDocument) -> None:
        code = render_typescript(build_model(complex_api))

        # Signature block
        assert f"getUser: ({OPTIONS_ARG}) => Promise<FetchResponse<Array<User>>>;" in code
        assert f"createUser: (body: User, {OPTIONS_ARG}) => Promise<FetchResponse<User>>;" in code
        assert f"updateUser: (id: string, body: User, {OPTIONS_ARG}) => Promise<FetchResponse<User>>;" in code
        assert f"delUser: (id: string, {OPTIONS_ARG}) => Promise<FetchResponse<boolean>>;" in code

        # Implementations
        assert "return client.get(`/users`, undefined, options);" in code
        assert "return client.post(`/users`, body, undefined, options);" in code
        assert "return client.put(`/users/${id}`, body, undefined, options);" in code
        assert "return client.del(`/users/${id}`, undefined, options);" in code

        # Interface members
        assert "export interface User {" in code
        assert '  status?: "active" | "inactive" | "banned";' in code
        assert "  tags?: Array<string>;" in code
        assert "  metadata?: Record<string, string>;" in code
        assert "  profile?: { age?: number; bio?: string };" in code

    def test_operations_in_canonical_order(self, complex_api: OpenAPIDocument) -> None:
        code = render_typescript(build_model(complex_api))
        signatures = code.split("} {")[0]
        positions = [signatures.index(f"  {name}: (") for name in ("createUser", "getUser", "delUser", "updateUser")]
        assert positions == sorted(positions)

    def test_doc_comments(self, users_api: OpenAPIDocument) -> None:
        code = render_typescript(build_model(users_api))
        assert "   * Fetch one user\n" in code
        assert "   * @param id - User id\n" in code
        assert "   * GET /users\n" in code
        assert "   * @param query - Query parameters\n" in code

    def test_query_url_building(self, users_api: OpenAPIDocument) -> None:
        code = render_typescript(build_model(users_api))
        assert "const queryString = query ? buildQueryParams(query) : '';" in code
        assert "const url = `/users` + (queryString ? '?' + queryString : '');" in code
        assert "return client.get(url, undefined, options);" in code
        assert 'query?: { limit?: number; role: "admin" | "member" }' in code

    def test_schema_declarations(self, users_api: OpenAPIDocument) -> None:
        code = render_typescript(build_model(users_api))
        assert "/** A registered user */\nexport interface User {" in code
        assert "  /** Display name */\n  name?: string | null;" in code
        assert "  id: number;" in code
        assert "/** Role schema */\nexport type Role = \"admin\" | \"member\";" in code
        assert "export type Tags = Record<string, string>;" in code

    def test_methods_separated_by_commas(self, users_api: OpenAPIDocument) -> None:
        code = render_typescript(build_model(users_api))
        implementation = code.split("return {", 1)[1]
        assert implementation.count("    },\n") == 1
        assert "    }\n  };\n}" in implementation

    def test_deterministic(self, complex_api: OpenAPIDocument) -> None:
        assert render_typescript(build_model(complex_api)) == render_typescript(build_model(complex_api))

    def test_no_html_escaping(self) -> None:
        op = _op(id="getThing", description="Returns <Thing> & friends")
        code = render_typescript(ApiModel(operations=(op,)))
        assert "Returns <Thing> & friends" in code


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerate:
    def test_writes_file(self, tmp_path: Path, complex_api: OpenAPIDocument) -> None:
        model = build_model(complex_api)
        target = tmp_path / "out" / "api.ts"
        written = generate(model, target)
        assert written == target
        assert target.read_text(encoding="utf-8") == render_typescript(model)

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "api.ts"
        target.write_text("stale", encoding="utf-8")
        generate(ApiModel(), str(target))
        assert "stale" not in target.read_text(encoding="utf-8")
        assert [p.name for p in tmp_path.iterdir()] == ["api.ts"]

    def test_write_failure_raises_render_error(self, tmp_path: Path) -> None:
        with patch("fetchgen.generator.renderer.atomic_write", side_effect=OSError("disk full")):
            with pytest.raises(RenderError, match="disk full"):
                generate(ApiModel(), tmp_path / "api.ts")


# ---------------------------------------------------------------------------
# Interface declarations for untyped and nullable objects
# ---------------------------------------------------------------------------


class TestInterfaceShapes:
    """Schemas that become interfaces render from their declared properties only."""

    def _model(self, schemas: dict) -> ApiModel:
        return build_model(OpenAPIDocument.model_validate({"components": {"schemas": schemas}}))

    def test_untyped_map_renders_empty_interface(self) -> None:
        model = self._model({"Labels": {"additionalProperties": {"type": "string"}}})
        labels = model.schemas[0]
        assert labels.is_alias is False
        assert labels.type.render() == "Record<string, string>"

        code = render_typescript(model)
        assert "/** Labels schema */\nexport interface Labels {\n}\n" in code
        assert "Record<string, string>" not in code

    def test_nullable_object_renders_without_null(self) -> None:
        model = self._model(
            {"Note": {"type": ["object", "null"], "properties": {"text": {"type": "string"}}}}
        )
        note = model.schemas[0]
        assert note.is_alias is False
        assert note.type.render() == "{ text?: string } | null"

        code = render_typescript(model)
        assert "export interface Note {\n  text?: string;\n}\n" in code
        assert "| null" not in code
