"""Tests for fetchgen.config."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from fetchgen.config import (
    atomic_write,
    load_project_config,
    resolve_config,
    save_project_config,
)
from fetchgen.exceptions import ConfigError
from fetchgen.models import DEFAULT_INSTANCE, GeneratorConfig


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "out.ts"
        atomic_write(target, "content")
        assert target.read_text(encoding="utf-8") == "content"

    def test_no_temp_file_left_on_failure(self, tmp_path: Path) -> None:
        target = tmp_path / "out.ts"
        with patch("fetchgen.config.os.replace", side_effect=OSError("boom")):
            with pytest.raises(OSError, match="boom"):
                atomic_write(target, "content")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_missing_file(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_file(self, isolated_config: Path) -> None:
        (isolated_config / "fetchgen.json").write_text(
            json.dumps({"input": "api.yaml", "output": "api.ts"}), encoding="utf-8"
        )
        assert load_project_config() == {"input": "api.yaml", "output": "api.ts"}

    def test_invalid_json(self, isolated_config: Path) -> None:
        (isolated_config / "fetchgen.json").write_text("{nope", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object(self, isolated_config: Path) -> None:
        (isolated_config / "fetchgen.json").write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()

    def test_save_round_trip(self, isolated_config: Path) -> None:
        path = save_project_config(GeneratorConfig(input="api.yaml", output="src/api.ts"))
        assert path == isolated_config / "fetchgen.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "input": "api.yaml",
            "output": "src/api.ts",
            "instance": DEFAULT_INSTANCE,
        }


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_config()
        assert config.input is None
        assert config.output is None
        assert config.instance == DEFAULT_INSTANCE

    def test_project_file(self, isolated_config: Path) -> None:
        (isolated_config / "fetchgen.json").write_text(
            json.dumps({"input": "file.yaml", "output": "file.ts", "instance": "@acme/http"}),
            encoding="utf-8",
        )
        config = resolve_config()
        assert (config.input, config.output, config.instance) == ("file.yaml", "file.ts", "@acme/http")

    def test_env_beats_project_file(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_config / "fetchgen.json").write_text(
            json.dumps({"input": "file.yaml", "output": "file.ts"}), encoding="utf-8"
        )
        monkeypatch.setenv("FETCHGEN_INPUT", "env.yaml")
        config = resolve_config()
        assert config.input == "env.yaml"
        assert config.output == "file.ts"

    def test_cli_beats_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FETCHGEN_INPUT", "env.yaml")
        monkeypatch.setenv("FETCHGEN_OUTPUT", "env.ts")
        monkeypatch.setenv("FETCHGEN_INSTANCE", "@env/fetch")
        config = resolve_config(cli_input="cli.yaml", cli_instance="@cli/fetch")
        assert config.input == "cli.yaml"
        assert config.output == "env.ts"
        assert config.instance == "@cli/fetch"

    def test_empty_env_ignored(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FETCHGEN_INSTANCE", "")
        assert resolve_config().instance == DEFAULT_INSTANCE

    def test_instance_ts_suffix_stripped(self, isolated_config: Path) -> None:
        assert resolve_config(cli_instance="./client.ts").instance == "./client"

    def test_invalid_values(self, isolated_config: Path) -> None:
        (isolated_config / "fetchgen.json").write_text(
            json.dumps({"input": ["not", "a", "string"]}), encoding="utf-8"
        )
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()

    def test_unknown_keys_ignored(self, isolated_config: Path) -> None:
        (isolated_config / "fetchgen.json").write_text(
            json.dumps({"input": "a.yaml", "comment": "hi"}), encoding="utf-8"
        )
        assert resolve_config().input == "a.yaml"
