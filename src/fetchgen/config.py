"""Configuration loading, atomic writes, and precedence resolution.

fetchgen keeps no user-level state; its only persistent configuration is an
optional project-local ``fetchgen.json`` in the working directory::

    {
      "input": "openapi.yaml",
      "output": "src/api.ts",
      "instance": "@fgrzl/fetch"
    }

:func:`resolve_config` merges CLI flags, environment variables
(``FETCHGEN_INPUT``, ``FETCHGEN_OUTPUT``, ``FETCHGEN_INSTANCE``), that file
and the defaults into one :class:`~fetchgen.models.GeneratorConfig`.

All file writes go through :func:`atomic_write` (temp file then rename), so
a crash never leaves a half-written config or generated client behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from fetchgen.exceptions import ConfigError
from fetchgen.models import GeneratorConfig

_PROJECT_CONFIG_FILENAME = "fetchgen.json"

ENV_INPUT = "FETCHGEN_INPUT"
ENV_OUTPUT = "FETCHGEN_OUTPUT"
ENV_INSTANCE = "FETCHGEN_INSTANCE"


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project-local config ---


def project_config_path() -> Path:
    """Return the path of the project-local config file (``./fetchgen.json``)."""
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./fetchgen.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = project_config_path()
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read project config at {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def save_project_config(config: GeneratorConfig) -> Path:
    """Write *config* to ``./fetchgen.json``, omitting unset values."""
    path = project_config_path()
    data = config.model_dump(exclude_none=True)
    try:
        atomic_write(path, json.dumps(data, indent=2) + "\n")
    except OSError as exc:
        raise ConfigError(f"Failed to write project config at {path}: {exc}") from exc
    return path


# --- Precedence resolution ---


def resolve_config(
    cli_input: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_instance: Optional[str] = None,
) -> GeneratorConfig:
    """Resolve the generator settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_input``, ``cli_output``, ``cli_instance``)
        2. Environment variables (``FETCHGEN_INPUT``, ``FETCHGEN_OUTPUT``,
           ``FETCHGEN_INSTANCE``)
        3. Project config (``./fetchgen.json``)
        4. Defaults

    Empty environment variables are ignored. Nothing here checks that
    ``input`` and ``output`` are present; the ``generate`` command does.

    Raises:
        ConfigError: If the project config is invalid or the merged values
            fail validation.
    """
    # 4 + 3. Defaults overlaid with the project file
    values: dict[str, Any] = {}
    project = load_project_config()
    if project is not None:
        values.update(project)

    # 2. Environment
    for key, env_var in (("input", ENV_INPUT), ("output", ENV_OUTPUT), ("instance", ENV_INSTANCE)):
        env_value = os.environ.get(env_var)
        if env_value:
            values[key] = env_value

    # 1. CLI flags (highest precedence)
    for key, cli_value in (("input", cli_input), ("output", cli_output), ("instance", cli_instance)):
        if cli_value is not None:
            values[key] = cli_value

    try:
        return GeneratorConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
