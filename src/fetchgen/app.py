"""Typer application and CLI entry point for fetchgen.

This module wires together the top-level Typer application and registers the
built-in commands (``generate``, ``inspect``, ``init``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a Ctrl-C handler and invokes the app;
:class:`~fetchgen.exceptions.FetchgenError` instances that escape a command
become a clean exit with the error's ``exit_code``.

See Also:
    :mod:`fetchgen.config`: Generator settings resolution.
    :mod:`fetchgen.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any

import typer

from fetchgen import __version__
from fetchgen.commands.generate import generate_command
from fetchgen.commands.init import init_command
from fetchgen.commands.inspect import inspect_command
from fetchgen.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED

app = typer.Typer(
    name="fetchgen",
    help="Generate typed TypeScript fetch clients from OpenAPI 3.0/3.1 documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.command("inspect")(inspect_command)
app.command("init")(init_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"fetchgen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every command.

    Installs the global :class:`~fetchgen.output.OutputManager` built from
    the CLI flags. ``--verbose`` also routes library log records (such as
    skipped-operation warnings) to stderr at DEBUG level.
    """
    from fetchgen.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.JSON if json_output else OutputFormat.AUTO
    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )

    if verbose:
        _configure_logging(logging.DEBUG)


def _configure_logging(level: int) -> None:
    """Attach a stderr handler to the ``fetchgen`` logger."""
    logger = logging.getLogger("fetchgen")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``fetchgen`` console script.

    Unhandled :class:`~fetchgen.exceptions.FetchgenError` instances cause a
    clean exit with the error's ``exit_code``. Any other exception is
    reported on stderr and exits with a generic failure code.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from fetchgen.exceptions import FetchgenError
        from fetchgen.output import error

        if isinstance(exc, FetchgenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
