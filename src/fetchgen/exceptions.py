"""Exception hierarchy for fetchgen.

All exceptions inherit from :class:`FetchgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`fetchgen.exit_codes`.
The top-level error handler in :func:`fetchgen.app.main` catches
``FetchgenError`` and exits with the appropriate code.

None of these are raised by the resolution core: skippable data defects
(operations without an id, unresolvable schema shapes) are reported through
:class:`~fetchgen.diagnostics.Diagnostics` or degrade to ``any`` instead.

Subclass hierarchy::

    FetchgenError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SpecParseError      (exit 7)
    +-- ConfigError         (exit 1)
    +-- RenderError         (exit 1)
"""

from fetchgen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class FetchgenError(Exception):
    """Base exception for all fetchgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`fetchgen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(FetchgenError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(FetchgenError):
    """Raised when the OpenAPI document cannot be loaded or deserialized."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(FetchgenError):
    """Raised for configuration problems (invalid project config, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE


class RenderError(FetchgenError):
    """Raised when the generated client cannot be rendered or written."""

    exit_code = EXIT_GENERIC_FAILURE
