"""Exception hierarchy for gh-profile.

All exceptions inherit from :class:`GhProfileError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`ghprofile.exit_codes`.
The top-level handler in :func:`ghprofile.app.main` catches
``GhProfileError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Plugin-authored failures never surface as exceptions: the registry and
runner contain them and log a warning instead. The plugin exceptions below
cover the strict validation entry point and misuse of the plugin core
itself.

Subclass hierarchy::

    GhProfileError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- ValidationError         (exit 3)
    |   +-- PluginValidationError
    +-- GitHubError             (exit 4)
    |   +-- NotFoundError
    |   +-- AuthError
    |   +-- RateLimitError
    |   +-- ServerError
    |   +-- NetworkError
    +-- OutputError             (exit 5)
    +-- TemplateError           (exit 1)
    +-- ConfigError             (exit 1)
    +-- PluginError             (exit 10)
        +-- PluginLifecycleError
"""

from __future__ import annotations

from typing import Optional

from ghprofile.exit_codes import (
    EXIT_FILESYSTEM_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NETWORK_ERROR,
    EXIT_PLUGIN_ERROR,
    EXIT_VALIDATION_ERROR,
)


class GhProfileError(Exception):
    """Base exception for all gh-profile errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`ghprofile.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(GhProfileError):
    """Raised for invalid CLI arguments (unknown template, bad flag combination)."""

    exit_code = EXIT_INVALID_USAGE


class ValidationError(GhProfileError):
    """Raised when an input document or object fails validation."""

    exit_code = EXIT_VALIDATION_ERROR


class PluginValidationError(ValidationError):
    """Raised by :func:`~ghprofile.plugins.validate.assert_valid_plugin`.

    The registration path never raises this; it only logs the same reason
    and discards the candidate.
    """


class GitHubError(GhProfileError):
    """Base class for failures talking to the GitHub REST API."""

    exit_code = EXIT_NETWORK_ERROR


class NotFoundError(GitHubError):
    """Raised when GitHub returns HTTP 404 (unknown user)."""


class AuthError(GitHubError):
    """Raised when GitHub rejects the token (HTTP 401, or 403 without a rate limit)."""


class RateLimitError(GitHubError):
    """Raised when GitHub answers 403/429 because the rate limit is exhausted."""


class ServerError(GitHubError):
    """Raised when GitHub returns an unexpected status (5xx or other 4xx)."""


class NetworkError(GitHubError):
    """Raised on transport failures (timeout, DNS resolution, connection refused)."""


class OutputError(GhProfileError):
    """Raised when the generated README cannot be written."""

    exit_code = EXIT_FILESYSTEM_ERROR


class TemplateError(GhProfileError):
    """Raised for unknown, duplicate, invalid or failing templates."""


class ConfigError(GhProfileError):
    """Raised for configuration problems (invalid JSON/YAML, unknown keys, bad schema version)."""


class PluginError(GhProfileError):
    """Raised when the plugin system itself cannot proceed.

    Args:
        message: Human-readable error description.
        plugin_id: Id of the plugin involved, if any.
        phase: Lifecycle phase the failure belongs to, if any.
    """

    exit_code = EXIT_PLUGIN_ERROR

    def __init__(
        self,
        message: str,
        plugin_id: Optional[str] = None,
        phase: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.plugin_id = plugin_id
        self.phase = phase


class PluginLifecycleError(PluginError):
    """Raised when a runner phase is called before the registry is initialized."""
