"""Numeric process exit codes for the ``gh-profile`` command.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~ghprofile.exceptions.GhProfileError` subclass.
Shell scripts and CI jobs can branch on the exit code without parsing
stderr.

Example::

    $ gh-profile generate octocat
    $ echo $?
    4   # EXIT_NETWORK_ERROR -- GitHub could not be reached or refused the call
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_VALIDATION_ERROR = 3
"""Input (a plugin, template or config document) failed validation."""

EXIT_NETWORK_ERROR = 4
"""The GitHub API call failed (unreachable, not found, rate limited, rejected)."""

EXIT_FILESYSTEM_ERROR = 5
"""The README could not be written to disk."""

EXIT_PLUGIN_ERROR = 10
"""The plugin system was misused or a plugin could not be loaded."""
