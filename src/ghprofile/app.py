"""Typer application and CLI entry point for gh-profile.

The root callback configures logging and the global
:class:`~ghprofile.output.OutputManager` from the global flags; the
sub-commands are registered below the app definition.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. Known errors exit with their mapped code; anything
else writes a crash log under the data directory.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from ghprofile import __version__
from ghprofile.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="gh-profile",
    help="Generate a GitHub profile README from your GitHub data.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gh-profile {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Args:
        ctx: Typer invocation context; ``ctx.obj["verbose"]`` is set for
            sub-commands.
        version: Print the version and exit.
        json_output: Force JSON output.
        plain_output: Force plain-text output.
        no_color: Disable colour and Rich markup.
        quiet: Suppress informational messages.
        verbose: Show debug messages and DEBUG-level log records.
    """
    from ghprofile.output import OutputFormat, OutputManager, set_output

    _configure_logging(verbose)

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from ghprofile.commands.config import config_app  # noqa: E402
from ghprofile.commands.generate import generate_command  # noqa: E402
from ghprofile.commands.plugins import plugins_command  # noqa: E402
from ghprofile.commands.preview import preview_command  # noqa: E402
from ghprofile.commands.templates import templates_command  # noqa: E402

app.command("generate")(generate_command)
app.command("preview")(preview_command)
app.command("templates")(templates_command)
app.command("plugins")(plugins_command)
app.add_typer(config_app, name="config", help="Show or create the config file.")


def _setup_signal_handlers() -> None:
    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback under the data directory and return its path."""
    from ghprofile.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """Console-script entry point.

    Raises:
        SystemExit: Always, either from Typer or with a mapped exit code.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from ghprofile.exceptions import GhProfileError
        from ghprofile.output import error

        if isinstance(exc, GhProfileError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
