"""``gh-profile config`` -- inspect or create the project config file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ghprofile.commands._common import fail
from ghprofile.config import DEFAULT_CONFIG_NAME, resolve_config, save_config
from ghprofile.exceptions import GhProfileError, OutputError
from ghprofile.models import Config
from ghprofile.output import info, print_json, success, suggest

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Config file."),
) -> None:
    """Show the effective configuration (file, environment and defaults merged).

    The token is masked.
    """
    try:
        config = resolve_config(config_path)
    except GhProfileError as exc:
        fail(exc)

    data = config.model_dump(mode="json", by_alias=True)
    if data.get("token"):
        data["token"] = "****"
    info(f"Config file: {Path.cwd() / (config_path or DEFAULT_CONFIG_NAME)}")
    print_json(data)


@config_app.command("init")
def config_init(
    path: str = typer.Argument(DEFAULT_CONFIG_NAME, help="Where to write the config."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file."),
) -> None:
    """Write a default config file."""
    target = Path(path)
    if target.exists() and not force:
        fail(OutputError(f"{target} already exists (use --force to overwrite)"))

    try:
        save_config(Config(), target)
    except OSError as exc:
        fail(OutputError(f"Cannot write {target}: {exc}"))
    success(f"Wrote {target}")
    suggest("Edit the template, pinnedRepos and plugins entries, then run 'gh-profile generate'.")
