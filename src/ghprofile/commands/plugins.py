"""``gh-profile plugins`` -- list discovered plugins and their resolved state."""

from __future__ import annotations

from typing import Optional

import typer

from ghprofile.commands._common import fail, run
from ghprofile.config import load_config
from ghprofile.core.generate import build_plugin_system
from ghprofile.exceptions import GhProfileError
from ghprofile.output import info, print_table

_COLUMNS = ["id", "name", "version", "source", "enabled", "description"]


def plugins_command(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Config file."),
    enable_plugin: list[str] = typer.Option([], "--enable-plugin", help="Preview enabling a plugin."),
    disable_plugin: list[str] = typer.Option([], "--disable-plugin", help="Preview disabling a plugin."),
) -> None:
    """List plugins as 'generate' would see them with the same flags."""
    try:
        config = load_config(config_path)
        registry, _ = run(build_plugin_system(config, enable_plugin, disable_plugin))
    except GhProfileError as exc:
        fail(exc)

    rows = registry.describe()
    if not rows:
        info("No plugins registered.")
        return
    print_table(_COLUMNS, [[row[c] for c in _COLUMNS] for row in rows], title="Plugins")
