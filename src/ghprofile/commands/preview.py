"""``gh-profile preview`` -- render to stdout with personal details redacted."""

from __future__ import annotations

from typing import Optional

import typer

from ghprofile.commands._common import fail, fetch, run
from ghprofile.config import resolve_config
from ghprofile.core.normalize import normalize
from ghprofile.core.sanitize import sanitize_tech_stack
from ghprofile.exceptions import GhProfileError
from ghprofile.models import Config
from ghprofile.output import print_markdown
from ghprofile.templates import create_default_registry, generate_preview


async def _preview(username: str, config: Config, no_cache: bool) -> str:
    template = create_default_registry(config.templates_path).require(config.template)
    data = await fetch(username, config, no_cache)
    normalized = normalize(
        data,
        exclude=config.github.exclude_repos,
        pinned=config.github.pinned_repos,
        tools=sanitize_tech_stack(config.customize.tools),
    )
    return generate_preview(template, normalized)


def preview_command(
    username: str = typer.Argument(help="GitHub username to preview."),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Template id."),
    token: Optional[str] = typer.Option(None, "--token", help="GitHub token."),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Config file."),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the GitHub response cache."),
) -> None:
    """Preview the template output for USERNAME without writing a file.

    Email addresses and ``email:``/``location:``/``phone:``/``address:``/
    ``private:`` lines are redacted. Plugins are not run.
    """
    try:
        config = resolve_config(config_path, cli_template=template, cli_token=token)
        content = run(_preview(username, config, no_cache))
    except GhProfileError as exc:
        fail(exc)
    print_markdown(content)
