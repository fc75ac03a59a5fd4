"""``gh-profile generate`` -- build a README and write it to disk."""

from __future__ import annotations

from typing import Optional

import typer

from ghprofile.commands._common import fail, fetch, run
from ghprofile.config import resolve_config
from ghprofile.core.assets import make_assets_local
from ghprofile.core.generate import build_plugin_system, generate
from ghprofile.exceptions import GhProfileError
from ghprofile.models import Config
from ghprofile.output import info, success
from ghprofile.templates import create_default_registry
from ghprofile.writer import write_output


async def _generate(
    username: str,
    config: Config,
    enable: list[str],
    disable: list[str],
    local_assets: bool,
    no_cache: bool,
) -> str:
    template = create_default_registry(config.templates_path).require(config.template)
    _, runner = await build_plugin_system(config, enable, disable)
    data = await fetch(username, config, no_cache)
    content = await generate(
        data,
        template,
        runner,
        exclude=config.github.exclude_repos,
        pinned=config.github.pinned_repos,
        tools=config.customize.tools,
    )
    if local_assets:
        content = await make_assets_local(content, config.output)
    return content


def generate_command(
    username: str = typer.Argument(help="GitHub username to generate a README for."),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Template id (see 'gh-profile templates')."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output file. Defaults to ./README.md."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="GitHub token. Defaults to GH_PROFILE_TOKEN or GITHUB_TOKEN."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file."),
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Config file. Defaults to ./gh-profile.config.json."
    ),
    enable_plugin: list[str] = typer.Option(
        [], "--enable-plugin", help="Enable a plugin by id (repeatable)."
    ),
    disable_plugin: list[str] = typer.Option(
        [], "--disable-plugin", help="Disable a plugin by id (repeatable). Wins over --enable-plugin."
    ),
    local_assets: bool = typer.Option(
        False, "--local-assets", help="Download images into ./assets next to the output."
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the GitHub response cache."),
) -> None:
    """Generate a profile README for USERNAME.

    Example::

        gh-profile generate octocat
        gh-profile generate octocat -t showcase -o profile/README.md --force
        gh-profile generate octocat --disable-plugin stats
    """
    try:
        config = resolve_config(config_path, template, output, token, force or None)
        content = run(
            _generate(username, config, enable_plugin, disable_plugin, local_assets, no_cache)
        )
        result = write_output(content, config.output, overwrite=config.force)
    except GhProfileError as exc:
        fail(exc)

    verb = "Updated" if result.overwritten else "Created"
    success(f"{verb} {result.path} using template '{config.template}'")
    info(f"{len(content.splitlines())} lines written")
