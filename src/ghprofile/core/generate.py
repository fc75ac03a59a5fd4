"""The README generation pipeline.

::

    GitHubData --normalize--> NormalizedData --before_render--> data'
        --template.render--> markdown --render--> --after_render--> README

Template failures are fatal and surface as
:class:`~ghprofile.exceptions.TemplateError`. Plugin failures are contained
by the runner and never stop generation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from ghprofile.core.normalize import normalize
from ghprofile.core.sanitize import sanitize_tech_stack
from ghprofile.exceptions import TemplateError
from ghprofile.models import Config, GitHubData
from ghprofile.plugins.loader import discover_plugins
from ghprofile.plugins.registry import PluginRegistry
from ghprofile.plugins.resolve import resolve_plugin_state
from ghprofile.plugins.runner import PluginRunner
from ghprofile.templates.base import Template

logger = logging.getLogger(__name__)


async def build_plugin_system(
    config: Optional[Config] = None,
    cli_enable: Iterable[str] = (),
    cli_disable: Iterable[str] = (),
) -> tuple[PluginRegistry, PluginRunner]:
    """Create, populate and initialize a fresh plugin registry.

    Discovery registers built-in, local and entry-point plugins. The
    enablement decision from :func:`resolve_plugin_state` is then applied
    as explicit options, so CLI flags override the config file's
    booleans while its mapping values still reach each plugin as settings.

    Returns:
        The initialized registry and a runner bound to it.
    """
    config = config or Config()
    registry = PluginRegistry()
    discover_plugins(registry, config.plugins_path)

    known = registry.plugin_ids()
    cli_enable, cli_disable = list(cli_enable), list(cli_disable)
    for pid in [*cli_enable, *cli_disable]:
        if pid not in known:
            logger.warning("Unknown plugin '%s' on the command line; ignoring.", pid)

    resolution = resolve_plugin_state(
        known,
        cli_enable=cli_enable,
        cli_disable=cli_disable,
        config=config.plugin_toggles(),
    )
    await registry.initialize(resolution.as_options(), config=config)
    return registry, PluginRunner(registry)


async def generate(
    data: GitHubData,
    template: Template,
    runner: PluginRunner,
    exclude: Iterable[str] = (),
    pinned: Iterable[str] = (),
    tools: Iterable[str] = (),
) -> str:
    """Render a README for *data* with *template*, passing through plugins.

    Args:
        data: Raw fetch result.
        template: Template to render with.
        runner: Runner over an initialized registry.
        exclude: Repository names to drop.
        pinned: Repository names to list first among the top repositories.
        tools: Free-form tool names; sanitized to skillicons ids.

    Raises:
        TemplateError: If the template raises or returns a non-string.
        PluginLifecycleError: If the runner's registry is not initialized.
    """
    normalized = normalize(data, exclude=exclude, pinned=pinned, tools=sanitize_tech_stack(tools))
    normalized = await runner.run_before_render(normalized)

    try:
        content = template.render(normalized)
    except Exception as exc:
        raise TemplateError(f"Template '{template.id}' failed to render: {exc}") from exc
    if not isinstance(content, str):
        raise TemplateError(f"Template '{template.id}' returned {type(content).__name__}, not a string")

    content = await runner.run_render(normalized, content)
    return await runner.run_after_render(normalized, content)
