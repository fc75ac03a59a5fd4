"""Plugin system for gh-profile.

Plugins adjust the normalized data before a template renders and rewrite
the markdown afterwards. The package is split by responsibility:

* :class:`Plugin` / :class:`PluginMetadata` -- the plugin record.
* :func:`validate_plugin` -- shape checks applied on registration.
* :func:`resolve_plugin_state` -- CLI/config/default enablement policy.
* :class:`PluginRegistry` -- identity, enablement and per-plugin config.
* :class:`PluginRunner` -- drives ``before_render``, ``render`` and
  ``after_render`` across enabled plugins.
* :func:`discover_plugins` -- built-in, local and entry-point loading.

Example:
    Wiring the pieces by hand::

        registry = PluginRegistry()
        discover_plugins(registry)
        resolution = resolve_plugin_state(registry.plugin_ids(), cli_disable=["stats"])
        await registry.initialize(resolution.as_options(), config=config)
        content = await PluginRunner(registry).run_render(data, content)
"""

from ghprofile.plugins.base import (
    Hook,
    Plugin,
    PluginContext,
    PluginMetadata,
    PluginOptions,
)
from ghprofile.plugins.loader import (
    ENTRY_POINT_GROUP,
    discover_plugins,
    load_builtin_plugins,
    load_entry_point_plugins,
    load_local_plugins,
)
from ghprofile.plugins.registry import PluginRegistry
from ghprofile.plugins.resolve import PluginResolution, resolve_plugin_state
from ghprofile.plugins.runner import PluginRunner
from ghprofile.plugins.validate import assert_valid_plugin, validate_plugin

__all__ = [
    "ENTRY_POINT_GROUP",
    "Hook",
    "Plugin",
    "PluginContext",
    "PluginMetadata",
    "PluginOptions",
    "PluginRegistry",
    "PluginResolution",
    "PluginRunner",
    "assert_valid_plugin",
    "discover_plugins",
    "load_builtin_plugins",
    "load_entry_point_plugins",
    "load_local_plugins",
    "resolve_plugin_state",
    "validate_plugin",
]
