"""Plugin discovery.

Plugins reach a registry from three places, registered in this order:

1. **Built-ins** -- ``stats``, ``socials`` and ``projects``.
2. **Local plugins** -- every sub-directory of ``./plugins/`` (or the
   configured ``pluginsPath``) that contains a ``plugin.py`` exposing a
   module-level ``plugin``. The value may be a
   :class:`~ghprofile.plugins.base.Plugin` or a mapping of the same shape.
3. **Installed packages** -- entry points in the ``gh_profile.plugins``
   group::

       [project.entry-points."gh_profile.plugins"]
       wakatime = "gh_profile_wakatime:plugin"

   An entry point may also name a zero-argument factory returning the
   plugin.

Registration order is hook execution order, so built-ins always run first.
A plugin that fails to import is logged and skipped; the registry's own
validation and duplicate checks apply to everything loaded here.
"""

from __future__ import annotations

import importlib.metadata
import logging
from pathlib import Path
from typing import Any, Optional, Union

from ghprofile._loading import load_module_from_path
from ghprofile.plugins.base import Plugin
from ghprofile.plugins.registry import PluginRegistry
from ghprofile.plugins.validate import plugin_problems

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "gh_profile.plugins"
"""Entry-point group scanned by :func:`load_entry_point_plugins`."""

DEFAULT_PLUGINS_DIR = "plugins"
PLUGIN_MODULE = "plugin.py"


def load_builtin_plugins(registry: PluginRegistry) -> list[str]:
    """Register the built-in plugins and return the ids that were accepted."""
    from ghprofile.plugins.builtin import BUILTIN_PLUGINS

    return [p.metadata.id for p in BUILTIN_PLUGINS if registry.register(p, source="built-in")]


def load_local_plugins(
    registry: PluginRegistry,
    path: Optional[Union[str, Path]] = None,
) -> list[str]:
    """Import and register every plugin directory under *path*.

    Args:
        registry: Target registry.
        path: Plugins directory; defaults to ``./plugins``.

    Returns:
        Ids of the plugins that were registered.
    """
    root = Path.cwd() / Path(path or DEFAULT_PLUGINS_DIR)
    if not root.is_dir():
        logger.debug("No plugins directory found at %s", root)
        return []

    loaded = []
    for plugin_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        module_path = plugin_dir / PLUGIN_MODULE
        if not module_path.is_file():
            logger.debug("Skipping %s: no %s", plugin_dir, PLUGIN_MODULE)
            continue
        try:
            module = load_module_from_path(module_path, "ghprofile_local_plugins")
        except Exception as exc:
            logger.warning("Failed to load plugin from %s: %s", plugin_dir, exc)
            continue

        candidate = getattr(module, "plugin", None)
        if candidate is None:
            logger.warning("No 'plugin' object found in %s", module_path)
            continue
        plugin_id = _register(registry, candidate, "local")
        if plugin_id:
            logger.debug("Loaded local plugin '%s' from %s", plugin_id, plugin_dir)
            loaded.append(plugin_id)
    return loaded


def load_entry_point_plugins(registry: PluginRegistry) -> list[str]:
    """Register plugins advertised by installed distributions."""
    loaded = []
    for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
        try:
            candidate = ep.load()
            if callable(candidate) and not isinstance(candidate, Plugin):
                candidate = candidate()
        except Exception as exc:
            logger.warning("Failed to load plugin entry point '%s': %s", ep.name, exc)
            continue
        plugin_id = _register(registry, candidate, "entry-point")
        if plugin_id:
            loaded.append(plugin_id)
    return loaded


def discover_plugins(
    registry: PluginRegistry,
    plugins_path: Optional[Union[str, Path]] = None,
) -> list[str]:
    """Run all three loaders in order and return every registered id."""
    loaded = load_builtin_plugins(registry)
    loaded += load_local_plugins(registry, plugins_path)
    loaded += load_entry_point_plugins(registry)
    logger.debug("Discovered plugins: %s", ", ".join(loaded) or "none")
    return loaded


def _register(registry: PluginRegistry, candidate: Any, source: str) -> Optional[str]:
    if not isinstance(candidate, Plugin) and not plugin_problems(candidate):
        candidate = Plugin.from_mapping(candidate)
    if not registry.register(candidate, source=source):
        return None
    return candidate.metadata.id
