"""Plugin registry -- identity, enablement and configuration of plugins.

:class:`PluginRegistry` is the single source of truth for which plugins
exist, which are enabled and what configuration each one receives. Each
plugin id moves through::

    unregistered -> registered (enabled) -> [disabled] -> initialized

No operation raises for ordinary misuse. Malformed candidates, duplicate
ids, unknown ids and failing ``init`` hooks are logged and otherwise
ignored, so a broken plugin can never abort README generation.

Registries are plain instances; create one per pipeline and pass it to
:class:`~ghprofile.plugins.runner.PluginRunner`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from ghprofile.plugins.base import Hook, Plugin, PluginOptions, call_hook
from ghprofile.plugins.validate import plugin_problems

logger = logging.getLogger(__name__)

OptionsLike = Union[PluginOptions, Mapping[str, Any]]


@dataclass
class PluginRegistration:
    """Internal record pairing a plugin with its runtime state."""

    plugin: Plugin
    options: PluginOptions = field(default_factory=PluginOptions)
    enabled: bool = True
    source: str = "api"


def _coerce_options(value: Optional[OptionsLike]) -> PluginOptions:
    if value is None:
        return PluginOptions()
    if isinstance(value, PluginOptions):
        return PluginOptions(enabled=value.enabled, config=dict(value.config))
    return PluginOptions(
        enabled=value.get("enabled"),
        config=dict(value.get("config") or {}),
    )


def _config_plugins(config: Any) -> Mapping[str, Any]:
    """Extract the ``plugins`` section from a Config model or a plain mapping."""
    if config is None:
        return {}
    if isinstance(config, Mapping):
        return config.get("plugins") or {}
    return getattr(config, "plugins", None) or {}


class PluginRegistry:
    """Stateful store of registered plugins.

    Registration order is preserved and is the only ordering guarantee
    exposed by the query methods.

    Example::

        registry = PluginRegistry()
        registry.register(my_plugin)
        await registry.initialize(config=config)
        enabled = registry.get_enabled_plugins()
    """

    def __init__(self) -> None:
        self._registrations: dict[str, PluginRegistration] = {}
        self._initialized = False
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        plugin: Any,
        options: Optional[OptionsLike] = None,
        source: str = "api",
    ) -> bool:
        """Validate and store *plugin*.

        Args:
            plugin: A :class:`Plugin` or a mapping of the same shape.
                Mappings are converted and the converted plugin is stored.
            options: Initial options. ``enabled`` defaults to ``True``.
            source: Where the plugin came from (``built-in``, ``local``,
                ``entry-point`` or ``api``); informational only.

        Returns:
            ``True`` if the plugin was stored, ``False`` if it was rejected
            (invalid shape or duplicate id). Rejections are logged.
        """
        problems = plugin_problems(plugin)
        if problems:
            logger.warning("Invalid plugin rejected: %s", problems[0])
            return False

        if not isinstance(plugin, Plugin):
            plugin = Plugin.from_mapping(plugin)

        plugin_id = plugin.metadata.id
        if plugin_id in self._registrations:
            logger.warning("Plugin with id '%s' is already registered. Skipping.", plugin_id)
            return False

        opts = _coerce_options(options)
        enabled = True if opts.enabled is None else bool(opts.enabled)
        opts.enabled = enabled
        self._registrations[plugin_id] = PluginRegistration(
            plugin=plugin, options=opts, enabled=enabled, source=source
        )
        logger.debug("Registered plugin '%s' v%s (%s)", plugin_id, plugin.metadata.version, source)
        return True

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def initialize(
        self,
        plugin_options: Optional[Mapping[str, OptionsLike]] = None,
        config: Any = None,
    ) -> None:
        """Apply configuration and run every enabled plugin's ``init`` hook.

        The sequence is:

        1. Config-file overrides from ``config.plugins``: booleans toggle
           enablement, mappings are shallow-merged into the plugin config.
           Unknown ids are logged and ignored.
        2. *plugin_options*: ``config`` mappings are merged and an explicit
           ``enabled`` value wins over step 1.
        3. ``init(options)`` for each plugin still enabled, awaited one at a
           time in registration order. A plugin whose ``init`` raises is
           disabled for the rest of the run.

        A second call is a no-op.

        Args:
            plugin_options: Per-plugin runtime options keyed by id.
            config: A :class:`~ghprofile.models.Config` or a mapping with
                an optional ``plugins`` section.
        """
        async with self._lock:
            if self._initialized:
                return

            for plugin_id, value in _config_plugins(config).items():
                registration = self._registrations.get(plugin_id)
                if registration is None:
                    logger.warning("Config references unknown plugin '%s'; ignoring.", plugin_id)
                    continue
                if isinstance(value, bool):
                    self._set_enabled(registration, value)
                elif isinstance(value, Mapping):
                    registration.options.config.update(value)
                else:
                    logger.warning(
                        "Ignoring config for plugin '%s': expected a boolean or a mapping, got %s",
                        plugin_id,
                        type(value).__name__,
                    )

            for plugin_id, value in (plugin_options or {}).items():
                registration = self._registrations.get(plugin_id)
                if registration is None:
                    logger.warning("Options supplied for unknown plugin '%s'; ignoring.", plugin_id)
                    continue
                opts = _coerce_options(value)
                registration.options.config.update(opts.config)
                if opts.enabled is not None:
                    self._set_enabled(registration, opts.enabled)

            for plugin_id, registration in self._registrations.items():
                init = registration.plugin.init
                if not registration.enabled or init is None:
                    continue
                options = PluginOptions(
                    enabled=registration.enabled,
                    config=dict(registration.options.config),
                )
                try:
                    await call_hook(init, options)
                except Exception as exc:
                    logger.warning(
                        "Plugin '%s' failed during init: %s; disabling it.", plugin_id, exc
                    )
                    self._set_enabled(registration, False)

            self._initialized = True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_plugin(self, plugin_id: str) -> Optional[Plugin]:
        registration = self._registrations.get(plugin_id)
        return registration.plugin if registration else None

    def get_registration(self, plugin_id: str) -> Optional[PluginRegistration]:
        return self._registrations.get(plugin_id)

    def get_all_plugins(self) -> list[Plugin]:
        return [r.plugin for r in self._registrations.values()]

    def get_enabled_plugins(self) -> list[Plugin]:
        return [r.plugin for r in self._registrations.values() if r.enabled]

    def get_plugins_with_hook(self, hook: Union[Hook, str]) -> list[Plugin]:
        """Return enabled plugins implementing *hook*, in registration order."""
        hook = Hook(hook)
        return [p for p in self.get_enabled_plugins() if p.has_hook(hook)]

    def get_plugin_config(self, plugin_id: str) -> dict[str, Any]:
        """Return a copy of the merged config for *plugin_id* (empty if unknown)."""
        registration = self._registrations.get(plugin_id)
        return dict(registration.options.config) if registration else {}

    def plugin_ids(self) -> list[str]:
        return list(self._registrations)

    def is_enabled(self, plugin_id: str) -> bool:
        registration = self._registrations.get(plugin_id)
        return bool(registration and registration.enabled)

    def is_initialized(self) -> bool:
        return self._initialized

    def describe(self) -> list[dict[str, str]]:
        """List registered plugins with their metadata and state."""
        return [
            {
                "id": r.plugin.metadata.id,
                "name": r.plugin.metadata.name,
                "version": r.plugin.metadata.version,
                "description": r.plugin.metadata.description,
                "source": r.source,
                "enabled": "yes" if r.enabled else "no",
            }
            for r in self._registrations.values()
        ]

    # ------------------------------------------------------------------
    # Enablement
    # ------------------------------------------------------------------

    def enable_plugin(self, plugin_id: str) -> None:
        registration = self._registrations.get(plugin_id)
        if registration is not None:
            self._set_enabled(registration, True)

    def disable_plugin(self, plugin_id: str) -> None:
        registration = self._registrations.get(plugin_id)
        if registration is not None:
            self._set_enabled(registration, False)

    @staticmethod
    def _set_enabled(registration: PluginRegistration, enabled: bool) -> None:
        registration.enabled = enabled
        registration.options.enabled = enabled

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Forget every plugin and return to the uninitialized state."""
        self._registrations.clear()
        self._initialized = False
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._registrations)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._registrations
