"""Plugin runner -- drives the three rendering phases across enabled plugins.

Each phase walks the plugins that are enabled *at call time* (the registry
is re-queried on every call) in registration order, awaiting one hook
before starting the next. Values accumulate: every plugin sees what the
previous plugins in the chain produced.

Isolation is copy-on-call for all three phases. Each hook receives its own
deep copy of the normalized data, so only what a hook explicitly hands
back travels forward, and a hook that raises halfway through a mutation
leaves nothing behind. A failing hook is logged with the plugin id and
phase and its effect is discarded; the plugin stays enabled.
"""

from __future__ import annotations

import logging

from ghprofile.exceptions import PluginLifecycleError
from ghprofile.models import NormalizedData
from ghprofile.plugins.base import Hook, Plugin, PluginContext, call_hook
from ghprofile.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


class PluginRunner:
    """Executes ``before_render``, ``render`` and ``after_render`` hooks.

    The runner only reads registry state; it never enables, disables or
    reconfigures plugins.

    Args:
        registry: The registry whose enabled plugins are run.
    """

    def __init__(self, registry: PluginRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> PluginRegistry:
        return self._registry

    async def run_before_render(self, data: NormalizedData) -> NormalizedData:
        """Thread *data* through every ``before_render`` hook.

        A hook may mutate ``context.data`` in place, assign a new value to
        it, or return a :class:`NormalizedData`; a returned
        :class:`NormalizedData` takes precedence and any other return value
        is ignored. The caller's *data* is never handed to a plugin.

        Returns:
            The final working copy.

        Raises:
            PluginLifecycleError: If the registry is not initialized.
        """
        plugins = self._plugins_for(Hook.BEFORE_RENDER)
        current = data.model_copy(deep=True)

        for plugin in plugins:
            context = PluginContext(
                data=current.model_copy(deep=True),
                content="",
                config=self._registry.get_plugin_config(plugin.metadata.id),
            )
            try:
                result = await call_hook(plugin.before_render, context)
            except Exception as exc:
                self._log_failure(plugin, Hook.BEFORE_RENDER, exc)
                continue

            if isinstance(result, NormalizedData):
                current = result
            elif isinstance(context.data, NormalizedData):
                current = context.data
            else:
                logger.warning(
                    "Plugin '%s' left %s in context.data during %s; ignoring.",
                    plugin.metadata.id,
                    type(context.data).__name__,
                    Hook.BEFORE_RENDER.value,
                )

        return current

    async def run_render(self, data: NormalizedData, content: str) -> str:
        """Thread *content* through every ``render`` hook.

        Raises:
            PluginLifecycleError: If the registry is not initialized.
        """
        return await self._run_content_phase(Hook.RENDER, data, content)

    async def run_after_render(self, data: NormalizedData, content: str) -> str:
        """Thread *content* through every ``after_render`` hook.

        Raises:
            PluginLifecycleError: If the registry is not initialized.
        """
        return await self._run_content_phase(Hook.AFTER_RENDER, data, content)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _plugins_for(self, hook: Hook) -> list[Plugin]:
        if not self._registry.is_initialized():
            raise PluginLifecycleError(
                f"Cannot run {hook.value} hooks: the plugin registry has not been initialized",
                phase=hook.value,
            )
        return self._registry.get_plugins_with_hook(hook)

    async def _run_content_phase(self, hook: Hook, data: NormalizedData, content: str) -> str:
        plugins = self._plugins_for(hook)
        current = content

        for plugin in plugins:
            fn = plugin.hook(hook)
            try:
                result = await call_hook(fn, current, data.model_copy(deep=True))
            except Exception as exc:
                self._log_failure(plugin, hook, exc)
                continue

            if isinstance(result, str):
                current = result
            else:
                logger.warning(
                    "Plugin '%s' returned %s during %s instead of a string; ignoring.",
                    plugin.metadata.id,
                    type(result).__name__,
                    hook.value,
                )

        return current

    @staticmethod
    def _log_failure(plugin: Plugin, hook: Hook, exc: Exception) -> None:
        logger.warning(
            "Plugin '%s' failed during %s: %s",
            plugin.metadata.id,
            hook.value,
            exc,
        )
