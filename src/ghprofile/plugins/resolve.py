"""Resolve plugin enablement from CLI flags, config and defaults.

Precedence, highest first:

1. ``--disable-plugin`` -- always wins.
2. ``--enable-plugin`` -- cannot undo a CLI disable.
3. ``plugins.<id>: false`` in the config file -- skipped for CLI-enabled ids.
4. ``plugins.<id>: true`` in the config file -- skipped for disabled ids.
5. Default -- every remaining id is enabled.

The resolver is a pure policy layer used by the CLI. The registry does not
consult it; callers feed the result into
:meth:`~ghprofile.plugins.registry.PluginRegistry.initialize` through
:meth:`PluginResolution.as_options`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from ghprofile.plugins.base import PluginOptions


@dataclass(frozen=True)
class PluginResolution:
    """Final enablement partition of the known plugin ids."""

    enabled: frozenset[str]
    disabled: frozenset[str]

    def as_options(self) -> dict[str, PluginOptions]:
        """Express the resolution as explicit per-plugin enablement overrides."""
        options = {pid: PluginOptions(enabled=True) for pid in self.enabled}
        options.update({pid: PluginOptions(enabled=False) for pid in self.disabled})
        return options


def resolve_plugin_state(
    all_plugin_ids: Iterable[str],
    cli_enable: Iterable[str] = (),
    cli_disable: Iterable[str] = (),
    config: Optional[Mapping[str, Any]] = None,
) -> PluginResolution:
    """Partition *all_plugin_ids* into enabled and disabled sets.

    Only exact ``True``/``False`` config values take part; mapping values
    are per-plugin settings and are ignored here. Ids named in the CLI
    lists or config but absent from *all_plugin_ids* are ignored.

    Args:
        all_plugin_ids: Ids of every registered plugin.
        cli_enable: Ids passed with ``--enable-plugin``.
        cli_disable: Ids passed with ``--disable-plugin``.
        config: The ``plugins`` section of the config file.

    Returns:
        A :class:`PluginResolution` in which every known id appears in
        exactly one of the two sets.
    """
    known = list(dict.fromkeys(all_plugin_ids))
    cli_enable = set(cli_enable)
    config = config or {}
    enabled: set[str] = set()
    disabled: set[str] = set()

    for pid in cli_disable:
        disabled.add(pid)
        enabled.discard(pid)

    for pid in cli_enable:
        if pid not in disabled:
            enabled.add(pid)

    for pid, value in config.items():
        if value is False and pid not in cli_enable:
            disabled.add(pid)
            enabled.discard(pid)

    for pid, value in config.items():
        if value is True and pid not in disabled:
            enabled.add(pid)

    for pid in known:
        if pid not in disabled and pid not in enabled:
            enabled.add(pid)

    known_set = set(known)
    return PluginResolution(
        enabled=frozenset(enabled & known_set),
        disabled=frozenset(disabled & known_set),
    )
