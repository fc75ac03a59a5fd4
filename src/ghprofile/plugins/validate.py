"""Shape checks for plugin candidates.

Registration goes through :func:`validate_plugin`, which never raises: the
registry logs the reason and discards the candidate. Tooling that prefers
to fail fast calls :func:`assert_valid_plugin` instead.

Candidates are either :class:`~ghprofile.plugins.base.Plugin` instances or
mappings of the same shape (``{"metadata": {...}, "render": fn, ...}``),
which is what local plugin modules commonly export.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ghprofile.exceptions import PluginValidationError
from ghprofile.plugins.base import METADATA_FIELDS, Hook, Plugin, PluginMetadata


def _metadata_of(candidate: Any) -> Any:
    if isinstance(candidate, Plugin):
        return candidate.metadata
    return candidate.get("metadata")


def _metadata_value(metadata: Any, key: str) -> Any:
    if isinstance(metadata, PluginMetadata):
        return getattr(metadata, key)
    return metadata.get(key)


def _hook_of(candidate: Any, hook: Hook) -> Any:
    if isinstance(candidate, Plugin):
        return candidate.hook(hook)
    return candidate.get(hook.value)


def plugin_problems(candidate: Any) -> list[str]:
    """Return the reasons *candidate* is not a usable plugin.

    Checks run in order and stop at the first failing stage, so the list
    holds a single message. An empty list means the candidate is valid.
    """
    if candidate is None or not isinstance(candidate, (Plugin, Mapping)):
        return ["plugin must be a Plugin or a mapping"]

    metadata = _metadata_of(candidate)
    if not isinstance(metadata, (PluginMetadata, Mapping)):
        return ["plugin must have a metadata object"]

    missing = [
        key
        for key in METADATA_FIELDS
        if not isinstance(_metadata_value(metadata, key), str)
        or not _metadata_value(metadata, key)
    ]
    if missing:
        return [f"missing required metadata fields: {', '.join(missing)}"]

    homepage = _metadata_value(metadata, "homepage")
    if homepage is not None and not isinstance(homepage, str):
        return ["metadata.homepage must be a string"]

    plugin_id = _metadata_value(metadata, "id")
    present = 0
    for hook in Hook:
        fn = _hook_of(candidate, hook)
        if fn is None:
            continue
        if not callable(fn):
            return [f"plugin '{plugin_id}': {hook.value} must be callable"]
        present += 1

    if present == 0:
        hooks = ", ".join(h.value for h in Hook)
        return [f"plugin '{plugin_id}' must implement at least one hook ({hooks})"]

    return []


def validate_plugin(candidate: Any) -> bool:
    """Return ``True`` if *candidate* satisfies the plugin contract."""
    return not plugin_problems(candidate)


def assert_valid_plugin(candidate: Any) -> None:
    """Raise :class:`PluginValidationError` unless *candidate* is valid.

    Raises:
        PluginValidationError: With the human-readable reason.
    """
    problems = plugin_problems(candidate)
    if problems:
        raise PluginValidationError(f"Invalid plugin: {problems[0]}")
