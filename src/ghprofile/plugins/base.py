"""Plugin contract for gh-profile.

A plugin is a fixed record: identity metadata plus up to four optional
hook callables. Hooks are dispatched by checking which fields are set,
never by probing arbitrary attribute names on the plugin object.

The lifecycle is:

1. :meth:`~ghprofile.plugins.registry.PluginRegistry.register` -- the
   registry validates the record and stores it, enabled by default.
2. ``init(options)`` -- called once by
   :meth:`~ghprofile.plugins.registry.PluginRegistry.initialize` for every
   enabled plugin.
3. ``before_render(context)`` -- may adjust the normalized data before the
   template runs.
4. ``render(content, data)`` -- may transform the rendered markdown.
5. ``after_render(content, data)`` -- final content transformations.

Every hook may be a plain function or a coroutine function; the runner
awaits the result either way.

Example:
    Minimal plugin::

        def shout(content, data):
            return content.upper()

        plugin = Plugin(
            metadata=PluginMetadata(
                id="shout",
                name="Shout",
                description="Upper-cases the README",
                version="1.0.0",
                author="me",
            ),
            render=shout,
        )
"""

from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Optional, Union

if TYPE_CHECKING:
    from ghprofile.models import NormalizedData


class Hook(str, enum.Enum):
    """Tags for the four recognised hooks."""

    INIT = "init"
    BEFORE_RENDER = "before_render"
    RENDER = "render"
    AFTER_RENDER = "after_render"


RENDER_PHASES = (Hook.BEFORE_RENDER, Hook.RENDER, Hook.AFTER_RENDER)
"""The three rendering-lifecycle phases driven by the runner, in order."""

METADATA_FIELDS = ("id", "name", "description", "version", "author")
"""Metadata fields that must be non-empty strings."""


@dataclass
class PluginOptions:
    """Runtime options for one plugin.

    Attributes:
        enabled: Explicit enablement override, or ``None`` to leave the
            current state untouched.
        config: Plugin-specific settings.
    """

    enabled: Optional[bool] = None
    config: dict[str, Any] = field(default_factory=dict)


@dataclass
class PluginContext:
    """Per-call value handed to ``before_render``.

    A fresh context is built for every invocation and never retained.
    ``data`` is the plugin's private copy; mutating it (or assigning a new
    value) is how the hook hands data forward.
    """

    data: NormalizedData
    content: str = ""
    config: dict[str, Any] = field(default_factory=dict)


HookResult = Union[None, Awaitable[None]]
RenderResult = Union[str, Awaitable[str], Any]

InitHook = Callable[[PluginOptions], HookResult]
BeforeRenderHook = Callable[[PluginContext], Any]
RenderHook = Callable[[str, "NormalizedData"], RenderResult]


@dataclass(frozen=True)
class PluginMetadata:
    """Identity record for a plugin.

    ``id`` is the registry key and must be unique for the lifetime of a
    registry. ``version`` is stored verbatim, never parsed.
    """

    id: str
    name: str
    description: str
    version: str
    author: str
    homepage: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PluginMetadata:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            version=data.get("version", ""),
            author=data.get("author", ""),
            homepage=data.get("homepage"),
        )


@dataclass(frozen=True)
class Plugin:
    """An immutable capability bundle: metadata plus optional hooks."""

    metadata: PluginMetadata
    init: Optional[InitHook] = None
    before_render: Optional[BeforeRenderHook] = None
    render: Optional[RenderHook] = None
    after_render: Optional[RenderHook] = None

    @property
    def id(self) -> str:
        return self.metadata.id

    def hook(self, name: Hook) -> Optional[Callable[..., Any]]:
        """Return the callable registered for *name*, or ``None``."""
        return {
            Hook.INIT: self.init,
            Hook.BEFORE_RENDER: self.before_render,
            Hook.RENDER: self.render,
            Hook.AFTER_RENDER: self.after_render,
        }[Hook(name)]

    def has_hook(self, name: Hook) -> bool:
        return self.hook(name) is not None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Plugin:
        """Build a plugin from a ``{"metadata": {...}, "render": fn}`` mapping.

        Callers are expected to validate *data* first with
        :func:`~ghprofile.plugins.validate.validate_plugin`.
        """
        metadata = data["metadata"]
        if not isinstance(metadata, PluginMetadata):
            metadata = PluginMetadata.from_mapping(metadata)
        return cls(
            metadata=metadata,
            init=data.get(Hook.INIT.value),
            before_render=data.get(Hook.BEFORE_RENDER.value),
            render=data.get(Hook.RENDER.value),
            after_render=data.get(Hook.AFTER_RENDER.value),
        )


async def call_hook(fn: Callable[..., Any], *args: Any) -> Any:
    """Call a sync or async hook and return its (awaited) result."""
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
