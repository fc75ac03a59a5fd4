"""Template contract.

A template is a metadata record plus a pure ``render(data) -> str``
function over :class:`~ghprofile.models.NormalizedData`. Templates never
see the GitHub client, the config or the plugin system.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ghprofile.models import NormalizedData


class TemplateCategory(str, enum.Enum):
    DEVELOPER = "developer"
    DESIGNER = "designer"
    FOUNDER = "founder"
    GENERIC = "generic"
    MINIMAL = "minimal"
    SHOWCASE = "showcase"


CATEGORIES = tuple(c.value for c in TemplateCategory)

RenderFunction = Callable[[NormalizedData], str]


@dataclass(frozen=True)
class TemplateMetadata:
    """Identity and listing information for a template.

    ``source`` is ``built-in`` or ``local``; ``path`` is the directory a
    local template was loaded from.
    """

    id: str
    name: str
    description: str
    category: str
    version: str
    author: str = "gh-profile"
    source: str = "built-in"
    path: Optional[Path] = None


@dataclass(frozen=True)
class Template:
    metadata: TemplateMetadata
    render: RenderFunction

    @property
    def id(self) -> str:
        return self.metadata.id
