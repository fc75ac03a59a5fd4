"""README templates.

Built-in templates live in this package (``default``, ``minimal``,
``showcase``, ``stats-heavy``); user templates are loaded from a directory
by :func:`~ghprofile.templates.loader.load_local_templates`. Use
:func:`create_default_registry` to get a registry holding both.
"""

from ghprofile.templates.base import (
    CATEGORIES,
    Template,
    TemplateCategory,
    TemplateMetadata,
)
from ghprofile.templates.preview import generate_preview
from ghprofile.templates.registry import TemplateRegistry, create_default_registry

__all__ = [
    "CATEGORIES",
    "Template",
    "TemplateCategory",
    "TemplateMetadata",
    "TemplateRegistry",
    "create_default_registry",
    "generate_preview",
]
