"""Template registry.

Unlike the plugin registry, template registration is strict: a duplicate
id or an unknown category is a programming or packaging error and raises
:class:`~ghprofile.exceptions.TemplateError`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ghprofile.exceptions import TemplateError
from ghprofile.templates.base import CATEGORIES, Template, TemplateMetadata

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """Ordered collection of templates keyed by id.

    Example::

        registry = create_default_registry()
        template = registry.get("showcase")
    """

    def __init__(self) -> None:
        self._templates: dict[str, Template] = {}

    def register(self, template: Template) -> None:
        """Add *template*.

        Raises:
            TemplateError: If the id is taken or the category is unknown.
        """
        meta = template.metadata
        if meta.id in self._templates:
            raise TemplateError(f"Template with id '{meta.id}' is already registered")
        if meta.category not in CATEGORIES:
            raise TemplateError(
                f"Invalid category '{meta.category}' in template '{meta.id}' "
                f"(expected one of: {', '.join(CATEGORIES)})"
            )
        self._templates[meta.id] = template
        logger.debug("Registered template '%s' (%s)", meta.id, meta.source)

    def get(self, template_id: str) -> Optional[Template]:
        return self._templates.get(template_id)

    def require(self, template_id: str) -> Template:
        """Return the template or raise :class:`TemplateError` naming the known ids."""
        template = self._templates.get(template_id)
        if template is None:
            known = ", ".join(self._templates) or "none"
            raise TemplateError(f"Template '{template_id}' not found (available: {known})")
        return template

    def get_all(self) -> list[Template]:
        return list(self._templates.values())

    def get_built_in(self) -> list[Template]:
        return [t for t in self._templates.values() if t.metadata.source == "built-in"]

    def get_by_category(self, category: str) -> list[Template]:
        return [t for t in self._templates.values() if t.metadata.category == category]

    def has(self, template_id: str) -> bool:
        return template_id in self._templates

    def list_metadata(self) -> list[TemplateMetadata]:
        return [t.metadata for t in self._templates.values()]

    def __len__(self) -> int:
        return len(self._templates)


def create_default_registry(templates_path: Optional[Union[str, Path]] = None) -> TemplateRegistry:
    """Build a registry holding the built-in templates, then any local ones.

    A local template whose id clashes with an earlier one is skipped with a
    warning rather than aborting the whole run.
    """
    from ghprofile.templates import default, minimal, showcase, stats_heavy
    from ghprofile.templates.loader import load_local_templates

    registry = TemplateRegistry()
    for module in (default, minimal, showcase, stats_heavy):
        registry.register(module.template)

    if templates_path is not None:
        for template in load_local_templates(templates_path):
            try:
                registry.register(template)
            except TemplateError as exc:
                logger.warning("Skipping local template from %s: %s", template.metadata.path, exc)
    return registry
