"""Discover user templates on disk.

Each sub-directory of the templates path is one template and must hold:

* ``meta.json`` -- ``id``, ``name``, ``description``, ``category`` and
  ``version`` (``author`` optional).
* ``template.py`` -- a module-level ``render(data) -> str`` function.

Broken entries are logged and skipped; they never stop the built-in
templates from loading.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from ghprofile._loading import load_module_from_path
from ghprofile.templates.base import Template, TemplateMetadata

logger = logging.getLogger(__name__)

META_FILE = "meta.json"
MODULE_FILE = "template.py"
REQUIRED_META = ("id", "name", "description", "category", "version")


def _read_metadata(meta_path: Path, template_dir: Path) -> Optional[TemplateMetadata]:
    try:
        meta = json.loads(meta_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to parse template metadata %s: %s", meta_path, exc)
        return None

    if not isinstance(meta, dict):
        logger.warning("Invalid template metadata in %s: expected an object", meta_path)
        return None

    missing = [key for key in REQUIRED_META if not isinstance(meta.get(key), str) or not meta[key]]
    if missing:
        logger.warning(
            "Invalid template metadata in %s: missing required fields: %s",
            meta_path,
            ", ".join(missing),
        )
        return None

    return TemplateMetadata(
        id=meta["id"],
        name=meta["name"],
        description=meta["description"],
        category=meta["category"],
        version=meta["version"],
        author=meta.get("author") or "unknown",
        source="local",
        path=template_dir,
    )


def load_template(template_dir: Path) -> Optional[Template]:
    """Load one template directory, or return ``None`` after logging why not."""
    meta_path = template_dir / META_FILE
    module_path = template_dir / MODULE_FILE
    if not meta_path.is_file() or not module_path.is_file():
        logger.warning(
            "Invalid template structure in %s: expected %s and %s", template_dir, META_FILE, MODULE_FILE
        )
        return None

    metadata = _read_metadata(meta_path, template_dir)
    if metadata is None:
        return None

    try:
        module = load_module_from_path(module_path, "ghprofile_local_templates")
    except Exception as exc:
        logger.warning("Failed to load template from %s: %s", template_dir, exc)
        return None

    render = getattr(module, "render", None)
    if not callable(render):
        logger.warning("Invalid template in %s: %s must define render(data)", template_dir, MODULE_FILE)
        return None

    return Template(metadata=metadata, render=render)


def load_local_templates(templates_path: Union[str, Path]) -> list[Template]:
    """Load every template directory under *templates_path*, sorted by directory name."""
    root = Path.cwd() / Path(templates_path)
    if not root.is_dir():
        logger.warning("Templates directory not found: %s", templates_path)
        return []

    templates = []
    for entry in sorted(p for p in root.iterdir() if p.is_dir()):
        template = load_template(entry)
        if template is not None:
            templates.append(template)
    logger.debug("Loaded %d local template(s) from %s", len(templates), root)
    return templates
