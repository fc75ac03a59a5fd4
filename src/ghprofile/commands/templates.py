"""``gh-profile templates`` -- list available templates."""

from __future__ import annotations

from typing import Optional

import typer

from ghprofile.commands._common import fail
from ghprofile.config import load_config
from ghprofile.exceptions import GhProfileError, InvalidUsageError
from ghprofile.output import info, print_table
from ghprofile.templates import CATEGORIES, create_default_registry


def templates_command(
    category: Optional[str] = typer.Option(
        None, "--category", help=f"Only show one category ({', '.join(CATEGORIES)})."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Config file."),
) -> None:
    """List built-in and local templates."""
    try:
        if category is not None and category not in CATEGORIES:
            raise InvalidUsageError(
                f"Unknown category '{category}' (expected one of: {', '.join(CATEGORIES)})"
            )
        config = load_config(config_path)
        registry = create_default_registry(config.templates_path)
    except GhProfileError as exc:
        fail(exc)

    templates = registry.get_by_category(category) if category else registry.get_all()
    if not templates:
        info("No templates found.")
        return

    rows = [
        [t.metadata.id, t.metadata.name, t.metadata.category, t.metadata.source, t.metadata.description]
        for t in templates
    ]
    print_table(["id", "name", "category", "source", "description"], rows, title="Templates")
