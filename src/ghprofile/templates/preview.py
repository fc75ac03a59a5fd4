"""Render a template for on-screen preview with personal details masked."""

from __future__ import annotations

import re

from ghprofile.exceptions import TemplateError
from ghprofile.models import NormalizedData
from ghprofile.templates.base import Template

REDACTED = "[REDACTED]"
SENSITIVE_LABELS = ("email", "location", "phone", "address", "private")

_LABELLED = [
    (label, re.compile(rf"{label}:.*$", re.IGNORECASE | re.MULTILINE)) for label in SENSITIVE_LABELS
]
_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")


def redact(content: str) -> str:
    """Mask ``label: value`` tails for sensitive labels and any bare email address."""
    for label, pattern in _LABELLED:
        content = pattern.sub(f"{label}: {REDACTED}", content)
    return _EMAIL.sub(REDACTED, content)


def generate_preview(template: Template, data: NormalizedData) -> str:
    """Render *template* and redact the result.

    Raises:
        TemplateError: If rendering fails or does not produce a string.
    """
    try:
        output = template.render(data)
    except Exception as exc:
        raise TemplateError(f"Failed to generate preview: {exc}") from exc
    if not isinstance(output, str):
        raise TemplateError("Failed to generate preview: template output must be a string")
    return redact(output)
