"""Tests for redacted template previews."""

from __future__ import annotations

import pytest

from ghprofile.exceptions import TemplateError
from ghprofile.templates import generate_preview
from ghprofile.templates.base import Template, TemplateMetadata
from ghprofile.templates.default import template as default_template
from ghprofile.templates.preview import REDACTED, redact


def _template(render) -> Template:
    return Template(
        metadata=TemplateMetadata(
            id="t", name="T", description="d", category="generic", version="1.0.0"
        ),
        render=render,
    )


class TestRedact:
    def test_labelled_lines(self) -> None:
        text = "Email: me@example.com\nLocation: Berlin\nPhone: 555-0100\nName: Ada"
        assert redact(text) == (
            f"email: {REDACTED}\nlocation: {REDACTED}\nphone: {REDACTED}\nName: Ada"
        )

    def test_bare_email(self) -> None:
        assert redact("reach me at ada@example.org today") == f"reach me at {REDACTED} today"

    def test_plain_text_untouched(self) -> None:
        assert redact("# Hello\n\nNothing to hide.") == "# Hello\n\nNothing to hide."


class TestGeneratePreview:
    def test_redacts_rendered_output(self, normalized_data) -> None:
        preview = generate_preview(_template(lambda data: f"Contact: {data.profile.email}"), normalized_data)
        assert preview == f"Contact: {REDACTED}"

    def test_builtin_template(self, normalized_data) -> None:
        preview = generate_preview(default_template, normalized_data)
        assert preview.startswith("# Hi, I'm The Octocat")

    def test_render_failure(self, normalized_data) -> None:
        def broken(data):
            raise RuntimeError("nope")

        with pytest.raises(TemplateError, match="Failed to generate preview: nope"):
            generate_preview(_template(broken), normalized_data)

    def test_non_string_output(self, normalized_data) -> None:
        with pytest.raises(TemplateError, match="must be a string"):
            generate_preview(_template(lambda data: 42), normalized_data)
