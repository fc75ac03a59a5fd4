"""Tests for tool name sanitization."""

from __future__ import annotations

import pytest

from ghprofile.core.sanitize import sanitize_tech_stack, sanitize_tool


class TestSanitizeTool:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Next.js", "nextjs"),
            ("Node", "nodejs"),
            ("C++", "cpp"),
            ("TypeScript", "ts"),
            ("K8s", "kubernetes"),
            ("  Docker  ", "docker"),
            ("AWS (EC2, S3)", "aws"),
        ],
    )
    def test_aliases_and_cleanup(self, raw, expected) -> None:
        assert sanitize_tool(raw) == expected

    def test_unknown_name_kept_lowercase(self) -> None:
        assert sanitize_tool("Svelte") == "svelte"


class TestSanitizeTechStack:
    def test_drops_empty_entries(self) -> None:
        assert sanitize_tech_stack(["Next.js", "AWS (EC2)", "  ", "(legacy)"]) == ["nextjs", "aws"]

    def test_keeps_order(self) -> None:
        assert sanitize_tech_stack(["Python", "Go", "Rust"]) == ["py", "go", "rust"]
