"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_markdown, print_json and print_table in each format
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from ghprofile import output as output_module
from ghprofile.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("ghprofile.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("ghprofile.output._is_tty", lambda: True)


def _plain(**kwargs) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, no_color=True, **kwargs)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager().format == OutputFormat.RICH

    def test_no_color_flag_forces_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStreams:
    def test_data_goes_to_stdout(self, capfd, non_tty):
        _plain().print_data("hello")
        captured = capfd.readouterr()
        assert captured.out == "hello\n"
        assert captured.err == ""

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("info", "note"),
            ("success", "note"),
            ("warning", "Warning: note"),
            ("error", "Error: note"),
            ("suggest", "→ note"),
        ],
    )
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method, expected):
        getattr(_plain(), method)("note")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err.strip() == expected


class TestQuietAndVerbose:
    @pytest.mark.parametrize("method", ["info", "success", "suggest"])
    def test_quiet_suppresses(self, capfd, non_tty, method):
        getattr(_plain(quiet=True), method)("hidden")
        assert capfd.readouterr().err == ""

    @pytest.mark.parametrize("method", ["warning", "error"])
    def test_quiet_keeps_problems(self, capfd, non_tty, method):
        getattr(_plain(quiet=True), method)("shown")
        assert "shown" in capfd.readouterr().err

    def test_debug_only_when_verbose(self, capfd, non_tty):
        _plain().debug("quiet")
        assert capfd.readouterr().err == ""
        _plain(verbose=True).debug("loud")
        assert capfd.readouterr().err.strip() == "[debug] loud"

    def test_progress_needs_tty(self, capfd, non_tty):
        _plain().progress("Fetching...")
        assert capfd.readouterr().err == ""

    def test_progress_shown_on_tty(self, capfd, tty):
        _plain().progress("Fetching...")
        assert "Fetching..." in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Structured output
# ------------------------------------------------------------------ #


class TestMarkdown:
    def test_plain_prints_source(self, capfd, non_tty):
        _plain().print_markdown("# Title\n\n- item")
        assert capfd.readouterr().out == "# Title\n\n- item\n"

    def test_json_wraps_markdown(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_markdown("# Title")
        assert json.loads(capfd.readouterr().out) == {"markdown": "# Title"}


class TestJsonAndTables:
    def test_print_json_plain(self, capfd, non_tty):
        _plain().print_json({"template": "default"})
        assert json.loads(capfd.readouterr().out) == {"template": "default"}

    def test_table_plain_is_tab_separated(self, capfd, non_tty):
        _plain().print_table(["id", "name"], [["default", "Default"], ["minimal", "Minimal"]])
        assert capfd.readouterr().out.splitlines() == [
            "id\tname",
            "default\tDefault",
            "minimal\tMinimal",
        ]

    def test_table_json_is_records(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(["id", "enabled"], [["stats", "yes"]])
        assert json.loads(capfd.readouterr().out) == [{"id": "stats", "enabled": "yes"}]

    def test_table_rich_renders_cells(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_table(
            ["id"], [["showcase"]], title="Templates"
        )
        out = capfd.readouterr().out
        assert "showcase" in out
        assert "Templates" in out


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self, non_tty):
        reset_output()
        first = get_output()
        assert get_output() is first

    def test_module_helpers_delegate(self, capfd, non_tty):
        set_output(_plain())
        output_module.print_data("data")
        output_module.warning("careful")
        captured = capfd.readouterr()
        assert captured.out == "data\n"
        assert captured.err.strip() == "Warning: careful"
