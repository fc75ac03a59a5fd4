"""End-to-end tests of the gh-profile CLI against a mocked GitHub API."""

from __future__ import annotations

import functools
import importlib.metadata
import json
import textwrap

import httpx
import pytest

from ghprofile import __version__
from ghprofile.app import app
from ghprofile.exit_codes import (
    EXIT_FILESYSTEM_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NETWORK_ERROR,
)
from ghprofile.github import GitHubClient

LOCAL_PLUGIN = """
def after_render(content, data):
    return content + "\\n<!-- built for " + data.profile.username + " -->\\n"

plugin = {
    "metadata": {
        "id": "signature",
        "name": "Signature",
        "description": "adds a comment",
        "version": "0.1.0",
        "author": "tests",
    },
    "after_render": after_render,
}
"""

RENAMING_PLUGIN = """
def before_render(context):
    context.data.profile.name = "Renamed"

plugin = {
    "metadata": {
        "id": "renamer",
        "name": "Renamer",
        "description": "renames the profile",
        "version": "0.1.0",
        "author": "tests",
    },
    "before_render": before_render,
}
"""


@pytest.fixture
def cli(cli_runner, isolated_config, github_api, monkeypatch: pytest.MonkeyPatch):
    """Invoke the app with GitHub served by ``github_api`` and no installed plugins.

    ``NO_COLOR`` keeps diagnostics as unwrapped plain lines.
    """
    monkeypatch.setattr(
        "ghprofile.commands._common.GitHubClient",
        functools.partial(GitHubClient, transport=httpx.MockTransport(github_api)),
    )
    monkeypatch.setattr(importlib.metadata, "entry_points", lambda **kwargs: [])
    monkeypatch.setenv("NO_COLOR", "1")

    def invoke(*args: str):
        return cli_runner.invoke(app, list(args))

    return invoke


def _write_config(root, data) -> None:
    (root / "gh-profile.config.json").write_text(json.dumps(data))


class TestGlobalOptions:
    def test_version(self, cli) -> None:
        result = cli("--version")
        assert result.exit_code == 0
        assert f"gh-profile {__version__}" in result.output

    def test_no_args_shows_help(self, cli) -> None:
        result = cli()
        assert "generate" in result.output
        assert "preview" in result.output


class TestGenerate:
    def test_writes_readme_with_builtin_plugins(self, cli, isolated_config) -> None:
        result = cli("generate", "octocat", "--no-cache")

        assert result.exit_code == 0, result.output
        readme = (isolated_config / "README.md").read_text()
        assert readme.startswith("# Hi, I'm The Octocat 👋")
        assert readme.index("## GitHub Stats") < readme.index("## Connect") < readme.index(
            "## Featured Projects"
        )
        assert "Created" in result.output
        assert "using template 'default'" in result.output

    def test_refuses_to_overwrite_without_force(self, cli, isolated_config) -> None:
        (isolated_config / "README.md").write_text("mine")

        result = cli("generate", "octocat", "--no-cache")

        assert result.exit_code == EXIT_FILESYSTEM_ERROR
        assert "already exists" in result.output
        assert (isolated_config / "README.md").read_text() == "mine"

    def test_force_overwrites(self, cli, isolated_config) -> None:
        (isolated_config / "README.md").write_text("mine")
        result = cli("generate", "octocat", "--force", "--no-cache")
        assert result.exit_code == 0, result.output
        assert "Updated" in result.output

    def test_template_and_output_flags(self, cli, isolated_config) -> None:
        result = cli("generate", "octocat", "-t", "minimal", "-o", "profile/README.md", "--no-cache")
        assert result.exit_code == 0, result.output
        readme = (isolated_config / "profile" / "README.md").read_text()
        assert "| Public Repos | 8 |" in readme

    def test_disable_plugin(self, cli, isolated_config) -> None:
        result = cli("generate", "octocat", "--disable-plugin", "stats", "--no-cache")
        assert result.exit_code == 0, result.output
        readme = (isolated_config / "README.md").read_text()
        assert "## GitHub Stats" not in readme
        assert "## Connect" in readme

    def test_cli_enable_beats_config_disable(self, cli, isolated_config) -> None:
        _write_config(isolated_config, {"plugins": {"socials": False, "projects": False}})

        result = cli("generate", "octocat", "--enable-plugin", "socials", "--no-cache")

        assert result.exit_code == 0, result.output
        readme = (isolated_config / "README.md").read_text()
        assert "## Connect" in readme
        assert "## Featured Projects" not in readme

    def test_local_plugin_runs_last(self, cli, isolated_config) -> None:
        plugin_dir = isolated_config / "plugins" / "signature"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "plugin.py").write_text(textwrap.dedent(LOCAL_PLUGIN))

        result = cli("generate", "octocat", "--no-cache")

        assert result.exit_code == 0, result.output
        readme = (isolated_config / "README.md").read_text()
        assert readme.endswith("<!-- built for octocat -->\n")

    def test_config_exclude_and_template(self, cli, isolated_config) -> None:
        _write_config(
            isolated_config,
            {"template": "showcase", "github": {"excludeRepos": ["linguist"]}},
        )
        result = cli("generate", "octocat", "--no-cache")
        assert result.exit_code == 0, result.output
        readme = (isolated_config / "README.md").read_text()
        assert readme.startswith('<h1 align="center">')
        assert "linguist" not in readme

    def test_unknown_user(self, cli, isolated_config) -> None:
        result = cli("generate", "ghost", "--no-cache")
        assert result.exit_code == EXIT_NETWORK_ERROR
        assert "HTTP 404" in result.output
        assert "Check the username spelling" in result.output
        assert not (isolated_config / "README.md").exists()

    def test_unknown_template(self, cli) -> None:
        result = cli("generate", "octocat", "-t", "nope", "--no-cache")
        assert result.exit_code == EXIT_GENERIC_FAILURE
        assert "Template 'nope' not found" in result.output

    def test_invalid_config(self, cli, isolated_config) -> None:
        (isolated_config / "gh-profile.config.json").write_text("{oops")
        result = cli("generate", "octocat", "--no-cache")
        assert result.exit_code == EXIT_GENERIC_FAILURE
        assert "Failed to load config" in result.output

    def test_uses_cache_between_runs(self, cli, isolated_config, github_api) -> None:
        assert cli("generate", "octocat").exit_code == 0
        calls = len(github_api.calls)
        assert cli("generate", "octocat", "--force").exit_code == 0
        assert len(github_api.calls) == calls


class TestPreview:
    def test_prints_redacted_markdown(self, cli) -> None:
        result = cli("preview", "octocat", "-t", "showcase", "--no-cache")
        assert result.exit_code == 0, result.output
        assert "Hi 👋, I'm The Octocat" in result.output
        assert "octocat@github.com" not in result.output
        assert "[REDACTED]" in result.output

    def test_plugins_not_run(self, cli, isolated_config) -> None:
        plugin_dir = isolated_config / "plugins" / "renamer"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "plugin.py").write_text(textwrap.dedent(RENAMING_PLUGIN))

        result = cli("preview", "octocat", "--no-cache")

        assert result.exit_code == 0, result.output
        assert "## GitHub Stats" not in result.output
        assert "Renamed" not in result.output
        assert "The Octocat" in result.output
        assert not (isolated_config / "README.md").exists()

    def test_json_mode(self, cli) -> None:
        result = cli("--json", "--quiet", "preview", "octocat", "--no-cache")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["markdown"].startswith("# Hi, I'm The Octocat")


class TestTemplates:
    def test_lists_builtins(self, cli) -> None:
        result = cli("--plain", "templates")
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "id\tname\tcategory\tsource\tdescription"
        assert [line.split("\t")[0] for line in lines[1:]] == [
            "default",
            "minimal",
            "showcase",
            "stats-heavy",
        ]

    def test_category_filter(self, cli) -> None:
        result = cli("--plain", "templates", "--category", "developer")
        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[1].startswith("stats-heavy\t")
        assert len(result.output.splitlines()) == 2

    def test_unknown_category(self, cli) -> None:
        result = cli("templates", "--category", "retro")
        assert result.exit_code == EXIT_INVALID_USAGE
        assert "Unknown category 'retro'" in result.output


class TestPlugins:
    def test_lists_resolved_state(self, cli, isolated_config) -> None:
        _write_config(isolated_config, {"plugins": {"socials": False}})

        result = cli("--json", "plugins", "--disable-plugin", "projects")

        assert result.exit_code == 0, result.output
        rows = {row["id"]: row for row in json.loads(result.output)}
        assert rows["stats"]["enabled"] == "yes"
        assert rows["socials"]["enabled"] == "no"
        assert rows["projects"]["enabled"] == "no"
        assert rows["stats"]["source"] == "built-in"


class TestConfigCommands:
    def test_show_masks_token(self, cli, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GH_PROFILE_TOKEN", "ghp_secret")
        result = cli("--quiet", "config", "show")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["token"] == "****"
        assert data["template"] == "default"
        assert "ghp_secret" not in result.output

    def test_init_writes_defaults_once(self, cli, isolated_config) -> None:
        result = cli("config", "init")
        assert result.exit_code == 0, result.output
        written = json.loads((isolated_config / "gh-profile.config.json").read_text())
        assert written["$schemaVersion"] == 2
        assert written["template"] == "default"

        again = cli("config", "init")
        assert again.exit_code == EXIT_FILESYSTEM_ERROR
        assert "already exists" in again.output

        assert cli("config", "init", "--force").exit_code == 0


class TestMain:
    def test_unexpected_error_writes_crash_log(self, isolated_config, monkeypatch, capsys) -> None:
        from ghprofile import app as app_module

        def explode() -> None:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "app", explode)
        monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)
        monkeypatch.setattr("ghprofile.config._is_xdg_platform", lambda: True)

        with pytest.raises(SystemExit) as exc_info:
            app_module.main()

        assert exc_info.value.code == EXIT_GENERIC_FAILURE
        logs = list((isolated_config / "data" / "gh-profile" / "logs").glob("crash-*.log"))
        assert len(logs) == 1
        assert "kaboom" in logs[0].read_text()
        assert "Unexpected error" in capsys.readouterr().err

    def test_known_error_maps_exit_code(self, isolated_config, monkeypatch) -> None:
        from ghprofile import app as app_module
        from ghprofile.exceptions import OutputError

        def refuse() -> None:
            raise OutputError("disk full")

        monkeypatch.setattr(app_module, "app", refuse)
        monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)

        with pytest.raises(SystemExit) as exc_info:
            app_module.main()
        assert exc_info.value.code == EXIT_FILESYSTEM_ERROR
