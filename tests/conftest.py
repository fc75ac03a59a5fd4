"""Shared test fixtures for gh-profile.

Provides GitHub payload factories, normalized data, plugin builders, an
isolated config environment and a CLI runner. Fixtures
are discovered by pytest and available to every test module.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import httpx
import pytest

from ghprofile.core.normalize import normalize
from ghprofile.models import GitHubData, GitHubRepo, GitHubUser, NormalizedData
from ghprofile.output import reset_output
from ghprofile.plugins.base import Plugin, PluginMetadata


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager holds references to sys.stdout/sys.stderr from creation
    time; CliRunner swaps those streams, so a stale manager would write to
    closed files in the next test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# GitHub payload factories
# ---------------------------------------------------------------------------


def _user_payload(**overrides: Any) -> dict[str, Any]:
    """A ``GET /users/{username}`` body for octocat."""
    data = {
        "login": "octocat",
        "name": "The Octocat",
        "avatar_url": "https://avatars.githubusercontent.com/u/583231",
        "html_url": "https://github.com/octocat",
        "bio": "Mascot of GitHub",
        "company": "@github",
        "location": "San Francisco",
        "blog": "https://github.blog",
        "twitter_username": "github",
        "email": "octocat@github.com",
        "followers": 1000,
        "following": 9,
        "public_repos": 8,
        "created_at": "2011-01-25T18:44:36Z",
    }
    data.update(overrides)
    return data


def _repo_payload(name: str, **overrides: Any) -> dict[str, Any]:
    """One item of ``GET /users/{username}/repos``."""
    data = {
        "name": name,
        "full_name": f"octocat/{name}",
        "html_url": f"https://github.com/octocat/{name}",
        "description": f"{name} description",
        "language": "Python",
        "stargazers_count": 0,
        "forks_count": 0,
        "watchers_count": 0,
        "open_issues_count": 0,
        "topics": [],
        "homepage": None,
        "fork": False,
        "archived": False,
        "created_at": "2020-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
        "pushed_at": "2024-01-01T00:00:00Z",
    }
    data.update(overrides)
    return data


@pytest.fixture
def repo_payloads() -> list[dict[str, Any]]:
    return [
        _repo_payload("hello-world", stargazers_count=50, forks_count=10, language="Python",
                     topics=["demo", "git"], pushed_at="2024-05-01T00:00:00Z"),
        _repo_payload("spoon-knife", stargazers_count=30, forks_count=40, language="HTML",
                     pushed_at="2024-03-01T00:00:00Z"),
        _repo_payload("linguist", stargazers_count=80, forks_count=5, language="Ruby",
                     created_at="2019-06-01T00:00:00Z", pushed_at="2024-04-01T00:00:00Z"),
        _repo_payload("forked", stargazers_count=500, language="Go", fork=True),
        _repo_payload("old-thing", stargazers_count=200, language="Python", archived=True),
        _repo_payload("docs", stargazers_count=1, language=None, pushed_at=None),
    ]


@pytest.fixture
def github_data(repo_payloads: list[dict[str, Any]]) -> GitHubData:
    return GitHubData(
        user=GitHubUser.model_validate(_user_payload()),
        repos=[GitHubRepo.model_validate(r) for r in repo_payloads],
    )


@pytest.fixture
def normalized_data(github_data: GitHubData) -> NormalizedData:
    return normalize(github_data)


@pytest.fixture
def empty_data() -> NormalizedData:
    """A user with no repositories and no optional profile fields."""
    user = GitHubUser.model_validate(
        _user_payload(bio=None, company=None, location=None, blog="", twitter_username=None, email=None)
    )
    return normalize(GitHubData(user=user, repos=[]))


# ---------------------------------------------------------------------------
# GitHub API mock
# ---------------------------------------------------------------------------


@pytest.fixture
def github_api(repo_payloads: list[dict[str, Any]]) -> Callable[[httpx.Request], httpx.Response]:
    """Request handler for :class:`httpx.MockTransport` serving octocat.

    Unknown users answer 404. ``handler.calls`` records every request.
    """
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        path = request.url.path
        if path == "/users/octocat":
            return httpx.Response(200, json=_user_payload())
        if path == "/users/octocat/repos":
            page = int(request.url.params.get("page", "1"))
            return httpx.Response(200, json=repo_payloads if page == 1 else [])
        return httpx.Response(404, json={"message": "Not Found"})

    handler.calls = calls  # type: ignore[attr-defined]
    return handler


# ---------------------------------------------------------------------------
# Plugin builders
# ---------------------------------------------------------------------------


def _make_plugin(plugin_id: str, **hooks: Callable[..., Any]) -> Plugin:
    """Build a plugin with metadata derived from *plugin_id*.

    Defaults to a no-op ``render`` hook when no hooks are given.
    """
    if not hooks:
        hooks = {"render": lambda content, data: content}
    return Plugin(
        metadata=PluginMetadata(
            id=plugin_id,
            name=plugin_id.title(),
            description=f"{plugin_id} test plugin",
            version="1.0.0",
            author="tests",
        ),
        **hooks,
    )


def _plugin_mapping(plugin_id: str, **hooks: Any) -> dict[str, Any]:
    """Mapping-shaped plugin candidate, as local plugin modules export."""
    return {
        "metadata": {
            "id": plugin_id,
            "name": plugin_id.title(),
            "description": f"{plugin_id} test plugin",
            "version": "1.0.0",
            "author": "tests",
        },
        **hooks,
    }


def _appender(suffix: str) -> Callable[[str, NormalizedData], str]:
    def render(content: str, data: NormalizedData) -> str:
        return content + suffix

    return render


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Isolate configuration, cache and data to a temporary directory.

    Points the XDG variables at subdirectories of ``tmp_path``, clears the
    gh-profile environment variables and changes into ``tmp_path`` so the
    default ``gh-profile.config.json`` and ``./plugins`` resolve there.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ("GH_PROFILE_TOKEN", "GITHUB_TOKEN", "GH_PROFILE_TEMPLATE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Helper factories exposed as fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def user_payload() -> Callable[..., dict[str, Any]]:
    return _user_payload


@pytest.fixture
def repo_payload() -> Callable[..., dict[str, Any]]:
    return _repo_payload


@pytest.fixture
def make_plugin() -> Callable[..., Plugin]:
    return _make_plugin


@pytest.fixture
def plugin_mapping() -> Callable[..., dict[str, Any]]:
    return _plugin_mapping


@pytest.fixture
def appender() -> Callable[[str], Callable[[str, NormalizedData], str]]:
    return _appender


@pytest.fixture
def utc() -> Callable[..., datetime]:
    return lambda *args: datetime(*args, tzinfo=timezone.utc)
