"""Tests for :class:`GitHubClient` using :class:`httpx.MockTransport`."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from ghprofile.cache import ResponseCache
from ghprofile.exceptions import (
    AuthError,
    GitHubError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from ghprofile.github import GitHubClient
from ghprofile.github.client import PER_PAGE
from ghprofile.models import CacheConfig


def _fetch(handler, username: str = "octocat", **kwargs):
    async def run():
        async with GitHubClient(transport=httpx.MockTransport(handler), **kwargs) as client:
            return await client.fetch_all(username)

    return asyncio.run(run())


def _status(status: int, headers=None, json=None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, headers=headers, json=json or {"message": "nope"})

    return handler


class TestFetch:
    def test_fetch_all(self, github_api) -> None:
        data = _fetch(github_api)
        assert data.user.login == "octocat"
        assert [r.name for r in data.repos][:3] == ["hello-world", "spoon-knife", "linguist"]
        assert len(data.repos) == 6

    def test_request_headers_and_params(self, github_api) -> None:
        _fetch(github_api, token="ghp_secret")
        request = next(r for r in github_api.calls if r.url.path.endswith("/repos"))
        assert request.headers["Authorization"] == "Bearer ghp_secret"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.headers["User-Agent"].startswith("gh-profile/")
        assert request.url.params["per_page"] == str(PER_PAGE)
        assert request.url.params["sort"] == "updated"

    def test_anonymous_has_no_authorization(self, github_api) -> None:
        _fetch(github_api)
        assert all("Authorization" not in r.headers for r in github_api.calls)

    def test_short_page_stops_pagination(self, github_api) -> None:
        _fetch(github_api)
        repo_calls = [r for r in github_api.calls if r.url.path.endswith("/repos")]
        assert len(repo_calls) == 1

    def test_full_pages_are_followed(self, repo_payload, user_payload) -> None:
        full_page = [repo_payload(f"repo-{i}") for i in range(PER_PAGE)]
        pages = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/users/octocat":
                return httpx.Response(200, json=user_payload())
            page = int(request.url.params["page"])
            pages.append(page)
            if page == 1:
                return httpx.Response(200, json=full_page)
            if page == 2:
                return httpx.Response(200, json=[repo_payload("last")])
            return httpx.Response(200, json=[])

        data = _fetch(handler)
        assert pages == [1, 2]
        assert len(data.repos) == PER_PAGE + 1
        assert data.repos[-1].name == "last"

    def test_malformed_user_payload(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/users/octocat":
                return httpx.Response(200, json={"name": "no login"})
            return httpx.Response(200, json=[])

        with pytest.raises(GitHubError, match="Unexpected user payload"):
            _fetch(handler)


class TestErrorMapping:
    def test_unknown_user(self, github_api) -> None:
        with pytest.raises(NotFoundError, match="HTTP 404: Not Found"):
            _fetch(github_api, "ghost")

    def test_bad_token(self) -> None:
        with pytest.raises(AuthError):
            _fetch(_status(401, json={"message": "Bad credentials"}))

    def test_forbidden_without_rate_limit(self) -> None:
        with pytest.raises(AuthError):
            _fetch(_status(403, headers={"x-ratelimit-remaining": "10"}))

    def test_rate_limited(self) -> None:
        headers = {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000"}
        with pytest.raises(RateLimitError, match="resets at epoch 1700000000"):
            _fetch(_status(403, headers=headers))

    def test_secondary_rate_limit(self) -> None:
        with pytest.raises(RateLimitError):
            _fetch(_status(429))

    def test_server_error(self) -> None:
        with pytest.raises(ServerError, match="HTTP 502"):
            _fetch(_status(502))

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError, match="Cannot reach GitHub"):
            _fetch(handler)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(NetworkError, match="timed out"):
            _fetch(handler)

    def test_error_exit_code(self) -> None:
        with pytest.raises(GitHubError) as exc_info:
            _fetch(_status(500))
        assert exc_info.value.exit_code == 4


class TestCaching:
    def test_second_fetch_served_from_cache(self, github_api, tmp_path) -> None:
        cache = ResponseCache(tmp_path, CacheConfig())
        try:
            first = _fetch(github_api, cache=cache)
            calls_after_first = len(github_api.calls)
            second = _fetch(github_api, cache=cache)
        finally:
            cache.close()

        assert calls_after_first == 2
        assert len(github_api.calls) == 2
        assert second == first

    def test_errors_are_not_cached(self, github_api, tmp_path) -> None:
        cache = ResponseCache(tmp_path, CacheConfig())
        try:
            for _ in range(2):
                with pytest.raises(NotFoundError):
                    _fetch(github_api, "ghost", cache=cache)
        finally:
            cache.close()
        user_calls = [r for r in github_api.calls if r.url.path == "/users/ghost"]
        assert len(user_calls) == 2
