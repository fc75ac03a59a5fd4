"""Asynchronous GitHub REST client.

:class:`GitHubClient` wraps :class:`httpx.AsyncClient` and reads the two
endpoints gh-profile needs: the public user record and the user's
repository list. It must be used as an async context manager.

Failed requests are mapped onto the :class:`~ghprofile.exceptions.GitHubError`
hierarchy. There is no retry policy; a failure is reported to the caller
on the first attempt.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ghprofile import __version__
from ghprofile.cache import ResponseCache
from ghprofile.exceptions import (
    AuthError,
    GitHubError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from ghprofile.models import GitHubData, GitHubRepo, GitHubUser

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
PER_PAGE = 100
DEFAULT_TIMEOUT = 30.0


class GitHubClient:
    """Read-only client for the GitHub REST API.

    Args:
        token: Personal access token. Anonymous requests are allowed but
            heavily rate limited.
        base_url: API root, overridable for GitHub Enterprise.
        cache: Optional response cache consulted before every GET.
        transport: Optional httpx transport; tests pass an
            :class:`httpx.MockTransport`.
        timeout: Per-request timeout in seconds.

    Example::

        async with GitHubClient(token=token) as client:
            data = await client.fetch_all("octocat")
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        cache: Optional[ResponseCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._cache = cache
        self._transport = transport
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> GitHubClient:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"gh-profile/{__version__}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    async def get_user(self, username: str) -> GitHubUser:
        """Fetch ``GET /users/{username}``.

        Raises:
            NotFoundError: If the user does not exist.
            GitHubError: For any other API or transport failure.
        """
        body = await self._get_json(f"/users/{username}")
        try:
            return GitHubUser.model_validate(body)
        except PydanticValidationError as exc:
            raise GitHubError(f"Unexpected user payload for '{username}': {exc}") from exc

    async def get_repos(self, username: str) -> list[GitHubRepo]:
        """Fetch every public repository of *username*, most recently updated first.

        Pages of 100 are requested until a short or empty page arrives.
        """
        repos: list[GitHubRepo] = []
        page = 1
        while True:
            params = {
                "per_page": PER_PAGE,
                "page": page,
                "sort": "updated",
                "direction": "desc",
            }
            body = await self._get_json(f"/users/{username}/repos", params)
            if not isinstance(body, list):
                raise GitHubError(f"Unexpected repository payload for '{username}'")
            if not body:
                break
            try:
                repos.extend(GitHubRepo.model_validate(item) for item in body)
            except PydanticValidationError as exc:
                raise GitHubError(
                    f"Unexpected repository payload for '{username}': {exc}"
                ) from exc
            if len(body) < PER_PAGE:
                break
            page += 1

        logger.debug("Fetched %d repositories for %s", len(repos), username)
        return repos

    async def fetch_all(self, username: str) -> GitHubData:
        """Fetch the user record and repository list concurrently."""
        user, repos = await asyncio.gather(self.get_user(username), self.get_repos(username))
        return GitHubData(user=user, repos=repos)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        assert self._client is not None, "Client not initialised -- use as async context manager"

        url = f"{self._base_url}{path}"
        if self._cache is not None:
            cached = self._cache.get("GET", url, params)
            if cached is not None:
                return cached["body"]

        logger.debug("GET %s %s", url, params or "")
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Request to {url} timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"Cannot reach GitHub at {url}: {exc}") from exc

        self._map_response_error(response)
        body = response.json()

        if self._cache is not None:
            self._cache.set(
                "GET", url, params, {"status_code": response.status_code, "body": body}
            )
        return body

    @staticmethod
    def _map_response_error(response: httpx.Response) -> None:
        """Raise a typed :class:`GitHubError` for error status codes."""
        status = response.status_code
        if status < 400:
            return

        try:
            detail = response.json()
            msg = detail.get("message", "") if isinstance(detail, dict) else str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""

        full_msg = f"HTTP {status}: {msg}" if msg else f"HTTP {status}"

        if status == 404:
            raise NotFoundError(full_msg)
        if status == 401:
            raise AuthError(full_msg)
        if status in (403, 429):
            if status == 429 or response.headers.get("x-ratelimit-remaining") == "0":
                reset = response.headers.get("x-ratelimit-reset")
                suffix = f" (resets at epoch {reset})" if reset else ""
                raise RateLimitError(f"GitHub rate limit exceeded{suffix}: {full_msg}")
            raise AuthError(full_msg)
        raise ServerError(full_msg)
