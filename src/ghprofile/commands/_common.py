"""Helpers shared by the commands that talk to GitHub."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, NoReturn, Optional, TypeVar

import typer

from ghprofile.cache import ResponseCache
from ghprofile.config import get_cache_dir
from ghprofile.exceptions import GhProfileError, NotFoundError, RateLimitError
from ghprofile.github import GitHubClient
from ghprofile.models import Config, GitHubData
from ghprofile.output import error, progress, suggest

T = TypeVar("T")


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Drive *coro* to completion from synchronous Typer code."""
    return asyncio.run(coro)


def fail(exc: GhProfileError) -> NoReturn:
    """Report *exc* on stderr, add a hint where one helps, and exit with its code."""
    error(str(exc))
    if isinstance(exc, RateLimitError):
        suggest("Pass --token or set GH_PROFILE_TOKEN to raise the rate limit.")
    elif isinstance(exc, NotFoundError):
        suggest("Check the username spelling.")
    raise typer.Exit(code=exc.exit_code)


def create_cache(config: Config, no_cache: bool = False) -> Optional[ResponseCache]:
    """Return the response cache for *config*, or ``None`` when caching is off."""
    if not config.cache.enabled or no_cache:
        return None
    return ResponseCache(get_cache_dir(), config.cache)


async def fetch(username: str, config: Config, no_cache: bool = False) -> GitHubData:
    """Fetch the user and repositories for *username* using *config*'s token and cache."""
    progress(f"Fetching GitHub data for {username}...")
    cache = create_cache(config, no_cache)
    try:
        async with GitHubClient(token=config.token, cache=cache) as client:
            return await client.fetch_all(username)
    finally:
        if cache is not None:
            cache.close()
