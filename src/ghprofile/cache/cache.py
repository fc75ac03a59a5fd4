"""Disk-backed cache for GitHub GET responses.

Built on :mod:`diskcache`. Keys are SHA-256 hashes of
``METHOD|URL|sorted params`` so parameter order never splits entries. Only
2xx GET responses are stored; everything else passes through.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Optional

import diskcache

from ghprofile.models import CacheConfig

logger = logging.getLogger(__name__)


class ResponseCache:
    """TTL cache of response records (``status_code``, ``etag``, ``body``).

    Args:
        cache_dir: Root directory; entries live in its ``responses/``
            subdirectory.
        config: ``enabled`` flag and ``ttl_seconds``.

    Example::

        cache = ResponseCache(get_cache_dir(), CacheConfig(ttl_seconds=600))
        cache.set("GET", "https://api.github.com/users/octocat", None,
                  {"status_code": 200, "body": {...}})
    """

    def __init__(self, cache_dir: str | Path, config: CacheConfig) -> None:
        self._config = config
        self._cache_dir = Path(cache_dir)
        self._cache: Optional[diskcache.Cache] = None
        if config.enabled:
            self._cache = diskcache.Cache(str(self._cache_dir / "responses"))

    @property
    def enabled(self) -> bool:
        return self._cache is not None

    def get(self, method: str, url: str, params: Optional[dict] = None) -> Optional[dict]:
        """Return the cached record, or ``None`` on a miss, a non-GET or when disabled."""
        if self._cache is None or method.upper() != "GET":
            return None
        hit = self._cache.get(self._make_key(method, url, params))
        if hit is not None:
            logger.debug("Cache hit for %s", url)
        return hit

    def set(
        self,
        method: str,
        url: str,
        params: Optional[dict],
        response_data: dict,
    ) -> None:
        """Store *response_data* if it is a 2xx GET; otherwise do nothing."""
        if self._cache is None or method.upper() != "GET":
            return
        status = response_data.get("status_code", 0)
        if not (200 <= status < 300):
            return
        self._cache.set(
            self._make_key(method, url, params),
            response_data,
            expire=self._config.ttl_seconds,
        )

    def clear(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return ``{"enabled": False}`` or entry count, directory and TTL."""
        if self._cache is None:
            return {"enabled": False}
        return {
            "enabled": True,
            "size": len(self._cache),
            "directory": str(self._cache_dir / "responses"),
            "ttl_seconds": self._config.ttl_seconds,
        }

    def close(self) -> None:
        if self._cache is not None:
            self._cache.close()

    @staticmethod
    def _make_key(method: str, url: str, params: Optional[dict]) -> str:
        parts = [method.upper(), url]
        if params:
            parts.append(json.dumps(params, sort_keys=True))
        return hashlib.sha256("|".join(parts).encode()).hexdigest()
