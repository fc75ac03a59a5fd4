"""On-disk cache for GitHub API responses.

:class:`ResponseCache` stores successful GET response bodies with a TTL so
that repeated ``generate``/``preview`` runs against the same user do not
spend the unauthenticated rate limit. It is controlled by the ``cache``
section of the config (:class:`~ghprofile.models.CacheConfig`) and the
``--no-cache`` flag.
"""

from ghprofile.cache.cache import ResponseCache

__all__ = ["ResponseCache"]
