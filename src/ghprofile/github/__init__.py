"""GitHub REST API access."""

from ghprofile.github.client import DEFAULT_BASE_URL, GitHubClient

__all__ = ["DEFAULT_BASE_URL", "GitHubClient"]
