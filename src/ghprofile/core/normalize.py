"""Convert GitHub API payloads into the normalized data model."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from ghprofile.core.aggregate import aggregate_stats
from ghprofile.models import GitHubData, GitHubRepo, GitHubUser, NormalizedData, Profile, Repository


def normalize_user(user: GitHubUser) -> Profile:
    return Profile(
        username=user.login,
        name=user.name or user.login,
        avatar_url=user.avatar_url,
        profile_url=user.html_url,
        bio=user.bio,
        company=user.company,
        location=user.location,
        blog=user.blog or None,
        twitter=user.twitter_username,
        email=user.email,
        followers=user.followers,
        following=user.following,
        public_repos=user.public_repos,
        created_at=user.created_at,
    )


def normalize_repo(repo: GitHubRepo) -> Repository:
    """Map one repository payload.

    Repositories that were never pushed to report ``pushed_at`` as null;
    ``updated_at`` stands in so recency sorting stays total.
    """
    return Repository(
        name=repo.name,
        full_name=repo.full_name,
        url=repo.html_url,
        description=repo.description,
        language=repo.language,
        stars=repo.stargazers_count,
        forks=repo.forks_count,
        watchers=repo.watchers_count,
        issues=repo.open_issues_count,
        topics=list(repo.topics or []),
        homepage=repo.homepage or None,
        is_fork=repo.fork,
        is_archived=repo.archived,
        created_at=repo.created_at,
        updated_at=repo.updated_at,
        pushed_at=repo.pushed_at or repo.updated_at,
    )


def normalize_repos(repos: Iterable[GitHubRepo]) -> list[Repository]:
    return [normalize_repo(r) for r in repos]


def sort_by_stars(repos: Iterable[Repository]) -> list[Repository]:
    return sorted(repos, key=lambda r: r.stars, reverse=True)


def sort_by_recent(repos: Iterable[Repository]) -> list[Repository]:
    return sorted(repos, key=lambda r: r.pushed_at, reverse=True)


def filter_original_repos(repos: Iterable[Repository]) -> list[Repository]:
    """Drop forks and archived repositories."""
    return [r for r in repos if not r.is_fork and not r.is_archived]


def normalize(
    data: GitHubData,
    exclude: Iterable[str] = (),
    pinned: Iterable[str] = (),
    tools: Optional[Iterable[str]] = None,
) -> NormalizedData:
    """Build :class:`NormalizedData` from a fetch result.

    Args:
        data: User and repositories as returned by the client.
        exclude: Repository names dropped before anything is computed.
        pinned: Repository names listed first among the top repositories.
        tools: Already-sanitized tool ids carried through to templates.
    """
    excluded = set(exclude)
    repos = normalize_repos(r for r in data.repos if r.name not in excluded)
    return NormalizedData(
        profile=normalize_user(data.user),
        repos=repos,
        stats=aggregate_stats(repos, pinned=pinned),
        tools=list(tools or []),
    )
