"""Derived statistics over normalized repositories."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ghprofile.models import LanguageStats, ProfileStats, Repository

DEFAULT_LIMIT = 6


def _percent(count: int, total: int) -> int:
    # Integer round-half-up of count / total * 100.
    return (200 * count + total) // (2 * total)


def aggregate_languages(repos: Iterable[Repository]) -> list[LanguageStats]:
    """Count primary languages over non-fork repositories.

    Ties in count keep first-seen order.
    """
    counts: dict[str, int] = {}
    for repo in repos:
        if repo.language and not repo.is_fork:
            counts[repo.language] = counts.get(repo.language, 0) + 1

    total = sum(counts.values())
    languages = [
        LanguageStats(name=name, count=count, percentage=_percent(count, total))
        for name, count in counts.items()
    ]
    return sorted(languages, key=lambda lang: lang.count, reverse=True)


def aggregate_total_stars(repos: Iterable[Repository]) -> int:
    return sum(r.stars for r in repos)


def aggregate_total_forks(repos: Iterable[Repository]) -> int:
    return sum(r.forks for r in repos)


def get_top_repos(
    repos: Sequence[Repository],
    limit: int = DEFAULT_LIMIT,
    pinned: Iterable[str] = (),
) -> list[Repository]:
    """Return up to *limit* original repositories, pinned names first.

    Pinned repositories appear in the order given; the rest follow by star
    count. Forks and archived repositories are never included, even when
    pinned.
    """
    originals = [r for r in repos if not r.is_fork and not r.is_archived]
    by_name = {r.name: r for r in originals}

    top: list[Repository] = []
    for name in dict.fromkeys(pinned):
        if name in by_name:
            top.append(by_name[name])
    chosen = {r.name for r in top}

    rest = sorted((r for r in originals if r.name not in chosen), key=lambda r: r.stars, reverse=True)
    return (top + rest)[:limit]


def get_recent_repos(repos: Sequence[Repository], limit: int = DEFAULT_LIMIT) -> list[Repository]:
    """Return up to *limit* original repositories, most recently pushed first."""
    originals = [r for r in repos if not r.is_fork and not r.is_archived]
    return sorted(originals, key=lambda r: r.pushed_at, reverse=True)[:limit]


def aggregate_stats(repos: Sequence[Repository], pinned: Iterable[str] = ()) -> ProfileStats:
    return ProfileStats(
        total_stars=aggregate_total_stars(repos),
        total_forks=aggregate_total_forks(repos),
        total_repos=len(repos),
        languages=aggregate_languages(repos),
        top_repos=get_top_repos(repos, pinned=pinned),
        recent_repos=get_recent_repos(repos),
    )
