"""The ``default`` template: header, about, stats, languages, top repos."""

from __future__ import annotations

from ghprofile.models import LanguageStats, NormalizedData, Repository
from ghprofile.templates.base import Template, TemplateMetadata

MAX_LANGUAGES = 8


def _header(data: NormalizedData) -> list[str]:
    lines = [f"# Hi, I'm {data.profile.name} 👋", ""]
    if data.profile.bio:
        lines += [data.profile.bio, ""]
    return lines


def _about(data: NormalizedData) -> list[str]:
    p = data.profile
    items = []
    if p.location:
        items.append(f"📍 {p.location}")
    if p.company:
        items.append(f"🏢 {p.company}")
    if p.blog:
        items.append(f"🔗 [{p.blog}]({p.blog})")
    if p.twitter:
        items.append(f"🐦 [@{p.twitter}](https://twitter.com/{p.twitter})")
    if not items:
        return []
    return ["## About", ""] + [f"- {item}" for item in items] + [""]


def _stats(data: NormalizedData) -> list[str]:
    p, s = data.profile, data.stats
    return [
        "## Stats",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Public Repos | {p.public_repos} |",
        f"| Total Stars | {s.total_stars} |",
        f"| Total Forks | {s.total_forks} |",
        f"| Followers | {p.followers} |",
        f"| Following | {p.following} |",
        "",
    ]


def _languages(languages: list[LanguageStats]) -> list[str]:
    if not languages:
        return []
    lines = ["## Languages", ""]
    for lang in languages[:MAX_LANGUAGES]:
        lines.append(f"- **{lang.name}**: {lang.count} repos ({lang.percentage}%)")
    return lines + [""]


def _repo_card(repo: Repository) -> list[str]:
    lines = [f"### [{repo.name}]({repo.url})"]
    if repo.description:
        lines.append(repo.description)
    badges = [f"`{repo.language}`"] if repo.language else []
    badges += [f"⭐ {repo.stars}", f"🍴 {repo.forks}"]
    return lines + ["", " • ".join(badges), ""]


def _top_repos(repos: list[Repository]) -> list[str]:
    if not repos:
        return []
    lines = ["## Top Repositories", ""]
    for repo in repos:
        lines += _repo_card(repo)
    return lines


def render(data: NormalizedData) -> str:
    lines = (
        _header(data)
        + _about(data)
        + _stats(data)
        + _languages(data.stats.languages)
        + _top_repos(data.stats.top_repos)
        + ["---", "", f"📫 Find me on [GitHub]({data.profile.profile_url})"]
    )
    return "\n".join(lines) + "\n"


template = Template(
    metadata=TemplateMetadata(
        id="default",
        name="Default",
        description="Balanced profile with about, stats, languages and top repositories",
        category="generic",
        version="1.0.0",
    ),
    render=render,
)
