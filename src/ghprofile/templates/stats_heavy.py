"""The ``stats-heavy`` template: a badge and metrics dashboard.

Stat cards come from third-party image services; every number they show
is also written out as plain text so the README still reads correctly when
an image fails to load.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta, timezone

from ghprofile.models import NormalizedData, Repository
from ghprofile.templates.base import Template, TemplateMetadata

THEME = "dracula"
STATS_HOST = "https://github-readme-stats.vercel.app/api"
STREAK_HOST = "https://github-readme-streak-stats.herokuapp.com/"
ACTIVE_WINDOW = timedelta(days=90)
FEATURED = 4

LANGUAGE_ICONS = {
    "javascript": "js",
    "typescript": "ts",
    "python": "py",
    "html": "html",
    "css": "css",
    "java": "java",
    "kotlin": "kotlin",
    "c": "c",
    "shell": "bash",
    "go": "go",
    "rust": "rust",
}
DEFAULT_TOOLS = ("git", "docker", "vscode", "linux", "github")


def _utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def account_age_years(created_at: datetime, now: datetime) -> float:
    return round((now - _utc(created_at)).days / 365, 1)


def count_active(repos: list[Repository], now: datetime) -> int:
    cutoff = now - ACTIVE_WINDOW
    return sum(1 for r in repos if not r.is_archived and _utc(r.pushed_at) > cutoff)


def timeline(repos: list[Repository]) -> dict[int, dict[str, int]]:
    """Per creation year: repository count, stars and forks, newest year first."""
    years: dict[int, dict[str, int]] = defaultdict(lambda: {"count": 0, "stars": 0, "forks": 0})
    for repo in repos:
        bucket = years[repo.created_at.year]
        bucket["count"] += 1
        bucket["stars"] += repo.stars
        bucket["forks"] += repo.forks
    return dict(sorted(years.items(), reverse=True))


def tool_icons(data: NormalizedData) -> list[str]:
    detected = [
        LANGUAGE_ICONS[lang.name.lower()]
        for lang in data.stats.languages
        if lang.name.lower() in LANGUAGE_ICONS
    ]
    combined = list(dict.fromkeys([*data.tools, *detected]))
    return combined or list(DEFAULT_TOOLS)


def _badge(label: str, value: object, color: str, logo: str, alt: str) -> str:
    return (
        f'<img src="https://img.shields.io/badge/{label}-{value}-{color}'
        f'?style=flat-square&logo={logo}&logoColor=white" alt="{alt}" />'
    )


def render(data: NormalizedData) -> str:
    profile, stats, repos = data.profile, data.stats, data.repos
    user = profile.username
    now = _now()
    total = stats.total_repos or 1
    active = count_active(repos, now)

    md = '<div align="center">\n'
    md += f"  <h1>{profile.name} | Analytics Dashboard</h1>\n"
    badges = [
        _badge("Stars", stats.total_stars, "f59e0b", "github-sponsors", "total stars"),
        _badge("Followers", profile.followers, "0ea5e9", "github", "followers"),
    ]
    md += f"  <p>{'&nbsp;&nbsp;'.join(badges)}</p>\n"
    md += "</div>\n\n"

    md += '<div align="center">\n'
    md += (
        f'  <img src="{STATS_HOST}?username={user}&show_icons=true&theme={THEME}'
        '&hide_border=true" alt="GitHub Stats" />\n'
    )
    md += (
        f'  <img src="{STATS_HOST}/top-langs/?username={user}&layout=compact&theme={THEME}'
        '&hide_border=true&langs_count=10" alt="Top Languages" />\n'
    )
    md += f'  <img src="{STREAK_HOST}?user={user}&theme={THEME}&hide_border=true" alt="GitHub Streak" />\n'
    md += "</div>\n\n"

    if stats.languages:
        top = ", ".join(f"{lang.name} ({lang.percentage}%)" for lang in stats.languages[:5])
        md += f'<p align="center"><strong>Top Languages:</strong> {top}</p>\n\n'

    originals = sum(1 for r in repos if not r.is_fork)
    ratio = profile.followers / (profile.following or 1)
    md += "### Key Metrics\n\n"
    md += "| Metric | Value | Detail |\n| :--- | :--- | :--- |\n"
    md += (
        f"| **Account Age** | {account_age_years(profile.created_at, now)} years "
        f"| Joined {profile.created_at:%Y-%m-%d} |\n"
    )
    md += f"| **Total Repos** | {profile.public_repos} | {originals} Original |\n"
    md += f"| **Community** | {profile.followers} | {ratio:.2f} Ratio |\n\n"

    md += "### Repository Insights\n\n"
    md += "| Aspect | Count | Efficiency |\n| :--- | :--- | :--- |\n"
    md += f"| **Total Stars** | {stats.total_stars} | {stats.total_stars / total:.1f} avg/repo |\n"
    md += f"| **Total Forks** | {stats.total_forks} | {stats.total_forks / total:.1f} avg/repo |\n"
    md += (
        f"| **Active Projects** | {active} "
        f"| {(200 * active + total) // (2 * total)}% activity |\n\n"
    )

    md += "### Productivity Timeline\n\n"
    md += "| Year | New Repos | Stars | Forks |\n| :--- | :--- | :--- | :--- |\n"
    for year, bucket in timeline(repos).items():
        md += f"| {year} | {bucket['count']} | {bucket['stars']} | {bucket['forks']} |\n"
    md += "\n"

    md += "### Tools & Frameworks\n\n"
    md += '<div align="center">\n'
    md += f'  <img src="https://skillicons.dev/icons?i={",".join(tool_icons(data))}" alt="tools" />\n'
    md += "</div>\n\n"

    if stats.top_repos:
        md += "### Featured Projects\n\n"
        md += '<div align="center">\n'
        for repo in stats.top_repos[:FEATURED]:
            md += f'  <a href="{repo.url}">\n'
            md += (
                f'    <img src="{STATS_HOST}/pin/?username={user}&repo={repo.name}'
                f'&theme={THEME}&hide_border=true" alt="{repo.name}" />\n'
            )
            md += "  </a>\n"
        md += "</div>\n\n"

    md += "<hr>\n\n"
    md += '<div align="center">\n'
    md += f"  <sub>Generated with gh-profile • {now.year}</sub>\n"
    md += "</div>\n"
    return md


template = Template(
    metadata=TemplateMetadata(
        id="stats-heavy",
        name="Stats Dashboard",
        description="A comprehensive, data-driven dashboard for the analytical developer",
        category="developer",
        version="1.0.0",
    ),
    render=render,
)
