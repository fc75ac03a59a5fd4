"""``stats`` -- append a GitHub stats table and a language bar chart."""

from __future__ import annotations

from ghprofile.models import NormalizedData
from ghprofile.plugins.base import Plugin, PluginMetadata

BAR_WIDTH = 25
MAX_LANGUAGES = 8


def language_bar(count: int, max_count: int, width: int = BAR_WIDTH) -> str:
    filled = (2 * count * width + max_count) // (2 * max_count)
    return "█" * filled + "░" * (width - filled)


def render(content: str, data: NormalizedData) -> str:
    stats, profile = data.stats, data.profile
    section = (
        "\n## GitHub Stats\n\n"
        "| Metric | Count |\n"
        "|--------|-------|\n"
        f"| Repositories | {stats.total_repos:,} |\n"
        f"| Stars | {stats.total_stars:,} |\n"
        f"| Followers | {profile.followers:,} |\n"
        f"| Following | {profile.following:,} |\n"
    )

    if stats.languages:
        section += "\n### Languages\n\n"
        max_count = max(lang.count for lang in stats.languages)
        ranked = sorted(stats.languages, key=lambda lang: lang.percentage, reverse=True)
        for lang in ranked[:MAX_LANGUAGES]:
            bar = language_bar(lang.count, max_count)
            section += f"`{lang.name:<12}` {bar} {lang.percentage}%\n"

    return content + section


plugin = Plugin(
    metadata=PluginMetadata(
        id="stats",
        name="GitHub Stats",
        description="Adds GitHub statistics to your profile",
        version="1.0.0",
        author="gh-profile",
    ),
    render=render,
)
