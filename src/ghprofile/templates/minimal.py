"""The ``minimal`` template."""

from __future__ import annotations

from ghprofile.core.normalize import sort_by_stars
from ghprofile.models import NormalizedData
from ghprofile.templates.base import Template, TemplateMetadata

MAX_REPOS = 5


def render(data: NormalizedData) -> str:
    profile = data.profile
    parts = [f"# Hi, I'm {profile.name or profile.username} 👋"]

    if profile.bio:
        parts.append(profile.bio)
    if profile.location:
        parts.append(f"📍 {profile.location}")
    if profile.company:
        parts.append(f"🏢 {profile.company}")

    parts.append(
        "## Stats\n\n"
        "| Metric | Value |\n"
        "|--------|-------|\n"
        f"| Public Repos | {profile.public_repos} |\n"
        f"| Followers | {profile.followers} |"
    )

    if data.repos:
        parts.append("## Top Repositories")
        for repo in sort_by_stars(data.repos)[:MAX_REPOS]:
            card = f"### [{repo.name}]({repo.url})\n"
            if repo.description:
                card += f"{repo.description}\n\n"
            card += f"⭐ {repo.stars} • 🍴 {repo.forks}"
            parts.append(card)

    return "\n\n".join(parts).strip() + "\n"


template = Template(
    metadata=TemplateMetadata(
        id="minimal",
        name="Minimal",
        description="A clean, minimal GitHub profile README",
        category="minimal",
        version="1.0.0",
    ),
    render=render,
)
