"""``projects`` -- append a "Featured Projects" section from the top repositories."""

from __future__ import annotations

from ghprofile.models import NormalizedData
from ghprofile.plugins.base import Plugin, PluginMetadata

MAX_PROJECTS = 6


def render(content: str, data: NormalizedData) -> str:
    repos = data.stats.top_repos[:MAX_PROJECTS]
    if not repos:
        return content

    section = "\n## Featured Projects\n\n"
    for repo in repos:
        section += f"### [{repo.name}]({repo.url})\n"
        if repo.description:
            section += f"> {repo.description.strip()}\n\n"
        facts = []
        if repo.stars:
            facts.append(f"⭐ {repo.stars}")
        if repo.forks:
            facts.append(f"🍴 {repo.forks}")
        if repo.language:
            facts.append(f"💻 {repo.language}")
        if facts:
            section += " · ".join(facts) + "\n\n"
        if repo.topics:
            section += " ".join(f"`{t}`" for t in repo.topics) + "\n\n"
    return content + section


plugin = Plugin(
    metadata=PluginMetadata(
        id="projects",
        name="Projects Section",
        description="Adds a featured projects section to your profile",
        version="1.0.0",
        author="gh-profile",
    ),
    render=render,
)
