"""The ``showcase`` template: centred header, language bars, featured projects."""

from __future__ import annotations

from ghprofile.models import NormalizedData, Repository
from ghprofile.templates.base import Template, TemplateMetadata

FEATURED = 4
RECENT = 3


def _about(data: NormalizedData) -> str:
    p = data.profile
    items = []
    if p.location:
        items.append(f"🌍 Based in **{p.location}**")
    if p.company:
        items.append(f"💼 Currently working at **{p.company}**")
    if p.blog:
        items.append(f"🌐 Visit my [website]({p.blog})")
    if p.twitter:
        items.append(f"🐦 Follow me on [Twitter](https://twitter.com/{p.twitter})")
    if p.email:
        items.append(f"✉️ Contact me at [{p.email}](mailto:{p.email})")
    return "\n\n".join(items)


def _project(repo: Repository) -> str:
    out = f"### ⭐ [{repo.name}]({repo.url})\n\n"
    if repo.description:
        out += f"> {repo.description}\n\n"
    facts = []
    if repo.stars:
        facts.append(f"⭐ {repo.stars} stars")
    if repo.forks:
        facts.append(f"🍴 {repo.forks} forks")
    if repo.watchers:
        facts.append(f"👀 {repo.watchers} watchers")
    if repo.language:
        facts.append(f"💻 {repo.language}")
    if facts:
        out += " · ".join(facts) + "\n\n"
    if repo.topics:
        out += " ".join(f"`{t}`" for t in repo.topics) + "\n\n"
    return out


def render(data: NormalizedData) -> str:
    profile, stats = data.profile, data.stats

    md = f'<h1 align="center">Hi 👋, I\'m {profile.name}</h1>\n'
    if profile.bio:
        md += f'<h3 align="center">{profile.bio}</h3>\n'

    about = _about(data)
    if about:
        md += f"\n## About Me\n\n{about}\n"

    md += (
        "\n## Stats\n\n"
        "| Metric | Count |\n"
        "|--------|-------|\n"
        f"| Repositories | {stats.total_repos} |\n"
        f"| Stars Earned | {stats.total_stars} |\n"
        f"| Forks | {stats.total_forks} |\n"
        f"| Followers | {profile.followers} |\n"
        f"| Following | {profile.following} |\n"
    )

    if stats.languages:
        md += "\n## Technologies\n\n"
        for lang in stats.languages:
            # one block per 5%, so 100% is 20 blocks
            bar = "█" * ((lang.percentage + 2) // 5)
            md += f"{lang.name} {bar} {lang.percentage}%\n"

    if stats.top_repos:
        md += "\n## Featured Projects\n\n"
        md += "".join(_project(repo) for repo in stats.top_repos[:FEATURED]).rstrip("\n") + "\n"

    if stats.recent_repos:
        md += "\n## Recent Activity\n\n"
        for repo in stats.recent_repos[:RECENT]:
            date = f"{repo.pushed_at:%b} {repo.pushed_at.day}, {repo.pushed_at.year}"
            md += f"- 📦 Pushed to [{repo.name}]({repo.url}) on {date}\n"

    md += (
        "\n---\n\n"
        f'<p align="center"><a href="{profile.profile_url}">View GitHub Profile</a></p>\n'
    )
    return md


template = Template(
    metadata=TemplateMetadata(
        id="showcase",
        name="Showcase",
        description="A feature-rich template highlighting your best work",
        category="showcase",
        version="1.0.0",
    ),
    render=render,
)
