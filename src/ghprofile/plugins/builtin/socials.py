"""``socials`` -- append a "Connect" line built from the profile's public links."""

from __future__ import annotations

import re

from ghprofile.models import NormalizedData
from ghprofile.plugins.base import Plugin, PluginMetadata

_SCHEME = re.compile(r"^https?://")


def social_links(data: NormalizedData) -> list[str]:
    p = data.profile
    links = []
    if p.location:
        links.append(f"🌍 {p.location}")
    if p.company:
        links.append(f"💼 {p.company}")
    if p.blog:
        url = p.blog if p.blog.startswith("http") else f"https://{p.blog}"
        links.append(f"🌐 [{_SCHEME.sub('', p.blog)}]({url})")
    if p.twitter:
        links.append(f"🐦 [@{p.twitter}](https://twitter.com/{p.twitter})")
    if p.email:
        links.append(f"✉️ [{p.email}](mailto:{p.email})")
    return links


def render(content: str, data: NormalizedData) -> str:
    links = social_links(data)
    if not links:
        return content
    return content + "\n## Connect\n\n" + "  ·  ".join(f"**{link}**" for link in links) + "\n"


plugin = Plugin(
    metadata=PluginMetadata(
        id="socials",
        name="Social Links",
        description="Adds social media links to your profile",
        version="1.0.0",
        author="gh-profile",
    ),
    render=render,
)
