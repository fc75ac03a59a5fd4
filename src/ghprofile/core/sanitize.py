"""Map free-form tool names onto skillicons.dev icon ids."""

from __future__ import annotations

import re
from collections.abc import Iterable

ICON_ALIASES: dict[str, str] = {
    # frameworks
    "next.js": "nextjs",
    "next": "nextjs",
    "nest.js": "nestjs",
    "nest": "nestjs",
    "vue.js": "vue",
    "vuejs": "vue",
    "nuxt.js": "nuxtjs",
    "nuxt": "nuxtjs",
    "react.js": "react",
    "reactjs": "react",
    "node.js": "nodejs",
    "node": "nodejs",
    "express.js": "express",
    # languages
    "c++": "cpp",
    "c#": "cs",
    "golang": "go",
    "javascript": "js",
    "typescript": "ts",
    "python": "py",
    # tools and cloud
    "amazon web services": "aws",
    "google cloud": "gcp",
    "k8s": "kubernetes",
    "shell": "bash",
}

_PARENTHESISED = re.compile(r"\(.*\)")


def sanitize_tool(name: str) -> str:
    """Normalize one entry: lower-case, drop ``(...)`` text, apply aliases.

    Unknown names are returned cleaned but otherwise unchanged.
    """
    clean = _PARENTHESISED.sub("", name.strip().lower()).strip()
    return ICON_ALIASES.get(clean, clean)


def sanitize_tech_stack(items: Iterable[str]) -> list[str]:
    """Sanitize every entry and drop those that end up empty.

    Example::

        >>> sanitize_tech_stack(["Next.js", "AWS (EC2)", "  "])
        ['nextjs', 'aws']
    """
    return [clean for clean in (sanitize_tool(item) for item in items) if clean]
