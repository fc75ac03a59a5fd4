"""Snapshot remote README images into a local ``assets/`` directory.

Badges and stat cards are usually served by third-party services. With
``--local-assets`` every image referenced from the rendered markdown is
downloaded next to the output file and the link is rewritten to
``./assets/<file>``, so the README keeps rendering if a service goes away.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import re
from pathlib import Path, PurePosixPath
from typing import Optional, Union
from urllib.parse import urlsplit

import httpx

from ghprofile import __version__

logger = logging.getLogger(__name__)

ASSETS_DIRNAME = "assets"
MAX_ATTEMPTS = 3
DOWNLOAD_TIMEOUT = 15.0

_MD_IMAGE = re.compile(r"(!\[[^\]]*\])\((https?://[^)\s]+)\)")
_HTML_IMAGE = re.compile(r"""(<img[^>]+src=["'])(https?://[^"']+)(["'][^>]*>)""")

# Hosts that serve SVG without a file extension in the path.
_SVG_HOSTS = ("shields.io", "skillicons.dev", "github-readme-stats", "komarev.com")


def asset_filename(url: str) -> str:
    """Return ``<first 8 hex of md5(url)><extension>`` for *url*."""
    digest = hashlib.md5(url.encode("utf-8")).hexdigest()[:8]
    return f"{digest}{guess_extension(url)}"


def guess_extension(url: str) -> str:
    """Guess a file extension from the URL path, then from the host."""
    suffix = PurePosixPath(urlsplit(url).path).suffix
    if suffix and len(suffix) < 5:
        return suffix
    if any(host in url for host in _SVG_HOSTS):
        return ".svg"
    return ".png"


def find_image_urls(markdown: str) -> list[str]:
    """Return distinct remote image URLs in first-seen order."""
    found = [m.group(2) for m in _MD_IMAGE.finditer(markdown)]
    found += [m.group(2) for m in _HTML_IMAGE.finditer(markdown)]
    return list(dict.fromkeys(found))


async def download_file(
    client: httpx.AsyncClient,
    url: str,
    dest: Path,
    attempts: int = MAX_ATTEMPTS,
    backoff: float = 1.0,
) -> None:
    """Download *url* to *dest*, retrying with exponential backoff.

    Raises:
        httpx.HTTPError: When the last attempt fails.
    """
    for attempt in range(attempts):
        try:
            response = await client.get(url)
            response.raise_for_status()
            dest.write_bytes(response.content)
            return
        except httpx.HTTPError as exc:
            if attempt == attempts - 1:
                raise
            delay = backoff * (2 ** attempt)
            logger.debug("Download of %s failed (%s); retrying in %ss", url, exc, delay)
            await asyncio.sleep(delay)


async def make_assets_local(
    markdown: str,
    output_path: Union[str, Path],
    client: Optional[httpx.AsyncClient] = None,
    backoff: float = 1.0,
) -> str:
    """Download every remote image in *markdown* and rewrite its links.

    Images that cannot be fetched keep their remote URL and are reported
    with a warning.

    Args:
        markdown: Rendered README content.
        output_path: Where the README will be written; ``assets/`` is
            created beside it.
        client: Optional client to reuse (tests inject a mock transport).
        backoff: Base delay in seconds between attempts.

    Returns:
        The markdown with downloaded images pointing at ``./assets/``.
    """
    urls = find_image_urls(markdown)
    if not urls:
        return markdown

    assets_dir = Path(output_path).resolve().parent / ASSETS_DIRNAME
    assets_dir.mkdir(parents=True, exist_ok=True)

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            timeout=DOWNLOAD_TIMEOUT,
            follow_redirects=True,
            headers={"User-Agent": f"gh-profile/{__version__}"},
        )

    local: dict[str, str] = {}
    try:
        for url in urls:
            filename = asset_filename(url)
            try:
                await download_file(client, url, assets_dir / filename, backoff=backoff)
            except httpx.HTTPError as exc:
                logger.warning("Failed to download asset %s: %s", url, exc)
                continue
            local[url] = f"./{ASSETS_DIRNAME}/{filename}"
    finally:
        if owns_client:
            await client.aclose()

    def _md(match: re.Match[str]) -> str:
        url = match.group(2)
        return f"{match.group(1)}({local[url]})" if url in local else match.group(0)

    def _html(match: re.Match[str]) -> str:
        url = match.group(2)
        if url not in local:
            return match.group(0)
        return f"{match.group(1)}{local[url]}{match.group(3)}"

    updated = _MD_IMAGE.sub(_md, markdown)
    return _HTML_IMAGE.sub(_html, updated)
