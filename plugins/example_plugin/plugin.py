"""Example local plugin: adds a "last updated" footer to the README.

Drop a directory like this one under ``./plugins/`` and gh-profile picks it
up automatically. Settings come from the config file::

    {"plugins": {"last-updated": {"label": "Refreshed"}}}
"""

from __future__ import annotations

from datetime import datetime, timezone

_settings = {"label": "Last updated"}


def init(options):
    _settings.update(options.config)


def after_render(content, data):
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    return f"{content.rstrip()}\n\n<sub>{_settings['label']}: {stamp}</sub>\n"


plugin = {
    "metadata": {
        "id": "last-updated",
        "name": "Last Updated",
        "description": "Appends the generation date to the README",
        "version": "0.1.0",
        "author": "gh-profile",
    },
    "init": init,
    "after_render": after_render,
}
