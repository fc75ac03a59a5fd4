"""Plugins shipped with gh-profile, registered ahead of any discovered plugin."""

from ghprofile.plugins.builtin.projects import plugin as projects_plugin
from ghprofile.plugins.builtin.socials import plugin as socials_plugin
from ghprofile.plugins.builtin.stats import plugin as stats_plugin

BUILTIN_PLUGINS = (stats_plugin, socials_plugin, projects_plugin)

__all__ = ["BUILTIN_PLUGINS", "projects_plugin", "socials_plugin", "stats_plugin"]
