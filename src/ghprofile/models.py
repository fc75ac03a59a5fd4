"""Canonical Pydantic models shared across all gh-profile modules.

The models fall into three groups:

**Configuration models** -- parsed from ``gh-profile.config.json`` (or YAML):
    :class:`GitHubConfig`, :class:`CustomizeConfig`, :class:`CacheConfig`
    and :class:`Config`. Keys are camelCase on disk and unknown keys are
    rejected so that typos surface as errors.

**GitHub payload models** -- the subset of the REST API responses we read:
    :class:`GitHubUser`, :class:`GitHubRepo` and :class:`GitHubData`.
    Unknown keys are ignored.

**Normalized models** -- the stable internal shape every template and
plugin consumes: :class:`Profile`, :class:`Repository`,
:class:`LanguageStats`, :class:`ProfileStats` and :class:`NormalizedData`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CONFIG_SCHEMA_VERSION = 2


# --- Config ---


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class GitHubConfig(_ConfigModel):
    """Repository selection settings."""

    exclude_repos: list[str] = Field(
        default_factory=list, description="Repository names dropped before normalization"
    )
    pinned_repos: list[str] = Field(
        default_factory=list, description="Repository names listed first among top repos"
    )


class CustomizeConfig(_ConfigModel):
    """Template customisation settings."""

    tools: list[str] = Field(
        default_factory=list,
        description="Tools and frameworks shown as icons (sanitized to skillicons ids)",
    )


class CacheConfig(_ConfigModel):
    """GitHub response cache settings."""

    enabled: bool = Field(default=True, description="Enable response caching")
    ttl_seconds: int = Field(default=300, description="Cache TTL in seconds")


class Config(_ConfigModel):
    """Effective gh-profile configuration.

    Loaded by :func:`~ghprofile.config.load_config` and merged with CLI
    flags and environment variables by :func:`~ghprofile.config.resolve_config`.

    ``plugins`` maps plugin ids to either a boolean (enable/disable
    override) or a mapping of plugin-specific settings that is shallow-merged
    into the plugin's config during registry initialization.
    """

    schema_version: int = Field(default=CONFIG_SCHEMA_VERSION, alias="$schemaVersion")
    template: str = "default"
    output: str = "./README.md"
    token: Optional[str] = None
    force: bool = False
    templates_path: Optional[str] = None
    plugins_path: Optional[str] = None
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    customize: CustomizeConfig = Field(default_factory=CustomizeConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    plugins: dict[str, Union[bool, dict[str, Any]]] = Field(default_factory=dict)

    def plugin_toggles(self) -> dict[str, bool]:
        """Return only the boolean entries of :attr:`plugins`."""
        return {k: v for k, v in self.plugins.items() if isinstance(v, bool)}


# --- GitHub payloads ---


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GitHubUser(_Payload):
    """``GET /users/{username}`` response."""

    login: str
    name: Optional[str] = None
    avatar_url: str = ""
    html_url: str = ""
    bio: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None
    twitter_username: Optional[str] = None
    email: Optional[str] = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    created_at: datetime


class GitHubRepo(_Payload):
    """One item of ``GET /users/{username}/repos``."""

    name: str
    full_name: str
    html_url: str
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    watchers_count: int = 0
    open_issues_count: int = 0
    topics: Optional[list[str]] = None
    homepage: Optional[str] = None
    fork: bool = False
    archived: bool = False
    created_at: datetime
    updated_at: datetime
    pushed_at: Optional[datetime] = None


class GitHubData(BaseModel):
    """Everything fetched for one user."""

    user: GitHubUser
    repos: list[GitHubRepo] = Field(default_factory=list)


# --- Normalized data ---


class Profile(BaseModel):
    username: str
    name: str
    avatar_url: str
    profile_url: str
    bio: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None
    twitter: Optional[str] = None
    email: Optional[str] = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    created_at: datetime


class Repository(BaseModel):
    name: str
    full_name: str
    url: str
    description: Optional[str] = None
    language: Optional[str] = None
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    issues: int = 0
    topics: list[str] = Field(default_factory=list)
    homepage: Optional[str] = None
    is_fork: bool = False
    is_archived: bool = False
    created_at: datetime
    updated_at: datetime
    pushed_at: datetime


class LanguageStats(BaseModel):
    name: str
    count: int
    percentage: int


class ProfileStats(BaseModel):
    total_stars: int = 0
    total_forks: int = 0
    total_repos: int = 0
    languages: list[LanguageStats] = Field(default_factory=list)
    top_repos: list[Repository] = Field(default_factory=list)
    recent_repos: list[Repository] = Field(default_factory=list)


class NormalizedData(BaseModel):
    """The value threaded through templates and plugin hooks.

    ``tools`` carries the sanitized icon ids from
    :attr:`CustomizeConfig.tools`; templates merge them with detected
    languages.
    """

    profile: Profile
    repos: list[Repository] = Field(default_factory=list)
    stats: ProfileStats = Field(default_factory=ProfileStats)
    tools: list[str] = Field(default_factory=list)
