"""Configuration loading, migration and precedence resolution.

gh-profile reads a single project-local file, ``gh-profile.config.json`` in
the working directory by default. Paths ending in ``.yaml`` or ``.yml``
are parsed with PyYAML instead of JSON. The parsed document is migrated to
the current schema version (:func:`migrate_config`) and validated against
:class:`~ghprofile.models.Config`.

:func:`resolve_config` layers the sources, highest precedence first:

1. CLI flags (``--template``, ``--output``, ``--token``, ``--force``)
2. Environment variables (``GH_PROFILE_TOKEN``, then ``GITHUB_TOKEN``;
   ``GH_PROFILE_TEMPLATE``)
3. The config file
4. Model defaults

Writes go through :func:`atomic_write` (temp file in the same directory,
then ``os.replace``).
"""

from __future__ import annotations

import copy
import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from ghprofile.exceptions import ConfigError
from ghprofile.models import CONFIG_SCHEMA_VERSION, Config

logger = logging.getLogger(__name__)

_APP_NAME = "gh-profile"
DEFAULT_CONFIG_NAME = "gh-profile.config.json"
SCHEMA_VERSION_KEY = "$schemaVersion"

# Version 1 keys that have no version 2 counterpart.
_LEGACY_KEYS: dict[str, tuple[str, ...]] = {
    "github": ("includePrivate",),
    "customize": ("showLanguages", "showStats", "showSocial", "sections"),
}

TOKEN_ENV_VARS = ("GH_PROFILE_TOKEN", "GITHUB_TOKEN")
TEMPLATE_ENV_VAR = "GH_PROFILE_TEMPLATE"


# --- Directories ---


def _is_xdg_platform() -> bool:
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/gh-profile/`` (default
    ``~/.cache/gh-profile/``). Elsewhere: ``~/.gh-profile/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory used for crash logs, creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/gh-profile/`` (default
    ``~/.local/share/gh-profile/``). Elsewhere: ``~/.gh-profile/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* via a temp file in the same directory and a rename.

    The temp file is removed on any failure, including ``KeyboardInterrupt``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Schema migration ---


def detect_config_version(raw: dict[str, Any]) -> int:
    """Return the schema version of a raw config document (1 when unmarked)."""
    return raw.get(SCHEMA_VERSION_KEY, 1)


def migrate_config(raw: dict[str, Any]) -> dict[str, Any]:
    """Upgrade a raw config document to the current schema version.

    Version 1 documents carry no ``$schemaVersion`` key. They are stamped
    with version 2 and lose the display toggles that version 2 dropped.
    The input is never modified.

    Raises:
        ConfigError: If the document declares an unsupported version.
    """
    version = detect_config_version(raw)
    if version == CONFIG_SCHEMA_VERSION:
        return dict(raw)
    if version != 1:
        raise ConfigError(
            f"Unsupported config schema version {version!r} "
            f"(expected 1 or {CONFIG_SCHEMA_VERSION})"
        )

    migrated = copy.deepcopy(raw)
    for section, keys in _LEGACY_KEYS.items():
        block = migrated.get(section)
        if not isinstance(block, dict):
            continue
        for key in keys:
            if key in block:
                logger.debug("Dropping legacy config key %s.%s", section, key)
                del block[key]
    migrated[SCHEMA_VERSION_KEY] = CONFIG_SCHEMA_VERSION
    return migrated


# --- Loading ---


def _parse(path: Path, text: str) -> Any:
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """Load, migrate and validate the config file.

    Args:
        config_path: File to read. Relative paths resolve against the
            working directory. Defaults to ``gh-profile.config.json``.

    Returns:
        The validated :class:`~ghprofile.models.Config`; model defaults
        when the file does not exist.

    Raises:
        ConfigError: If the file cannot be parsed, its root is not an
            object, or validation fails (for example on unknown keys).
    """
    path = Path.cwd() / Path(config_path or DEFAULT_CONFIG_NAME)
    if not path.is_file():
        logger.debug("No config file at %s; using defaults", path)
        return Config()

    try:
        raw = _parse(path, path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Failed to load config {path}: config must be an object")

    try:
        return Config.model_validate(migrate_config(raw))
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc


def save_config(config: Config, path: Union[str, Path]) -> Path:
    """Write *config* as camelCase JSON atomically and return the path."""
    target = Path(path)
    data = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    atomic_write(target, json.dumps(data, indent=2) + "\n")
    return target


# --- Precedence resolution ---


def _env_token() -> Optional[str]:
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def resolve_config(
    config_path: Optional[Union[str, Path]] = None,
    cli_template: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_token: Optional[str] = None,
    cli_force: Optional[bool] = None,
) -> Config:
    """Merge CLI flags, environment variables and the config file.

    ``None`` CLI values mean "not given" and fall through to the next
    source.

    Returns:
        A new :class:`~ghprofile.models.Config`; the loaded file model is
        not shared with the caller.
    """
    config = load_config(config_path)
    updates: dict[str, Any] = {}

    env_template = os.environ.get(TEMPLATE_ENV_VAR)
    if cli_template is not None:
        updates["template"] = cli_template
    elif env_template:
        updates["template"] = env_template

    if cli_output is not None:
        updates["output"] = cli_output

    env_token = _env_token()
    if cli_token is not None:
        updates["token"] = cli_token
    elif env_token:
        updates["token"] = env_token

    if cli_force:
        updates["force"] = True

    return config.model_copy(update=updates, deep=True)
