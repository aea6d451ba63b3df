#!/usr/bin/env python3
"""
Core application metadata and settings management.

This module centralizes:
- Static app metadata (APP_ID, APP_TITLE, gettext domain)
- Host directories offered as repository locations (content dir, site root)
- Settings load/save (with defaults and atomic writes)
- The activation hook that writes first-run defaults
- Sanitizing user supplied settings before they are persisted

Settings are plain values: callers load them once per refresh and pass
them down, nothing here is cached at module level.
"""

from __future__ import annotations

import gettext
import json
import logging
import math
import os
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------
# App metadata
# -------------------------------------------------------------------
APP_ID: str = "dev.wpgitupdater.git-status"
APP_TITLE: str = "Git Status"
TEXT_DOMAIN: str = "git-status"

_ = gettext.translation(TEXT_DOMAIN, fallback=True).gettext

# -------------------------------------------------------------------
# Settings storage
# -------------------------------------------------------------------
SETTINGS_DIR: str = os.path.join(os.path.expanduser("~"), ".config", "git-status")
SETTINGS_FILE: str = os.path.join(SETTINGS_DIR, "settings.json")

DEFAULT_COMMAND_TIMEOUT: float = 15.0
MAX_COMMAND_TIMEOUT: float = 3600.0


class SettingsError(Exception):
    """Raised when settings cannot be persisted."""


@dataclass(frozen=True)
class Notice:
    """A message for the settings page; kind is 'error', 'warning' or 'success'."""

    kind: str
    message: str


@dataclass(frozen=True)
class HostPaths:
    """
    Well-known host directories.

    Attributes:
        content_dir: Content storage directory, the default repository location.
        root_dir: Site root, offered as the second quick-set location.
    """

    content_dir: str
    root_dir: str

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HostPaths":
        env = os.environ if environ is None else environ
        root = env.get("GIT_STATUS_ROOT_DIR") or os.getcwd()
        content = env.get("GIT_STATUS_CONTENT_DIR") or os.path.join(root, "content")
        return cls(
            content_dir=strip_trailing_slashes(content),
            root_dir=strip_trailing_slashes(root),
        )


@dataclass(frozen=True)
class Settings:
    """
    Persisted settings.

    Attributes:
        git_directory (str): Location of the repository to inspect.
        command_timeout (float): Seconds before a git command is abandoned.
    """

    git_directory: str
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT

    def to_dict(self) -> Dict[str, object]:
        return {
            "git_directory": self.git_directory,
            "command_timeout": self.command_timeout,
        }


def strip_trailing_slashes(path: str) -> str:
    """
    Remove trailing slashes, keeping the filesystem root as '/'.
    """
    stripped = path.rstrip("/")
    if not stripped and path.startswith("/"):
        return "/"
    return stripped


def get_settings_path() -> str:
    """
    Returns the file path where settings are stored.
    """
    return os.environ.get("GIT_STATUS_SETTINGS_FILE") or SETTINGS_FILE


def default_settings(host_paths: Optional[HostPaths] = None) -> Settings:
    paths = host_paths or HostPaths.from_env()
    return Settings(git_directory=paths.content_dir)


def _coerce_timeout(value: object) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        timeout = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(timeout) or timeout <= 0:
        return None
    return min(timeout, MAX_COMMAND_TIMEOUT)


def repository_location(
    settings: Union[Settings, Mapping[str, object], None],
    host_paths: Optional[HostPaths] = None,
) -> str:
    """
    Returns the location of the git repository, defaulting to the content dir.

    Args:
        settings: Loaded Settings, a raw mapping as read from disk, or None.
        host_paths: Host directories; defaults to HostPaths.from_env().

    Returns:
        The configured path without trailing slashes.
    """
    if isinstance(settings, Settings):
        value: object = settings.git_directory
    elif isinstance(settings, Mapping):
        value = settings.get("git_directory")
    else:
        value = None

    if isinstance(value, str) and value.strip():
        return strip_trailing_slashes(value.strip())
    paths = host_paths or HostPaths.from_env()
    return paths.content_dir


def load_settings(
    path: Optional[str] = None, host_paths: Optional[HostPaths] = None
) -> Settings:
    """
    Load persisted settings from disk, merging with defaults.

    Behavior:
    - If the file does not exist, returns the defaults.
    - Unknown keys from disk are ignored.
    - Any error while reading/parsing falls back to defaults.
    """
    settings_path = path or get_settings_path()
    defaults = default_settings(host_paths)
    loaded: object = None
    if os.path.isfile(settings_path):
        try:
            with open(settings_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as ex:
            logger.warning("Ignoring unreadable settings file %s: %s", settings_path, ex)
            return defaults
    if not isinstance(loaded, Mapping):
        return defaults

    timeout = _coerce_timeout(loaded.get("command_timeout", DEFAULT_COMMAND_TIMEOUT))
    return Settings(
        git_directory=repository_location(loaded, host_paths),
        command_timeout=timeout if timeout is not None else DEFAULT_COMMAND_TIMEOUT,
    )


def save_settings(settings: Settings, path: Optional[str] = None) -> None:
    """
    Persist settings atomically (write to temp then replace).

    Raises:
        SettingsError: when the file cannot be written.
    """
    settings_path = path or get_settings_path()
    tmp = settings_path + ".tmp"
    try:
        os.makedirs(os.path.dirname(settings_path) or ".", exist_ok=True)
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
        os.replace(tmp, settings_path)
    except OSError as ex:
        raise SettingsError(f"Could not save settings to {settings_path}: {ex}") from ex
    logger.info("Saved settings to %s", settings_path)


def install_defaults(
    path: Optional[str] = None, host_paths: Optional[HostPaths] = None
) -> bool:
    """
    Activation hook: write default settings if none are present.

    Returns:
        True when defaults were written, False when settings already existed.
    """
    settings_path = path or get_settings_path()
    if os.path.exists(settings_path):
        return False
    save_settings(default_settings(host_paths), settings_path)
    return True


def sanitize_options(
    options: Mapping[str, object],
    current: Optional[Settings] = None,
    host_paths: Optional[HostPaths] = None,
) -> Tuple[Settings, List[Notice]]:
    """
    Sanitize user supplied settings, collecting notices where appropriate.

    Args:
        options: Raw form values ('git_directory', optionally 'command_timeout').
        current: Settings to inherit unspecified values from.
        host_paths: Host directories used for the fallback location.

    Returns:
        (sanitized Settings, notices for the settings page)
    """
    base = current or default_settings(host_paths)
    notices: List[Notice] = []

    raw_dir = options.get("git_directory")
    directory = raw_dir.strip() if isinstance(raw_dir, str) else ""
    if "\x00" in directory:
        notices.append(
            Notice("error", _("The repository location contains invalid characters."))
        )
        directory = ""
    if not directory:
        directory = repository_location(None, host_paths)
        notices.append(
            Notice(
                "warning",
                _("No repository location given, using %s instead.") % directory,
            )
        )
    sanitized = replace(base, git_directory=strip_trailing_slashes(directory))

    if "command_timeout" in options:
        timeout = _coerce_timeout(options.get("command_timeout"))
        sanitized = replace(
            sanitized,
            command_timeout=timeout if timeout is not None else DEFAULT_COMMAND_TIMEOUT,
        )

    notices.append(Notice("success", _("Settings Saved")))
    return sanitized, notices


__all__ = [
    "APP_ID",
    "APP_TITLE",
    "TEXT_DOMAIN",
    "SETTINGS_DIR",
    "SETTINGS_FILE",
    "DEFAULT_COMMAND_TIMEOUT",
    "MAX_COMMAND_TIMEOUT",
    "SettingsError",
    "Notice",
    "HostPaths",
    "Settings",
    "strip_trailing_slashes",
    "get_settings_path",
    "default_settings",
    "repository_location",
    "load_settings",
    "save_settings",
    "install_defaults",
    "sanitize_options",
]
