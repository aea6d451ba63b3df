"""
Core package for git-status.

This package centralizes non-UI logic such as:
- Application metadata and settings management (core.app_meta)
- Git helpers and repository status modeling (core.git_utils)

It also re-exports commonly used symbols for convenience, so callers can do:
    from core import load_settings, check_repo_status
"""

from .app_meta import (
    APP_ID,
    APP_TITLE,
    DEFAULT_COMMAND_TIMEOUT,
    MAX_COMMAND_TIMEOUT,
    SETTINGS_DIR,
    SETTINGS_FILE,
    TEXT_DOMAIN,
    HostPaths,
    Notice,
    Settings,
    SettingsError,
    default_settings,
    get_settings_path,
    install_defaults,
    load_settings,
    repository_location,
    sanitize_options,
    save_settings,
    strip_trailing_slashes,
)
from .git_utils import (
    GitCommand,
    GitOutcome,
    GitResult,
    RepoStatus,
    check_repo_status,
    get_branch,
    get_last_commit,
    get_status_text,
    inspect_repo,
    is_clean,
    run_command,
)

__all__ = [
    # app_meta
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
    # git_utils
    "GitCommand",
    "GitOutcome",
    "GitResult",
    "RepoStatus",
    "inspect_repo",
    "run_command",
    "get_branch",
    "is_clean",
    "get_status_text",
    "get_last_commit",
    "check_repo_status",
]
