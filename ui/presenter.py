#!/usr/bin/env python3
"""
View models for the git-status UI.

Nothing here imports GTK: the widgets in ui.status_indicator and
ui.settings_page only copy these values onto widgets, so what gets
shown (labels, tooltips, CSS classes, notices) is decided here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from core.app_meta import _, HostPaths, Notice, Settings
from core.git_utils import GitOutcome, RepoStatus

PAGE_ID: str = "git-status"

CSS_MENU: str = "git-status-menu"
CSS_UP_TO_DATE: str = "git-status-up-to-date"
CSS_UNTRACKED: str = "git-status-untracked"

ICON_CLEAN: str = "git.svg"
ICON_DIRTY: str = "git-white.svg"

INDICATOR_CSS: str = """
.git-status-menu image {
    min-width: 22px;
    min-height: 22px;
}
.git-status-menu.git-status-untracked {
    background-image: none;
    background-color: #f05133;
    color: #ffffff;
}
.git-status-menu.git-status-untracked:hover {
    background-color: #d4492f;
    color: #ffffff;
}
"""


@dataclass
class IndicatorModel:
    """
    What the persistent header-bar indicator shows.

    Attributes:
        visible (bool): False hides the indicator entirely.
        label (str): Branch name.
        tooltip (str): Clean/dirty sentence.
        css_classes (tuple): Style classes applied to the button.
        icon (str): Asset file name under ui/assets.
        target (str): Page opened on click.
    """

    visible: bool
    label: str = ""
    tooltip: str = ""
    css_classes: Tuple[str, ...] = ()
    icon: str = ICON_CLEAN
    target: str = PAGE_ID


@dataclass
class QuickSetButton:
    label: str
    path: str


@dataclass
class SettingsPageModel:
    """
    Everything the Git Status page renders for one refresh.
    """

    git_directory: str
    quick_set: List[QuickSetButton]
    status_text: str
    last_commit: str
    notices: List[Notice] = field(default_factory=list)


def build_indicator(status: RepoStatus, can_manage: bool = True) -> IndicatorModel:
    """
    Build the indicator for a status snapshot.

    Hidden when the user may not manage settings or no branch was found.
    """
    if not can_manage or not status.branch:
        return IndicatorModel(visible=False)

    if status.clean:
        tooltip = _("You are currently on the %s branch") % status.branch
        return IndicatorModel(
            visible=True,
            label=status.branch,
            tooltip=tooltip,
            css_classes=(CSS_MENU, CSS_UP_TO_DATE),
            icon=ICON_CLEAN,
        )

    tooltip = (
        _("You are currently on the %s branch, but there are uncommitted changes!")
        % status.branch
    )
    return IndicatorModel(
        visible=True,
        label=status.branch,
        tooltip=tooltip,
        css_classes=(CSS_MENU, CSS_UNTRACKED),
        icon=ICON_DIRTY,
    )


def build_settings_page(
    settings: Settings,
    host_paths: HostPaths,
    status: RepoStatus,
    notices: Optional[List[Notice]] = None,
) -> SettingsPageModel:
    """
    Build the settings page for a status snapshot.

    Args:
        settings: Settings the status was computed from.
        host_paths: Host directories for the quick-set buttons.
        status: Result of check_repo_status(settings).
        notices: Extra notices to show first (e.g. from saving).
    """
    shown: List[Notice] = list(notices or [])
    if not status.branch:
        shown.append(
            Notice(
                "error",
                _(
                    "The saved location is not a git repository! "
                    "The git status menu item will be hidden from view."
                ),
            )
        )
        if status.error is not None and status.error.outcome in (
            GitOutcome.TOOL_UNAVAILABLE,
            GitOutcome.TIMEOUT,
        ):
            shown.append(Notice("warning", status.error.detail))

    return SettingsPageModel(
        git_directory=settings.git_directory,
        quick_set=[
            QuickSetButton(_("Set to content"), host_paths.content_dir),
            QuickSetButton(_("Set to root"), host_paths.root_dir),
        ],
        status_text=status.status_text,
        last_commit=status.last_commit,
        notices=shown,
    )


__all__ = [
    "PAGE_ID",
    "CSS_MENU",
    "CSS_UP_TO_DATE",
    "CSS_UNTRACKED",
    "ICON_CLEAN",
    "ICON_DIRTY",
    "INDICATOR_CSS",
    "IndicatorModel",
    "QuickSetButton",
    "SettingsPageModel",
    "build_indicator",
    "build_settings_page",
]
