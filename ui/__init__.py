#!/usr/bin/env python3
"""
UI package for git-status.

This package contains user interface components built with GTK, plus the
GTK-free view models they render (ui.presenter).

Exports (lazily imported):
- StatusIndicator:      Header-bar branch indicator.
- SettingsPage:         The "Git Status" tools page.
- MainWindow:           The admin window hosting both.
- GitStatusApplication: Gtk.Application running the activation hook.

Lazy imports keep GTK-heavy modules from loading unless needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__all__ = [
    "StatusIndicator",
    "SettingsPage",
    "MainWindow",
    "GitStatusApplication",
]

if TYPE_CHECKING:
    # For type checkers only; avoids importing GTK at runtime unless needed.
    from .main_window import GitStatusApplication as _GitStatusApplication
    from .main_window import MainWindow as _MainWindow
    from .settings_page import SettingsPage as _SettingsPage
    from .status_indicator import StatusIndicator as _StatusIndicator

_LAZY = {
    "StatusIndicator": "status_indicator",
    "SettingsPage": "settings_page",
    "MainWindow": "main_window",
    "GitStatusApplication": "main_window",
}


def __getattr__(name: str):
    """
    Lazily import UI components on first access to avoid unnecessary GTK imports.
    """
    if name in _LAZY:
        import importlib

        module = importlib.import_module(f".{_LAZY[name]}", __name__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
