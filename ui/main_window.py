#!/usr/bin/env python3
"""
Main window and application for git-status.

The window is the admin area: a header bar carrying the persistent
branch indicator and a refresh button, and a sidebar-switched stack
with a dashboard and the "Git Status" tools page.

Every refresh loads settings from disk, runs the git inspection once
and pushes the resulting view models to both the indicator and the
page. Nothing is cached between refreshes.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import gi

gi.require_version("Gtk", "3.0")
from gi.repository import Gio, GLib, Gtk

from core.app_meta import (
    APP_ID,
    APP_TITLE,
    _,
    HostPaths,
    Notice,
    SettingsError,
    get_settings_path,
    install_defaults,
    load_settings,
    sanitize_options,
    save_settings,
)
from core.git_utils import RepoStatus, check_repo_status

from .presenter import PAGE_ID, build_indicator, build_settings_page
from .settings_page import SettingsPage
from .status_indicator import StatusIndicator

logger = logging.getLogger(__name__)

DASHBOARD_ID: str = "dashboard"


class MainWindow(Gtk.ApplicationWindow):
    """
    Admin window: header-bar indicator plus dashboard and Git Status pages.
    """

    def __init__(
        self,
        application: Optional[Gtk.Application] = None,
        settings_path: Optional[str] = None,
        host_paths: Optional[HostPaths] = None,
        can_manage: bool = True,
    ) -> None:
        super().__init__(application=application, title=APP_TITLE)
        self.settings_path = settings_path or get_settings_path()
        self.host_paths = host_paths or HostPaths.from_env()
        self.can_manage = can_manage
        self.last_status: Optional[RepoStatus] = None
        self.set_default_size(900, 640)

        # Header bar
        header = Gtk.HeaderBar()
        header.set_show_close_button(True)
        header.set_title(APP_TITLE)
        self.set_titlebar(header)

        refresh_btn = Gtk.Button.new_from_icon_name(
            "view-refresh-symbolic", Gtk.IconSize.BUTTON
        )
        refresh_btn.set_tooltip_text(_("Refresh"))
        refresh_btn.connect("clicked", lambda _b: self.refresh())
        header.pack_start(refresh_btn)

        self.indicator = StatusIndicator(on_activate=self.show_page)
        header.pack_end(self.indicator.button)

        # Pages
        self.stack = Gtk.Stack()
        self.stack.set_transition_type(Gtk.StackTransitionType.CROSSFADE)

        self.dashboard_label = Gtk.Label()
        self.dashboard_label.set_line_wrap(True)
        self.dashboard_label.set_selectable(True)
        self.stack.add_titled(self.dashboard_label, DASHBOARD_ID, _("Dashboard"))

        self.settings_page = SettingsPage(on_save=self.save_form)
        page_scroller = Gtk.ScrolledWindow()
        page_scroller.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        page_scroller.add(self.settings_page.root)
        self.stack.add_titled(page_scroller, PAGE_ID, _("Git Status"))

        sidebar = Gtk.StackSidebar()
        sidebar.set_stack(self.stack)
        body = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL)
        body.pack_start(sidebar, False, False, 0)
        body.pack_start(Gtk.Separator(orientation=Gtk.Orientation.VERTICAL), False, False, 0)
        body.pack_start(self.stack, True, True, 0)
        self.add(body)

        # The Git Status page is only reachable for managers
        page_scroller.set_no_show_all(not self.can_manage)
        page_scroller.set_visible(self.can_manage)
        self.refresh()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self, notices: Optional[List[Notice]] = None) -> RepoStatus:
        """
        Re-read settings, re-run git and re-render indicator + page.
        """
        settings = load_settings(self.settings_path, self.host_paths)
        status = check_repo_status(settings)
        self.last_status = status

        self.indicator.update(build_indicator(status, self.can_manage))
        self.settings_page.render(
            build_settings_page(settings, self.host_paths, status, notices)
        )
        if status.branch:
            summary = _("Watching %(path)s on branch %(branch)s.") % {
                "path": status.repo_path,
                "branch": status.branch,
            }
        else:
            summary = _("%s is not a git repository.") % status.repo_path
        self.dashboard_label.set_text(summary)
        return status

    def save_form(self, values: Dict[str, object]) -> None:
        """
        Sanitize and persist submitted form values, then refresh.
        """
        current = load_settings(self.settings_path, self.host_paths)
        sanitized, notices = sanitize_options(values, current, self.host_paths)
        try:
            save_settings(sanitized, self.settings_path)
        except SettingsError as ex:
            logger.error("%s", ex)
            notices = [n for n in notices if n.kind != "success"]
            notices.append(Notice("error", str(ex)))
        self.refresh(notices)

    def show_page(self, name: str) -> None:
        child = self.stack.get_child_by_name(name)
        if child is not None and child.get_visible():
            self.stack.set_visible_child(child)


class GitStatusApplication(Gtk.Application):
    """
    Single-instance application; writes default settings on startup.
    """

    def __init__(
        self,
        settings_path: Optional[str] = None,
        host_paths: Optional[HostPaths] = None,
    ) -> None:
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.FLAGS_NONE)
        self.settings_path = settings_path
        self.host_paths = host_paths
        self.window: Optional[MainWindow] = None

    def do_startup(self) -> None:
        Gtk.Application.do_startup(self)
        GLib.set_application_name(APP_TITLE)
        try:
            if install_defaults(self.settings_path, self.host_paths):
                logger.info("Wrote default settings")
        except SettingsError as ex:
            logger.error("Could not write default settings: %s", ex)

    def do_activate(self) -> None:
        if self.window is None:
            self.window = MainWindow(
                application=self,
                settings_path=self.settings_path,
                host_paths=self.host_paths,
            )
            self.window.show_all()
        self.window.present()


__all__ = ["DASHBOARD_ID", "GitStatusApplication", "MainWindow"]
