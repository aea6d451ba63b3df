#!/usr/bin/env python3
"""
The "Git Status" tools page.

Layout:
- Page title with the git icon
- Notice area (one Gtk.InfoBar per notice)
- "Git Settings" section: repository location entry, two quick-set
  buttons that only fill the entry, a description and "Save Settings"
- "Git Status" section: read-only, insensitive text views for the
  full status and the last commit

The page does not persist anything itself; "Save Settings" hands the raw
form values to the on_save callback and the owner re-renders the page.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

import gi

gi.require_version("Gtk", "3.0")
from gi.repository import GLib, Gtk

from core.app_meta import _, Notice

from .presenter import ICON_CLEAN, SettingsPageModel
from .status_indicator import load_icon

logger = logging.getLogger(__name__)

ENTRY_ID: str = "git_status_setting_git_directory"

_MESSAGE_TYPES = {
    "error": Gtk.MessageType.ERROR,
    "warning": Gtk.MessageType.WARNING,
    "success": Gtk.MessageType.INFO,
}


def _section_title(text: str) -> Gtk.Label:
    lbl = Gtk.Label()
    lbl.set_markup(f"<b>{GLib.markup_escape_text(text)}</b>")
    lbl.set_xalign(0.0)
    return lbl


def _readonly_view() -> Gtk.TextView:
    view = Gtk.TextView()
    view.set_editable(False)
    view.set_cursor_visible(False)
    view.set_monospace(True)
    view.set_sensitive(False)
    return view


class SettingsPage:
    """
    Builds the page widgets and renders SettingsPageModel values onto them.
    """

    def __init__(
        self, on_save: Optional[Callable[[Dict[str, object]], None]] = None
    ) -> None:
        self._on_save = on_save
        self._quick_buttons: List[Gtk.Button] = []

        self.root = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        self.root.set_border_width(18)

        # Title row
        title_row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        title_icon = Gtk.Image()
        pixbuf = load_icon(ICON_CLEAN)
        if pixbuf is not None:
            title_icon.set_from_pixbuf(pixbuf)
        title_row.pack_start(title_icon, False, False, 0)
        title = Gtk.Label()
        title.set_markup(
            f"<span size='x-large'>{GLib.markup_escape_text(_('Git Status'))}</span>"
        )
        title_row.pack_start(title, False, False, 0)
        self.root.pack_start(title_row, False, False, 0)

        self.notice_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=4)
        self.root.pack_start(self.notice_box, False, False, 0)

        # Git Settings section
        self.root.pack_start(_section_title(_("Git Settings")), False, False, 0)
        grid = Gtk.Grid(column_spacing=12, row_spacing=6)
        location_lbl = Gtk.Label(label=_("Git Repository Location"))
        location_lbl.set_xalign(0.0)
        grid.attach(location_lbl, 0, 0, 1, 1)

        entry_row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        self.entry = Gtk.Entry()
        self.entry.set_name(ENTRY_ID)
        self.entry.set_width_chars(48)
        self.entry.set_hexpand(True)
        location_lbl.set_mnemonic_widget(self.entry)
        entry_row.pack_start(self.entry, True, True, 0)
        self.quick_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        entry_row.pack_start(self.quick_box, False, False, 0)
        grid.attach(entry_row, 1, 0, 1, 1)

        desc = Gtk.Label(label=_("Enter the full path to your sites git repository."))
        desc.set_xalign(0.0)
        desc.get_style_context().add_class("dim-label")
        grid.attach(desc, 1, 1, 1, 1)
        self.root.pack_start(grid, False, False, 0)

        self.save_btn = Gtk.Button(label=_("Save Settings"))
        self.save_btn.get_style_context().add_class("suggested-action")
        self.save_btn.set_halign(Gtk.Align.START)
        self.save_btn.connect("clicked", self._on_save_clicked)
        self.entry.connect("activate", self._on_save_clicked)
        self.root.pack_start(self.save_btn, False, False, 0)

        # Git Status section
        self.root.pack_start(_section_title(_("Git Status")), False, False, 0)
        self.status_view = _readonly_view()
        self.commit_view = _readonly_view()
        status_grid = Gtk.Grid(column_spacing=12, row_spacing=6)
        for row, (label, view) in enumerate(
            [
                (_("Repository Status"), self.status_view),
                (_("Last Commit"), self.commit_view),
            ]
        ):
            lbl = Gtk.Label(label=label)
            lbl.set_xalign(0.0)
            lbl.set_yalign(0.0)
            status_grid.attach(lbl, 0, row, 1, 1)
            sw = Gtk.ScrolledWindow()
            sw.set_policy(Gtk.PolicyType.AUTOMATIC, Gtk.PolicyType.AUTOMATIC)
            sw.set_min_content_height(180)
            sw.set_hexpand(True)
            sw.add(view)
            status_grid.attach(sw, 1, row, 1, 1)
        self.root.pack_start(status_grid, True, True, 0)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render(self, model: SettingsPageModel) -> None:
        """
        Replace everything on the page with the values of model.
        """
        self.entry.set_text(model.git_directory)
        self.status_view.get_buffer().set_text(model.status_text)
        self.commit_view.get_buffer().set_text(model.last_commit)
        self._render_quick_set(model)
        self._render_notices(model.notices)

    def form_values(self) -> Dict[str, object]:
        return {"git_directory": self.entry.get_text()}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _render_quick_set(self, model: SettingsPageModel) -> None:
        for btn in self._quick_buttons:
            self.quick_box.remove(btn)
        self._quick_buttons = []
        for quick in model.quick_set:
            btn = Gtk.Button(label=quick.label)
            btn.set_tooltip_text(quick.path)
            # Only fills the entry; nothing is saved until "Save Settings"
            btn.connect("clicked", lambda _b, p=quick.path: self.entry.set_text(p))
            self.quick_box.pack_start(btn, False, False, 0)
            self._quick_buttons.append(btn)
        self.quick_box.show_all()

    def _render_notices(self, notices: List[Notice]) -> None:
        for child in self.notice_box.get_children():
            self.notice_box.remove(child)
        for notice in notices:
            bar = Gtk.InfoBar()
            bar.set_message_type(_MESSAGE_TYPES.get(notice.kind, Gtk.MessageType.OTHER))
            bar.set_show_close_button(True)
            bar.connect("response", lambda b, _r: b.destroy())
            lbl = Gtk.Label(label=notice.message)
            lbl.set_xalign(0.0)
            lbl.set_line_wrap(True)
            bar.get_content_area().add(lbl)
            self.notice_box.pack_start(bar, False, False, 0)
        self.notice_box.show_all()

    def _on_save_clicked(self, _widget) -> None:
        values = self.form_values()
        logger.debug("Settings form submitted: %s", values)
        if self._on_save:
            self._on_save(values)


__all__ = ["ENTRY_ID", "SettingsPage"]
