#!/usr/bin/env python3
"""
Persistent branch indicator for the git-status header bar.

A flat Gtk.Button holding the git icon and the current branch name.
The look is driven by CSS classes from ui.presenter; dirty trees get
'git-status-untracked' (red background). The button hides itself when
the indicator model says so.

Typical usage:

    indicator = StatusIndicator(on_activate=lambda page: stack.set_visible_child_name(page))
    header_bar.pack_end(indicator.button)
    indicator.update(build_indicator(status))
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional

import gi

gi.require_version("Gtk", "3.0")
gi.require_version("Gdk", "3.0")
gi.require_version("GdkPixbuf", "2.0")
from gi.repository import Gdk, GdkPixbuf, GLib, Gtk

from .presenter import INDICATOR_CSS, IndicatorModel, PAGE_ID

logger = logging.getLogger(__name__)

ASSETS_DIR: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")
ICON_SIZE: int = 22

_css_installed = False


def install_css() -> None:
    """
    Register the indicator stylesheet for the default screen (once).
    """
    global _css_installed
    if _css_installed:
        return
    screen = Gdk.Screen.get_default()
    if screen is None:
        return
    provider = Gtk.CssProvider()
    try:
        provider.load_from_data(INDICATOR_CSS.encode("utf-8"))
    except GLib.Error as ex:
        logger.warning("Indicator stylesheet rejected: %s", ex)
        return
    Gtk.StyleContext.add_provider_for_screen(
        screen, provider, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
    )
    _css_installed = True


def load_icon(name: str) -> Optional[GdkPixbuf.Pixbuf]:
    path = os.path.join(ASSETS_DIR, name)
    try:
        return GdkPixbuf.Pixbuf.new_from_file_at_size(path, ICON_SIZE, ICON_SIZE)
    except GLib.Error as ex:
        logger.warning("Could not load icon %s: %s", path, ex)
        return None


class StatusIndicator:
    """
    Header-bar button showing icon + branch; clicking opens the status page.
    """

    def __init__(self, on_activate: Optional[Callable[[str], None]] = None) -> None:
        install_css()
        self._on_activate = on_activate
        self._target = PAGE_ID
        self._classes: tuple = ()
        self._icon_name: Optional[str] = None

        self.button = Gtk.Button()
        self.button.set_relief(Gtk.ReliefStyle.NONE)
        self.button.set_no_show_all(True)
        self.button.connect("clicked", self._on_clicked)

        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        self.image = Gtk.Image()
        self.label = Gtk.Label()
        box.pack_start(self.image, False, False, 0)
        box.pack_start(self.label, False, False, 0)
        box.show_all()
        self.button.add(box)
        self.button.hide()

    def update(self, model: IndicatorModel) -> None:
        """
        Apply an IndicatorModel: visibility, label, tooltip, classes and icon.
        """
        ctx = self.button.get_style_context()
        for cls in self._classes:
            ctx.remove_class(cls)
        self._classes = ()

        if not model.visible:
            self.button.hide()
            return

        for cls in model.css_classes:
            ctx.add_class(cls)
        self._classes = tuple(model.css_classes)
        self._target = model.target

        self.label.set_text(model.label)
        self.button.set_tooltip_text(model.tooltip)
        if model.icon != self._icon_name:
            pixbuf = load_icon(model.icon)
            if pixbuf is not None:
                self.image.set_from_pixbuf(pixbuf)
            self._icon_name = model.icon
        self.button.show()

    def _on_clicked(self, _btn: Gtk.Button) -> None:
        if self._on_activate:
            self._on_activate(self._target)


__all__ = ["StatusIndicator", "install_css", "load_icon"]
