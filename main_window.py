#!/usr/bin/env python3
"""
Entry point for git-status.

This module re-exports the public API expected by existing imports:
    - MainWindow
    - GitStatusApplication
    - APP_ID
    - APP_TITLE

and provides main(), installed as the `git-status` console script.
The actual implementation lives in ui.main_window.

Environment:
    GIT_STATUS_LOG_LEVEL      logging level name (default WARNING)
    GIT_STATUS_SETTINGS_FILE  settings file location
    GIT_STATUS_CONTENT_DIR    default repository location
    GIT_STATUS_ROOT_DIR       site root offered by "Set to root"
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

from core.app_meta import APP_ID, APP_TITLE


def configure_logging(level_name: Optional[str] = None) -> None:
    name = (level_name or os.environ.get("GIT_STATUS_LOG_LEVEL") or "WARNING").upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    from ui.main_window import GitStatusApplication

    app = GitStatusApplication()
    return app.run(sys.argv if argv is None else argv)


def __getattr__(name: str):
    if name in ("MainWindow", "GitStatusApplication"):
        import ui.main_window as _main_window

        return getattr(_main_window, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "MainWindow",
    "GitStatusApplication",
    "APP_ID",
    "APP_TITLE",
    "configure_logging",
    "main",
]


if __name__ == "__main__":
    raise SystemExit(main())
