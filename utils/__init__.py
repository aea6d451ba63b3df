#!/usr/bin/env python3
"""
Utilities package for git-status.

This package centralizes subprocess helpers.
It re-exports commonly used helpers from utils.process for convenience:

    from utils import run_process, build_git_env
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__all__ = [
    "ProcessResult",
    "build_git_env",
    "run_process",
]

if TYPE_CHECKING:
    # Type-checking only imports (no runtime cost)
    from .process import ProcessResult as _ProcessResult
    from .process import build_git_env as _build_git_env
    from .process import run_process as _run_process


def __getattr__(name: str):
    """
    Lazily expose helpers from utils.process to avoid importing
    the module unless a symbol is actually used.
    """
    if name in __all__:
        from . import process as _process  # Local import to keep it lazy

        return getattr(_process, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
