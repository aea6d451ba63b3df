#!/usr/bin/env python3
"""
Process spawning helpers for git-status.

This module centralizes:
- Environment utilities for quiet, non-interactive git subprocesses
- A blocking argv runner that never raises and never goes through a shell
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Environment helpers
# -------------------------------------------------------------------
def build_git_env(base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Build an environment suitable for read-only git inspection.

    Args:
        base: Optional base environment to copy; defaults to os.environ.

    Returns:
        A new environment dictionary safe to pass to subprocess calls.
    """
    env: Dict[str, str] = dict(base if base is not None else os.environ)
    env.update(
        {
            "GIT_TERMINAL_PROMPT": "0",  # Never block on credential prompts
            "GIT_OPTIONAL_LOCKS": "0",  # `git status` must not take index.lock
            "GIT_PAGER": "cat",
            "PAGER": "cat",
            "LC_ALL": "C",
            "NO_COLOR": "1",
        }
    )
    # Color forcing from the parent would leak escape codes into the text views
    for key in ("FORCE_COLOR", "CLICOLOR_FORCE"):
        env.pop(key, None)
    return env


# -------------------------------------------------------------------
# Blocking runner
# -------------------------------------------------------------------
@dataclass
class ProcessResult:
    """
    Outcome of a single blocking process run.

    Attributes:
        argv: The command vector that was (or would have been) executed.
        returncode: Exit status, or None when the process never ran to exit.
        stdout: Captured standard output (text).
        stderr: Captured standard error, or the spawn error message.
        missing: True when the executable could not be found or run.
        timed_out: True when the process was killed after the timeout.
    """

    argv: Sequence[str]
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""
    missing: bool = False
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_process(
    cmd: Sequence[str],
    cwd: Optional[str],
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ProcessResult:
    """
    Run a command to completion and capture stdout/stderr.

    The command is always an argv vector and the working directory is passed
    to the OS directly, so nothing in `cwd` is ever parsed by a shell.

    Args:
        cmd: Command vector (argv).
        cwd: Working directory or None.
        timeout: Seconds before the process is killed; None waits forever.
        env: Optional environment mapping; if None, inherits current process env.

    Returns:
        ProcessResult. Spawn failures and timeouts are reported, not raised.
    """
    argv = list(cmd)
    try:
        cp = subprocess.run(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            env=dict(env) if env is not None else None,
        )
    except subprocess.TimeoutExpired as ex:
        logger.warning("Command %s timed out after %ss in %s", argv, timeout, cwd)
        return ProcessResult(
            argv=argv,
            returncode=None,
            stdout=_as_text(ex.stdout),
            stderr=_as_text(ex.stderr),
            timed_out=True,
        )
    except OSError as ex:
        # The child names either the executable or the cwd as the failing file
        missing = ex.filename is not None and ex.filename != cwd
        logger.debug("Spawn of %s in %s failed: %s", argv, cwd, ex)
        return ProcessResult(argv=argv, returncode=None, stderr=str(ex), missing=missing)
    except (ValueError, OverflowError) as ex:
        # Embedded NUL bytes, timeouts too large for the platform clock
        logger.warning("Spawn of %s in %s failed: %s", argv, cwd, ex)
        return ProcessResult(argv=argv, returncode=None, stderr=str(ex))

    return ProcessResult(
        argv=argv, returncode=cp.returncode, stdout=cp.stdout, stderr=cp.stderr
    )


def _as_text(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", "replace")
    return data


__all__ = [
    "ProcessResult",
    "build_git_env",
    "run_process",
]
