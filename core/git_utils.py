#!/usr/bin/env python3
"""
Git utilities and repository status model for git-status.

This module provides:
- GitCommand: the four read-only subcommands the UI needs
- GitResult / GitOutcome: a classified result for a single invocation
- A RepoStatus dataclass capturing a snapshot of a repository state
- Lightweight git helper functions:
  - inspect_repo
  - run_command
  - get_branch
  - is_clean
  - get_status_text
  - get_last_commit
  - check_repo_status

Every helper is total: failures come back as an empty string (or as a
non-SUCCESS GitResult), never as an exception.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from utils.process import ProcessResult, build_git_env, run_process

from .app_meta import DEFAULT_COMMAND_TIMEOUT, Settings

logger = logging.getLogger(__name__)

GIT_EXECUTABLE: str = "git"


class GitCommand(enum.Enum):
    """Subcommands run against the configured repository."""

    REV_PARSE_BRANCH = ("rev-parse", "--abbrev-ref", "HEAD")
    STATUS_PORCELAIN = ("status", "--porcelain=v1")
    STATUS_FULL = ("status",)
    LAST_COMMIT = ("show", "--name-status")

    @property
    def args(self) -> Tuple[str, ...]:
        return self.value


class GitOutcome(enum.Enum):
    SUCCESS = "success"
    NOT_A_REPOSITORY = "not-a-repository"
    TOOL_UNAVAILABLE = "tool-unavailable"
    PROCESS_ERROR = "process-error"
    TIMEOUT = "timeout"


@dataclass
class GitResult:
    """
    Classified result of one git invocation.

    Attributes:
        outcome (GitOutcome): What happened.
        text (str): Trimmed stdout on success, empty string otherwise.
        returncode (int|None): Exit status when the process exited.
        detail (str): Trimmed stderr or spawn error, for logs and notices.
    """

    outcome: GitOutcome
    text: str = ""
    returncode: Optional[int] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is GitOutcome.SUCCESS


@dataclass
class RepoStatus:
    """
    Snapshot of repository state used by the UI, recomputed on every refresh.

    Attributes:
        repo_path (str): Path that was inspected.
        branch (str): Current branch; empty when the location is not usable.
        clean (bool): True when `git status --porcelain` printed nothing.
        status_text (str): Output of `git status`.
        last_commit (str): Output of `git show --name-status`.
        error (GitResult|None): Failed branch lookup, if any.
    """

    repo_path: str
    branch: str = ""
    clean: bool = True
    status_text: str = ""
    last_commit: str = ""
    error: Optional[GitResult] = None

    @property
    def ok(self) -> bool:
        return self.branch != ""


def _classify(repo_path: str, result: ProcessResult) -> GitResult:
    detail = (result.stderr or "").strip()
    if result.timed_out:
        return GitResult(GitOutcome.TIMEOUT, detail=detail or "timed out")
    if result.missing:
        return GitResult(GitOutcome.TOOL_UNAVAILABLE, detail=detail)
    if result.returncode is None:
        if os.path.isdir(repo_path):
            return GitResult(GitOutcome.PROCESS_ERROR, detail=detail)
        # cwd vanished between the isdir check and the spawn
        return GitResult(GitOutcome.NOT_A_REPOSITORY, detail=detail)
    if result.returncode == 0:
        return GitResult(
            GitOutcome.SUCCESS, text=result.stdout.strip(), returncode=0, detail=detail
        )
    if result.returncode == 128 and "not a git repository" in detail.lower():
        return GitResult(
            GitOutcome.NOT_A_REPOSITORY, returncode=result.returncode, detail=detail
        )
    return GitResult(GitOutcome.PROCESS_ERROR, returncode=result.returncode, detail=detail)


def inspect_repo(
    repo_path: str, command: GitCommand, timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT
) -> GitResult:
    """
    Run one git subcommand inside repo_path and classify the result.

    The path is handed to the OS as the working directory; it is never
    part of a command line, so shell metacharacters in it are inert.

    Args:
        repo_path: Repository directory.
        command: Which subcommand to run.
        timeout: Seconds before the process is killed; None waits forever.

    Returns:
        GitResult (text is empty unless outcome is SUCCESS).
    """
    if not repo_path or not os.path.isdir(repo_path):
        logger.info("Repository location %r is not a directory", repo_path)
        return GitResult(GitOutcome.NOT_A_REPOSITORY, detail="Repository path not found")

    argv = [GIT_EXECUTABLE, *command.args]
    logger.debug("Running %s in %s", argv, repo_path)
    result = _classify(
        repo_path, run_process(argv, cwd=repo_path, timeout=timeout, env=build_git_env())
    )
    if result.outcome in (GitOutcome.TOOL_UNAVAILABLE, GitOutcome.TIMEOUT):
        logger.warning("git %s in %s: %s", " ".join(command.args), repo_path, result.detail)
    elif not result.ok:
        logger.info(
            "git %s in %s failed (%s): %s",
            " ".join(command.args),
            repo_path,
            result.outcome.value,
            result.detail,
        )
    return result


def run_command(
    repo_path: str, command: GitCommand, timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT
) -> str:
    """
    Run a subcommand and return its trimmed stdout; empty on any failure.
    """
    return inspect_repo(repo_path, command, timeout).text


def get_branch(repo_path: str, timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT) -> str:
    """
    Get current branch name.

    Returns:
        str: Branch name, or empty string if not a repository or on error.
    """
    return run_command(repo_path, GitCommand.REV_PARSE_BRANCH, timeout)


def is_clean(repo_path: str, timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT) -> bool:
    """
    Returns:
        bool: True when there are no modified/untracked files.
              A failed command also reads as clean.
    """
    return run_command(repo_path, GitCommand.STATUS_PORCELAIN, timeout) == ""


def get_status_text(
    repo_path: str, timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT
) -> str:
    return run_command(repo_path, GitCommand.STATUS_FULL, timeout)


def get_last_commit(
    repo_path: str, timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT
) -> str:
    return run_command(repo_path, GitCommand.LAST_COMMIT, timeout)


def check_repo_status(settings: Settings) -> RepoStatus:
    """
    Build a RepoStatus for the configured repository.

    Workflow:
        1. Resolve the branch; stop there if the location is unusable.
        2. Check porcelain status for cleanliness.
        3. Collect full status and last commit text for display.

    Returns:
        RepoStatus: Complete snapshot (branch empty if invalid).
    """
    repo_path = settings.git_directory
    timeout = settings.command_timeout

    head = inspect_repo(repo_path, GitCommand.REV_PARSE_BRANCH, timeout)
    if not head.ok or not head.text:
        return RepoStatus(repo_path=repo_path, error=head if not head.ok else None)

    return RepoStatus(
        repo_path=repo_path,
        branch=head.text,
        clean=is_clean(repo_path, timeout),
        status_text=get_status_text(repo_path, timeout),
        last_commit=get_last_commit(repo_path, timeout),
    )


__all__ = [
    "GIT_EXECUTABLE",
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
