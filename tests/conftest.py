"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from core.app_meta import HostPaths

GIT_IDENTITY = [
    "-c",
    "user.name=Git Status Tests",
    "-c",
    "user.email=tests@example.invalid",
    "-c",
    "commit.gpgsign=false",
]

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *GIT_IDENTITY, *args],
        cwd=str(repo),
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


def make_repo(path: Path, branch: str = "main") -> Path:
    """Create a repository at path with a single commit on branch."""
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "-q")
    git(path, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
    (path / "README.md").write_text("hello\n", encoding="utf-8")
    git(path, "add", "README.md")
    git(path, "commit", "-q", "-m", "Initial commit")
    return path


@pytest.fixture(autouse=True)
def _isolated_git_env(tmp_path, monkeypatch):
    # Keep git from discovering a repository above tmp_path
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    monkeypatch.setenv("GIT_STATUS_SETTINGS_FILE", str(tmp_path / "config" / "settings.json"))


@pytest.fixture
def git_repo(tmp_path) -> Path:
    return make_repo(tmp_path / "repo")


@pytest.fixture
def host_paths(tmp_path) -> HostPaths:
    content = tmp_path / "site" / "content"
    content.mkdir(parents=True)
    return HostPaths(content_dir=str(content), root_dir=str(tmp_path / "site"))
