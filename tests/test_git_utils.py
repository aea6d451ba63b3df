import json
import logging

import pytest

import core.git_utils as git_utils
from conftest import git, make_repo, requires_git
from core.app_meta import Settings, load_settings
from core.git_utils import (
    GitCommand,
    GitOutcome,
    check_repo_status,
    get_branch,
    get_last_commit,
    get_status_text,
    inspect_repo,
    is_clean,
    run_command,
)
from utils.process import ProcessResult

pytestmark = requires_git


def test_branch_name_is_trimmed(git_repo):
    assert get_branch(str(git_repo)) == "main"


def test_branch_name_follows_checkout(git_repo):
    git(git_repo, "checkout", "-q", "-b", "feature/login")

    assert get_branch(str(git_repo)) == "feature/login"


def test_clean_tree(git_repo):
    assert is_clean(str(git_repo)) is True
    status = get_status_text(str(git_repo))
    assert "On branch main" in status
    assert "nothing to commit" in status
    assert "modified:" not in status


def test_untracked_file_makes_tree_dirty(git_repo):
    (git_repo / "new.txt").write_text("x\n", encoding="utf-8")

    assert is_clean(str(git_repo)) is False
    assert "new.txt" in get_status_text(str(git_repo))


def test_modified_file_makes_tree_dirty(git_repo):
    (git_repo / "README.md").write_text("changed\n", encoding="utf-8")

    assert is_clean(str(git_repo)) is False


def test_last_commit_lists_changed_files(git_repo):
    text = get_last_commit(str(git_repo))

    assert text.startswith("commit ")
    assert "Initial commit" in text
    assert "A\tREADME.md" in text


def test_empty_directory_is_not_a_repository(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()

    assert get_branch(str(empty)) == ""
    assert run_command(str(empty), GitCommand.STATUS_FULL) == ""
    assert run_command(str(empty), GitCommand.LAST_COMMIT) == ""
    result = inspect_repo(str(empty), GitCommand.REV_PARSE_BRANCH)
    assert result.outcome is GitOutcome.NOT_A_REPOSITORY
    assert result.returncode == 128


def test_missing_directory_is_not_a_repository(tmp_path):
    result = inspect_repo(str(tmp_path / "missing"), GitCommand.REV_PARSE_BRANCH)

    assert result.outcome is GitOutcome.NOT_A_REPOSITORY
    assert result.text == ""


def test_shell_metacharacters_in_path_are_not_executed(tmp_path):
    marker = tmp_path / "pwned"
    hostile = f'{tmp_path}/nope"; touch {marker}; echo "'

    assert get_branch(hostile) == ""
    assert is_clean(hostile) is True
    assert get_status_text(hostile) == ""
    assert not marker.exists()


def test_repository_with_metacharacters_in_its_name(tmp_path):
    marker = tmp_path / "pwned"
    repo = make_repo(tmp_path / "repo; touch pwned")

    assert get_branch(str(repo)) == "main"
    assert not marker.exists()


def test_missing_git_binary_is_tool_unavailable(git_repo, monkeypatch, caplog):
    monkeypatch.setattr(git_utils, "GIT_EXECUTABLE", "git-binary-that-does-not-exist")
    caplog.set_level(logging.WARNING, logger="core.git_utils")

    result = inspect_repo(str(git_repo), GitCommand.REV_PARSE_BRANCH)

    assert result.outcome is GitOutcome.TOOL_UNAVAILABLE
    assert result.text == ""
    assert get_branch(str(git_repo)) == ""
    assert any(r.levelname == "WARNING" for r in caplog.records)


def test_timeout_collapses_to_empty_output(git_repo, monkeypatch):
    def fake_run_process(cmd, cwd, timeout=None, env=None):
        return ProcessResult(argv=cmd, returncode=None, timed_out=True)

    monkeypatch.setattr(git_utils, "run_process", fake_run_process)

    result = inspect_repo(str(git_repo), GitCommand.STATUS_FULL, timeout=0.1)
    assert result.outcome is GitOutcome.TIMEOUT
    assert run_command(str(git_repo), GitCommand.STATUS_FULL) == ""


def test_non_repository_failure_is_process_error(git_repo, monkeypatch):
    def fake_run_process(cmd, cwd, timeout=None, env=None):
        return ProcessResult(argv=cmd, returncode=1, stderr="fatal: something else\n")

    monkeypatch.setattr(git_utils, "run_process", fake_run_process)

    result = inspect_repo(str(git_repo), GitCommand.LAST_COMMIT)
    assert result.outcome is GitOutcome.PROCESS_ERROR
    assert result.returncode == 1
    assert result.detail == "fatal: something else"


def test_check_repo_status_clean(git_repo):
    status = check_repo_status(Settings(git_directory=str(git_repo)))

    assert status.ok
    assert status.branch == "main"
    assert status.clean
    assert "nothing to commit" in status.status_text
    assert "Initial commit" in status.last_commit
    assert status.error is None


def test_check_repo_status_dirty(git_repo):
    (git_repo / "scratch.txt").write_text("wip\n", encoding="utf-8")

    status = check_repo_status(Settings(git_directory=str(git_repo)))

    assert status.branch == "main"
    assert not status.clean


def test_check_repo_status_stops_after_failed_branch_lookup(tmp_path, monkeypatch):
    calls = []
    real_inspect = git_utils.inspect_repo

    def counting_inspect(repo_path, command, timeout=None):
        calls.append(command)
        return real_inspect(repo_path, command, timeout)

    monkeypatch.setattr(git_utils, "inspect_repo", counting_inspect)

    status = check_repo_status(Settings(git_directory=str(tmp_path)))

    assert not status.ok
    assert status.branch == ""
    assert status.status_text == ""
    assert status.error is not None
    assert status.error.outcome is GitOutcome.NOT_A_REPOSITORY
    assert calls == [GitCommand.REV_PARSE_BRANCH]


@pytest.mark.parametrize("command", list(GitCommand))
def test_every_command_starts_with_a_subcommand(command):
    assert command.args[0] in {"rev-parse", "status", "show"}


def test_overflowing_timeout_in_settings_file_still_inspects(git_repo, tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        '{"git_directory": %s, "command_timeout": 1e999}' % json.dumps(str(git_repo)),
        encoding="utf-8",
    )

    status = check_repo_status(load_settings(str(path)))

    assert status.branch == "main"
    assert status.clean


def test_huge_timeout_passed_directly_does_not_raise(git_repo):
    result = inspect_repo(str(git_repo), GitCommand.REV_PARSE_BRANCH, timeout=1e300)

    assert result.outcome in (GitOutcome.SUCCESS, GitOutcome.PROCESS_ERROR)


def test_non_executable_git_is_tool_unavailable(git_repo, tmp_path, monkeypatch):
    fake_git = tmp_path / "git"
    fake_git.write_text("#!/bin/sh\n", encoding="utf-8")
    fake_git.chmod(0o644)
    monkeypatch.setattr(git_utils, "GIT_EXECUTABLE", str(fake_git))

    result = inspect_repo(str(git_repo), GitCommand.REV_PARSE_BRANCH)

    assert result.outcome is GitOutcome.TOOL_UNAVAILABLE
    assert get_branch(str(git_repo)) == ""
