import sys

from utils.process import build_git_env, run_process


def test_run_process_captures_stdout(tmp_path):
    result = run_process([sys.executable, "-c", "print('hi')"], cwd=str(tmp_path))

    assert result.ok
    assert result.stdout.strip() == "hi"
    assert not result.missing
    assert not result.timed_out


def test_run_process_uses_given_working_directory(tmp_path):
    result = run_process(
        [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=str(tmp_path)
    )

    assert result.stdout.strip() == str(tmp_path.resolve())


def test_run_process_reports_missing_executable(tmp_path):
    result = run_process(["definitely-not-a-real-binary-xyz"], cwd=str(tmp_path))

    assert result.returncode is None
    assert result.missing
    assert not result.ok


def test_run_process_reports_missing_cwd(tmp_path):
    result = run_process([sys.executable, "-c", "pass"], cwd=str(tmp_path / "gone"))

    assert result.returncode is None
    assert not result.missing
    assert result.stderr


def test_run_process_kills_on_timeout(tmp_path):
    result = run_process(
        [sys.executable, "-c", "import time; time.sleep(10)"],
        cwd=str(tmp_path),
        timeout=0.5,
    )

    assert result.timed_out
    assert result.returncode is None


def test_build_git_env_is_non_interactive():
    env = build_git_env({"PATH": "/usr/bin", "FORCE_COLOR": "1"})

    assert env["PATH"] == "/usr/bin"
    assert env["GIT_TERMINAL_PROMPT"] == "0"
    assert env["GIT_OPTIONAL_LOCKS"] == "0"
    assert env["LC_ALL"] == "C"
    assert "FORCE_COLOR" not in env


def test_run_process_survives_oversized_timeout(tmp_path):
    result = run_process(
        [sys.executable, "-c", "pass"], cwd=str(tmp_path), timeout=1e300
    )

    assert result.ok or result.returncode is None
    assert not result.timed_out


def test_run_process_reports_non_executable_program(tmp_path):
    program = tmp_path / "not-executable"
    program.write_text("#!/bin/sh\n", encoding="utf-8")
    program.chmod(0o644)

    result = run_process([str(program)], cwd=str(tmp_path))

    assert result.returncode is None
    assert result.missing


def test_run_process_cwd_that_is_a_file_is_not_a_missing_program(tmp_path):
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("", encoding="utf-8")

    result = run_process([sys.executable, "-c", "pass"], cwd=str(not_a_dir))

    assert result.returncode is None
    assert not result.missing
