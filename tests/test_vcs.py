"""Tests for git access and the cleanliness verifier.

All tests use tmp_path fixtures with real git repos (subprocess git).
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from vgnguard.cleanliness import Cleanliness, verify_clean
from vgnguard.report import FailureLog
from vgnguard.vcs.repo import GitError, RepoManager, sanitized_env


# ---------------------------------------------------------------------------
# Helper: configure git user for tmp repos
# ---------------------------------------------------------------------------


def _configure_git_user(path: Path) -> None:
    """Set git user.name, user.email, and disable GPG signing in a temp repo."""
    subprocess.run(["git", "config", "user.email", "test@vgnguard.dev"], cwd=path, capture_output=True)
    subprocess.run(["git", "config", "user.name", "vgnguard Test"], cwd=path, capture_output=True)
    subprocess.run(["git", "config", "commit.gpgsign", "false"], cwd=path, capture_output=True)


def _init_git_repo(path: Path) -> Path:
    """Create a git repo at *path* with one initial commit, signing disabled."""
    path.mkdir(parents=True, exist_ok=True)
    subprocess.run(["git", "init"], cwd=path, capture_output=True)
    _configure_git_user(path)
    (path / "vgn-version.txt").write_text("v1.2\n")
    subprocess.run(["git", "add", "."], cwd=path, capture_output=True)
    subprocess.run(["git", "commit", "-m", "init"], cwd=path, capture_output=True)
    return path


# ---------------------------------------------------------------------------
# RepoManager
# ---------------------------------------------------------------------------


class TestRepoManager:
    def test_clean_after_commit(self, tmp_path: Path):
        repo = RepoManager(_init_git_repo(tmp_path / "repo"))
        assert repo.status() == ""

    def test_dirty_with_changes(self, tmp_path: Path):
        repo_path = _init_git_repo(tmp_path / "repo")
        (repo_path / "new.txt").write_text("x")
        assert RepoManager(repo_path).status() == "?? new.txt\n"

    def test_status_outside_repo_raises(self, tmp_path: Path):
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(GitError) as info:
            RepoManager(plain).status()
        assert info.value.returncode != 0
        assert info.value.output

    def test_missing_directory_raises(self, tmp_path: Path):
        with pytest.raises(GitError):
            RepoManager(tmp_path / "absent").status()

    def test_ignores_inherited_git_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        outer = _init_git_repo(tmp_path / "outer")
        (outer / "dirty.txt").write_text("x")
        inner = _init_git_repo(tmp_path / "inner")
        # Hooks export GIT_DIR for the outer repository
        monkeypatch.setenv("GIT_DIR", str(outer / ".git"))
        monkeypatch.setenv("GIT_INDEX_FILE", str(outer / ".git" / "index"))
        assert RepoManager(inner).status() == ""


class TestSanitizedEnv:
    def test_strips_git_variables(self):
        env = sanitized_env({"GIT_DIR": "/x", "GIT_WORK_TREE": "/y", "PATH": "/bin", "HOME": "/h"})
        assert env == {"PATH": "/bin", "HOME": "/h"}

    def test_defaults_to_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GIT_INDEX_FILE", "/tmp/index")
        monkeypatch.setenv("VGNGUARD_TEST_MARKER", "1")
        env = sanitized_env()
        assert "GIT_INDEX_FILE" not in env
        assert env["VGNGUARD_TEST_MARKER"] == "1"


# ---------------------------------------------------------------------------
# Cleanliness verifier
# ---------------------------------------------------------------------------


class TestVerifyClean:
    def test_clean_submodule(self, tmp_path: Path):
        _init_git_repo(tmp_path / "vendor" / "vgn")
        log = FailureLog()
        assert verify_clean("vendor/vgn", log, root=tmp_path) == Cleanliness.CLEAN
        assert not log.failed

    def test_pending_changes_reported_once_with_raw_output(self, tmp_path: Path):
        sub = _init_git_repo(tmp_path / "vendor" / "vgn")
        (sub / "vgn-version.txt").write_text("v1.3\n")
        (sub / "extra.go").write_text("package vgn\n")
        log = FailureLog()
        assert verify_clean("vendor/vgn", log, root=tmp_path) == Cleanliness.DIRTY
        assert len(log.failures) == 1
        message = log.failures[0].message
        assert message.startswith('Found pending changes in "vendor/vgn":\n\n')
        assert " M vgn-version.txt" in message
        assert "?? extra.go" in message

    def test_query_failure(self, tmp_path: Path):
        (tmp_path / "vendor" / "vgn").mkdir(parents=True)
        log = FailureLog()
        assert verify_clean("vendor/vgn", log, root=tmp_path) == Cleanliness.QUERY_FAILED
        assert log.failures[0].message.startswith('Failed to run git status on "vendor/vgn":')

    def test_unresolvable_path_still_queries(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        _init_git_repo(tmp_path / "vendor" / "vgn")

        def broken_absolute(path):
            raise OSError("cwd vanished")

        monkeypatch.setattr("vgnguard.cleanliness._absolute", broken_absolute)
        log = FailureLog()
        result = verify_clean("vendor/vgn", log, root=tmp_path)
        assert result == Cleanliness.CLEAN
        assert log.lines() == ["- Failed to get absolute path for submodule: cwd vanished"]

    @pytest.mark.skipif(sys.platform != "linux", reason="needs byte filenames")
    def test_non_utf8_status_output(self, tmp_path: Path):
        sub = _init_git_repo(tmp_path / "vendor" / "vgn")
        subprocess.run(["git", "config", "core.quotePath", "false"], cwd=sub, capture_output=True)
        with open(os.path.join(os.fsencode(sub), b"caf\xe9.txt"), "wb") as fh:
            fh.write(b"x")
        log = FailureLog()
        assert verify_clean("vendor/vgn", log, root=tmp_path) == Cleanliness.DIRTY
        assert "?? caf\ufffd.txt" in log.failures[0].message
