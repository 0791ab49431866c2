"""
Shared pytest fixtures for the snitch test suite.

This module provides:
- A real git repository in a temporary directory (skipped without git)
- A fake Git wrapper that lists files from disk and records commits
- A stub issue tracker that hands out predictable issue numbers

Fixture Naming Convention:
- tmp_* : Fixtures that create temporary directories/files
- fake_* / stub_* : In-memory stand-ins for external collaborators
"""
from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from snitch.git import Git


# =============================================================================
# Collaborator stand-ins
# =============================================================================

class FakeGit(Git):
    """Git wrapper that lists files from the file system and records commits."""

    def __init__(self, cwd: Path) -> None:
        super().__init__(cwd)
        self.added: list[str] = []
        self.commits: list[str] = []

    def ls_files(self, path: str | Path = ".") -> list[str]:
        base = self.cwd / path
        return sorted(
            p.relative_to(self.cwd).as_posix()
            for p in base.rglob("*")
            if p.is_file() and not p.name.endswith(".snitch")
        )

    def add(self, path: str | Path) -> None:
        self.added.append(str(path))

    def commit(self, message: str) -> None:
        self.commits.append(message)


class StubTracker:
    """Issue tracker that numbers issues from ``first`` upwards."""

    def __init__(self, first: int = 100, states: dict[str, str] | None = None) -> None:
        self.next_number = first
        self.created: list[tuple[str, str]] = []
        self.states = states or {}
        self.queried: list[str] = []

    def create_issue(self, title: str, body: str = "") -> str:
        self.created.append((title, body))
        issue_id = f"#{self.next_number}"
        self.next_number += 1
        return issue_id

    def get_issue_state(self, issue_id: str) -> str:
        self.queried.append(issue_id)
        return self.states.get(issue_id, "open")


@pytest.fixture
def fake_git(tmp_path: Path) -> FakeGit:
    return FakeGit(tmp_path)


@pytest.fixture
def stub_tracker() -> StubTracker:
    return StubTracker()


# =============================================================================
# Real git repository
# =============================================================================

def git(cwd: Path, *args: str) -> str:
    """Run git in ``cwd`` and return stdout."""
    return subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    ).stdout


@pytest.fixture
def tmp_repo(tmp_path: Path) -> Path:
    """
    Create an empty git repository with a committer identity configured.

    Tests using it are skipped when git is not installed.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.name", "Snitch Tests")
    git(repo, "config", "user.email", "snitch@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    return repo


def commit_all(repo: Path, message: str = "initial") -> None:
    git(repo, "add", "-A")
    git(repo, "commit", "-q", "-m", message)
