"""
Tests for snitch.cli module.

This module tests the command line surface:
- Usage text and argument errors
- The list command
- The report and purge commands with a stubbed GitHub client
- The interactive yes/no prompt
- The console script entry point
"""
from __future__ import annotations

import io
from pathlib import Path

import pytest

from conftest import StubTracker, commit_all, git
from snitch import cli
from snitch.core.errors import SnitchError


@pytest.fixture
def credentials(tmp_path: Path) -> Path:
    path = tmp_path / "github.ini"
    path.write_text("[github]\npersonal_token = test-token\n")
    return path


@pytest.fixture
def tracker(monkeypatch: pytest.MonkeyPatch) -> StubTracker:
    """Replace the GitHub client the CLI builds with a stub."""
    stub = StubTracker(states={"#1": "closed"})
    created_for: list[str] = []

    def factory(creds, repo):
        assert creds.personal_token == "test-token"
        created_for.append(repo)
        return stub

    monkeypatch.setattr(cli, "GithubClient", factory)
    stub.repos = created_for  # type: ignore[attr-defined]
    return stub


def answer(monkeypatch: pytest.MonkeyPatch, *answers: str) -> list[str]:
    """Feed ``answers`` to input() and return the prompts shown."""
    prompts: list[str] = []
    remaining = list(answers)

    def fake_input(prompt: str = "") -> str:
        prompts.append(prompt)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)
    return prompts


# =============================================================================
# Arguments
# =============================================================================

class TestArguments:
    """Tests for usage and argument handling."""

    def test_no_command_prints_usage(self, capsys: pytest.CaptureFixture[str]):
        assert cli.main([]) == 0

        out = capsys.readouterr().out
        assert "usage: snitch" in out
        assert "report" in out
        assert "list" in out

    def test_unknown_command(self):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["frobnicate"])

        assert excinfo.value.code == 2

    def test_report_needs_repo(self):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["report"])

        assert excinfo.value.code == 2


# =============================================================================
# list
# =============================================================================

class TestListCommand:
    """Tests for `snitch list`."""

    def test_list(self, tmp_repo: Path, capsys: pytest.CaptureFixture[str]):
        (tmp_repo / "a.py").write_text("# TODO: one\nx = 1\n# TODO(#3): two\n")
        commit_all(tmp_repo)

        assert cli.main(["-C", str(tmp_repo), "list"]) == 0

        assert capsys.readouterr().out.splitlines() == [
            "a.py:1: # TODO: one",
            "a.py:3: # TODO(#3): two",
        ]

    def test_list_outside_repository(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
        plain = tmp_path / "plain"
        plain.mkdir()

        assert cli.main(["-C", str(plain), "list"]) == 1

        assert capsys.readouterr().err.startswith("snitch: ")

    def test_list_does_not_need_credentials(self, tmp_repo: Path, tmp_path: Path):
        (tmp_repo / "a.txt").write_text("nothing\n")
        commit_all(tmp_repo)

        code = cli.main(["-C", str(tmp_repo), "--credentials", str(tmp_path / "missing.ini"), "list"])

        assert code == 0


# =============================================================================
# report / purge
# =============================================================================

class TestReportCommand:
    """Tests for `snitch report` and `snitch purge`."""

    def test_report(
        self,
        tmp_repo: Path,
        credentials: Path,
        tracker: StubTracker,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        (tmp_repo / "main.go").write_text("package main\n\n// TODO: add tests\n")
        commit_all(tmp_repo)
        prompts = answer(monkeypatch, "maybe", "y")

        code = cli.main(["-C", str(tmp_repo), "--credentials", str(credentials), "report", "owner/repo"])

        assert code == 0
        assert tracker.repos == ["owner/repo"]  # type: ignore[attr-defined]
        assert tracker.created == [("add tests", "")]
        assert prompts == ["Do you want to report this? [y/n] "] * 2
        assert (tmp_repo / "main.go").read_text() == "package main\n\n// TODO(#100): add tests\n"
        assert git(tmp_repo, "log", "-1", "--format=%s").strip() == "Add TODO(#100)"
        out = capsys.readouterr().out
        assert "main.go:3: // TODO: add tests" in out
        assert "[REPORTED] main.go:3: // TODO(#100): add tests" in out

    def test_report_missing_credentials(
        self, tmp_repo: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ):
        code = cli.main(
            ["-C", str(tmp_repo), "--credentials", str(tmp_path / "missing.ini"), "report", "owner/repo"]
        )

        assert code == 1
        assert "Credentials file not found" in capsys.readouterr().err

    def test_report_stdin_closed(
        self,
        tmp_repo: Path,
        credentials: Path,
        tracker: StubTracker,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        (tmp_repo / "a.py").write_text("# TODO: x\n")
        commit_all(tmp_repo)
        answer(monkeypatch)

        code = cli.main(["-C", str(tmp_repo), "--credentials", str(credentials), "report", "owner/repo"])

        assert code == 1
        assert "No answer" in capsys.readouterr().err
        assert tracker.created == []

    def test_purge(
        self,
        tmp_repo: Path,
        credentials: Path,
        tracker: StubTracker,
        monkeypatch: pytest.MonkeyPatch,
    ):
        (tmp_repo / "a.py").write_text("# TODO(#1): closed\n# TODO(#2): open\n")
        commit_all(tmp_repo)
        answer(monkeypatch, "y")

        code = cli.main(["-C", str(tmp_repo), "--credentials", str(credentials), "purge", "owner/repo"])

        assert code == 0
        assert (tmp_repo / "a.py").read_text() == "# TODO(#2): open\n"
        assert git(tmp_repo, "log", "-1", "--format=%s").strip() == "Remove TODO(#1)"


# =============================================================================
# Prompt
# =============================================================================

class TestPrompt:
    """Tests for prompt_yes_no()."""

    def test_yes(self):
        assert cli.prompt_yes_no("Go?", read=lambda p: "y")

    def test_no(self):
        assert not cli.prompt_yes_no("Go?", read=lambda p: "n\n")

    def test_repeats_until_answered(self):
        answers = iter(["", "yes", "Y", "n"])
        prompts: list[str] = []

        def read(prompt: str) -> str:
            prompts.append(prompt)
            return next(answers)

        assert cli.prompt_yes_no("Go?", read=read) is False
        assert prompts == ["Go? [y/n] "] * 4

    def test_eof(self):
        def read(prompt: str) -> str:
            raise EOFError

        with pytest.raises(SnitchError):
            cli.prompt_yes_no("Go?", read=read)


# =============================================================================
# Entry point
# =============================================================================

class RecordingStdout(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self.reconfigured: list[dict[str, str]] = []

    def reconfigure(self, **kwargs: str) -> None:
        self.reconfigured.append(kwargs)


class TestEntryPoint:
    """Tests for the console script wrapper."""

    def test_main_leaves_stdout_alone(self, monkeypatch: pytest.MonkeyPatch):
        stdout = RecordingStdout()
        monkeypatch.setattr("sys.stdout", stdout)

        assert cli.main([]) == 0

        assert stdout.reconfigured == []
        assert "usage: snitch" in stdout.getvalue()

    def test_run_sets_error_handler_and_exits(self, monkeypatch: pytest.MonkeyPatch):
        stdout = RecordingStdout()
        monkeypatch.setattr("sys.stdout", stdout)
        monkeypatch.setattr(cli, "main", lambda: 3)

        with pytest.raises(SystemExit) as excinfo:
            cli.run()

        assert excinfo.value.code == 3
        assert stdout.reconfigured == [{"errors": "backslashreplace"}]
