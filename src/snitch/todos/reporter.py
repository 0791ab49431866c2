"""Workflows turning TODOs into GitHub issues and back."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Protocol

from snitch.config import ProjectConfig
from snitch.core.results import BatchResult, Result
from snitch.git import Git
from snitch.github import ISSUE_ID_PATTERN
from snitch.todos.finder import TodoFinder
from snitch.todos.rewriter import remove_todo, update_todo
from snitch.todos.todo import Todo

logger = logging.getLogger(__name__)

REPORT_QUESTION = "Do you want to report this?"
PURGE_QUESTION = "This TODO's issue is closed. Do you want to remove it?"


class IssueTracker(Protocol):
    def create_issue(self, title: str, body: str = "") -> str: ...

    def get_issue_state(self, issue_id: str) -> str: ...


class TodoReporter:
    """Report unreported TODOs as issues and purge TODOs of closed issues.

    Both workflows are fail-fast: the first error from the tracker, the
    file rewrite or git stops the run and propagates. Work committed before
    the failure stays committed.

    Parameters
    ----------
    finder : TodoFinder
        Source of TODOs.
    tracker : IssueTracker
        Issue tracker to create and query issues with.
    git : Git
        Git wrapper used to commit each change.
    confirm : Callable[[str], bool]
        Asks the operator a yes/no question.
    echo : Callable[[str], None]
        Shows a line of output to the operator.
    config : ProjectConfig | None
        Project settings; supplies the issue body template.

    Examples
    --------
    >>> reporter = TodoReporter(finder, GithubClient(creds, "owner/repo"), git, confirm)
    >>> result = reporter.report()
    >>> print(f"Reported {len(result)}, skipped {result.skipped}")
    """

    def __init__(
        self,
        finder: TodoFinder,
        tracker: IssueTracker,
        git: Git,
        confirm: Callable[[str], bool],
        echo: Callable[[str], None] = print,
        config: ProjectConfig | None = None,
    ) -> None:
        self._finder = finder
        self._tracker = tracker
        self._git = git
        self._confirm = confirm
        self._echo = echo
        self._config = config or ProjectConfig()

    def issue_body(self, todo: Todo) -> str:
        """Issue body for ``todo``, from the project's body template."""
        return self._config.body.replace("{filename}", todo.filename).replace(
            "{line}", str(todo.line)
        )

    def report(self) -> BatchResult:
        """Report every unreported TODO the operator agrees to.

        All candidates are confirmed first; then, for each one, an issue is
        created, the source line is rewritten to ``TODO(#n)`` and the file
        is committed as ``Add TODO(#n)``.

        Returns
        -------
        BatchResult
            One result per reported TODO, with the reported Todo as ``data``.
        """
        batch = BatchResult()
        to_report: list[Todo] = []

        for todo in self._finder.find_unreported():
            self._echo(todo.log_string())
            if self._confirm(REPORT_QUESTION):
                to_report.append(todo)
            else:
                batch.skipped += 1

        for todo in to_report:
            issue_id = self._tracker.create_issue(todo.title, self.issue_body(todo))
            reported = todo.reported(issue_id)
            self._echo(f"[REPORTED] {reported.log_string()}")

            update_todo(reported, self._git.cwd)
            self._git.commit_todo(reported, "Add")

            batch.results.append(
                Result(
                    success=True,
                    message=f"Reported {reported.location} as {issue_id}",
                    files_changed=[Path(reported.filename)],
                    data=reported,
                )
            )

        return batch

    def purge(self) -> BatchResult:
        """Remove TODOs whose issue has been closed.

        Only TODOs carrying a ``#<number>`` reference are checked. Each
        removal is committed as ``Remove TODO(#n)``. Lines are removed from
        the bottom of each file upwards so the recorded line numbers of the
        remaining candidates stay valid.
        """
        batch = BatchResult()
        to_remove: list[Todo] = []

        for todo in self._finder.find_reported():
            if not ISSUE_ID_PATTERN.match(todo.id or ""):
                logger.debug("Skipping %s: not an issue reference", todo.location)
                continue
            if self._tracker.get_issue_state(todo.id) != "closed":
                continue
            self._echo(todo.log_string())
            if self._confirm(PURGE_QUESTION):
                to_remove.append(todo)
            else:
                batch.skipped += 1

        for todo in sorted(to_remove, key=lambda t: (t.filename, -t.line)):
            remove_todo(todo, self._git.cwd)
            self._git.commit_todo(todo, "Remove")
            self._echo(f"[REMOVED] {todo.log_string()}")

            batch.results.append(
                Result(
                    success=True,
                    message=f"Removed {todo.location} ({todo.id})",
                    files_changed=[Path(todo.filename)],
                    data=todo,
                )
            )

        return batch
