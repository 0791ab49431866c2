"""Thin wrapper around the git command line."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from snitch.core.errors import GitError

if TYPE_CHECKING:
    from snitch.todos.todo import Todo

logger = logging.getLogger(__name__)


class Git:
    """Run git commands inside a working tree.

    Parameters
    ----------
    cwd : str | Path
        Directory the commands run in. Paths passed to and returned from
        this class are relative to it.
    executable : str
        The git binary to run.
    """

    def __init__(self, cwd: str | Path = ".", executable: str = "git") -> None:
        self.cwd = Path(cwd)
        self.executable = executable

    def __repr__(self) -> str:
        return f"Git({self.cwd})"

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return its standard output.

        Raises
        ------
        GitError
            If git exits with a non-zero status.
        """
        command = [self.executable, *args]
        logger.debug("[CMD] %s", " ".join(command))
        try:
            proc = subprocess.run(
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
            )
        except FileNotFoundError as e:
            raise GitError(command, 127, str(e)) from e

        if proc.returncode != 0:
            raise GitError(command, proc.returncode, proc.stderr)
        return proc.stdout

    def ls_files(self, path: str | Path = ".") -> list[str]:
        """List the files git tracks under ``path``, in git's order."""
        output = self.run("ls-files", "-z", "--", str(path))
        return [name for name in output.split("\0") if name]

    def add(self, path: str | Path) -> None:
        self.run("add", "--", str(path))

    def commit(self, message: str) -> None:
        self.run("commit", "-m", message)

    def commit_todo(self, todo: Todo, action: str) -> None:
        """Stage the TODO's file and commit it as ``<action> TODO(<id>)``.

        Raises
        ------
        UnreportedTodoError
            If the TODO has no issue id. Nothing is staged in that case.
        """
        message = todo.commit_message(action)
        self.add(todo.filename)
        self.commit(message)
        logger.info("Committed %s", message)
