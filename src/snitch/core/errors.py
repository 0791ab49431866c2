"""Exception hierarchy.

Environmental failures (git, GitHub, configuration, file rewrites) derive
from SnitchError and are reported to the operator by the CLI. Programming
faults, such as committing a TODO that was never reported, derive from
TodoStateError instead so they are never mistaken for ordinary failures.
"""
from __future__ import annotations


class SnitchError(Exception):
    """Base exception for operational failures."""


class GitError(SnitchError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, args: list[str], returncode: int, stderr: str = "") -> None:
        self.command = args
        self.returncode = returncode
        self.stderr = stderr
        message = f"`{' '.join(args)}` exited with status {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class IssueTrackerError(SnitchError):
    """Raised when the issue tracker rejects a request or answers garbage."""


class ConfigError(SnitchError):
    """Raised for missing or malformed configuration and credentials."""


class RewriteError(SnitchError):
    """Raised when a file could not be rewritten in place."""


class TodoStateError(RuntimeError):
    """Raised when a TODO is used in a way its lifecycle does not allow."""


class UnreportedTodoError(TodoStateError):
    """Raised when an operation needs an issue id the TODO does not have."""
