"""Core building blocks shared by the TODO workflows.

Modules
-------
errors
    Exception hierarchy (SnitchError and friends).
results
    Result and BatchResult outcome records.
"""
from snitch.core.errors import (
    ConfigError,
    GitError,
    IssueTrackerError,
    RewriteError,
    SnitchError,
    TodoStateError,
    UnreportedTodoError,
)
from snitch.core.results import BatchResult, Result

__all__ = [
    "SnitchError",
    "GitError",
    "IssueTrackerError",
    "ConfigError",
    "RewriteError",
    "TodoStateError",
    "UnreportedTodoError",
    "Result",
    "BatchResult",
]
