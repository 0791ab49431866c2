"""
snitch - keep inline TODO comments in sync with GitHub issues.

Scans the files tracked by git for ``TODO:`` markers, files an issue for
each one the operator picks, and rewrites the marker in place as
``TODO(#<issue>):`` in a commit of its own. TODOs whose issues were closed
can be purged the same way.

Example
-------
>>> from snitch import Git, GithubClient, GithubCredentials, TodoFinder, TodoReporter
>>>
>>> git = Git(".")
>>> finder = TodoFinder(git)
>>> for todo in finder.find_all():
...     print(todo.log_string())
>>>
>>> creds = GithubCredentials.from_file()
>>> reporter = TodoReporter(finder, GithubClient(creds, "owner/repo"), git, confirm=lambda q: True)
>>> reporter.report()

Classes
-------
Todo
    A TODO marker on one line of a file.

TodoParser
    Recognizes ``TODO:`` and ``TODO(<id>):`` markers.

TodoFinder
    Walks the files tracked by git.

TodoReporter
    The report and purge workflows.

Git
    Runs git commands.

GithubClient
    Creates and queries GitHub issues.
"""

from snitch.config import GithubCredentials, ProjectConfig, TitleConfig
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
from snitch.git import Git
from snitch.github import GithubClient
from snitch.todos import (
    Todo,
    TodoFinder,
    TodoParser,
    TodoReporter,
    remove_todo,
    rewrite_lines,
    update_todo,
)

__version__ = "0.1.0"

__all__ = [
    "Todo",
    "TodoParser",
    "TodoFinder",
    "TodoReporter",
    "rewrite_lines",
    "update_todo",
    "remove_todo",
    "Git",
    "GithubClient",
    "GithubCredentials",
    "ProjectConfig",
    "TitleConfig",
    "Result",
    "BatchResult",
    "SnitchError",
    "GitError",
    "IssueTrackerError",
    "ConfigError",
    "RewriteError",
    "TodoStateError",
    "UnreportedTodoError",
]
