"""TODO marker handling.

Classes
-------
Todo
    A TODO marker found on a line, reported (``TODO(#n):``) or not.

TodoParser
    Recognize TODO markers in lines of text.

TodoFinder
    Walk the files tracked by git and yield their TODOs.

TodoReporter
    Report TODOs as issues, and purge TODOs whose issues are closed.

Functions
---------
rewrite_lines, update_todo, remove_todo
    Rewrite source files in place, one line at a time.

Examples
--------
>>> from snitch.git import Git
>>> from snitch.todos import TodoFinder
>>>
>>> finder = TodoFinder(Git("."))
>>> for todo in finder.find_all():
...     print(todo.log_string())
"""

from snitch.todos.finder import TodoFinder
from snitch.todos.parser import TodoParser
from snitch.todos.reporter import IssueTracker, TodoReporter
from snitch.todos.rewriter import remove_todo, rewrite_line, rewrite_lines, update_todo
from snitch.todos.todo import Todo

__all__ = [
    "Todo",
    "TodoParser",
    "TodoFinder",
    "TodoReporter",
    "IssueTracker",
    "rewrite_lines",
    "rewrite_line",
    "update_todo",
    "remove_todo",
]
