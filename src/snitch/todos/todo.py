"""The Todo entity."""
from __future__ import annotations

from dataclasses import dataclass, replace

from snitch.core.errors import TodoStateError, UnreportedTodoError


@dataclass(frozen=True)
class Todo:
    """A TODO marker found on a single line of a tracked file.

    A Todo is either unreported (``id is None``) or reported, in which case
    ``id`` holds the issue reference embedded in the source line, e.g.
    ``#42``. Instances are immutable; ``reported()`` returns a new Todo
    carrying the issue id.

    Parameters
    ----------
    prefix : str
        Everything on the line before the ``TODO`` keyword, e.g. ``"    // "``.
    suffix : str
        Free text after the marker.
    id : str | None
        Issue reference, or None for an unreported TODO.
    filename : str
        Path of the file, as listed by git. Empty if not located.
    line : int
        1-based line number. 0 if not located.
    title : str
        Issue title derived from ``suffix``.

    Examples
    --------
    >>> todo = Todo(prefix="# ", suffix="fix this", filename="a.py", line=3)
    >>> str(todo)
    '# TODO: fix this'
    >>> todo.reported("#7").log_string()
    'a.py:3: # TODO(#7): fix this'
    """

    prefix: str
    suffix: str
    id: str | None = None
    filename: str = ""
    line: int = 0
    title: str = ""

    @property
    def is_reported(self) -> bool:
        """True if the TODO is linked to an issue."""
        return self.id is not None

    @property
    def location(self) -> str:
        """The ``file:line`` location string."""
        return f"{self.filename}:{self.line}"

    def __str__(self) -> str:
        if self.id is None:
            return f"{self.prefix}TODO: {self.suffix}"
        return f"{self.prefix}TODO({self.id}): {self.suffix}"

    def log_string(self) -> str:
        """Format for compilation-style logging.

        The ``file:line: text`` shape is understood by editors' compilation
        modes, so one can jump between the TODOs.
        """
        return f"{self.location}: {self}"

    def reported(self, issue_id: str) -> Todo:
        """Return a copy of this TODO linked to ``issue_id``.

        Raises
        ------
        TodoStateError
            If the TODO is already reported.
        """
        if self.id is not None:
            raise TodoStateError(f"TODO is already reported as {self.id}: {self.log_string()}")
        return replace(self, id=issue_id)

    def commit_message(self, action: str) -> str:
        """Commit message for a change to this TODO, e.g. ``Add TODO(#42)``.

        Raises
        ------
        UnreportedTodoError
            If the TODO has no issue id.
        """
        if self.id is None:
            raise UnreportedTodoError(f"Trying to commit an unreported TODO! {self.log_string()}")
        return f"{action} TODO({self.id})"
