"""TODO marker parser.

Two shapes of marker are recognized on a line:

- unreported: ``<prefix>TODO: <suffix>``
- reported:   ``<prefix>TODO(<id>): <suffix>``

The reported shape is tried first. It is the stricter of the two since it
needs the parenthesized id, and a line such as ``// TODO(#1): a TODO: b``
matches both patterns; it is the issue link that must survive.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import IO, Iterator

from snitch.config import ProjectConfig
from snitch.todos.todo import Todo

# Files are decoded leniently so that rewriting a line never alters the
# bytes of the other lines, whatever their encoding.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def open_text(path: str | Path, mode: str = "r") -> IO[str]:
    """Open a source file for line-oriented reading or writing.

    Lines are split on ``\\n`` only and no newline translation happens.
    """
    return open(path, mode, encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n")


def split_ending(raw: str) -> tuple[str, str]:
    """Split a line read by :func:`open_text` into its text and terminator.

    The terminator is ``\\r\\n``, ``\\n``, or empty for a last line without one.
    """
    if raw.endswith("\r\n"):
        return raw[:-2], "\r\n"
    if raw.endswith("\n"):
        return raw[:-1], "\n"
    return raw, ""


def iter_lines(f: IO[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, text)`` pairs with line terminators removed.

    Line numbers are 1-based.
    """
    for line_number, raw in enumerate(f, 1):
        yield line_number, split_ending(raw)[0]


class TodoParser:
    """Parse TODO markers out of lines of text.

    Parameters
    ----------
    config : ProjectConfig | None
        Project settings; used to derive issue titles. Defaults apply
        when None.

    Examples
    --------
    >>> parser = TodoParser()
    >>> todo = parser.parse_line("x := 1 // TODO(#42): refactor")
    >>> todo.prefix, todo.id, todo.suffix
    ('x := 1 // ', '#42', 'refactor')
    """

    REPORTED_PATTERN = re.compile(r"^(?P<prefix>.*)TODO\((?P<id>.*)\): (?P<suffix>.*)$")
    UNREPORTED_PATTERN = re.compile(r"^(?P<prefix>.*)TODO: (?P<suffix>.*)$")

    def __init__(self, config: ProjectConfig | None = None) -> None:
        self._config = config or ProjectConfig()

    @property
    def config(self) -> ProjectConfig:
        return self._config

    def parse_line(self, line: str, filename: str = "", line_number: int = 0) -> Todo | None:
        """Parse a single line.

        Parameters
        ----------
        line : str
            The line to parse, without its terminator.
        filename : str
            File the line belongs to.
        line_number : int
            1-based line number.

        Returns
        -------
        Todo | None
            The TODO on this line, or None if the line has no marker.
        """
        match = self.REPORTED_PATTERN.match(line)
        if match:
            issue_id: str | None = match.group("id")
        else:
            match = self.UNREPORTED_PATTERN.match(line)
            if not match:
                return None
            issue_id = None

        suffix = match.group("suffix")
        return Todo(
            prefix=match.group("prefix"),
            suffix=suffix,
            id=issue_id,
            filename=filename,
            line=line_number,
            title=self._config.title.transform(suffix),
        )

    def parse_file(self, path: str | Path, filename: str | None = None) -> Iterator[Todo]:
        """Yield every TODO in a file, in line order.

        ``filename`` is recorded on the TODOs instead of ``path`` when given.

        The file stays open only while the generator is being consumed and
        is closed when it finishes, is closed, or the consumer raises.

        Raises
        ------
        OSError
            If the file cannot be opened or read.
        """
        label = str(path) if filename is None else filename
        with open_text(path) as f:
            for line_number, text in iter_lines(f):
                todo = self.parse_line(text, label, line_number)
                if todo is not None:
                    yield todo
