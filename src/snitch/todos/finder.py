"""TODO finder walking the files tracked by git."""
from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path
from typing import Callable, Iterator

from snitch.git import Git
from snitch.todos.parser import TodoParser
from snitch.todos.todo import Todo

logger = logging.getLogger(__name__)

# Same heuristic git uses to tell binary files apart
BINARY_SNIFF_SIZE = 8000


def is_binary(path: Path) -> bool:
    """True if the start of the file contains a NUL byte."""
    with open(path, "rb") as f:
        return b"\0" in f.read(BINARY_SNIFF_SIZE)


class TodoFinder:
    """Find TODO markers across the files tracked by git.

    Only files listed by ``git ls-files`` are scanned, so ignored and
    untracked files never show up. Walking is fail-fast: the first error,
    whether raised while reading a file or by the consumer, stops the walk
    and propagates to the caller.

    Parameters
    ----------
    git : Git
        Git wrapper for the working tree to scan.
    parser : TodoParser | None
        Parser to use; a default one is created when None.
    root : str | Path
        Directory to scan, relative to the working tree.

    Examples
    --------
    >>> finder = TodoFinder(Git("."))
    >>> for todo in finder.find_unreported():
    ...     print(todo.log_string())
    """

    def __init__(self, git: Git, parser: TodoParser | None = None, root: str | Path = ".") -> None:
        self._git = git
        self._parser = parser or TodoParser()
        self._root = root

    @property
    def parser(self) -> TodoParser:
        return self._parser

    def files(self) -> list[str]:
        """Files to scan, relative to the working tree."""
        return self._git.ls_files(self._root)

    def find_all(self) -> Iterator[Todo]:
        """Lazily yield every TODO, file by file in git's order.

        Raises
        ------
        GitError
            If the files cannot be listed.
        OSError
            If a listed file cannot be opened or read.
        """
        for name in self.files():
            yield from self.find_in_file(name)

    def find_in_file(self, name: str) -> Iterator[Todo]:
        """Yield the TODOs in one file, given relative to the working tree."""
        path = self._git.cwd / name
        # git tracks the link itself, not the contents of its target
        if path.is_symlink():
            logger.debug("Skipping symbolic link %s", name)
            return
        # submodules show up in ls-files as directories
        if path.is_dir():
            logger.debug("Skipping directory %s", name)
            return
        if is_binary(path):
            logger.debug("Skipping binary file %s", name)
            return
        yield from self._parser.parse_file(path, filename=name)

    def find_unreported(self) -> Iterator[Todo]:
        """Yield TODOs not linked to an issue yet."""
        return (todo for todo in self.find_all() if not todo.is_reported)

    def find_reported(self) -> Iterator[Todo]:
        """Yield TODOs already linked to an issue."""
        return (todo for todo in self.find_all() if todo.is_reported)

    def walk(self, visit: Callable[[Todo], None]) -> None:
        """Call ``visit`` for every TODO. An exception from ``visit`` ends the walk."""
        with closing(self.find_all()) as todos:
            for todo in todos:
                visit(todo)
