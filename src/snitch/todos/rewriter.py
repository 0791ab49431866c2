"""In-place, line-oriented file rewriting.

The source file is streamed into a sibling temporary file (``<name>.snitch``)
while a transform is applied to every line, then the temporary file is
renamed over the original. Readers see either the old or the new content,
never a partial file. If anything fails the temporary file is removed and
the original stays untouched.

Every line keeps its own terminator, ``\\n`` or ``\\r\\n``, so untouched lines
stay byte-identical. Only a missing final newline is added.
"""
from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Tuple

from snitch.core.errors import RewriteError
from snitch.core.results import Result
from snitch.todos.parser import open_text, split_ending
from snitch.todos.todo import Todo

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".snitch"

# (line_number, text) -> (new_text, delete)
LineTransform = Callable[[int, str], Tuple[str, bool]]


def temp_path_for(path: Path) -> Path:
    return path.with_name(path.name + TEMP_SUFFIX)


def rewrite_lines(
    path: str | Path,
    transform: LineTransform,
    check: Callable[[], None] | None = None,
) -> Result:
    """Rewrite ``path`` line by line through ``transform``.

    Parameters
    ----------
    path : str | Path
        File to rewrite.
    transform : LineTransform
        Called with the 1-based line number and the line text (without
        terminator). Returns the text to write and whether to drop the line
        instead. Lines it does not mean to touch must come back unchanged.
    check : Callable[[], None] | None
        Called once every line went through ``transform``, before the
        original is replaced. Raising from it cancels the rewrite.

    Returns
    -------
    Result
        Successful result listing ``path`` as changed.

    Raises
    ------
    OSError
        If the file cannot be read, or the new content cannot be written
        or moved into place.
    """
    path = Path(path)
    temp_path = temp_path_for(path)

    try:
        with open_text(path) as src, open_text(temp_path, "w") as dst:
            for line_number, raw in enumerate(src, 1):
                text, ending = split_ending(raw)
                new_text, delete = transform(line_number, text)
                if not delete:
                    dst.write(new_text)
                    dst.write(ending or "\n")
        if check is not None:
            check()
        shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except BaseException:
        _discard(temp_path)
        raise

    logger.debug("Rewrote %s", path)
    return Result(success=True, message=f"Rewrote {path}", files_changed=[path])


def _discard(temp_path: Path) -> None:
    try:
        temp_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", temp_path, e)


def rewrite_line(path: str | Path, target: int, replacement: str | None) -> Result:
    """Replace line ``target`` of ``path`` with ``replacement``, or delete it if None.

    Raises
    ------
    RewriteError
        If the file has no line ``target``. The file is left untouched.
    """
    path = Path(path)
    if target < 1:
        raise RewriteError(f"{path}: invalid line number {target}")

    hit = False

    def transform(line_number: int, text: str) -> tuple[str, bool]:
        nonlocal hit
        if line_number != target:
            return text, False
        hit = True
        if replacement is None:
            return "", True
        return replacement, False

    def check() -> None:
        if not hit:
            raise RewriteError(f"{path} has no line {target}")

    result = rewrite_lines(path, transform, check)
    action = "Removed" if replacement is None else "Updated"
    result.message = f"{action} {path}:{target}"
    return result


def update_todo(todo: Todo, root: str | Path = ".") -> Result:
    """Write the TODO's canonical form over its line.

    ``todo.filename`` is resolved against ``root``.
    """
    return rewrite_line(Path(root) / todo.filename, todo.line, str(todo))


def remove_todo(todo: Todo, root: str | Path = ".") -> Result:
    """Delete the TODO's line from its file."""
    return rewrite_line(Path(root) / todo.filename, todo.line, None)
