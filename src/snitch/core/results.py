"""Result types for workflow operations.

This module defines the outcome records returned by the workflows:
- Result - Outcome of a single operation on one TODO
- BatchResult - Aggregate of the operations performed in one run

Failures are not represented here: they are raised as exceptions and
abort the run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator


@dataclass
class Result:
    """Outcome of a single operation.

    Attributes:
        success: Whether the operation succeeded
        message: Human-readable description of what happened
        files_changed: List of files that were modified
        data: Optional payload, e.g. the reported Todo
    """

    success: bool
    message: str
    files_changed: list[Path] = field(default_factory=list)
    data: Any = None

    def __bool__(self) -> bool:
        return self.success


@dataclass
class BatchResult:
    """Aggregate result of a workflow run.

    Attributes:
        results: One Result per TODO that was acted upon
        skipped: Number of candidates the operator declined
    """

    results: list[Result] = field(default_factory=list)
    skipped: int = 0

    @property
    def success(self) -> bool:
        """True if all operations succeeded."""
        return all(r.success for r in self.results)

    @property
    def files_changed(self) -> list[Path]:
        """All files changed across all operations, in first-seen order."""
        files: list[Path] = []
        for r in self.results:
            for path in r.files_changed:
                if path not in files:
                    files.append(path)
        return files

    def __bool__(self) -> bool:
        return self.success

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)
