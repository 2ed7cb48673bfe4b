"""Application-layer result objects."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from audio_tree_converter.types import FileClassification


class FileOutcome(Enum):
    """What happened (or would happen, in dry run) to one file."""

    CONVERTED = "converted"
    COPIED = "copied"
    SKIPPED_EXISTS = "skipped_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class FileResult:
    """Structured per-file outcome."""

    source: Path
    destination: Path
    classification: FileClassification
    outcome: FileOutcome
    action: str
    dry_run: bool = False
    error: str | None = None


@dataclass(frozen=True)
class SizeComparison:
    """Aggregate byte sizes of an input tree and its output mirror."""

    input_bytes: int
    output_bytes: int

    @property
    def ratio_percent(self) -> float:
        return self.output_bytes / self.input_bytes * 100.0


@dataclass
class DirectoryResult:
    """Outcome of one directory level and, recursively, its children."""

    input_root: Path
    output_root: Path
    created_output_dir: bool = False
    files: list[FileResult] = field(default_factory=list)
    children: list[DirectoryResult] = field(default_factory=list)
    error: str | None = None

    def iter_files(self) -> Iterator[FileResult]:
        """Yield file results depth-first, this level before its children."""
        yield from self.files
        for child in self.children:
            yield from child.iter_files()

    def iter_directories(self) -> Iterator[DirectoryResult]:
        yield self
        for child in self.children:
            yield from child.iter_directories()

    def counts(self) -> Counter[FileOutcome]:
        return Counter(result.outcome for result in self.iter_files())

    @property
    def failed(self) -> bool:
        if any(d.error is not None for d in self.iter_directories()):
            return True
        return any(r.outcome is FileOutcome.FAILED for r in self.iter_files())


@dataclass(frozen=True)
class TreeReport:
    """Top-level conversion outcome."""

    root: DirectoryResult
    size_comparison: SizeComparison | None = None

    @property
    def failed(self) -> bool:
        return self.root.failed
