"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from audio_tree_converter.application.results import DirectoryResult, FileResult


class Transcoder(Protocol):
    """Run the external transcoding tool on a single file."""

    def transcode(self, input_path: Path, output_path: Path) -> None:
        """Raise ``TranscodeError`` or ``MissingTranscoderError`` on failure."""

    def describe(self, input_path: Path, output_path: Path) -> str:
        """Return the command line that ``transcode`` would run."""


class FileSystem(Protocol):
    """Minimal filesystem capability used by the tree walk."""

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def list_dir(self, path: Path) -> Iterable[Path]:
        """Return direct entries of ``path``."""

    def make_dirs(self, path: Path) -> None: ...

    def copy_file(self, source: Path, destination: Path) -> None: ...

    def remove(self, path: Path) -> None: ...

    def file_size(self, path: Path) -> int: ...


class ConversionListener(Protocol):
    """Receive progress events while a tree is converted."""

    def on_directory_created(self, path: Path, dry_run: bool) -> None: ...

    def on_file(self, result: FileResult) -> None: ...

    def on_directory_done(self, result: DirectoryResult) -> None: ...

    def on_directory_failed(self, result: DirectoryResult) -> None: ...
