"""Local filesystem adapter implementing the ``FileSystem`` port."""

from __future__ import annotations

import shutil
from pathlib import Path

from audio_tree_converter.errors import FilesystemError


class LocalFileSystem:
    """Thin pathlib/shutil wrapper translating ``OSError`` to ``FilesystemError``."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def list_dir(self, path: Path) -> list[Path]:
        try:
            return list(path.iterdir())
        except OSError as exc:
            raise FilesystemError(f"Cannot list directory {path}: {exc}") from exc

    def make_dirs(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Cannot create directory {path}: {exc}") from exc

    def copy_file(self, source: Path, destination: Path) -> None:
        try:
            shutil.copyfile(source, destination)
        except OSError as exc:
            raise FilesystemError(f"Cannot copy {source} to {destination}: {exc}") from exc

    def remove(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError as exc:
            raise FilesystemError(f"Cannot remove {path}: {exc}") from exc

    def file_size(self, path: Path) -> int:
        try:
            return path.stat().st_size
        except OSError as exc:
            raise FilesystemError(f"Cannot stat {path}: {exc}") from exc
