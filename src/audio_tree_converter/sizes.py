"""Aggregate size reporting for input and output trees."""

from __future__ import annotations

from pathlib import Path

from audio_tree_converter.adapters.filesystem import LocalFileSystem
from audio_tree_converter.application.ports import FileSystem
from audio_tree_converter.application.results import SizeComparison

_UNITS = ("B", "KB", "MB", "GB", "TB")


def tree_size(
    root: Path,
    filesystem: FileSystem | None = None,
    exclude: Path | None = None,
) -> int:
    """Sum the sizes of all files under ``root``; a missing root sums to 0.

    A directory resolving to ``exclude`` is left out of the total.
    """
    fs = filesystem or LocalFileSystem()
    if not fs.exists(root):
        return 0
    if not fs.is_dir(root):
        return fs.file_size(root)
    if exclude is not None and root.resolve() == exclude.resolve():
        return 0
    return sum(tree_size(entry, fs, exclude) for entry in fs.list_dir(root))


def compare_tree_sizes(
    input_root: Path,
    output_root: Path,
    filesystem: FileSystem | None = None,
) -> SizeComparison | None:
    """Compare total sizes of two trees.

    Returns ``None`` when either total is zero, since a ratio against an
    empty tree carries no information. An output tree nested inside the
    input tree is not counted towards the input total.
    """
    fs = filesystem or LocalFileSystem()
    input_bytes = tree_size(input_root, fs, exclude=output_root)
    output_bytes = tree_size(output_root, fs)
    if input_bytes == 0 or output_bytes == 0:
        return None
    return SizeComparison(input_bytes=input_bytes, output_bytes=output_bytes)


def format_size(num_bytes: int) -> str:
    """Render a byte count in the largest unit keeping the value >= 1."""
    value = float(num_bytes)
    for unit in _UNITS[:-1]:
        if abs(value) < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} {_UNITS[-1]}"
