"""Top-level API for converting audio directory trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from audio_tree_converter.types import AudioFormat, FileClassification, PathLike

if TYPE_CHECKING:
    from audio_tree_converter.application.results import TreeReport

__version__ = "0.1.0"


def convert_audio_tree(
    input_root: PathLike = ".",
    output_root: PathLike = "output",
    target_format: str | AudioFormat = AudioFormat.MP3,
    *,
    recurse: bool = False,
    dry_run: bool = False,
    compare: bool = False,
    transcoder_executable: str = "ffmpeg",
) -> TreeReport:
    """Convert every audio file under a directory tree.

    Parameters
    ----------
    input_root : str | Path, default="."
        Directory to scan.
    output_root : str | Path, default="output"
        Mirror directory for converted and copied files.
    target_format : str | AudioFormat, default=AudioFormat.MP3
        Output audio format, e.g. ``"mp3"`` or ``".flac"``.
    recurse : bool, default=False
        Descend into subdirectories.
    dry_run : bool, default=False
        Describe actions without touching the filesystem.
    compare : bool, default=False
        Compute a size comparison after the run.
    transcoder_executable : str, default="ffmpeg"
        Executable invoked as ``<tool> -i <input> <output>``.

    Returns
    -------
    TreeReport
        Per-file outcomes and the optional size comparison.
    """
    from .api import convert_audio_tree as _impl

    return _impl(
        input_root=input_root,
        output_root=output_root,
        target_format=target_format,
        recurse=recurse,
        dry_run=dry_run,
        compare=compare,
        transcoder_executable=transcoder_executable,
    )


__all__ = [
    "AudioFormat",
    "FileClassification",
    "convert_audio_tree",
]
