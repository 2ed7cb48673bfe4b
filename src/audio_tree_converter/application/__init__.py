"""Application-layer use-cases and request objects."""

from __future__ import annotations

from audio_tree_converter.application.options import ConversionRequest
from audio_tree_converter.application.ports import (
    ConversionListener,
    FileSystem,
    Transcoder,
)
from audio_tree_converter.application.results import (
    DirectoryResult,
    FileOutcome,
    FileResult,
    SizeComparison,
    TreeReport,
)
from audio_tree_converter.types import AudioFormat, PathLike


def build_conversion_request(
    *,
    input_root: PathLike = ".",
    output_root: PathLike = "output",
    target_format: str | AudioFormat = AudioFormat.MP3,
    recurse: bool = False,
    dry_run: bool = False,
    compare: bool = False,
) -> ConversionRequest:
    """Build a validated request via lazy use-case import."""
    from audio_tree_converter.application.use_cases import (
        build_conversion_request as _impl,
    )

    return _impl(
        input_root=input_root,
        output_root=output_root,
        target_format=target_format,
        recurse=recurse,
        dry_run=dry_run,
        compare=compare,
    )


def run_conversion(
    request: ConversionRequest,
    *,
    transcoder: Transcoder | None = None,
    filesystem: FileSystem | None = None,
    listener: ConversionListener | None = None,
) -> TreeReport:
    """Convert a tree via lazy use-case import."""
    from audio_tree_converter.application.use_cases import run_conversion as _impl

    return _impl(
        request,
        transcoder=transcoder,
        filesystem=filesystem,
        listener=listener,
    )


__all__ = [
    "ConversionRequest",
    "ConversionListener",
    "DirectoryResult",
    "FileOutcome",
    "FileResult",
    "FileSystem",
    "SizeComparison",
    "Transcoder",
    "TreeReport",
    "build_conversion_request",
    "run_conversion",
]
