"""Public tree conversion API (delegates to application use-cases)."""

from __future__ import annotations

from audio_tree_converter.adapters.transcoders import DEFAULT_TRANSCODER, FfmpegTranscoder
from audio_tree_converter.application.ports import ConversionListener
from audio_tree_converter.application.results import TreeReport
from audio_tree_converter.application.use_cases import (
    build_conversion_request,
    run_conversion,
)
from audio_tree_converter.types import AudioFormat, PathLike


def convert_audio_tree(
    input_root: PathLike = ".",
    output_root: PathLike = "output",
    target_format: str | AudioFormat = AudioFormat.MP3,
    recurse: bool = False,
    dry_run: bool = False,
    compare: bool = False,
    transcoder_executable: str = DEFAULT_TRANSCODER,
    listener: ConversionListener | None = None,
) -> TreeReport:
    """Convert audio files under ``input_root`` into ``output_root``."""
    request = build_conversion_request(
        input_root=input_root,
        output_root=output_root,
        target_format=target_format,
        recurse=recurse,
        dry_run=dry_run,
        compare=compare,
    )
    return run_conversion(
        request,
        transcoder=FfmpegTranscoder(transcoder_executable),
        listener=listener,
    )
