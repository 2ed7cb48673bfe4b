"""Application use-cases orchestrating tree conversion."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from audio_tree_converter.adapters.filesystem import LocalFileSystem
from audio_tree_converter.adapters.transcoders import FfmpegTranscoder
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
    TreeReport,
)
from audio_tree_converter.errors import (
    AudioTreeError,
    FilesystemError,
    InvalidFormatError,
    TranscodeError,
)
from audio_tree_converter.schemas import ConversionRequestConfig
from audio_tree_converter.sizes import compare_tree_sizes
from audio_tree_converter.types import AudioFormat, FileClassification, PathLike

logger = logging.getLogger(__name__)


class _NullListener:
    def on_directory_created(self, path: Path, dry_run: bool) -> None:
        del path, dry_run

    def on_file(self, result: FileResult) -> None:
        del result

    def on_directory_done(self, result: DirectoryResult) -> None:
        del result

    def on_directory_failed(self, result: DirectoryResult) -> None:
        del result


def extension_of(filename: str) -> str:
    """Return ``.`` plus the text after the final dot, case preserved."""
    _, dot, ext = filename.rpartition(".")
    return f".{ext}" if dot else ""


def classify_file(filename: str, target_format: AudioFormat) -> FileClassification:
    """Decide how ``filename`` is handled when converting to ``target_format``."""
    source_format = AudioFormat.from_extension(extension_of(filename))
    if source_format is None:
        return FileClassification.OPAQUE
    if source_format is target_format:
        return FileClassification.ALREADY_TARGET_FORMAT
    return FileClassification.CONVERTIBLE_AUDIO


def plan_output_path(
    filename: str,
    output_root: Path,
    target_format: AudioFormat,
) -> Path:
    """Map a source filename to its location in the output tree."""
    if classify_file(filename, target_format) is not FileClassification.CONVERTIBLE_AUDIO:
        return output_root / filename
    stem = filename[: -len(extension_of(filename))]
    return output_root / f"{stem}{target_format.extension}"


def build_conversion_request(
    *,
    input_root: PathLike = ".",
    output_root: PathLike = "output",
    target_format: str | AudioFormat = AudioFormat.MP3,
    recurse: bool = False,
    dry_run: bool = False,
    compare: bool = False,
) -> ConversionRequest:
    """Build a validated request object from command/API params."""
    try:
        config = ConversionRequestConfig(
            input_root=input_root,
            output_root=output_root,
            target_format=target_format,
            recurse=recurse,
            dry_run=dry_run,
            compare=compare,
        )
    except ValidationError as exc:
        if any(err["loc"] == ("target_format",) for err in exc.errors()):
            raise InvalidFormatError(f"Invalid target format: {exc}") from exc
        raise AudioTreeError(f"Invalid conversion parameters: {exc}") from exc
    return ConversionRequest(
        input_root=config.input_root,
        output_root=config.output_root,
        target_format=config.target_format,
        recurse=config.recurse,
        dry_run=config.dry_run,
        compare=config.compare,
    )


def convert_tree(
    request: ConversionRequest,
    *,
    transcoder: Transcoder | None = None,
    filesystem: FileSystem | None = None,
    listener: ConversionListener | None = None,
) -> DirectoryResult:
    """Use-case: convert one directory level and, with ``recurse``, its subtree.

    Per-file failures are recorded on the returned result and do not stop
    sibling files. A failure to list the input directory or create the output
    directory aborts that level only. A failed or interrupted write leaves no
    partial output behind, and a subdirectory that is the output root itself
    is never descended into.

    Raises
    ------
    MissingTranscoderError
        If the transcoder executable is absent; every later conversion
        would fail the same way.
    """
    return _convert_level(
        request,
        transcoder or FfmpegTranscoder(),
        filesystem or LocalFileSystem(),
        listener or _NullListener(),
        request.output_root.resolve(),
    )


def run_conversion(
    request: ConversionRequest,
    *,
    transcoder: Transcoder | None = None,
    filesystem: FileSystem | None = None,
    listener: ConversionListener | None = None,
) -> TreeReport:
    """Use-case: convert a tree, then compare sizes when requested."""
    filesystem = filesystem or LocalFileSystem()
    root = convert_tree(
        request,
        transcoder=transcoder,
        filesystem=filesystem,
        listener=listener,
    )
    comparison = None
    if request.compare:
        try:
            comparison = compare_tree_sizes(
                request.input_root, request.output_root, filesystem
            )
        except FilesystemError as exc:
            logger.warning("size comparison skipped: %s", exc)
    return TreeReport(root=root, size_comparison=comparison)


def _convert_level(
    request: ConversionRequest,
    transcoder: Transcoder,
    fs: FileSystem,
    listener: ConversionListener,
    output_top: Path,
) -> DirectoryResult:
    result = DirectoryResult(
        input_root=request.input_root, output_root=request.output_root
    )
    try:
        entries = sorted(fs.list_dir(request.input_root), key=lambda p: p.name)
        if not fs.is_dir(request.output_root):
            if not request.dry_run:
                fs.make_dirs(request.output_root)
            result.created_output_dir = True
            logger.info(
                "%screate directory %s",
                "[dry-run] " if request.dry_run else "",
                request.output_root,
            )
            listener.on_directory_created(request.output_root, request.dry_run)
    except FilesystemError as exc:
        result.error = str(exc)
        logger.error("skipping %s: %s", request.input_root, exc)
        listener.on_directory_failed(result)
        return result

    subdirectories: list[Path] = []
    for entry in entries:
        if fs.is_dir(entry):
            # The output tree may live inside the input tree (the CLI default).
            if entry.resolve() == output_top:
                logger.debug("not descending into output tree %s", entry)
            else:
                subdirectories.append(entry)
            continue
        file_result = _process_file(entry, request, transcoder, fs)
        result.files.append(file_result)
        listener.on_file(file_result)

    if request.recurse:
        for subdirectory in subdirectories:
            child = _convert_level(
                request.child(subdirectory.name),
                transcoder,
                fs,
                listener,
                output_top,
            )
            result.children.append(child)

    logger.info("finished %s", request.input_root)
    listener.on_directory_done(result)
    return result


def _process_file(
    source: Path,
    request: ConversionRequest,
    transcoder: Transcoder,
    fs: FileSystem,
) -> FileResult:
    classification = classify_file(source.name, request.target_format)
    destination = plan_output_path(
        source.name, request.output_root, request.target_format
    )

    if fs.exists(destination):
        logger.info("%s already exists", destination)
        return FileResult(
            source=source,
            destination=destination,
            classification=classification,
            outcome=FileOutcome.SKIPPED_EXISTS,
            action=f"{destination} already exists",
            dry_run=request.dry_run,
        )

    if classification is FileClassification.CONVERTIBLE_AUDIO:
        outcome = FileOutcome.CONVERTED
        action = transcoder.describe(source, destination)
    else:
        outcome = FileOutcome.COPIED
        action = f"copy {source} -> {destination}"

    if request.dry_run:
        logger.info("[dry-run] %s", action)
        return FileResult(
            source=source,
            destination=destination,
            classification=classification,
            outcome=outcome,
            action=action,
            dry_run=True,
        )

    logger.info("%s", action)
    try:
        if outcome is FileOutcome.CONVERTED:
            transcoder.transcode(source, destination)
        else:
            fs.copy_file(source, destination)
    except (TranscodeError, FilesystemError) as exc:
        logger.warning("failed %s: %s", source, exc)
        _discard_partial(destination, fs)
        return FileResult(
            source=source,
            destination=destination,
            classification=classification,
            outcome=FileOutcome.FAILED,
            action=action,
            error=str(exc),
        )
    except BaseException:
        # Interrupts must not leave a partial output behind.
        _discard_partial(destination, fs)
        raise
    return FileResult(
        source=source,
        destination=destination,
        classification=classification,
        outcome=outcome,
        action=action,
    )


def _discard_partial(destination: Path, fs: FileSystem) -> None:
    if not fs.exists(destination):
        return
    try:
        fs.remove(destination)
    except FilesystemError as exc:
        logger.error("could not remove partial output %s: %s", destination, exc)
