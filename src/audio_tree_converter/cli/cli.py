#!/usr/bin/env python3
"""
audio_tree_converter.cli.cli

Typer-based CLI for converting a directory tree of audio files.

Examples
--------
Convert everything under ``music/`` to mp3, descending into subfolders:

    convert-audio-tree -i music -o converted -f mp3 -r

Preview what would happen and compare sizes afterwards:

    convert-audio-tree -i music -d -c
"""

from __future__ import annotations

import logging
import os
import traceback
from pathlib import Path

import typer

from audio_tree_converter.adapters.transcoders import DEFAULT_TRANSCODER, FfmpegTranscoder
from audio_tree_converter.application.results import (
    DirectoryResult,
    FileOutcome,
    FileResult,
    TreeReport,
)
from audio_tree_converter.errors import AudioTreeError, MissingTranscoderError
from audio_tree_converter.sizes import format_size
from audio_tree_converter.types import AudioFormat

TRANSCODER_ENV = "AUDIO_TREE_TRANSCODER"

app = typer.Typer(
    name="convert-audio-tree",
    help="Convert audio files in a directory tree with ffmpeg and mirror everything else.",
    add_completion=False,
)

FORMAT_HELP = "Output format: " + ", ".join(f.value for f in AudioFormat) + "."


# -----------------------------
# Console output
# -----------------------------
def _dry(dry_run: bool) -> str:
    return "[dry-run] " if dry_run else ""


class EchoListener:
    """Print conversion progress as coloured console lines."""

    def on_directory_created(self, path: Path, dry_run: bool) -> None:
        typer.secho(f"{_dry(dry_run)}create directory {path}", fg=typer.colors.CYAN)

    def on_file(self, result: FileResult) -> None:
        if result.outcome is FileOutcome.SKIPPED_EXISTS:
            typer.secho(f"⚠ {result.action}, skipping", fg=typer.colors.YELLOW)
        elif result.outcome is FileOutcome.FAILED:
            typer.secho(f"✗ {result.source}: {result.error}", fg=typer.colors.RED, err=True)
        else:
            typer.secho(f"{_dry(result.dry_run)}{result.action}", fg=typer.colors.GREEN)

    def on_directory_done(self, result: DirectoryResult) -> None:
        typer.secho(f"✓ Processed {result.input_root}", fg=typer.colors.GREEN, bold=True)

    def on_directory_failed(self, result: DirectoryResult) -> None:
        typer.secho(f"✗ {result.error}", fg=typer.colors.RED, err=True)


def _print_summary(report: TreeReport) -> None:
    counts = report.root.counts()
    typer.echo(
        "Converted: {converted}, copied: {copied}, skipped (exists): {skipped}, "
        "failed: {failed}".format(
            converted=counts[FileOutcome.CONVERTED],
            copied=counts[FileOutcome.COPIED],
            skipped=counts[FileOutcome.SKIPPED_EXISTS],
            failed=counts[FileOutcome.FAILED],
        )
    )
    comparison = report.size_comparison
    if comparison is not None:
        typer.echo(f"Input size:  {format_size(comparison.input_bytes)}")
        typer.echo(f"Output size: {format_size(comparison.output_bytes)}")
        typer.echo(f"Output is {comparison.ratio_percent:.1f}% of input")


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly fatal error and return the process exit code."""
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Option callbacks
# -----------------------------
def _help_callback(ctx: typer.Context, value: bool) -> None:
    """Show this tool's usage followed by the transcoder's own help."""
    if not value or ctx.resilient_parsing:
        return
    typer.echo(ctx.get_help())
    executable = os.getenv(TRANSCODER_ENV, DEFAULT_TRANSCODER)
    typer.echo(f"\n--- {executable} -h ---\n")
    try:
        typer.echo(FfmpegTranscoder(executable).help_text())
    except MissingTranscoderError as exc:
        typer.secho(str(exc), fg=typer.colors.YELLOW, err=True)
    raise typer.Exit()


def _parse_format(value: str) -> AudioFormat:
    try:
        return AudioFormat.parse(value)
    except AudioTreeError as exc:
        raise typer.BadParameter(str(exc)) from exc


# -----------------------------
# Command
# -----------------------------
@app.command(context_settings={"help_option_names": []})
def convert_cmd(
    input_root: Path = typer.Option(
        Path("."),
        "--input",
        "-i",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory to scan for audio files.",
    ),
    output_root: Path = typer.Option(
        Path("output"), "--output", "-o", help="Directory receiving the mirrored tree."
    ),
    target_format: str = typer.Option(
        AudioFormat.MP3.value,
        "--format",
        "-f",
        callback=_parse_format,
        help=FORMAT_HELP,
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Describe actions without changing anything."
    ),
    recurse: bool = typer.Option(
        False, "--recurse", "-r", help="Descend into subdirectories."
    ),
    compare: bool = typer.Option(
        False, "--compare", "-c", help="Print input vs output size after the run."
    ),
    transcoder: str = typer.Option(
        DEFAULT_TRANSCODER,
        "--transcoder",
        envvar=TRANSCODER_ENV,
        help="Transcoder executable, invoked as '<tool> -i <input> <output>'.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    show_help: bool = typer.Option(
        False,
        "--help",
        "-h",
        is_eager=True,
        expose_value=False,
        callback=_help_callback,
        help="Show this message and the transcoder's help, then exit.",
    ),
) -> None:
    """Convert audio files under INPUT into OUTPUT, copying other files as-is.

    Notes
    -----
    - Existing outputs are never overwritten, so re-running is safe.
    - Files already in the target format are copied, not re-encoded.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        from audio_tree_converter.api import convert_audio_tree

        report = convert_audio_tree(
            input_root=input_root,
            output_root=output_root,
            target_format=target_format,
            recurse=recurse,
            dry_run=dry_run,
            compare=compare,
            transcoder_executable=transcoder,
            listener=EchoListener(),
        )
    except Exception as exc:
        # AudioTreeError carries its own exit code; anything else exits 1.
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    _print_summary(report)
    if report.failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
