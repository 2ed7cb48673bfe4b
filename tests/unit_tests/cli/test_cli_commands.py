"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import FakeTranscoder, write_tree

from audio_tree_converter.adapters import transcoders as transcoders_module
from audio_tree_converter.cli import cli as cli_module
from audio_tree_converter.errors import MissingTranscoderError
from audio_tree_converter.types import AudioFormat

runner = CliRunner()


@pytest.fixture
def patched_transcoder(monkeypatch: pytest.MonkeyPatch) -> FakeTranscoder:
    """Route every ffmpeg invocation through a fake."""
    fake = FakeTranscoder()
    monkeypatch.setattr(
        transcoders_module.FfmpegTranscoder,
        "transcode",
        lambda self, src, dst: fake.transcode(src, dst),
    )
    return fake


def test_help_shows_options_and_transcoder_help(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """``--help`` prints usage and then the transcoder's own help."""
    monkeypatch.setattr(
        transcoders_module.FfmpegTranscoder,
        "help_text",
        lambda self: "ffmpeg usage: ffmpeg [options]",
    )
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "--dry-run" in result.output
    assert "ffmpeg usage" in result.output


def test_help_short_circuits_conversion(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``-h`` wins over every other flag and converts nothing."""
    monkeypatch.setattr(
        transcoders_module.FfmpegTranscoder,
        "help_text",
        lambda self: "ffmpeg usage",
    )
    write_tree(tmp_path / "in", {"a.wav": b"a"})
    result = runner.invoke(
        cli_module.app,
        ["-i", str(tmp_path / "in"), "-o", str(tmp_path / "out"), "-h"],
    )
    assert result.exit_code == 0
    assert not (tmp_path / "out").exists()


def test_help_survives_missing_transcoder(monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing transcoder does not break help output."""

    def missing(self: object) -> str:
        raise MissingTranscoderError("ffmpeg not found")

    monkeypatch.setattr(transcoders_module.FfmpegTranscoder, "help_text", missing)
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "ffmpeg not found" in result.output


def test_invalid_format_is_rejected_before_traversal(tmp_path: Path) -> None:
    """Unsupported formats fail at argument parsing time."""
    result = runner.invoke(
        cli_module.app,
        ["-i", str(tmp_path), "-o", str(tmp_path / "out"), "-f", "xyz"],
    )
    assert result.exit_code == 2
    assert not (tmp_path / "out").exists()


def test_cli_forwards_arguments_to_api(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Flags reach the API layer as typed values."""
    called: dict[str, object] = {}

    def fake_convert(**kwargs: object) -> object:
        called.update(kwargs)
        from audio_tree_converter.application.results import (
            DirectoryResult,
            TreeReport,
        )

        return TreeReport(root=DirectoryResult(tmp_path, tmp_path / "out"))

    import audio_tree_converter.api as api_module

    monkeypatch.setattr(api_module, "convert_audio_tree", fake_convert)
    result = runner.invoke(
        cli_module.app,
        ["-i", str(tmp_path), "-o", str(tmp_path / "out"), "-f", "flac", "-r", "-d", "-c"],
    )

    assert result.exit_code == 0, result.output
    assert called["input_root"] == tmp_path
    assert called["output_root"] == tmp_path / "out"
    assert called["target_format"] is AudioFormat.FLAC
    assert called["recurse"] is True
    assert called["dry_run"] is True
    assert called["compare"] is True
    assert called["transcoder_executable"] == "ffmpeg"


def test_transcoder_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The transcoder executable can be configured by environment."""
    called: dict[str, object] = {}

    def fake_convert(**kwargs: object) -> object:
        called.update(kwargs)
        from audio_tree_converter.application.results import (
            DirectoryResult,
            TreeReport,
        )

        return TreeReport(root=DirectoryResult(tmp_path, tmp_path / "out"))

    import audio_tree_converter.api as api_module

    monkeypatch.setattr(api_module, "convert_audio_tree", fake_convert)
    result = runner.invoke(
        cli_module.app,
        ["-i", str(tmp_path)],
        env={cli_module.TRANSCODER_ENV: "/opt/ffmpeg/bin/ffmpeg"},
    )
    assert result.exit_code == 0, result.output
    assert called["transcoder_executable"] == "/opt/ffmpeg/bin/ffmpeg"


def test_end_to_end_run_and_rerun(
    tmp_path: Path, patched_transcoder: FakeTranscoder
) -> None:
    """Convert, copy, and on rerun only report existing outputs."""
    write_tree(tmp_path / "in", {"song.flac": b"f", "cover.jpg": b"c", "sub/x.wav": b"x"})
    args = ["-i", str(tmp_path / "in"), "-o", str(tmp_path / "out"), "-r", "-c"]

    first = runner.invoke(cli_module.app, args)
    assert first.exit_code == 0, first.output
    assert (tmp_path / "out" / "song.mp3").exists()
    assert (tmp_path / "out" / "sub" / "x.mp3").exists()
    assert "Converted: 2, copied: 1" in first.output
    assert "Output is" in first.output

    second = runner.invoke(cli_module.app, args)
    assert second.exit_code == 0, second.output
    assert "already exists" in second.output
    assert "skipped (exists): 3" in second.output
    assert len(patched_transcoder.calls) == 2


def test_dry_run_with_compare_prints_no_comparison(
    tmp_path: Path, patched_transcoder: FakeTranscoder
) -> None:
    """An empty output tree suppresses the size comparison."""
    write_tree(tmp_path / "in", {"song.flac": b"f"})
    result = runner.invoke(
        cli_module.app,
        ["-i", str(tmp_path / "in"), "-o", str(tmp_path / "out"), "-d", "-c"],
    )
    assert result.exit_code == 0, result.output
    assert "[dry-run]" in result.output
    assert "Output is" not in result.output
    assert not (tmp_path / "out").exists()
    assert patched_transcoder.calls == []


def test_failed_file_sets_exit_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Any per-file failure makes the process exit with 1."""
    fake = FakeTranscoder(fail_on={"bad.wav"})
    monkeypatch.setattr(
        transcoders_module.FfmpegTranscoder,
        "transcode",
        lambda self, src, dst: fake.transcode(src, dst),
    )
    write_tree(tmp_path / "in", {"bad.wav": b"x", "good.wav": b"y"})
    result = runner.invoke(
        cli_module.app, ["-i", str(tmp_path / "in"), "-o", str(tmp_path / "out")]
    )
    assert result.exit_code == 1
    assert "cannot decode" in result.output
    assert (tmp_path / "out" / "good.mp3").exists()


def test_missing_transcoder_exit_code(tmp_path: Path) -> None:
    """A missing transcoder is reported with its own exit code."""
    write_tree(tmp_path / "in", {"a.wav": b"a"})
    result = runner.invoke(
        cli_module.app,
        [
            "-i",
            str(tmp_path / "in"),
            "-o",
            str(tmp_path / "out"),
            "--transcoder",
            "definitely-not-a-transcoder-binary",
        ],
    )
    assert result.exit_code == MissingTranscoderError.exit_code
    assert "MissingTranscoderError" in result.output


def test_unexpected_error_exits_with_one(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Errors without their own exit code are reported cleanly with code 1."""

    def boom(**_: object) -> object:
        raise RuntimeError("unexpected")

    import audio_tree_converter.api as api_module

    monkeypatch.setattr(api_module, "convert_audio_tree", boom)
    result = runner.invoke(cli_module.app, ["-i", str(tmp_path)])
    assert result.exit_code == 1
    assert "RuntimeError: unexpected" in result.output
