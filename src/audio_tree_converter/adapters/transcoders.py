"""Transcoder adapters implementing the application ``Transcoder`` port."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

from audio_tree_converter.errors import MissingTranscoderError, TranscodeError

logger = logging.getLogger(__name__)

DEFAULT_TRANSCODER = "ffmpeg"


class FfmpegTranscoder:
    """Invoke an ffmpeg-compatible tool as ``<tool> -i <input> <output>``."""

    def __init__(self, executable: str = DEFAULT_TRANSCODER) -> None:
        self.executable = executable

    def command(self, input_path: Path, output_path: Path) -> list[str]:
        """Compose the transcoder command line."""
        return [self.executable, "-i", str(input_path), str(output_path)]

    def describe(self, input_path: Path, output_path: Path) -> str:
        return shlex.join(self.command(input_path, output_path))

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def transcode(self, input_path: Path, output_path: Path) -> None:
        """Transcode one file, blocking until the tool exits.

        Parameters
        ----------
        input_path : Path
            Source audio file.
        output_path : Path
            Destination path; its extension selects the output format.

        Raises
        ------
        MissingTranscoderError
            If the executable cannot be found.
        TranscodeError
            If the tool exits non-zero or leaves no output file.
        """
        cmd = self.command(input_path, output_path)
        logger.debug("running %s", shlex.join(cmd))
        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise MissingTranscoderError(
                f"Transcoder '{self.executable}' not found in PATH. Please install ffmpeg."
            ) from exc
        except OSError as exc:
            raise TranscodeError(f"Could not run '{self.executable}': {exc}") from exc

        if result.returncode != 0:
            detail = _last_line(result.stderr) or "unknown error"
            raise TranscodeError(
                f"{self.executable} exited with code {result.returncode}: {detail}"
            )
        if not output_path.exists():
            raise TranscodeError(f"{self.executable} produced no output at {output_path}")

    def help_text(self) -> str:
        """Return the transcoder's own ``-h`` output."""
        try:
            result = subprocess.run(
                [self.executable, "-h"],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise MissingTranscoderError(
                f"Transcoder '{self.executable}' not found in PATH."
            ) from exc
        return result.stdout or result.stderr


def _last_line(text: str | None) -> str:
    lines = [line for line in (text or "").splitlines() if line.strip()]
    return lines[-1].strip() if lines else ""
