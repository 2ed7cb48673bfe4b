"""Shared enums and type aliases for tree conversion."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from audio_tree_converter.errors import InvalidFormatError

type PathLike = str | Path


class AudioFormat(Enum):
    """Closed set of audio extensions the converter understands."""

    AIFF = ".aiff"
    FLAC = ".flac"
    M4A = ".m4a"
    MP3 = ".mp3"
    MP4 = ".mp4"
    WAV = ".wav"
    OGG = ".ogg"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def from_extension(cls, extension: str) -> AudioFormat | None:
        """Return the member matching ``extension`` exactly, or ``None``."""
        for member in cls:
            if member.value == extension:
                return member
        return None

    @classmethod
    def parse(cls, value: str | AudioFormat) -> AudioFormat:
        """Parse user input such as ``mp3``, ``.mp3`` or ``.MP3``.

        Raises
        ------
        InvalidFormatError
            If ``value`` does not name a supported format.
        """
        if isinstance(value, AudioFormat):
            return value
        normalized = value.strip().lower()
        if normalized and not normalized.startswith("."):
            normalized = f".{normalized}"
        member = cls.from_extension(normalized)
        if member is None:
            supported = ", ".join(m.value for m in cls)
            raise InvalidFormatError(
                f"Unsupported format '{value}'. Choose one of: {supported}."
            )
        return member


class FileClassification(Enum):
    """How a single file is treated by the converter."""

    ALREADY_TARGET_FORMAT = "already_target_format"
    CONVERTIBLE_AUDIO = "convertible_audio"
    OPAQUE = "opaque"
