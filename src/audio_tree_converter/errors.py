"""Exception hierarchy for audio tree conversion."""

from __future__ import annotations


class AudioTreeError(Exception):
    """Base error for all conversion failures."""

    exit_code = 1


class MissingTranscoderError(AudioTreeError):
    """The external transcoder executable cannot be found."""

    exit_code = 3


class TranscodeError(AudioTreeError):
    """The transcoder ran but failed or produced no output file."""


class FilesystemError(AudioTreeError):
    """A filesystem operation (list, create, copy, stat) failed."""


class InvalidFormatError(AudioTreeError, ValueError):
    """Requested target format is not a supported audio extension."""

    exit_code = 2
