"""Typed request objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from audio_tree_converter.types import AudioFormat


@dataclass(frozen=True)
class ConversionRequest:
    """One directory level of a tree conversion.

    Parameters
    ----------
    input_root : Path
        Directory whose direct entries are processed.
    output_root : Path
        Mirror directory receiving converted and copied files.
    target_format : AudioFormat
        Format every convertible audio file is transcoded to.
    recurse : bool, default=False
        Descend into subdirectories of ``input_root``.
    dry_run : bool, default=False
        Describe mutating actions instead of performing them.
    compare : bool, default=False
        Report input/output tree sizes after the top-level run.
    """

    input_root: Path
    output_root: Path
    target_format: AudioFormat = AudioFormat.MP3
    recurse: bool = False
    dry_run: bool = False
    compare: bool = False

    def child(self, name: str) -> ConversionRequest:
        """Derive the request for subdirectory ``name``; flags are unchanged."""
        return replace(
            self,
            input_root=self.input_root / name,
            output_root=self.output_root / name,
        )
