"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from audio_tree_converter.types import AudioFormat


class ConversionRequestConfig(BaseModel):
    """Validated input for a tree conversion run."""

    model_config = ConfigDict(extra="forbid")

    input_root: Path = Path(".")
    output_root: Path = Path("output")
    target_format: AudioFormat = AudioFormat.MP3
    recurse: bool = False
    dry_run: bool = False
    compare: bool = False

    @field_validator("target_format", mode="before")
    @classmethod
    def _parse_target_format(cls, value: object) -> AudioFormat:
        if isinstance(value, AudioFormat):
            return value
        if not isinstance(value, str):
            raise ValueError("target_format must be a string or AudioFormat.")
        return AudioFormat.parse(value)

    @field_validator("input_root", "output_root")
    @classmethod
    def _validate_root(cls, value: Path) -> Path:
        if not str(value).strip():
            raise ValueError("root paths cannot be empty.")
        return value
