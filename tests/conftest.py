"""Shared pytest configuration, marker assignment and conversion fakes."""

from __future__ import annotations

from pathlib import Path

import pytest

from audio_tree_converter.errors import TranscodeError


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


class FakeTranscoder:
    """Write a marker payload instead of running ffmpeg."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[tuple[Path, Path]] = []

    def describe(self, input_path: Path, output_path: Path) -> str:
        return f"fake -i {input_path} {output_path}"

    def transcode(self, input_path: Path, output_path: Path) -> None:
        self.calls.append((input_path, output_path))
        if input_path.name in self.fail_on:
            raise TranscodeError(f"cannot decode {input_path.name}")
        output_path.write_bytes(b"encoded:" + input_path.read_bytes())


def write_tree(root: Path, files: dict[str, bytes]) -> None:
    """Create ``files`` (relative path -> content) under ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Map every path under ``root`` to its bytes (``None`` for directories)."""
    return {
        str(path.relative_to(root)): None if path.is_dir() else path.read_bytes()
        for path in sorted(root.rglob("*"))
    }


@pytest.fixture
def fake_transcoder() -> FakeTranscoder:
    return FakeTranscoder()
