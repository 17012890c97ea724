"""Shared pytest fixtures for vframes tests."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import pytest

from vframes.core.capabilities import LocalStorage
from vframes.core.errors import DecoderError, StorageError


class FakeDecoder:
    """FrameDecoder stub that records calls and writes empty frame files.

    fail_batches: 1-based batch numbers whose call raises DecoderError.
    skip_timestamps: timestamps silently left out of the result.
    """

    def __init__(self, fail_batches: Sequence[int] = (), skip_timestamps: Sequence[int] = ()):
        self.fail_batches = set(fail_batches)
        self.skip_timestamps = set(skip_timestamps)
        self.calls: list[dict] = []

    async def extract_frames(self, video_reference, timestamps_ms, output_directory, quality, start_index=1):
        self.calls.append({
            "video_reference": video_reference,
            "timestamps": list(timestamps_ms),
            "output_directory": output_directory,
            "quality": quality,
            "start_index": start_index,
        })
        if len(self.calls) in self.fail_batches:
            raise DecoderError("EXTRACTION_ERROR", f"batch {len(self.calls)} unreadable")

        paths = []
        for ts in timestamps_ms:
            if ts in self.skip_timestamps:
                continue
            path = Path(output_directory) / f"frame_{start_index + len(paths):05d}.png"
            path.write_bytes(b"\x89PNG")
            paths.append(path)
        return paths


class FailingStorage(LocalStorage):
    """LocalStorage whose directory creation always fails."""

    def exists(self, path: Path) -> bool:
        return False

    def make_directory(self, path: Path) -> None:
        raise StorageError(f"Cannot create directory {path}: read-only filesystem")


@pytest.fixture
def storage() -> LocalStorage:
    return LocalStorage()


@pytest.fixture
def fake_decoder() -> FakeDecoder:
    return FakeDecoder()


@pytest.fixture
def make_decoder():
    """Factory for FakeDecoder with failing or skipped batches."""
    return FakeDecoder


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    return tmp_path / "Screenshots"


@pytest.fixture
def test_video(tmp_path: Path) -> Path:
    """Create a 3 second 30 fps test video."""
    cv2 = pytest.importorskip("cv2")
    video_path = tmp_path / "test clip.mp4"
    fourcc = cv2.VideoWriter_fourcc(*"mp4v")
    writer = cv2.VideoWriter(str(video_path), fourcc, 30.0, (160, 120))
    for i in range(90):
        frame = np.random.randint(50, 200, (120, 160, 3), dtype=np.uint8)
        writer.write(frame)
    writer.release()
    return video_path
