"""Capabilities consumed by the pipeline: storage and frame decoding.

Both are injected into the orchestrator so the core can be built and
tested without a real filesystem layout or a video backend.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from .errors import StorageError

logger = logging.getLogger(__name__)


@runtime_checkable
class StorageCapability(Protocol):
    def exists(self, path: Path) -> bool: ...

    def make_directory(self, path: Path) -> None: ...

    def move_file(self, source: Path, destination: Path) -> None: ...


@runtime_checkable
class FrameDecoder(Protocol):
    async def extract_frames(
        self,
        video_reference: str,
        timestamps_ms: Sequence[int],
        output_directory: Path,
        quality: float,
        start_index: int = 1,
    ) -> list[Path]:
        """Write one image per decodable timestamp, numbered from start_index.

        Timestamps that cannot be rendered are skipped, so the returned list
        may be shorter than timestamps_ms. Raises when the video itself
        cannot be opened.
        """
        ...


class LocalStorage:
    """StorageCapability backed by the local filesystem."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def make_directory(self, path: Path) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create directory {path}: {e}") from e
        logger.debug(f"Created directory {path}")

    def move_file(self, source: Path, destination: Path) -> None:
        try:
            os.replace(source, destination)
        except OSError as e:
            raise StorageError(f"Cannot move {source} to {destination}: {e}") from e
