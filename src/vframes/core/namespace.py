"""Per-run output folder naming and creation."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import Callable

from .capabilities import StorageCapability

logger = logging.getLogger(__name__)

FALLBACK_NAME = "video"
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def epoch_millis() -> int:
    return int(time.time() * 1000)


def folder_name_for(video_reference: str) -> str:
    """Filesystem-safe base name for a video: 'My Trip.MOV' -> 'My_Trip'."""
    segment = video_reference.split("/")[-1]
    stem = segment.rsplit(".", 1)[0] if "." in segment else segment
    if not stem:
        # ".hidden" has no stem before its only dot
        stem = segment
    name = _UNSAFE_CHARS.sub("_", stem)
    return name or FALLBACK_NAME


class OutputNamespace:
    """Creates a unique output directory under base_dir for each run."""

    def __init__(
        self,
        storage: StorageCapability,
        base_dir: Path,
        clock: Callable[[], int] = epoch_millis,
    ):
        self.storage = storage
        self.base_dir = Path(base_dir)
        self.clock = clock

    def folder_path(self, video_reference: str) -> Path:
        return self.base_dir / f"{folder_name_for(video_reference)}_{self.clock()}"

    def create_folder(self, video_reference: str, target: Path | None = None) -> Path:
        """Create and return a fresh directory for this video.

        target is a path already obtained from folder_path; when omitted a
        new one is derived. Raises StorageError when the directory cannot
        be created.
        """
        if target is None:
            target = self.folder_path(video_reference)
        self.storage.make_directory(target)
        logger.info(f"Output directory: {target}")
        return target
