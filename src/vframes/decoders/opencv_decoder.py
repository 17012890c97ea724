"""OpenCV-backed FrameDecoder: seek to each timestamp, encode, write atomically."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence
from urllib.parse import unquote, urlparse

from vframes.core.capabilities import LocalStorage, StorageCapability
from vframes.core.errors import DecoderError, StorageError

logger = logging.getLogger(__name__)

UNSUPPORTED_SCHEMES = ("ph://", "assets-library://")


def resolve_video_path(video_reference: str) -> Path:
    """Turn a plain path or file:// URI into a local Path."""
    if video_reference.startswith(UNSUPPORTED_SCHEMES):
        raise DecoderError(
            "UNSUPPORTED", "Photo library references are not supported; copy the video to local storage first"
        )
    if video_reference.startswith("file://"):
        parsed = urlparse(video_reference)
        if not parsed.path:
            raise DecoderError("INVALID_URL", f"Invalid video URL: {video_reference}")
        return Path(unquote(parsed.path))
    return Path(video_reference)


def encode_params(output_format: str, quality: float) -> tuple[str, list[int]]:
    """cv2.imencode extension and flags for a quality in (0, 1]."""
    import cv2

    if output_format == "jpg":
        return ".jpg", [cv2.IMWRITE_JPEG_QUALITY, round(quality * 100)]
    # PNG is lossless; quality only trades file size for encode time.
    return ".png", [cv2.IMWRITE_PNG_COMPRESSION, round((1.0 - quality) * 9)]


class OpenCVFrameDecoder:
    """Decodes frames with cv2.VideoCapture on a worker thread."""

    def __init__(self, storage: StorageCapability | None = None, output_format: str = "png"):
        if output_format not in ("png", "jpg"):
            raise ValueError(f"Unsupported output format: {output_format}")
        self.storage = storage or LocalStorage()
        self.output_format = output_format

    async def extract_frames(
        self,
        video_reference: str,
        timestamps_ms: Sequence[int],
        output_directory: Path,
        quality: float,
        start_index: int = 1,
    ) -> list[Path]:
        return await asyncio.to_thread(
            self._extract_sync,
            video_reference,
            list(timestamps_ms),
            Path(output_directory),
            quality,
            start_index,
        )

    def _extract_sync(
        self,
        video_reference: str,
        timestamps_ms: list[int],
        output_directory: Path,
        quality: float,
        start_index: int,
    ) -> list[Path]:
        import cv2

        video_path = resolve_video_path(video_reference)
        cap = cv2.VideoCapture(str(video_path))
        if not cap.isOpened():
            cap.release()
            raise DecoderError("OPEN_FAILED", f"Cannot open video: {video_path}")

        ext, params = encode_params(self.output_format, quality)
        written: list[Path] = []
        try:
            for ts in timestamps_ms:
                cap.set(cv2.CAP_PROP_POS_MSEC, float(ts))
                ret, frame = cap.read()
                if not ret or frame is None:
                    logger.warning(f"No frame at {ts / 1000:.3f}s in {video_path.name}, skipping")
                    continue

                ok, encoded = cv2.imencode(ext, frame, params)
                if not ok:
                    logger.warning(f"Encoding failed at {ts / 1000:.3f}s, skipping")
                    continue

                fname = f"frame_{start_index + len(written):05d}{ext}"
                final_path = output_directory / fname
                tmp_path = output_directory / f".{fname}.tmp"
                try:
                    encoded.tofile(str(tmp_path))
                    self.storage.move_file(tmp_path, final_path)
                except (OSError, StorageError) as e:
                    logger.warning(f"Could not write {fname}: {e}")
                    tmp_path.unlink(missing_ok=True)
                    continue
                written.append(final_path)
        finally:
            cap.release()

        return written
