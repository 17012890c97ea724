"""Read duration and stream metadata from a video file."""

from __future__ import annotations

import logging

from vframes.core.contracts import VideoInfo
from vframes.core.errors import DecoderError, ProbeError
from vframes.decoders.opencv_decoder import resolve_video_path

logger = logging.getLogger(__name__)


def probe_video(video_reference: str) -> VideoInfo:
    """Probe a video with cv2.VideoCapture.

    Duration is frame_count / fps; containers that report no fps raise
    ProbeError since no duration can be derived.
    """
    import cv2

    try:
        video_path = resolve_video_path(video_reference)
    except DecoderError as e:
        raise ProbeError(str(e)) from e
    if not video_path.exists():
        raise ProbeError(f"Video not found: {video_path}")

    cap = cv2.VideoCapture(str(video_path))
    try:
        if not cap.isOpened():
            raise ProbeError(f"Cannot open video: {video_path}")
        fps = cap.get(cv2.CAP_PROP_FPS)
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
    finally:
        cap.release()

    if fps <= 0:
        raise ProbeError(f"Video reports no frame rate: {video_path}")

    duration = max(frame_count, 0) / fps
    logger.debug(f"Probed {video_path.name}: {frame_count} frames @ {fps:.2f} fps = {duration:.2f}s")
    return VideoInfo(
        path=video_path,
        duration_seconds=duration,
        fps=fps,
        frame_count=frame_count,
        width=width,
        height=height,
    )
