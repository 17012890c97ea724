"""Batch extraction orchestrator.

Splits the planned timestamps into fixed-size batches and hands them to the
frame decoder one at a time. A batch whose decoder call raises is logged and
skipped; only failures outside the batch loop (output directory, planning)
turn the outcome into a failure.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Sequence

from .capabilities import FrameDecoder, StorageCapability
from .contracts import ExtractionOutcome, ExtractionRequest
from .namespace import OutputNamespace
from .planner import plan_timestamps

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10
DEFAULT_QUALITY = 1.0

ProgressCallback = Callable[[str], None]


def make_batches(timestamps: Sequence[int], batch_size: int = DEFAULT_BATCH_SIZE) -> list[list[int]]:
    """Consecutive, order-preserving slices of at most batch_size items."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    return [list(timestamps[i:i + batch_size]) for i in range(0, len(timestamps), batch_size)]


class BatchExtractor:
    """Drives a FrameDecoder over batches of timestamps for one run at a time."""

    def __init__(
        self,
        decoder: FrameDecoder,
        storage: StorageCapability,
        batch_size: int = DEFAULT_BATCH_SIZE,
        quality: float = DEFAULT_QUALITY,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if not 0.0 < quality <= 1.0:
            raise ValueError(f"quality must be in (0, 1], got {quality}")
        self.decoder = decoder
        self.storage = storage
        self.batch_size = batch_size
        self.quality = quality

    async def run(
        self,
        request: ExtractionRequest,
        namespace: OutputNamespace,
        on_progress: ProgressCallback | None = None,
    ) -> ExtractionOutcome:
        """Create the output folder, plan timestamps, then extract."""
        output_directory = None
        try:
            output_directory = namespace.folder_path(request.video_reference)
            namespace.create_folder(request.video_reference, output_directory)
        except Exception as e:
            logger.error(f"Setup failed for {request.video_reference}: {e}")
            return ExtractionOutcome(
                succeeded=False, error_message=str(e) or repr(e), output_directory=output_directory
            )

        try:
            timestamps = plan_timestamps(
                request.duration_seconds, request.sampling_mode, request.rate
            )
        except ValueError as e:
            logger.error(f"Planning failed for {request.video_reference}: {e}")
            return ExtractionOutcome(
                succeeded=False, error_message=str(e), output_directory=output_directory
            )

        return await self.extract(request, output_directory, timestamps, on_progress)

    async def extract(
        self,
        request: ExtractionRequest,
        output_directory: Path,
        timestamps: Sequence[int],
        on_progress: ProgressCallback | None = None,
    ) -> ExtractionOutcome:
        """Extract every batch in order and return the tally.

        Never raises: setup problems come back as succeeded=False.
        """
        directory: Path | None = None
        planned = 0
        t0 = time.time()
        try:
            directory = Path(output_directory)
            planned = len(timestamps)
            if not self.storage.exists(directory):
                self.storage.make_directory(directory)

            batches = make_batches(timestamps, self.batch_size)
            logger.info(
                f"Extracting {planned} frames from {request.video_reference} "
                f"in {len(batches)} batches"
            )
            _emit(on_progress, f"Preparing to extract {planned} frames...")

            frame_paths: list[Path] = []
            failed_batches = 0
            for batch_no, batch in enumerate(batches, 1):
                try:
                    paths = await self.decoder.extract_frames(
                        request.video_reference,
                        batch,
                        directory,
                        self.quality,
                        start_index=len(frame_paths) + 1,
                    )
                except Exception as e:
                    failed_batches += 1
                    logger.error(
                        f"Batch {batch_no}/{len(batches)} "
                        f"({batch[0]}-{batch[-1]} ms) failed: {e}"
                    )
                else:
                    frame_paths.extend(Path(p) for p in paths)
                    logger.debug(
                        f"Batch {batch_no}/{len(batches)}: {len(paths)}/{len(batch)} frames"
                    )
                _emit(on_progress, f"Extracted {len(frame_paths)} / {planned} frames...")
        except Exception as e:
            logger.error(f"Extraction of {request.video_reference} aborted: {e}")
            return ExtractionOutcome(
                succeeded=False,
                error_message=str(e) or repr(e),
                output_directory=directory,
                planned_count=planned,
                elapsed_seconds=time.time() - t0,
            )

        elapsed = time.time() - t0
        logger.info(
            f"Extracted {len(frame_paths)}/{planned} frames to {directory} "
            f"in {elapsed:.1f}s ({failed_batches} failed batches)"
        )
        return ExtractionOutcome(
            succeeded=True,
            extracted_count=len(frame_paths),
            output_directory=directory,
            planned_count=planned,
            failed_batches=failed_batches,
            frame_paths=frame_paths,
            elapsed_seconds=elapsed,
        )


def _emit(on_progress: ProgressCallback | None, message: str) -> None:
    if on_progress is not None:
        on_progress(message)
