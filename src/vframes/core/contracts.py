"""Common Pydantic models shared across the extraction pipeline."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class SamplingMode(str, Enum):
    """How capture instants are spaced along the video."""

    RATE = "rate"
    DENSE = "dense"


class ExtractionRequest(BaseModel):
    """One extraction job: which video, how long it is, how densely to sample."""

    video_reference: str = Field(..., min_length=1, description="Video path or file:// URI")
    duration_seconds: float = Field(..., ge=0.0, allow_inf_nan=False, description="Video duration in seconds")
    sampling_mode: SamplingMode = Field(SamplingMode.RATE, description="Sampling policy")
    rate: float | None = Field(None, gt=0.0, allow_inf_nan=False, description="Samples per second (RATE mode only)")

    @model_validator(mode="after")
    def _rate_required_for_rate_mode(self) -> ExtractionRequest:
        if self.sampling_mode == SamplingMode.RATE and self.rate is None:
            raise ValueError("rate is required when sampling_mode is 'rate'")
        return self


class ExtractionOutcome(BaseModel):
    """Terminal result of a single extraction run."""

    succeeded: bool
    extracted_count: int = Field(0, ge=0, description="Frames actually written")
    output_directory: Path | None = Field(None, description="Directory holding the frames")
    error_message: str | None = Field(None, description="Set only when succeeded is False")
    planned_count: int = Field(0, ge=0, description="Number of timestamps planned")
    failed_batches: int = Field(0, ge=0, description="Batches whose decoder call raised")
    frame_paths: list[Path] = Field(default_factory=list, description="Written frame files")
    elapsed_seconds: float = 0.0


class VideoInfo(BaseModel):
    """Basic video stream metadata."""

    path: Path
    duration_seconds: float = Field(..., ge=0.0)
    fps: float
    frame_count: int
    width: int
    height: int
