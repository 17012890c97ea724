"""Timestamp planning: turn (duration, mode, rate) into capture instants."""

from __future__ import annotations

import math

from .contracts import SamplingMode

# "Dense" sampling is a fixed 30 Hz, not every decoded frame.
DENSE_RATE = 30.0
# Timestamps have millisecond resolution; faster rates cannot be represented.
MAX_RATE = 1000.0


def effective_rate(sampling_mode: SamplingMode, rate: float | None = None) -> float:
    """Samples per second used for the given mode."""
    if sampling_mode == SamplingMode.DENSE:
        return DENSE_RATE
    if rate is None or not math.isfinite(rate) or not 0 < rate <= MAX_RATE:
        raise ValueError(f"RATE sampling needs a rate in (0, {MAX_RATE:g}], got {rate!r}")
    return float(rate)


def plan_timestamps(
    duration_seconds: float,
    sampling_mode: SamplingMode,
    rate: float | None = None,
) -> list[int]:
    """Millisecond offsets from 0 up to duration_seconds, inclusive.

    Accumulates the interval in floating point, so the last instant can be
    dropped or spacing can be off by a millisecond of rounding. The result
    is always non-empty, strictly ascending and starts at 0.
    """
    if not math.isfinite(duration_seconds) or duration_seconds < 0:
        raise ValueError(f"duration_seconds must be finite and >= 0, got {duration_seconds}")

    interval = 1.0 / effective_rate(sampling_mode, rate)
    timestamps: list[int] = []
    t = 0.0
    while t <= duration_seconds:
        ms = round(t * 1000)
        if not timestamps or ms > timestamps[-1]:
            timestamps.append(ms)
        t += interval
    return timestamps
