"""vframes: batched still-frame extraction from video files."""

__version__ = "0.1.0"
