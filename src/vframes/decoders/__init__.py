"""Concrete FrameDecoder implementations."""

from .opencv_decoder import OpenCVFrameDecoder

__all__ = ["OpenCVFrameDecoder"]
