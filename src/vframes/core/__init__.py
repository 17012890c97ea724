"""vframes core: planner, batch orchestrator, output namespace, shared contracts."""

from .capabilities import FrameDecoder, LocalStorage, StorageCapability
from .config import ExtractorConfig, load_config
from .contracts import ExtractionOutcome, ExtractionRequest, SamplingMode, VideoInfo
from .errors import DecoderError, ExtractionError, ProbeError, StorageError
from .logging import setup_logging
from .namespace import OutputNamespace, folder_name_for
from .orchestrator import BatchExtractor, make_batches
from .planner import DENSE_RATE, plan_timestamps

__all__ = [
    "FrameDecoder",
    "LocalStorage",
    "StorageCapability",
    "ExtractorConfig",
    "load_config",
    "ExtractionOutcome",
    "ExtractionRequest",
    "SamplingMode",
    "VideoInfo",
    "DecoderError",
    "ExtractionError",
    "ProbeError",
    "StorageError",
    "setup_logging",
    "OutputNamespace",
    "folder_name_for",
    "BatchExtractor",
    "make_batches",
    "DENSE_RATE",
    "plan_timestamps",
]
