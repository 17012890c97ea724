"""Tests for shared contracts and configuration loading."""

import math
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from vframes.core.config import ExtractorConfig, load_config
from vframes.core.contracts import ExtractionOutcome, ExtractionRequest, SamplingMode
from vframes.core.errors import DecoderError, ExtractionError, StorageError


class TestContracts:
    def test_request_rate_mode(self):
        req = ExtractionRequest(video_reference="a.mp4", duration_seconds=2.0, rate=2.0)
        assert req.sampling_mode == SamplingMode.RATE
        assert req.rate == 2.0

    def test_request_dense_without_rate(self):
        req = ExtractionRequest(video_reference="a.mp4", duration_seconds=2.0, sampling_mode="dense")
        assert req.sampling_mode == SamplingMode.DENSE
        assert req.rate is None

    @pytest.mark.parametrize("fields", [
        {"duration_seconds": -1.0, "rate": 1.0},
        {"duration_seconds": 1.0, "rate": 0.0},
        {"duration_seconds": 1.0, "rate": -2.0},
        {"duration_seconds": 1.0},
        {"duration_seconds": math.inf, "rate": 1.0},
        {"duration_seconds": math.nan, "rate": 1.0},
        {"duration_seconds": 1.0, "rate": math.inf},
        {"duration_seconds": 1.0, "rate": math.nan},
    ])
    def test_request_invalid(self, fields):
        with pytest.raises(ValidationError):
            ExtractionRequest(video_reference="a.mp4", **fields)

    def test_request_empty_reference(self):
        with pytest.raises(ValidationError):
            ExtractionRequest(video_reference="", duration_seconds=1.0, rate=1.0)

    def test_outcome_schema(self):
        schema = ExtractionOutcome.model_json_schema()
        for field in ("succeeded", "extracted_count", "output_directory", "error_message"):
            assert field in schema["properties"]

    def test_outcome_defaults(self):
        outcome = ExtractionOutcome(succeeded=False, error_message="boom")
        assert outcome.extracted_count == 0
        assert outcome.output_directory is None
        assert outcome.frame_paths == []


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(StorageError, ExtractionError)
        assert issubclass(DecoderError, ExtractionError)

    def test_decoder_error_code(self):
        err = DecoderError("OPEN_FAILED", "Cannot open video")
        assert err.code == "OPEN_FAILED"
        assert str(err) == "[OPEN_FAILED] Cannot open video"


class TestConfig:
    def test_defaults(self):
        cfg = ExtractorConfig()
        assert cfg.batch_size == 10
        assert cfg.quality == 1.0
        assert cfg.output_format == "png"
        assert cfg.base_dir.name == "Screenshots"

    def test_load_config(self, tmp_path: Path):
        config_file = tmp_path / "extractor.yaml"
        with open(config_file, "w") as f:
            yaml.dump({"base_dir": str(tmp_path / "out"), "batch_size": 5, "output_format": "jpg"}, f)

        cfg = load_config(config_file)
        assert cfg.base_dir == tmp_path / "out"
        assert cfg.batch_size == 5
        assert cfg.output_format == "jpg"
        assert cfg.quality == 1.0

    def test_load_empty_config(self, tmp_path: Path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(config_file) == ExtractorConfig()

    @pytest.mark.parametrize("raw", [{"batch_size": 0}, {"quality": 0}, {"output_format": "gif"}])
    def test_invalid_config(self, tmp_path: Path, raw):
        config_file = tmp_path / "bad.yaml"
        with open(config_file, "w") as f:
            yaml.dump(raw, f)
        with pytest.raises(ValidationError):
            load_config(config_file)

    def test_shipped_config_is_valid(self):
        shipped = Path(__file__).resolve().parents[2] / "configs" / "extractor.yaml"
        cfg = load_config(shipped)
        assert cfg.batch_size == 10
