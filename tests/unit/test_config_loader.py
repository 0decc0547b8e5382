"""Tests for pipeline specifications and ConfigLoader."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from geostream.config.config_loader import ConfigLoader
from geostream.config.specifications import (
    GeocoderProvider,
    IOSpec,
    PipelineSpec,
    ProgressMode,
    StreamSpec,
)
from geostream.utils import sanitize_for_logging


@pytest.fixture
def yaml_config(tmp_path: Path) -> Path:
    path = tmp_path / "geocode.yaml"
    path.write_text(
        yaml.dump(
            {
                "geocoder": {"provider": "google", "api_key": "secret", "region": "us"},
                "stream": {"address_field": "address", "timeout": 5},
                "io": {"input_path": "in.csv", "output_path": "out.ndjson"},
                "progress_mode": "logging",
            }
        )
    )
    return path


class TestSpecifications:
    """Tests for the pydantic specifications."""

    def test_defaults(self):
        spec = PipelineSpec(io=IOSpec(input_path="a.csv", output_path="b.csv"))

        assert spec.geocoder.provider == GeocoderProvider.GOOGLE
        assert spec.stream.address_field is None
        assert spec.stream.timeout is None
        assert spec.progress_mode == ProgressMode.AUTO

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            StreamSpec(timeout=0)

    def test_output_format_validated(self):
        with pytest.raises(ValidationError, match="Unsupported output format"):
            IOSpec(input_path="a", output_path="b", output_format="xlsx")

    def test_api_key_env_fallback(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")
        spec = PipelineSpec(io=IOSpec(input_path="a", output_path="b"))

        assert spec.geocoder.resolve_api_key() == "env-key"


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_from_yaml(self, yaml_config: Path):
        spec = ConfigLoader.from_yaml(yaml_config)

        assert spec.geocoder.api_key == "secret"
        assert spec.geocoder.region == "us"
        assert spec.stream.address_field == "address"
        assert spec.stream.timeout == 5
        assert spec.io.input_path == Path("in.csv")
        assert spec.progress_mode == ProgressMode.LOGGING

    def test_short_io_keys(self, tmp_path: Path):
        path = tmp_path / "short.yaml"
        path.write_text(
            yaml.dump(
                {
                    "input": "in.txt",
                    "output": {"path": "out.csv", "format": "csv"},
                }
            )
        )

        spec = ConfigLoader.from_yaml(path)

        assert spec.io.input_path == Path("in.txt")
        assert spec.io.output_path == Path("out.csv")
        assert spec.io.output_format == "csv"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            ConfigLoader.from_yaml(tmp_path / "missing.yaml")

    def test_json_round_trip_drops_api_key(self, yaml_config: Path, tmp_path: Path):
        spec = ConfigLoader.from_yaml(yaml_config)
        out = tmp_path / "saved.json"

        ConfigLoader.to_json(spec, out)
        reloaded = ConfigLoader.from_json(out)

        assert "secret" not in out.read_text()
        assert reloaded.geocoder.api_key is None
        assert reloaded.stream == spec.stream

    def test_to_yaml_drops_api_key(self, yaml_config: Path, tmp_path: Path):
        spec = ConfigLoader.from_yaml(yaml_config)
        out = tmp_path / "saved.yaml"

        ConfigLoader.to_yaml(spec, out)

        saved = yaml.safe_load(out.read_text())
        assert "api_key" not in saved["geocoder"]
        assert saved["geocoder"]["provider"] == "google"

    def test_logged_config_redacts_api_key(self, yaml_config: Path):
        spec = ConfigLoader.from_yaml(yaml_config)

        logged = sanitize_for_logging(spec.model_dump(mode="json"))

        assert logged["geocoder"]["api_key"] == "***REDACTED***"
        assert logged["geocoder"]["region"] == "us"
        assert "secret" not in str(logged)
