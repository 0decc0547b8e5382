"""
Configuration loader for YAML and JSON files.

Enables loading geocoding run configurations from declarative files.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from geostream.config.specifications import PipelineSpec


class ConfigLoader:
    """
    Loads pipeline specifications from YAML or JSON files.

    Follows Single Responsibility: only handles config file loading.
    """

    @staticmethod
    def from_yaml(file_path: str | Path) -> PipelineSpec:
        """
        Load configuration from YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            PipelineSpec

        Raises:
            FileNotFoundError: If file doesn't exist
            pydantic.ValidationError: If configuration is invalid
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            config_dict = yaml.safe_load(f) or {}

        return ConfigLoader._dict_to_spec(config_dict)

    @staticmethod
    def from_json(file_path: str | Path) -> PipelineSpec:
        """
        Load configuration from JSON file.

        Args:
            file_path: Path to JSON file

        Returns:
            PipelineSpec

        Raises:
            FileNotFoundError: If file doesn't exist
            pydantic.ValidationError: If configuration is invalid
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            config_dict = json.load(f)

        return ConfigLoader._dict_to_spec(config_dict)

    @staticmethod
    def _dict_to_spec(config: dict[str, Any]) -> PipelineSpec:
        """
        Convert configuration dictionary to PipelineSpec.

        Accepts the short ``input``/``output`` keys as aliases for the
        ``io`` section.
        """
        if "io" not in config and ("input" in config or "output" in config):
            io_config: dict[str, Any] = {}
            if "input" in config:
                io_config["input_path"] = config.pop("input")
            if "output" in config:
                output = config.pop("output")
                if isinstance(output, dict):
                    io_config["output_path"] = output.get("path")
                    if "format" in output:
                        io_config["output_format"] = output["format"]
                else:
                    io_config["output_path"] = output
            config["io"] = io_config

        return PipelineSpec(**config)

    @staticmethod
    def to_yaml(spec: PipelineSpec, file_path: str | Path) -> None:
        """
        Save specification to YAML file.

        The API key is never written out.
        """
        path = Path(file_path)
        config_dict = ConfigLoader._dump(spec)

        with open(path, "w") as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2)

    @staticmethod
    def to_json(spec: PipelineSpec, file_path: str | Path) -> None:
        """
        Save specification to JSON file.

        The API key is never written out.
        """
        path = Path(file_path)
        config_dict = ConfigLoader._dump(spec)

        with open(path, "w") as f:
            json.dump(config_dict, f, indent=2, default=str)

    @staticmethod
    def _dump(spec: PipelineSpec) -> dict[str, Any]:
        config_dict = spec.model_dump(mode="json")
        config_dict["geocoder"].pop("api_key", None)
        return config_dict
