"""
Pipeline configuration: header mapping, field transforms and split chapters.
"""
import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import yaml

from .config_validator import validate_pipeline_config

logger = logging.getLogger(__name__)

CANONICAL_FIELDS = ("id", "cost", "name", "source", "chapter", "description")

DEFAULT_CONFIG: Dict[str, Any] = {
    # Normalized header (or positional index) -> canonical field
    "header_map": {
        "0": "id",
        "unnamed0": "id",
        "cpcost": "cost",
        "cost": "cost",
        "price": "cost",
        "name": "name",
        "item": "name",
        "perkname": "name",
        "jump": "source",
        "jumpdoc": "source",
        "jumpchain": "source",
        "source": "source",
        "setting": "source",
        "chapter": "chapter",
        "category": "chapter",
        "description": "description",
    },
    "field_transforms": {
        "id": "integer",
        "cost": "integer",
        "description": "description",
        "chapter": "strip",
    },
    # Chapter name (case-insensitive) -> output document name
    "split_chapters": {
        "waifu catalogue": "waifu",
        "lewd": "companion_(lewd)",
    },
    "fallback_headers": ["CP Cost", "Name", "Jumpdoc", "Description"],
    "cost_suffix": "cp",
    "sheet_suffix": ".csv",
    "max_workers": None,
}

_MAPPING_KEYS = ("header_map", "field_transforms", "split_chapters")


@dataclass
class PipelineConfig:
    """Configuration tables passed into the parsing and splitting pipeline."""

    header_map: Dict[str, str]
    field_transforms: Dict[str, str]
    split_chapters: Dict[str, str]
    fallback_headers: List[str]
    cost_suffix: str = "cp"
    sheet_suffix: str = ".csv"
    max_workers: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Build a config from an already merged and validated dictionary."""
        return cls(
            header_map={str(k): v for k, v in data["header_map"].items()},
            field_transforms=dict(data["field_transforms"]),
            split_chapters={str(k).lower(): v for k, v in data["split_chapters"].items()},
            fallback_headers=list(data["fallback_headers"]),
            cost_suffix=data.get("cost_suffix", "cp"),
            sheet_suffix=data.get("sheet_suffix", ".csv"),
            max_workers=data.get("max_workers"),
        )

    @classmethod
    def default(cls) -> "PipelineConfig":
        return cls.from_dict(DEFAULT_CONFIG)


def merge_config(overrides: Optional[Dict[str, Any]], base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge user overrides into the default configuration.

    Mapping tables are merged key by key so a config file only needs the
    additions; lists and scalars replace the defaults outright.
    """
    merged = copy.deepcopy(base if base is not None else DEFAULT_CONFIG)
    for key, value in (overrides or {}).items():
        if key in _MAPPING_KEYS and isinstance(value, dict):
            target = merged.setdefault(key, {})
            for sub_key, sub_value in value.items():
                target[str(sub_key)] = sub_value
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None) -> PipelineConfig:
    """
    Load pipeline configuration.

    Args:
        config_path: Optional YAML file with overrides. Missing files fall
            back to the built-in defaults.

    Returns:
        Validated PipelineConfig

    Raises:
        ValueError: If the file is not valid YAML or the merged
            configuration does not match the schema
    """
    overrides: Dict[str, Any] = {}
    if config_path is not None and Path(config_path).exists():
        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                overrides = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid configuration in {config_path}: {e}") from e
        if not isinstance(overrides, dict):
            raise ValueError(f"Invalid configuration in {config_path}: top level must be a mapping")
        logger.info(f"Loaded configuration from {config_path}")
    elif config_path is not None:
        logger.debug(f"Config file {config_path} not found, using defaults")

    merged = merge_config(overrides)
    is_valid, error = validate_pipeline_config(merged)
    if not is_valid:
        raise ValueError(f"Invalid configuration: {error}")

    return PipelineConfig.from_dict(merged)
