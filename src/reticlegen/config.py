"""
Configuration management for the reticle generator.

Loads YAML configuration with sensible defaults. The reticle section holds
overrides for ReticleConfig; the remaining sections tune the renderers,
batch runs, tracing and workspace paths.
"""

import os
from dataclasses import dataclass, field

import yaml

from reticlegen.models import ReticleConfig


@dataclass
class RasterConfig:
    """Configuration for the supersampled raster backend."""
    supersample: int = 4
    alpha: int = 255  # global coverage multiplier, 0-255
    color: str = None  # hex; None uses the rim color
    flatten_tolerance: float = 0.25  # output pixels


@dataclass
class BatchConfig:
    """Configuration for color-pair batch runs."""
    output_format: str = "svg"  # "svg" or "png"
    verbose: bool = False


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class WorkspaceConfig:
    """Where CSVs, profiles and generated artifacts live."""
    base_dir: str = None  # None means ~/.local/lib/xhGen


@dataclass
class AppConfig:
    """Complete application configuration."""
    reticle: dict = field(default_factory=dict)
    raster: RasterConfig = field(default_factory=RasterConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)

    def reticle_config(self):
        """Validated ReticleConfig built from defaults plus YAML overrides."""
        return ReticleConfig.model_validate(self.reticle)


_SECTIONS = ("raster", "batch", "tracing", "workspace")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = AppConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section in _SECTIONS:
        values = yaml_data.get(section) or {}
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    reticle = yaml_data.get("reticle") or {}
    known = ReticleConfig.model_fields
    config.reticle = {k: v for k, v in reticle.items() if k in known}

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    config = AppConfig()
    reticle = ReticleConfig().model_dump()

    yaml_data = {
        "reticle": {
            **reticle,
            "rim_color": list(reticle["rim_color"]),
            "arm_color": list(reticle["arm_color"]),
        },
        "raster": {
            "supersample": config.raster.supersample,
            "alpha": config.raster.alpha,
            "color": config.raster.color,
            "flatten_tolerance": config.raster.flatten_tolerance,
        },
        "batch": {
            "output_format": config.batch.output_format,
            "verbose": config.batch.verbose,
        },
        "tracing": {
            "enabled": config.tracing.enabled,
            "level": config.tracing.level,
        },
        "workspace": {
            "base_dir": config.workspace.base_dir,
        },
    }

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
