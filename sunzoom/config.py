"""Configuration management for sunzoom."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".sunzoom"
CONFIG_FILE = CONFIG_DIR / "config.yaml"
CONFIG_ENV = "SUNZOOM_CONFIG"


@dataclass(frozen=True)
class SunburstConfig:
    """Viewport, geometry and animation settings for one sunburst."""

    width: int = 900
    height: int = 900
    radius_divisor: float = 2.2
    center_radius: float = 60.0
    stroke_gap: float = 1.0
    pad_angle: float = 0.003
    label_angle_threshold: float = 0.08
    label_min_space: float = 40.0
    label_max_chars: int = 15
    label_truncate_to: int = 12
    duration_ms: int = 1000
    frame_rate: int = 60
    fill_opacity: float = 0.8
    lpcd_threshold: float = 55.0
    lpcd_warning_threshold: float = 40.0
    default_population: float = 100.0
    root_label: str = "Maharashtra"
    dark_mode: bool = True

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            expected = type(f.default)
            if expected is float:
                ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            elif expected is int:
                ok = isinstance(value, int) and not isinstance(value, bool)
            else:
                ok = isinstance(value, expected)
            if not ok:
                raise ConfigError(f"{f.name} must be {expected.__name__}, got {value!r}")

        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"viewport must be positive, got {self.width}x{self.height}")
        if self.radius_divisor <= 0:
            raise ConfigError("radius_divisor must be positive")
        if self.center_radius < 0 or self.stroke_gap < 0 or self.pad_angle < 0:
            raise ConfigError("center_radius, stroke_gap and pad_angle must be >= 0")
        if self.duration_ms < 0:
            raise ConfigError("duration_ms must be >= 0")
        if self.frame_rate <= 0:
            raise ConfigError("frame_rate must be positive")
        if not 0.0 <= self.fill_opacity <= 1.0:
            raise ConfigError("fill_opacity must be within [0, 1]")
        if self.label_truncate_to > self.label_max_chars:
            raise ConfigError("label_truncate_to must not exceed label_max_chars")

    @property
    def radius(self) -> float:
        return min(self.width, self.height) / self.radius_divisor

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2

    @property
    def duration_s(self) -> float:
        return self.duration_ms / 1000.0

    def replace(self, **changes) -> "SunburstConfig":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)


def _config_path(path: Optional[Path]) -> Path:
    if path is not None:
        return Path(path)
    override = (os.environ.get(CONFIG_ENV) or "").strip()
    if override:
        return Path(override)
    return CONFIG_FILE


def load_config(path: Optional[Path] = None) -> SunburstConfig:
    """Load config from YAML; missing or unreadable files yield defaults."""
    cfg_path = _config_path(path)
    if not cfg_path.exists():
        return SunburstConfig()

    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return SunburstConfig()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", cfg_path)
        return SunburstConfig()

    fields = SunburstConfig.__dataclass_fields__
    unknown = sorted(k for k in data if k not in fields)
    if unknown:
        logger.debug("Unknown config keys ignored: %s", ", ".join(unknown))
    filtered = {k: v for k, v in data.items() if k in fields}
    return SunburstConfig(**filtered)


def save_config(config: SunburstConfig, path: Optional[Path] = None) -> Path:
    """Save config as YAML and return the path written."""
    cfg_path = _config_path(path)
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    cfg_path.write_text(yaml.safe_dump(config.to_dict(), default_flow_style=False), encoding="utf-8")
    return cfg_path
