"""
Sunzoom: zoomable sunburst charts for region → scheme → village data.

Main interface: Sunburst
"""

__version__ = "0.1.0"

from .config import SunburstConfig, load_config, save_config
from .errors import ConfigError, SunzoomError, UnknownNodeError
from .sunburst import Sunburst

__all__ = [
    "Sunburst",
    "SunburstConfig",
    "load_config",
    "save_config",
    "SunzoomError",
    "UnknownNodeError",
    "ConfigError",
]
