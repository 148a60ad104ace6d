"""
Configuration modules for modelSelector.

This module contains default configurations and analysis presets.
"""

from .default_config import DEFAULT_CONFIG
from .model_configs import MODEL_CONFIGS, NUTRIENT_COLUMNS, FOOD_GROUP_COLUMN, get_preset, preset_specifications

__all__ = [
    "DEFAULT_CONFIG",
    "MODEL_CONFIGS",
    "NUTRIENT_COLUMNS",
    "FOOD_GROUP_COLUMN",
    "get_preset",
    "preset_specifications",
]
