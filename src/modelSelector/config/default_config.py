"""
Default configuration for modelSelector.

This module contains the default configuration settings.
"""

from .model_configs import MODEL_CONFIGS, NUTRIENT_COLUMNS, FOOD_GROUP_COLUMN

_PALMETTO = MODEL_CONFIGS["palmetto"]

DEFAULT_CONFIG = {
    # Data configuration
    "data": {
        "response": _PALMETTO["response"],
        "response_mapping": dict(_PALMETTO["response_mapping"]),
        "positive_class": _PALMETTO["positive_class"],
        "reference_class": _PALMETTO["reference_class"],
    },

    # Candidate specifications
    "specifications": {label: list(p) for label, p in _PALMETTO["specifications"].items()},

    # Cross-validation configuration
    "cv": {
        "folds": 10,
        "seed": 244,
        "n_jobs": 1
    },

    # Final model selection
    "selection": {
        "accuracy_tolerance": 0.005,
        "strict": False
    },

    # PCA configuration
    "pca": {
        "columns": list(NUTRIENT_COLUMNS),
        "group_column": FOOD_GROUP_COLUMN,
        "food_groups": None,
        "scale": True,
        "n_components": None
    },

    # Output configuration
    "output": {
        "directory": "./results",
        "verbose": True
    },

    # Logging configuration
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s",
        "file": "run.log"
    }
}
