"""
Configuration management for modelSelector.

This module contains configuration loading and management utilities.
"""

from typing import Any, Dict, List, Optional, Union
import copy
import yaml
import json
from pathlib import Path
from dataclasses import dataclass, asdict, field

from .logger import get_logger
from ..core.base import CVConfig, ModelSpecification
from ..config.default_config import DEFAULT_CONFIG


@dataclass
class Config:
    """Configuration class for modelSelector."""

    # Data configuration
    data_file: Optional[str] = None
    response: str = DEFAULT_CONFIG["data"]["response"]
    positive_class: Any = DEFAULT_CONFIG["data"]["positive_class"]
    reference_class: Any = DEFAULT_CONFIG["data"]["reference_class"]
    response_mapping: Dict[Any, Any] = None

    # Candidate specifications: label -> ordered predictors
    specifications: Dict[str, List[str]] = None

    # Cross-validation configuration
    folds: int = DEFAULT_CONFIG["cv"]["folds"]
    seed: int = DEFAULT_CONFIG["cv"]["seed"]
    n_jobs: int = DEFAULT_CONFIG["cv"]["n_jobs"]

    # Final model selection
    accuracy_tolerance: float = DEFAULT_CONFIG["selection"]["accuracy_tolerance"]
    strict: bool = DEFAULT_CONFIG["selection"]["strict"]

    # PCA configuration
    pca: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULT_CONFIG["pca"]))

    # Output configuration
    output_dir: str = DEFAULT_CONFIG["output"]["directory"]
    verbose: bool = DEFAULT_CONFIG["output"]["verbose"]

    def __post_init__(self):
        """Initialize default values after dataclass creation."""
        if self.response_mapping is None:
            self.response_mapping = dict(DEFAULT_CONFIG["data"]["response_mapping"])
        if self.specifications is None:
            self.specifications = {
                label: list(predictors)
                for label, predictors in DEFAULT_CONFIG["specifications"].items()
            }

    def cv_config(self) -> CVConfig:
        return CVConfig(folds=self.folds, seed=self.seed, n_jobs=self.n_jobs)

    def build_specifications(self) -> List[ModelSpecification]:
        """Model specifications in configuration order."""
        return [
            ModelSpecification(label=label, response=self.response, predictors=tuple(predictors))
            for label, predictors in self.specifications.items()
        ]

    def required_columns(self) -> List[str]:
        """Every predictor referenced by any specification, first-seen order."""
        columns = []
        for predictors in self.specifications.values():
            for name in predictors:
                if name not in columns:
                    columns.append(name)
        return columns


class ConfigManager:
    """Configuration manager for modelSelector."""

    def __init__(self, config: Optional[Config] = None):
        self.logger = get_logger("ConfigManager")
        self.config = config if config is not None else Config()

    def load_from_file(self, config_path: Union[str, Path]) -> 'ConfigManager':
        """
        Load configuration from a file.

        Args:
            config_path: Path to configuration file

        Returns:
            Self for method chaining
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.logger.info(f"Loading configuration from {config_path}")

        if config_path.suffix.lower() in ('.yaml', '.yml'):
            self._load_yaml(config_path)
        elif config_path.suffix.lower() == '.json':
            self._load_json(config_path)
        else:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        return self

    def _load_yaml(self, config_path: Path) -> None:
        """Load configuration from YAML file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        self._update_config(config_data)

    def _load_json(self, config_path: Path) -> None:
        """Load configuration from JSON file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)

        self._update_config(config_data)

    def _update_config(self, config_data: Dict[str, Any]) -> None:
        """Update configuration with loaded data."""
        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")

        for key, value in config_data.items():
            if key == "pca" and isinstance(value, dict):
                # 部分覆盖，保留未指定的默认项
                self.config.pca.update(value)
            elif hasattr(self.config, key):
                setattr(self.config, key, value)
            else:
                self.logger.warning(f"Unknown configuration key: {key}")

        self.logger.info("Configuration loaded successfully")

    def save_to_file(self, config_path: Union[str, Path]) -> None:
        """
        Save configuration to a file.

        Args:
            config_path: Path to save configuration file
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        self.logger.info(f"Saving configuration to {config_path}")

        config_data = asdict(self.config)

        if config_path.suffix.lower() in ('.yaml', '.yml'):
            with open(config_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(config_data, f, default_flow_style=False, indent=2, sort_keys=False)
        elif config_path.suffix.lower() == '.json':
            with open(config_path, 'w', encoding='utf-8') as f:
                json.dump(config_data, f, indent=2)
        else:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        self.logger.info("Configuration saved successfully")

    def get_config(self) -> Config:
        """Get the current configuration."""
        return self.config

    def update_config(self, **kwargs) -> 'ConfigManager':
        """
        Update configuration with new values; ``None`` values are ignored.

        Args:
            **kwargs: Configuration parameters to update

        Returns:
            Self for method chaining
        """
        for key, value in kwargs.items():
            if value is None:
                continue
            if hasattr(self.config, key):
                setattr(self.config, key, value)
            else:
                self.logger.warning(f"Unknown configuration key: {key}")

        return self
