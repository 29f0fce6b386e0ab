"""
Configuration management for the coreference annotation stage
"""

import copy
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


DEFAULT_PRONOUNS = [
    "he", "him", "his", "himself",
    "she", "her", "hers", "herself",
    "it", "its", "itself",
    "they", "them", "their", "theirs", "themselves",
]

DEFAULT_CONFIG = {
    "coref": {
        "algorithm": "exact_match",
        "language": "en",
        "md_type": "rule",
        "use_custom_mention_detection": False,
        "pronouns": DEFAULT_PRONOUNS,
    },
    "spacy": {
        "model": "en_core_web_sm",
    },
    "logging": {
        "level": "WARNING",
    },
}


class CorefAlgorithm(str, Enum):
    """Coreference algorithms a coref system can be registered for"""
    EXACT_MATCH = "exact_match"
    CLUSTERING = "clustering"
    STATISTICAL = "statistical"
    NEURAL = "neural"
    FASTNEURAL = "fastneural"
    HYBRID = "hybrid"


class Language(str, Enum):
    ENGLISH = "en"
    CHINESE = "zh"
    ARABIC = "ar"


class MentionDetectionType(str, Enum):
    """How coref mentions are detected; everything but DEPENDENCY reads parse trees"""
    RULE = "rule"
    HYBRID = "hybrid"
    DEPENDENCY = "dependency"


class CorefConfig(BaseModel):
    """Typed settings for the coreference annotator."""

    algorithm: CorefAlgorithm = CorefAlgorithm.EXACT_MATCH
    language: Language = Language.ENGLISH
    md_type: MentionDetectionType = MentionDetectionType.RULE

    # When True, coref mentions come from an earlier pipeline stage
    use_custom_mention_detection: bool = False

    pronouns: List[str] = Field(default_factory=lambda: list(DEFAULT_PRONOUNS))

    @classmethod
    def from_manager(cls, manager: "ConfigManager") -> "CorefConfig":
        """Build settings from the ``coref`` section of a loaded configuration."""
        section = manager.get("coref", {}) or {}
        try:
            return cls.model_validate(section)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid coref configuration: {e}") from e


class ConfigManager:
    """Manages configuration for the annotation pipeline"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to YAML config file, if None uses defaults
        """
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        if config_path and config_path.exists():
            self.load_config(config_path)
        elif config_path:
            logger.warning(f"Config file not found: {config_path}, using defaults")

    def load_config(self, config_path: Path) -> None:
        """Load configuration from YAML file."""
        try:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config from {config_path}: {e}")
            return

        if not isinstance(file_config, dict):
            logger.error(f"Config file {config_path} does not contain a mapping, using defaults")
            return

        # Deep merge with default config
        self.config = self._merge_configs(DEFAULT_CONFIG, file_config)
        logger.info(f"Loaded configuration from {config_path}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'coref.algorithm'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key_path: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'coref.language'
            value: Value to set
        """
        keys = key_path.split('.')
        config = self.config

        # Navigate to parent dict
        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def save_config(self, config_path: Path) -> None:
        """Save current configuration to YAML file."""
        try:
            with open(config_path, 'w') as f:
                yaml.dump(self.config, f, default_flow_style=False, indent=2)
        except OSError as e:
            logger.error(f"Failed to save config to {config_path}: {e}")
            return
        logger.info(f"Saved configuration to {config_path}")

    def to_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary."""
        return copy.deepcopy(self.config)
