"""
Configuration Management

Centralized configuration with YAML file support and environment variable
overrides. Defaults reproduce the scoring contract exactly; a config file
only needs to mention what it changes.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load .env file if it exists
load_dotenv()


@dataclass
class EvaluationConfig:
    """Answer matching thresholds and reference table location."""
    reading_similarity_threshold: float = 0.8
    listening_similarity_threshold: float = 0.75
    partial_match_min_length: int = 4
    reference_data: Optional[str] = None  # None uses the packaged table


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    console_level: str = "WARNING"  # Separate level for console output
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    max_size: str = "10MB"
    backup_count: int = 5


@dataclass
class AppConfig:
    """Main application configuration."""
    name: str = "Band Engine"
    version: str = "1.0.0"
    environment: str = "production"
    debug: bool = False

    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "AppConfig":
        """Build a configuration from already-parsed data."""
        config_data = dict(config_data or {})

        # Handle nested app configuration structure
        if 'app' in config_data:
            app_config = config_data.pop('app') or {}
            config_data.update(app_config)

        try:
            if isinstance(config_data.get('evaluation'), dict):
                config_data['evaluation'] = EvaluationConfig(**config_data['evaluation'])

            if isinstance(config_data.get('logging'), dict):
                config_data['logging'] = LoggingConfig(**config_data['logging'])

            return cls(**config_data)
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: Path) -> "AppConfig":
        """Load configuration from YAML file."""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        # Apply environment variable overrides
        config_data = cls._apply_env_overrides(config_data)

        from .config_validator import ConfigValidator
        ConfigValidator().validate_config(config_data)

        return cls.from_dict(config_data)

    @staticmethod
    def _apply_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'BAND_ENGINE_LOG_LEVEL': ['logging', 'level'],
            'BAND_ENGINE_REFERENCE_DATA': ['evaluation', 'reference_data'],
            'BAND_ENGINE_ENVIRONMENT': ['environment'],
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value:
                current = config_data
                for key in config_path[:-1]:
                    current = current.setdefault(key, {})
                current[config_path[-1]] = env_value

        return config_data


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config(config_path: Optional[Path] = None) -> AppConfig:
    """Get the application configuration instance."""
    global _config

    if _config is None:
        if config_path is None:
            config_path = Path("config/default.yaml")

        if config_path.exists():
            _config = AppConfig.from_yaml(config_path)
        else:
            _config = AppConfig.from_dict(AppConfig._apply_env_overrides({}))

    return _config


def set_config(config: Optional[AppConfig]) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config


def reload_config(config_path: Optional[Path] = None) -> AppConfig:
    """Reload configuration from file."""
    global _config
    _config = None
    return get_config(config_path)
