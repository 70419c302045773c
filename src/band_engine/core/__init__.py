"""
Core Module

Foundational components used across the engine: configuration management
and custom exceptions.
"""

from .config import get_config, set_config, reload_config, AppConfig, EvaluationConfig, LoggingConfig
from .exceptions import (
    BandEngineException,
    ConfigurationError,
    ReferenceDataError,
    ValidationError,
)

__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "AppConfig",
    "EvaluationConfig",
    "LoggingConfig",
    "BandEngineException",
    "ConfigurationError",
    "ReferenceDataError",
    "ValidationError",
]
