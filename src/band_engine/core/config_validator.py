"""
Configuration Validator

Validates configuration data before it is turned into an AppConfig and
reports every problem at once with a readable message.
"""

from typing import Dict, Any, List

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidator:
    """Configuration validator for the evaluation and logging sections."""

    def __init__(self):
        self.field_validators = {
            'evaluation.reading_similarity_threshold': self._validate_similarity_threshold,
            'evaluation.listening_similarity_threshold': self._validate_similarity_threshold,
            'evaluation.partial_match_min_length': self._validate_positive_int,
            'evaluation.reference_data': self._validate_optional_path,
            'logging.level': self._validate_log_level,
            'logging.console_level': self._validate_log_level,
            'logging.backup_count': self._validate_non_negative_int,
        }

    def validate_config(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate configuration data.

        Args:
            config_data: Configuration dictionary to validate

        Returns:
            The same configuration data

        Raises:
            ConfigurationError: If validation fails
        """
        errors = []
        errors.extend(self._check_sections(config_data))
        errors.extend(self._validate_fields(config_data))

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors)
            raise ConfigurationError(error_msg)

        return config_data

    def _check_sections(self, config_data: Dict[str, Any]) -> List[str]:
        errors = []
        for section in ('evaluation', 'logging'):
            if section in config_data and not isinstance(config_data[section], dict):
                errors.append(f"Section '{section}' must be a dictionary")
        return errors

    def _validate_fields(self, config_data: Dict[str, Any]) -> List[str]:
        """Run the per-field validators over nested sections."""
        errors = []

        def validate_section(section_data: Dict[str, Any], path: str = ""):
            for key, value in section_data.items():
                current_path = f"{path}.{key}" if path else key

                if isinstance(value, dict):
                    validate_section(value, current_path)
                elif current_path in self.field_validators:
                    try:
                        self.field_validators[current_path](value)
                    except ValueError as e:
                        errors.append(f"Invalid value for {current_path}: {e}")

        validate_section(config_data)
        return errors

    def _validate_positive_int(self, value: Any) -> None:
        """Validate positive integer."""
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError("Must be a positive integer")

    def _validate_non_negative_int(self, value: Any) -> None:
        """Validate non-negative integer."""
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError("Must be a non-negative integer")

    def _validate_similarity_threshold(self, value: Any) -> None:
        """Validate similarity threshold."""
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not (0 < value <= 1):
            raise ValueError("Similarity threshold must be greater than 0 and at most 1")

    def _validate_log_level(self, value: Any) -> None:
        if not isinstance(value, str) or value.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(VALID_LOG_LEVELS)}")

    def _validate_optional_path(self, value: Any) -> None:
        if value is not None and not isinstance(value, str):
            raise ValueError("Must be a file path or null")
