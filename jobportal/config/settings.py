"""
Configuration management for the job portal client.

This module handles configuration loading, validation and logging setup
for the client, including environment variables, backend URLs and
page sizes used by the network views.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from dotenv import load_dotenv

from jobportal.core.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

DEFAULT_SESSION_FILE = str(Path.home() / ".jobportal" / "session.json")


class PortalSettings(BaseModel):
    """Main configuration settings for the job portal client."""

    # defaults are read from the environment
    model_config = ConfigDict(validate_default=True, validate_assignment=True)

    # Backend Configuration
    api_base_url: str = Field(default_factory=lambda: os.getenv("REACT_APP_API_URL") or os.getenv("API_URL", "http://localhost:5000/api"))
    server_base_url: str = Field(default_factory=lambda: os.getenv("REACT_APP_SERVER_URL") or os.getenv("SERVER_URL", "http://localhost:5000"))
    request_timeout_seconds: float = Field(default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "30")))

    # Network view page sizes
    connections_page_size: int = Field(default_factory=lambda: int(os.getenv("CONNECTIONS_PAGE_SIZE", "20")))
    suggestions_limit: int = Field(default_factory=lambda: int(os.getenv("SUGGESTIONS_LIMIT", "10")))
    users_page_size: int = Field(default_factory=lambda: int(os.getenv("USERS_PAGE_SIZE", "20")))

    # Session persistence
    session_file: str = Field(default_factory=lambda: os.getenv("JOBPORTAL_SESSION_FILE", DEFAULT_SESSION_FILE))

    # Logging Configuration
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = Field(default_factory=lambda: os.getenv("LOG_FILE") or None)
    enable_console_logging: bool = Field(default_factory=lambda: os.getenv("ENABLE_CONSOLE_LOGGING", "true").lower() == "true")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()

    @field_validator('api_base_url', 'server_base_url')
    @classmethod
    def validate_url(cls, v):
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://, got {v!r}")
        return v.rstrip("/")

    @field_validator('request_timeout_seconds')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("Request timeout must be positive")
        return v

    @field_validator('connections_page_size', 'suggestions_limit', 'users_page_size')
    @classmethod
    def validate_page_size(cls, v):
        if v < 1:
            raise ValueError("Page sizes must be at least 1")
        return v


class LoggingConfig:
    """Logging configuration and setup."""

    @staticmethod
    def setup_logging(settings: PortalSettings) -> logging.Logger:
        """Set up logging for the ``jobportal`` logger hierarchy."""

        logger = logging.getLogger('jobportal')
        logger.setLevel(getattr(logging, settings.log_level))

        # Clear existing handlers
        logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        if settings.enable_console_logging:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(getattr(logging, settings.log_level))
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if settings.log_file:
            try:
                file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
                file_handler.setLevel(getattr(logging, settings.log_level))
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"Could not set up file logging: {e}")

        return logger


class ConfigurationManager:
    """Central configuration manager for the job portal client."""

    def __init__(self):
        self._settings = None
        self._logger = None

    @property
    def settings(self) -> PortalSettings:
        """Get or create settings instance."""
        if self._settings is None:
            try:
                self._settings = PortalSettings()
            except ValueError as e:
                raise ConfigurationError(f"Failed to load configuration: {e}") from e
        return self._settings

    @property
    def logger(self) -> logging.Logger:
        """Get or create logger instance."""
        if self._logger is None:
            self._logger = LoggingConfig.setup_logging(self.settings)
        return self._logger

    def reset(self) -> None:
        """Drop cached settings so the next access re-reads the environment."""
        self._settings = None
        self._logger = None

    def validate_configuration(self) -> Dict[str, Any]:
        """Validate the current configuration and return status."""
        validation_results = {
            'valid': True,
            'errors': [],
            'warnings': [],
            'settings': {}
        }

        try:
            settings = self.settings

            validation_results['settings']['api_base_url'] = settings.api_base_url
            validation_results['settings']['server_base_url'] = settings.server_base_url

            if settings.api_base_url.startswith("http://") and "localhost" not in settings.api_base_url:
                validation_results['warnings'].append("API URL is not using HTTPS")

            session_dir = Path(settings.session_file).expanduser().parent
            if session_dir.exists() and not os.access(session_dir, os.W_OK):
                validation_results['errors'].append(f"Session directory is not writable: {session_dir}")

            validation_results['valid'] = len(validation_results['errors']) == 0

        except ConfigurationError as e:
            validation_results['valid'] = False
            validation_results['errors'].append(str(e))

        return validation_results

    def update_setting(self, key: str, value: Any) -> None:
        """Update a specific setting (for runtime configuration)."""
        if key in PortalSettings.model_fields:
            setattr(self.settings, key, value)
            self.logger.info(f"Updated setting {key} = {value}")
        else:
            raise ValueError(f"Unknown setting: {key}")

    def export_config(self) -> Dict[str, Any]:
        """Export current configuration."""
        return self.settings.model_dump()


# Global configuration instance
config_manager = ConfigurationManager()


def get_settings() -> PortalSettings:
    """Get the global settings instance."""
    return config_manager.settings


def get_logger() -> logging.Logger:
    """Get the global logger instance."""
    return config_manager.logger


def validate_config() -> Dict[str, Any]:
    """Validate the global configuration."""
    return config_manager.validate_configuration()


__all__ = [
    'PortalSettings',
    'LoggingConfig',
    'ConfigurationManager',
    'config_manager',
    'get_settings',
    'get_logger',
    'validate_config'
]
