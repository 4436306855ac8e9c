from .settings import (
    PortalSettings,
    LoggingConfig,
    ConfigurationManager,
    config_manager,
    get_settings,
    get_logger,
    validate_config
)

__all__ = [
    'PortalSettings',
    'LoggingConfig',
    'ConfigurationManager',
    'config_manager',
    'get_settings',
    'get_logger',
    'validate_config'
]
