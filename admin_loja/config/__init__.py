"""Configuration module."""

from admin_loja.config.configuration import (
    AppConfig,
    AuthConfig,
    ConfigurationError,
    CosmosDBConfig,
    DatabaseConfig,
    LoggingConfig,
    OpenAIConfig,
    StorageConfig,
    UploadConfig,
    get_config,
    get_environment,
    load_config,
    reset_config,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "ConfigurationError",
    "CosmosDBConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "OpenAIConfig",
    "StorageConfig",
    "UploadConfig",
    "get_config",
    "get_environment",
    "load_config",
    "reset_config",
]
