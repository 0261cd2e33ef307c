"""Configuration module for Admin Loja.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (SQLite documents + local asset folder)
- APP_ENV=test → config_test.yaml (Cosmos DB + Blob Storage, production-like)
- Default      → config.yaml

Secrets (database keys, storage connection string, admin password, session
signing secret, OpenAI key) are loaded from the .env file.
Fails fast with clear error messages if required configuration is missing.
"""

import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml
from dotenv import load_dotenv

DEFAULT_ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from admin_loja/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


@dataclass(frozen=True)
class DatabaseConfig:
    """Document database configuration with backend toggle."""
    backend: str  # "sqlite" or "cosmosdb"
    sqlite_path: str


@dataclass(frozen=True)
class CosmosDBConfig:
    """Azure Cosmos DB configuration for the catalog collections."""
    endpoint: str
    key: str
    database_name: str
    partition_key_path: str


@dataclass(frozen=True)
class StorageConfig:
    """Asset storage configuration with backend toggle."""
    backend: str  # "local" or "azure_blob"
    local_root: str
    local_base_url: str
    container_name: str
    connection_string: Optional[str]  # Only required when backend == "azure_blob"


@dataclass(frozen=True)
class OpenAIConfig:
    """OpenAI API configuration for description suggestions.

    ``api_key`` may be None: suggestions then fall back to the fixed template.
    """
    api_key: Optional[str]
    model: str
    temperature: float
    max_tokens: int


@dataclass(frozen=True)
class UploadConfig:
    """Limits applied when staging image files."""
    allowed_types: Tuple[str, ...]
    max_file_size_bytes: int
    max_product_images: int
    max_banner_images: int


@dataclass(frozen=True)
class AuthConfig:
    """Back-office sign-in configuration."""
    admin_email: str
    admin_password: str
    secret: str
    token_max_age: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    database: DatabaseConfig
    cosmosdb: Optional[CosmosDBConfig]  # Only required when database.backend == "cosmosdb"
    storage: StorageConfig
    openai: OpenAIConfig
    uploads: UploadConfig
    auth: AuthConfig
    logging: LoggingConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from config.yaml for non-sensitive settings and .env for secrets.
    Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build Database config
    db_section = yaml_config.get("database", {})
    database_backend = db_section.get("backend", "sqlite")
    if database_backend not in ("sqlite", "cosmosdb"):
        raise ConfigurationError(
            f"Unknown database backend '{database_backend}'. Use 'sqlite' or 'cosmosdb'."
        )

    database_config = DatabaseConfig(
        backend=database_backend,
        sqlite_path=db_section.get("sqlite_path", "admin_loja.db"),
    )

    # Build CosmosDB config (only if backend is cosmosdb)
    cosmosdb_config: Optional[CosmosDBConfig] = None
    if database_backend == "cosmosdb":
        cosmosdb_section = yaml_config.get("cosmosdb", {})
        cosmosdb_config = CosmosDBConfig(
            endpoint=_get_required_env("COSMOSDB_ENDPOINT"),
            key=_get_required_env("COSMOSDB_KEY"),
            database_name=cosmosdb_section.get("database_name", "loja"),
            partition_key_path=cosmosdb_section.get("partition_key_path", "/id"),
        )

    # Build Storage config
    storage_section = yaml_config.get("storage", {})
    storage_backend = storage_section.get("backend", "local")
    if storage_backend not in ("local", "azure_blob"):
        raise ConfigurationError(
            f"Unknown storage backend '{storage_backend}'. Use 'local' or 'azure_blob'."
        )

    storage_config = StorageConfig(
        backend=storage_backend,
        local_root=storage_section.get("local_root", "media"),
        local_base_url=storage_section.get("local_base_url", "http://localhost:8000/media"),
        container_name=storage_section.get("container_name", "loja-assets"),
        connection_string=(
            _get_required_env("AZURE_STORAGE_CONNECTION_STRING")
            if storage_backend == "azure_blob"
            else None
        ),
    )

    # Build OpenAI config
    openai_section = yaml_config.get("openai", {})

    openai_config = OpenAIConfig(
        api_key=_get_optional_env("OPENAI_API_KEY"),
        model=openai_section.get("model", "gpt-3.5-turbo"),
        temperature=float(openai_section.get("temperature", 0.7)),
        max_tokens=int(openai_section.get("max_tokens", 150)),
    )

    # Build Upload config
    uploads_section = yaml_config.get("uploads", {})

    upload_config = UploadConfig(
        allowed_types=tuple(uploads_section.get("allowed_types", DEFAULT_ALLOWED_IMAGE_TYPES)),
        max_file_size_bytes=int(uploads_section.get("max_file_size_mb", 5)) * 1024 * 1024,
        max_product_images=int(uploads_section.get("max_product_images", 5)),
        max_banner_images=int(uploads_section.get("max_banner_images", 1)),
    )

    # Build Auth config
    auth_section = yaml_config.get("auth", {})
    admin_password = _get_required_env("ADMIN_PASSWORD")

    # Dev sessions may be signed with a per-process key; they end on restart
    auth_secret = _get_optional_env("AUTH_SECRET")
    if not auth_secret:
        if get_environment() != "dev":
            auth_secret = _get_required_env("AUTH_SECRET")
        else:
            auth_secret = secrets.token_hex(32)

    auth_config = AuthConfig(
        admin_email=_get_optional_env("ADMIN_EMAIL", auth_section.get("admin_email", "admin@loja.com")),
        admin_password=admin_password,
        secret=auth_secret,
        token_max_age=int(auth_section.get("token_max_age", 86400)),
    )

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    return AppConfig(
        database=database_config,
        cosmosdb=cosmosdb_config,
        storage=storage_config,
        openai=openai_config,
        uploads=upload_config,
        auth=auth_config,
        logging=logging_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev', 'test', or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
