"""Configuration module for the Product API.

Loads settings from config.yaml for non-sensitive values and .env for
database credentials. Fails fast with clear error messages if required
configuration is missing.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv

SUPPORTED_BACKENDS = ("sqlite", "cosmosdb")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from product_api/config/ up to project root
    return Path(__file__).parent.parent.parent


def _load_yaml_config() -> dict:
    """Load configuration from config.yaml."""
    config_path = _get_project_root() / "config.yaml"
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

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


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""
    host: str
    port: int
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class ProductStoreConfig:
    """Product store configuration with backend toggle."""
    backend: str  # "sqlite" or "cosmosdb"
    sqlite_path: str


@dataclass(frozen=True)
class CosmosDBConfig:
    """Azure Cosmos DB configuration for the products container."""
    endpoint: str
    key: str
    database_name: str
    container_name: str
    partition_key_path: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    server: ServerConfig
    logging: LoggingConfig
    product_store: ProductStoreConfig
    cosmosdb: Optional[CosmosDBConfig]  # Only required when product_store.backend == "cosmosdb"


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from config.yaml for non-sensitive settings and .env for secrets.
    Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    yaml_config = _load_yaml_config()

    server_section = yaml_config.get("server", {})
    try:
        port = int(server_section.get("port", 5000))
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid server port: {server_section.get('port')!r}"
        )

    server_config = ServerConfig(
        host=server_section.get("host", "0.0.0.0"),
        port=port,
        cors_origins=list(server_section.get("cors_origins", ["*"])),
    )

    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=str(logging_section.get("level", "INFO")).upper(),
    )

    store_section = yaml_config.get("product_store", {})
    backend = store_section.get("backend", "sqlite")
    if backend not in SUPPORTED_BACKENDS:
        raise ConfigurationError(
            f"Unsupported product_store.backend '{backend}'. "
            f"Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
        )

    product_store_config = ProductStoreConfig(
        backend=backend,
        sqlite_path=store_section.get("sqlite_path", "products.db"),
    )

    # Build CosmosDB config (only if backend is cosmosdb)
    cosmosdb_config: Optional[CosmosDBConfig] = None
    if backend == "cosmosdb":
        cosmosdb_section = yaml_config.get("cosmosdb", {})
        cosmosdb_config = CosmosDBConfig(
            endpoint=_get_required_env("COSMOSDB_ENDPOINT"),
            key=_get_required_env("COSMOSDB_KEY"),
            database_name=cosmosdb_section.get("database_name", "product_api"),
            container_name=cosmosdb_section.get("container_name", "products"),
            partition_key_path=cosmosdb_section.get("partition_key_path", "/id"),
        )

    return AppConfig(
        server=server_config,
        logging=logging_config,
        product_store=product_store_config,
        cosmosdb=cosmosdb_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config
