"""Configuration module."""

from product_api.config.configuration import (
    AppConfig,
    ConfigurationError,
    CosmosDBConfig,
    LoggingConfig,
    ProductStoreConfig,
    ServerConfig,
    get_config,
    load_config,
)

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "CosmosDBConfig",
    "LoggingConfig",
    "ProductStoreConfig",
    "ServerConfig",
    "get_config",
    "load_config",
]
