"""Client modules for external services."""

from product_api.clients.sqlite_client import SqliteClient
from product_api.clients.cosmosdb_client import CosmosDBClient

__all__ = [
    "SqliteClient",
    "CosmosDBClient",
]
