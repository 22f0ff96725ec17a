"""Product persistence accessor with a backend toggle.

Two backends share one async contract:
- cosmosdb: documents in an Azure Cosmos DB container partitioned on /id
- sqlite: rows in a local SQLite file, for development and tests

Absent records are returned as None. Validation failures raise
ProductValidationError before the store is touched; store and transport
failures raise ProductStoreError.
"""

import logging
import sqlite3
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from azure.core.exceptions import AzureError
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from product_api.clients import CosmosDBClient, SqliteClient
from product_api.config import AppConfig, ConfigurationError, CosmosDBConfig
from product_api.errors import ProductStoreError
from product_api.models import Product, validate_new_product, validate_product_patch

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL
)
"""


class ProductRepository(ABC):
    """Async CRUD contract over the products collection."""

    backend: str

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> "ProductRepository":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Product:
        """Validate and store a new product, returning the stored record."""

    @abstractmethod
    async def find_all(self) -> List[Product]:
        """Return every stored product."""

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Optional[Product]:
        """Return the product with the given id, or None."""

    @abstractmethod
    async def update_by_id(self, product_id: str, patch: Dict[str, Any]) -> Optional[Product]:
        """Apply a partial update and return the updated record, or None."""

    @abstractmethod
    async def delete_by_id(self, product_id: str) -> Optional[Product]:
        """Delete the product and return the removed record, or None."""


class SqliteProductRepository(ProductRepository):
    """Product repository backed by a SQLite file."""

    backend = "sqlite"

    def __init__(self, db_path: str = "products.db"):
        """Initialize the repository.

        Args:
            db_path: Path to the SQLite database file.
        """
        self._db_path = db_path
        self._sqlite_client: Optional[SqliteClient] = None

    async def connect(self) -> None:
        """Open the database file and create the products table if needed."""
        try:
            self._sqlite_client = SqliteClient(self._db_path)
        except sqlite3.Error as exc:
            raise ProductStoreError(f"Unable to open product database: {exc}") from exc
        self._execute(CREATE_TABLE_SQL)
        logger.info(f"SQLite product store ready at {self._db_path}")

    async def close(self) -> None:
        if self._sqlite_client is not None:
            self._sqlite_client.close()
            self._sqlite_client = None

    def _execute(self, query: str, params=None) -> List[Dict[str, Any]]:
        if self._sqlite_client is None:
            raise ProductStoreError("SQLite product store not connected. Call connect() first.")
        try:
            return self._sqlite_client.execute_query(query, params)
        except sqlite3.Error as exc:
            raise ProductStoreError(str(exc)) from exc

    def _select_one(self, product_id: str) -> Optional[Product]:
        rows = self._execute(
            "SELECT id, name, description FROM products WHERE id = ?",
            (product_id,),
        )
        return Product.from_document(rows[0]) if rows else None

    async def create(self, data: Dict[str, Any]) -> Product:
        fields = validate_new_product(data)
        product = Product(id=str(uuid.uuid4()), **fields)
        self._execute(
            "INSERT INTO products (id, name, description) VALUES (?, ?, ?)",
            (product.id, product.name, product.description),
        )
        return product

    async def find_all(self) -> List[Product]:
        rows = self._execute("SELECT id, name, description FROM products ORDER BY rowid")
        return [Product.from_document(row) for row in rows]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        return self._select_one(product_id)

    async def update_by_id(self, product_id: str, patch: Dict[str, Any]) -> Optional[Product]:
        fields = validate_product_patch(patch)
        existing = self._select_one(product_id)
        if existing is None or not fields:
            return existing

        # Column names come from the validated schema fields only
        assignments = ", ".join(f"{name} = ?" for name in fields)
        self._execute(
            f"UPDATE products SET {assignments} WHERE id = ?",
            (*fields.values(), product_id),
        )
        return self._select_one(product_id)

    async def delete_by_id(self, product_id: str) -> Optional[Product]:
        existing = self._select_one(product_id)
        if existing is None:
            return None
        self._execute("DELETE FROM products WHERE id = ?", (product_id,))
        return existing


class CosmosProductRepository(ProductRepository):
    """Product repository backed by an Azure Cosmos DB container.

    The container is partitioned on /id so every point operation uses the
    product id as its partition key.
    """

    backend = "cosmosdb"

    def __init__(self, cosmosdb_client: CosmosDBClient):
        self._cosmosdb_client = cosmosdb_client

    @classmethod
    def from_config(cls, config: CosmosDBConfig) -> "CosmosProductRepository":
        if config.partition_key_path != "/id":
            raise ConfigurationError(
                f"Products container must be partitioned on '/id', "
                f"got '{config.partition_key_path}'"
            )
        return cls(
            CosmosDBClient(
                endpoint=config.endpoint,
                key=config.key,
                database_name=config.database_name,
                container_name=config.container_name,
                partition_key_path=config.partition_key_path,
            )
        )

    async def connect(self) -> None:
        try:
            await self._cosmosdb_client.connect()
        except AzureError as exc:
            raise ProductStoreError(f"Unable to connect to Cosmos DB: {exc.message}") from exc
        logger.info("Cosmos DB product store connected")

    async def close(self) -> None:
        await self._cosmosdb_client.close()

    async def create(self, data: Dict[str, Any]) -> Product:
        fields = validate_new_product(data)
        try:
            document = await self._cosmosdb_client.create_item(
                {"id": str(uuid.uuid4()), **fields}
            )
        except AzureError as exc:
            raise ProductStoreError(exc.message) from exc
        return Product.from_document(document)

    async def find_all(self) -> List[Product]:
        try:
            documents = await self._cosmosdb_client.query_items("SELECT * FROM c")
        except AzureError as exc:
            raise ProductStoreError(exc.message) from exc
        return [Product.from_document(document) for document in documents]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        try:
            document = await self._cosmosdb_client.read_item(product_id, product_id)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as exc:
            raise ProductStoreError(exc.message) from exc
        return Product.from_document(document)

    async def update_by_id(self, product_id: str, patch: Dict[str, Any]) -> Optional[Product]:
        fields = validate_product_patch(patch)
        if not fields:
            return await self.find_by_id(product_id)

        operations = [
            {"op": "set", "path": f"/{name}", "value": value}
            for name, value in fields.items()
        ]
        try:
            document = await self._cosmosdb_client.patch_item(product_id, product_id, operations)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as exc:
            raise ProductStoreError(exc.message) from exc
        return Product.from_document(document)

    async def delete_by_id(self, product_id: str) -> Optional[Product]:
        existing = await self.find_by_id(product_id)
        if existing is None:
            return None
        try:
            await self._cosmosdb_client.delete_item(product_id, product_id)
        except CosmosResourceNotFoundError:
            # Removed by a concurrent request between the read and the delete
            return None
        except AzureError as exc:
            raise ProductStoreError(exc.message) from exc
        return existing


def create_product_repository(config: AppConfig) -> ProductRepository:
    """Build the repository selected by product_store.backend."""
    if config.product_store.backend == "cosmosdb":
        if config.cosmosdb is None:
            raise ConfigurationError("Cosmos DB backend selected but cosmosdb config is missing")
        return CosmosProductRepository.from_config(config.cosmosdb)
    return SqliteProductRepository(config.product_store.sqlite_path)
