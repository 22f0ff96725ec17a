"""Integration tests for the Cosmos DB client and product repository.

These tests require actual Cosmos DB credentials and connectivity.
They verify:
- CosmosDBClient connection and CRUD operations
- CosmosProductRepository against a real container
- Database and container auto-creation
"""

import os
import uuid

import pytest
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from product_api.clients import CosmosDBClient
from product_api.config import CosmosDBConfig
from product_api.errors import ProductValidationError
from product_api.services import CosmosProductRepository


def cosmos_credentials_available() -> bool:
    """Check if Cosmos DB credentials are available."""
    return bool(os.environ.get("COSMOSDB_ENDPOINT") and os.environ.get("COSMOSDB_KEY"))


# Skip all tests if credentials not available
pytestmark = pytest.mark.skipif(
    not cosmos_credentials_available(),
    reason="Cosmos DB credentials not configured (COSMOSDB_ENDPOINT, COSMOSDB_KEY)",
)

TEST_DATABASE = os.environ.get("COSMOSDB_TEST_DATABASE", "product_api_test")


@pytest.fixture
def test_container_name():
    """Generate unique container name for test isolation."""
    return f"test-products-{uuid.uuid4().hex[:8]}"


@pytest.fixture
async def cosmos_client(test_container_name):
    """Create a connected CosmosDBClient on a throwaway container."""
    client = CosmosDBClient(
        endpoint=os.environ["COSMOSDB_ENDPOINT"],
        key=os.environ["COSMOSDB_KEY"],
        database_name=TEST_DATABASE,
        container_name=test_container_name,
    )
    await client.connect()
    yield client
    # Cleanup: delete test container
    try:
        if client._container:
            await client._database.delete_container(test_container_name)
    except Exception as e:
        print(f"Cleanup warning: {e}")
    await client.close()


class TestCosmosDBClient:
    """Test CosmosDBClient CRUD operations."""

    @pytest.mark.asyncio
    async def test_client_connection(self, cosmos_client):
        assert cosmos_client._client is not None
        assert cosmos_client._database is not None
        assert cosmos_client._container is not None

        print("Cosmos DB client connected successfully")
        print(f"  Container: {cosmos_client._container_name}")

    @pytest.mark.asyncio
    async def test_create_and_read_item(self, cosmos_client):
        item_id = f"read-test-{uuid.uuid4().hex[:8]}"
        await cosmos_client.create_item({"id": item_id, "name": "n", "description": "d"})

        result = await cosmos_client.read_item(item_id, item_id)

        assert result["id"] == item_id
        assert "_etag" in result  # Cosmos DB etag

    @pytest.mark.asyncio
    async def test_patch_item(self, cosmos_client):
        item_id = f"patch-test-{uuid.uuid4().hex[:8]}"
        await cosmos_client.create_item({"id": item_id, "name": "n", "description": "d"})

        result = await cosmos_client.patch_item(
            item_id, item_id, [{"op": "set", "path": "/name", "value": "patched"}]
        )

        assert result["name"] == "patched"
        assert result["description"] == "d"

    @pytest.mark.asyncio
    async def test_delete_item(self, cosmos_client):
        item_id = f"delete-test-{uuid.uuid4().hex[:8]}"
        await cosmos_client.create_item({"id": item_id, "name": "n", "description": "d"})

        await cosmos_client.delete_item(item_id, item_id)

        with pytest.raises(CosmosResourceNotFoundError):
            await cosmos_client.read_item(item_id, item_id)

    @pytest.mark.asyncio
    async def test_operations_without_connection_raise(self):
        client = CosmosDBClient(
            endpoint=os.environ["COSMOSDB_ENDPOINT"],
            key=os.environ["COSMOSDB_KEY"],
            database_name=TEST_DATABASE,
            container_name="test-container",
        )

        with pytest.raises(RuntimeError, match="not connected"):
            await client.query_items("SELECT * FROM c")


class TestCosmosProductRepository:
    """Product CRUD against a real container."""

    @pytest.fixture
    def repository(self, cosmos_client):
        return CosmosProductRepository(cosmos_client)

    @pytest.mark.asyncio
    async def test_product_lifecycle(self, repository):
        created = await repository.create({"name": "iphone", "description": "a phone"})

        assert await repository.find_by_id(created.id) == created
        assert created in await repository.find_all()

        updated = await repository.update_by_id(
            created.id, {"name": "updated name", "description": "updated desc"}
        )
        assert updated.name == "updated name"
        assert updated.description == "updated desc"

        assert await repository.delete_by_id(created.id) == updated
        assert await repository.delete_by_id(created.id) is None

        print(f"Product {created.id} created, updated and deleted")

    @pytest.mark.asyncio
    async def test_unknown_id_is_none(self, repository):
        missing = "628514cf7aead1f021afc666"

        assert await repository.find_by_id(missing) is None
        assert await repository.update_by_id(missing, {"name": "x"}) is None
        assert await repository.delete_by_id(missing) is None

    @pytest.mark.asyncio
    async def test_validation_error(self, repository):
        with pytest.raises(ProductValidationError):
            await repository.create({"name": "iphone"})

    @pytest.mark.asyncio
    async def test_from_config(self, test_container_name):
        config = CosmosDBConfig(
            endpoint=os.environ["COSMOSDB_ENDPOINT"],
            key=os.environ["COSMOSDB_KEY"],
            database_name=TEST_DATABASE,
            container_name=test_container_name,
            partition_key_path="/id",
        )

        async with CosmosProductRepository.from_config(config) as repository:
            product = await repository.create({"name": "n", "description": "d"})
            assert product.id

            # Cleanup
            await repository._cosmosdb_client._database.delete_container(test_container_name)
