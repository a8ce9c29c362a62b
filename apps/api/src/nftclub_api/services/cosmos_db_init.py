"""Cosmos DB initialization service."""

import logging

from azure.cosmos import CosmosClient, PartitionKey, exceptions
from azure.identity import DefaultAzureCredential

from nftclub_api.config import Settings

logger = logging.getLogger(__name__)


class CosmosDbInitializer:
    """Create the database and users container if they don't exist."""

    def __init__(self, settings: Settings):
        """Initialize the Cosmos DB client.

        Args:
            settings: Application settings with Cosmos DB configuration
        """
        self.settings = settings
        self.client: CosmosClient | None = None
        self.database = None

    def connect(self) -> None:
        """Create connection to Cosmos DB."""
        if not self.settings.azure_cosmosdb_endpoint:
            logger.warning("Cosmos DB endpoint not configured. Skipping initialization.")
            return

        credential = self.settings.azure_cosmosdb_key or DefaultAzureCredential()
        self.client = CosmosClient(url=self.settings.azure_cosmosdb_endpoint, credential=credential)
        logger.info("Connected to Cosmos DB at %s", self.settings.azure_cosmosdb_endpoint)

    def initialize_database(self) -> None:
        """Create database if it doesn't exist."""
        if not self.client:
            return

        self.database = self.client.create_database_if_not_exists(id=self.settings.database_name)
        logger.info("Database '%s' initialized", self.settings.database_name)

    def initialize_containers(self) -> None:
        """Create the users container if it doesn't exist."""
        if not self.database:
            return

        # Emulator requires provisioned throughput
        is_emulator = "localhost" in (self.settings.azure_cosmosdb_endpoint or "").lower()
        kwargs = {"offer_throughput": 400} if is_emulator else {}

        try:
            self.database.create_container_if_not_exists(
                id=self.settings.cosmos_users_container,
                partition_key=PartitionKey(path="/id"),
                **kwargs,
            )
            logger.info(
                "Container '%s' initialized with partition key '/id'",
                self.settings.cosmos_users_container,
            )
        except exceptions.CosmosResourceExistsError:
            logger.info("Container '%s' already exists", self.settings.cosmos_users_container)

    def initialize(self) -> None:
        """Run full initialization: connect, create database and containers."""
        self.connect()
        self.initialize_database()
        self.initialize_containers()
        logger.info("Cosmos DB initialization completed")


async def initialize_cosmos_db(settings: Settings) -> None:
    """Initialize Cosmos DB during application startup.

    Failures are fatal only in production.

    Args:
        settings: Application settings
    """
    initializer = CosmosDbInitializer(settings)
    try:
        initializer.initialize()
    except Exception as e:
        logger.error("Failed to initialize Cosmos DB: %s", e)
        if settings.environment == "production":
            raise
        logger.warning("Continuing without Cosmos DB initialization (development mode)")
