"""User stores: in-memory and Cosmos DB implementations."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

from azure.core import MatchConditions
from azure.cosmos import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)
from azure.identity import DefaultAzureCredential

from nftclub_common.exceptions import StoreError
from nftclub_common.models.user import UserRecord

logger = logging.getLogger(__name__)

# Cosmos adds these to every document it returns
_COSMOS_SYSTEM_FIELDS = ("_rid", "_self", "_etag", "_attachments", "_ts")


class UserStore(ABC):
    """Abstract interface for user persistence."""

    @abstractmethod
    def find_by_id(self, user_id: int) -> UserRecord | None:
        """Get a user record by ID, or None when absent."""

    @abstractmethod
    def save(self, record: UserRecord) -> UserRecord:
        """Insert a record and return it with its assigned ID."""


class InMemoryUserStore(UserStore):
    """Process-local store, used for development and tests."""

    def __init__(self) -> None:
        self._records: dict[int, UserRecord] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def find_by_id(self, user_id: int) -> UserRecord | None:
        with self._lock:
            record = self._records.get(user_id)
        return record.model_copy(deep=True) if record else None

    def save(self, record: UserRecord) -> UserRecord:
        with self._lock:
            self._last_id += 1
            stored = record.model_copy(update={"id": self._last_id}, deep=True)
            self._records[stored.id] = stored
        logger.debug("Stored user %s in memory", stored.id)
        return stored.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._records)


class CosmosUserStore(UserStore):
    """Cosmos DB implementation of UserStore.

    Documents are keyed (and partitioned) by the string form of the numeric
    user ID. IDs come from a sequence document that is incremented with an
    ETag precondition, so two concurrent inserts never share an ID.
    """

    SEQUENCE_DOC_ID = "_user_sequence"

    def __init__(self, container: ContainerProxy, max_sequence_retries: int = 10) -> None:
        """Initialize the store.

        Args:
            container: Cosmos container client for users (partition key "/id")
            max_sequence_retries: Attempts at bumping the ID sequence before giving up
        """
        self.container = container
        self.max_sequence_retries = max_sequence_retries

    @classmethod
    def from_connection(
        cls,
        cosmos_endpoint: str,
        cosmos_key: str | None = None,
        database_name: str = "nftclub",
        container_name: str = "users",
    ) -> "CosmosUserStore":
        """Connect to Cosmos DB and build a store for the users container.

        Args:
            cosmos_endpoint: Cosmos DB endpoint URL
            cosmos_key: Cosmos DB key; managed identity is used when omitted
            database_name: Database name
            container_name: Container name for users

        Returns:
            CosmosUserStore bound to the container
        """
        if cosmos_key:
            client = CosmosClient(cosmos_endpoint, cosmos_key)
        else:
            client = CosmosClient(cosmos_endpoint, DefaultAzureCredential())

        container = client.get_database_client(database_name).get_container_client(container_name)
        logger.info("Using Cosmos container '%s' in database '%s'", container_name, database_name)
        return cls(container)

    def find_by_id(self, user_id: int) -> UserRecord | None:
        key = str(user_id)
        try:
            doc = self.container.read_item(item=key, partition_key=key)
        except CosmosResourceNotFoundError:
            return None
        except CosmosHttpResponseError as e:
            logger.error("Error reading user %s: %s", user_id, e)
            raise StoreError(f"Failed to read user {user_id}") from e
        return self._to_record(doc)

    def save(self, record: UserRecord) -> UserRecord:
        user_id = self._next_id()
        body = record.model_dump(mode="json", exclude_unset=True)
        body["id"] = str(user_id)
        try:
            created = self.container.create_item(body=body)
        except CosmosHttpResponseError as e:
            logger.error("Error creating user %s: %s", user_id, e)
            raise StoreError("Failed to create user") from e
        logger.debug("Stored user %s in Cosmos", user_id)
        return self._to_record(created)

    def _next_id(self) -> int:
        """Bump the sequence document and return the new value."""
        key = self.SEQUENCE_DOC_ID
        for attempt in range(1, self.max_sequence_retries + 1):
            try:
                seq = self.container.read_item(item=key, partition_key=key)
            except CosmosResourceNotFoundError:
                try:
                    self.container.create_item(body={"id": key, "value": 1})
                    return 1
                except CosmosResourceExistsError:
                    logger.debug("Sequence created concurrently, retrying (attempt %s)", attempt)
                    continue
                except CosmosHttpResponseError as e:
                    raise StoreError("Failed to initialize user ID sequence") from e
            except CosmosHttpResponseError as e:
                raise StoreError("Failed to read user ID sequence") from e

            seq["value"] = int(seq["value"]) + 1
            try:
                self.container.replace_item(
                    item=key,
                    body={"id": key, "value": seq["value"]},
                    etag=seq["_etag"],
                    match_condition=MatchConditions.IfNotModified,
                )
                return seq["value"]
            except CosmosAccessConditionFailedError:
                logger.debug("Sequence updated concurrently, retrying (attempt %s)", attempt)
            except CosmosHttpResponseError as e:
                raise StoreError("Failed to update user ID sequence") from e

        raise StoreError(f"Could not allocate a user ID after {self.max_sequence_retries} attempts")

    @staticmethod
    def _to_record(doc: dict[str, Any]) -> UserRecord:
        data = {k: v for k, v in doc.items() if k not in _COSMOS_SYSTEM_FIELDS}
        data["id"] = int(data["id"])
        return UserRecord.model_validate(data)
