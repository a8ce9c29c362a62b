"""Service construction and dependency injection."""

import logging

from fastapi import Request

from nftclub_api.config import Settings
from nftclub_common.services.password_hasher import PasswordHasher
from nftclub_common.services.static_response import StaticResponseProvider
from nftclub_common.services.user_service import UserAccessService
from nftclub_common.services.user_store import CosmosUserStore, InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


def build_user_store(settings: Settings) -> UserStore:
    """Build the user store selected by settings.

    Args:
        settings: Application settings

    Returns:
        UserStore instance
    """
    if settings.user_store_backend == "cosmos":
        if not settings.azure_cosmosdb_endpoint:
            raise ValueError("AZURE_COSMOSDB_ENDPOINT is required for the cosmos user store")

        store = CosmosUserStore.from_connection(
            cosmos_endpoint=settings.azure_cosmosdb_endpoint,
            cosmos_key=settings.azure_cosmosdb_key,
            database_name=settings.database_name,
            container_name=settings.cosmos_users_container,
        )
        logger.info("Initialized CosmosUserStore")
        return store

    logger.info("Initialized InMemoryUserStore")
    return InMemoryUserStore()


def build_user_service(settings: Settings, store: UserStore | None = None) -> UserAccessService:
    """Build the user service and its collaborators.

    Args:
        settings: Application settings
        store: Store to use instead of the one selected by settings

    Returns:
        UserAccessService instance
    """
    if settings.static_responses_file:
        static_responses = StaticResponseProvider.from_file(settings.static_responses_file)
    else:
        static_responses = StaticResponseProvider()

    return UserAccessService(
        store=store if store is not None else build_user_store(settings),
        hasher=PasswordHasher(n=settings.password_hash_n),
        static_responses=static_responses,
    )


def get_user_service(request: Request) -> UserAccessService:
    """FastAPI dependency returning the service bound to the running app."""
    return request.app.state.user_service
