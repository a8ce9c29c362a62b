"""User Access Service: mediates between API callers and a UserStore."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from nftclub_common.exceptions import UserNotFoundError, UserValidationError
from nftclub_common.models.user import User, UserCreate, UserRecord
from nftclub_common.services.password_hasher import PasswordHasher
from nftclub_common.services.static_response import StaticResponseProvider
from nftclub_common.services.user_store import UserStore

logger = logging.getLogger(__name__)


class UserAccessService:
    """Read, create and describe users.

    The service keeps no state of its own; every collaborator is passed in.
    """

    RESOURCE_NAME = "user"

    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher | None = None,
        static_responses: StaticResponseProvider | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Entity store that owns all persisted users
            hasher: Password hasher applied before anything reaches the store
            static_responses: Provider of the static "user" descriptor
        """
        self.store = store
        self.hasher = hasher or PasswordHasher()
        self.static_responses = static_responses or StaticResponseProvider()

    def get_static_descriptor(self) -> dict[str, Any]:
        """Return the fixed descriptor of the user resource."""
        return self.static_responses.get(self.RESOURCE_NAME)

    def get_user(self, user_id: int) -> User:
        """Get a user by ID.

        Raises:
            UserValidationError: If the ID is not an integer
            UserNotFoundError: If no user has that ID
        """
        user_id = self._coerce_id(user_id)

        record = self.store.find_by_id(user_id)
        if record is None:
            logger.info("User %s not found", user_id)
            raise UserNotFoundError(user_id)
        return record.to_public()

    def create_user(self, payload: UserCreate | Mapping[str, Any]) -> User:
        """Validate, hash and persist a new user.

        Any client-supplied ID is discarded; the store assigns one. Calling
        this twice with the same payload creates two users.

        Raises:
            UserValidationError: If the payload is malformed
            StoreError: If the store fails
        """
        user = self._validate(payload)

        data = user.model_dump(exclude={"id", "password"}, exclude_unset=True)
        data.pop("password_hash", None)
        password_hash = self.hasher.hash(user.password.get_secret_value()) if user.password else None

        saved = self.store.save(UserRecord(**data, password_hash=password_hash))
        logger.info("Created user %s", saved.id)
        return saved.to_public()

    @staticmethod
    def _coerce_id(user_id: Any) -> int:
        """Accept ints, integral floats and numeric strings; reject everything else."""
        if isinstance(user_id, bool):
            raise UserValidationError(f"Invalid user id: {user_id!r}")
        if isinstance(user_id, int):
            return user_id
        if isinstance(user_id, float):
            if not user_id.is_integer():
                raise UserValidationError(f"Invalid user id: {user_id!r}")
            return int(user_id)
        try:
            return int(user_id)
        except (TypeError, ValueError) as e:
            raise UserValidationError(f"Invalid user id: {user_id!r}") from e

    @staticmethod
    def _validate(payload: UserCreate | Mapping[str, Any]) -> UserCreate:
        if isinstance(payload, UserCreate):
            return payload
        if not isinstance(payload, Mapping):
            raise UserValidationError(f"User payload must be an object, got {type(payload).__name__}")
        try:
            return UserCreate.model_validate(dict(payload))
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            logger.info("Rejected user payload: %s", errors)
            raise UserValidationError("Invalid user payload", errors=errors) from e
