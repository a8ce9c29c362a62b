"""User models for the User API."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr


class UserBase(BaseModel):
    """Fields shared by every user shape.

    Unknown fields are kept as-is so callers can attach their own attributes.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, description="Display name of the user")
    email: EmailStr | None = Field(default=None, description="Email address of the user")


class UserCreate(UserBase):
    """Payload accepted when creating a user."""

    id: int | None = Field(default=None, description="Ignored, identifiers are assigned on insert")
    password: SecretStr | None = Field(default=None, description="Plain password, hashed before storage")

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "name": "Alice",
                "email": "alice@example.com",
                "password": "correct horse battery staple",
            }
        },
    )


class UserRecord(UserBase):
    """User as held by a store."""

    id: int | None = None
    password_hash: str | None = None

    def to_public(self) -> "User":
        """Drop the credential and return the public view.

        Only fields that were set carry over, so optional fields the caller
        never sent stay absent from responses.
        """
        return User.model_validate(self.model_dump(exclude={"password_hash"}, exclude_unset=True))


class User(UserBase):
    """User entity returned to callers."""

    id: int = Field(..., description="Identifier assigned by the store")

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Alice",
                "email": "alice@example.com",
            }
        },
    )
