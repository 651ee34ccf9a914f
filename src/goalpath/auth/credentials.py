"""Credential validation, identifier normalization and the auth gateway."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from ..clients.base import BackendClient, BackendError
from ..models.session import AuthSession, AuthUser

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# The backend requires an email on sign-up; phone users get a placeholder one
PLACEHOLDER_EMAIL_DOMAIN = "temporary.com"


class AuthMethod(str, Enum):
    """Which kind of identifier the user typed."""

    EMAIL = "email"
    PHONE = "phone"


class CredentialsError(Exception):
    """Credentials rejected before reaching the backend."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Credentials(BaseModel):
    """Sign-up / sign-in form input."""

    identifier: str
    password: str
    method: AuthMethod = AuthMethod.EMAIL

    @field_validator("identifier")
    @classmethod
    def identifier_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("required", "Required")
        return value

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min_length} characters",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        return value


def validate_credentials(
    identifier: str, password: str, method: AuthMethod | str = AuthMethod.EMAIL
) -> Credentials:
    """Validate form input, raising CredentialsError with the first message."""
    try:
        return Credentials(identifier=identifier, password=password, method=method)
    except ValidationError as e:
        raise CredentialsError(e.errors()[0]["msg"]) from e


@dataclass
class SignUpIdentity:
    """What the backend sign-up call receives for an identifier."""

    email: str
    metadata: dict = field(default_factory=dict)


def normalize_identifier(identifier: str, method: AuthMethod) -> SignUpIdentity:
    """Map a user identifier onto the backend's email-based sign-up.

    Phone numbers become ``<identifier>@temporary.com`` with the typed value
    kept as ``username`` metadata.
    """
    if method is AuthMethod.EMAIL:
        return SignUpIdentity(email=identifier)
    return SignUpIdentity(
        email=f"{identifier}@{PLACEHOLDER_EMAIL_DOMAIN}",
        metadata={"username": identifier},
    )


class CredentialGateway:
    """Thin wrapper over the backend's auth calls."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def sign_up(self, credentials: Credentials) -> AuthUser:
        """Create an account, returning the new user."""
        identity = normalize_identifier(credentials.identifier, credentials.method)
        try:
            user = await self.backend.sign_up(
                identity.email, credentials.password, identity.metadata
            )
        except BackendError as e:
            logger.error("Sign-up failed for %s: %s", identity.email, e.message)
            raise

        if user is None:
            raise BackendError("No user returned from sign up")

        logger.info("User created successfully: %s", user.id)
        return user

    async def sign_in(self, credentials: Credentials) -> AuthSession:
        """Sign in with the identifier in the field ``method`` selects."""
        if credentials.method is AuthMethod.EMAIL:
            return await self.backend.sign_in_with_password(
                credentials.password, email=credentials.identifier
            )
        return await self.backend.sign_in_with_password(
            credentials.password, phone=credentials.identifier
        )

    async def sign_out(self) -> None:
        await self.backend.sign_out()
