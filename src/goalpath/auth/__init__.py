"""Authentication and onboarding gating."""

from .completeness import check_profile_completion
from .credentials import (
    AuthMethod,
    CredentialGateway,
    Credentials,
    CredentialsError,
    normalize_identifier,
    validate_credentials,
)
from .listener import SessionListener

__all__ = [
    "AuthMethod",
    "check_profile_completion",
    "CredentialGateway",
    "Credentials",
    "CredentialsError",
    "normalize_identifier",
    "SessionListener",
    "validate_credentials",
]
