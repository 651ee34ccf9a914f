"""Base protocol for backend-as-a-service clients."""

from abc import ABC, abstractmethod
from typing import Callable, Protocol, runtime_checkable

from ..models.session import AuthSession, AuthUser

# Receives the backend's event name (e.g. "SIGNED_IN") and the current session
AuthChangeCallback = Callable[[str, AuthSession | None], None]


class BackendError(Exception):
    """A failed backend call, carrying the backend's own message."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


@runtime_checkable
class Subscription(Protocol):
    """Handle returned by an auth-change subscription."""

    def unsubscribe(self) -> None:
        ...


@runtime_checkable
class BackendClient(Protocol):
    """Protocol for the hosted backend the app delegates to.

    Every method raises BackendError on failure.
    """

    async def sign_up(
        self, email: str, password: str, metadata: dict | None = None
    ) -> AuthUser | None:
        """Create an account and return the new user."""
        ...

    async def sign_in_with_password(
        self,
        password: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> AuthSession:
        """Sign in with exactly one of ``email`` or ``phone``."""
        ...

    async def sign_out(self) -> None:
        ...

    async def get_session(self) -> AuthSession | None:
        ...

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        """Register ``callback`` for every auth state transition."""
        ...

    async def select(
        self, table: str, filters: dict, columns: str = "*"
    ) -> list[dict]:
        """Return rows of ``table`` matching all equality ``filters``."""
        ...

    async def select_one(
        self, table: str, filters: dict, columns: str = "*"
    ) -> dict | None:
        """Return the first matching row, or None when there is none."""
        ...

    async def insert(self, table: str, row: dict) -> dict:
        """Insert a row and return it as stored."""
        ...

    async def update(self, table: str, values: dict, filters: dict) -> list[dict]:
        """Update matching rows and return them as stored."""
        ...

    async def close(self) -> None:
        ...


class BaseBackendClient(ABC):
    """Base class for backend clients with common functionality."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the name of this backend."""
        pass

    async def select_one(
        self, table: str, filters: dict, columns: str = "*"
    ) -> dict | None:
        rows = await self.select(table, filters, columns)
        return rows[0] if rows else None

    @abstractmethod
    async def select(
        self, table: str, filters: dict, columns: str = "*"
    ) -> list[dict]:
        pass

    async def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} backend={self.backend_name}>"
