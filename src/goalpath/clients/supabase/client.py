"""Supabase backend client."""

import logging
from datetime import datetime, timezone
from functools import wraps

import httpx
from supabase import AsyncClient, AsyncClientOptions, AuthError, PostgrestAPIError, acreate_client

from ...models.session import AuthSession, AuthUser
from ..base import AuthChangeCallback, BackendError, BaseBackendClient, Subscription

logger = logging.getLogger(__name__)


def translate_errors(f):
    """Re-raise Supabase library failures as BackendError."""

    @wraps(f)
    async def wrapper(*args, **kwargs):
        try:
            return await f(*args, **kwargs)
        except AuthError as e:
            raise BackendError(e.message or str(e), getattr(e, "code", None)) from e
        except PostgrestAPIError as e:
            raise BackendError(e.message or str(e), e.code) from e
        except httpx.HTTPError as e:
            raise BackendError(f"Network error: {e}") from e

    return wrapper


def to_auth_user(user) -> AuthUser:
    """Convert a supabase-auth ``User`` into an AuthUser."""
    return AuthUser(
        id=user.id,
        email=user.email or None,
        phone=user.phone or None,
        metadata=dict(user.user_metadata or {}),
    )


def to_auth_session(session) -> AuthSession | None:
    """Convert a supabase-auth ``Session`` into an AuthSession."""
    if session is None or session.user is None:
        return None
    expires_at = None
    if session.expires_at:
        expires_at = datetime.fromtimestamp(session.expires_at, tz=timezone.utc)
    return AuthSession(
        user=to_auth_user(session.user),
        access_token=session.access_token,
        expires_at=expires_at,
    )


class SupabaseBackend(BaseBackendClient):
    """Backend client backed by one Supabase ``AsyncClient``.

    Each instance keeps its own auth session in memory, so one instance must
    serve exactly one browser session. The access token is refreshed on
    demand before table calls; no background refresh timer runs.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    @classmethod
    async def connect(cls, url: str, key: str) -> "SupabaseBackend":
        """Create a client for the given project URL and anon key."""
        client = await acreate_client(
            url, key, options=AsyncClientOptions(auto_refresh_token=False)
        )
        logger.debug("Created Supabase client for %s", url)
        return cls(client)

    async def close(self) -> None:
        """Release the auth and PostgREST HTTP clients."""
        await self.client.auth.close()
        await self.client.postgrest.aclose()

    async def _table(self, table: str):
        # Refreshes an expired access token and the PostgREST auth header
        await self.client.auth.get_session()
        return self.client.table(table)

    @property
    def backend_name(self) -> str:
        return "supabase"

    @translate_errors
    async def sign_up(
        self, email: str, password: str, metadata: dict | None = None
    ) -> AuthUser | None:
        credentials = {"email": email, "password": password}
        if metadata:
            credentials["options"] = {"data": metadata}
        response = await self.client.auth.sign_up(credentials)
        if response.user is None:
            return None
        return to_auth_user(response.user)

    @translate_errors
    async def sign_in_with_password(
        self,
        password: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> AuthSession:
        if (email is None) == (phone is None):
            raise ValueError("Exactly one of email or phone is required")
        credentials = {"password": password}
        if email is not None:
            credentials["email"] = email
        else:
            credentials["phone"] = phone
        response = await self.client.auth.sign_in_with_password(credentials)
        session = to_auth_session(response.session)
        if session is None:
            raise BackendError("No session returned from sign in")
        return session

    @translate_errors
    async def sign_out(self) -> None:
        await self.client.auth.sign_out()

    @translate_errors
    async def get_session(self) -> AuthSession | None:
        return to_auth_session(await self.client.auth.get_session())

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        def relay(event, session):
            callback(str(event), to_auth_session(session))

        return self.client.auth.on_auth_state_change(relay)

    @translate_errors
    async def select(
        self, table: str, filters: dict, columns: str = "*"
    ) -> list[dict]:
        query = (await self._table(table)).select(columns)
        for column, value in filters.items():
            query = query.eq(column, value)
        response = await query.execute()
        return list(response.data or [])

    @translate_errors
    async def select_one(
        self, table: str, filters: dict, columns: str = "*"
    ) -> dict | None:
        query = (await self._table(table)).select(columns)
        for column, value in filters.items():
            query = query.eq(column, value)
        response = await query.limit(1).execute()
        return response.data[0] if response.data else None

    @translate_errors
    async def insert(self, table: str, row: dict) -> dict:
        response = await (await self._table(table)).insert(row).execute()
        if not response.data:
            raise BackendError(f"Insert into {table} returned no row")
        return response.data[0]

    @translate_errors
    async def update(self, table: str, values: dict, filters: dict) -> list[dict]:
        query = (await self._table(table)).update(values)
        for column, value in filters.items():
            query = query.eq(column, value)
        response = await query.execute()
        return list(response.data or [])
