"""Pytest configuration and fixtures."""

import asyncio
from uuid import uuid4

import pytest

from goalpath.clients.base import AuthChangeCallback, BackendError
from goalpath.models.session import AuthSession, AuthUser
from goalpath.services.app_session import AppSession


class FakeSubscription:
    def __init__(self, backend: "FakeBackend", callback: AuthChangeCallback):
        self.backend = backend
        self.callback = callback

    def unsubscribe(self) -> None:
        if self.callback in self.backend.subscribers:
            self.backend.subscribers.remove(self.callback)


class FakeBackend:
    """In-memory stand-in for the hosted backend.

    Auth callbacks fire synchronously from inside the auth calls, the way the
    Supabase client delivers them. Every call is recorded in ``calls``.
    """

    def __init__(self):
        self.tables: dict[str, list[dict]] = {"profiles": [], "categories": [], "goals": []}
        self.accounts: dict[str, tuple[AuthUser, str]] = {}
        self.session: AuthSession | None = None
        self.subscribers: list[AuthChangeCallback] = []
        self.calls: list[tuple] = []
        self.failing_tables: set[str] = set()
        self.auth_error: str | None = None
        self.emit_events = True
        self.session_gate: asyncio.Event | None = None
        self.closed = False

    # Auth

    async def sign_up(self, email, password, metadata=None):
        self.calls.append(("sign_up", email, password, metadata))
        if self.auth_error is not None:
            raise BackendError(self.auth_error)
        if email in self.accounts:
            raise BackendError("User already registered")
        user = AuthUser(id=f"user-{len(self.accounts) + 1}", email=email, metadata=dict(metadata or {}))
        self.accounts[email] = (user, password)
        self._start_session(user)
        return user

    async def sign_in_with_password(self, password, email=None, phone=None):
        self.calls.append(("sign_in_with_password", password, email, phone))
        if self.auth_error is not None:
            raise BackendError(self.auth_error)
        for user, stored_password in self.accounts.values():
            matches = (email is not None and user.email == email) or (
                phone is not None and user.phone == phone
            )
            if matches and stored_password == password:
                return self._start_session(user)
        raise BackendError("Invalid login credentials")

    async def sign_out(self):
        self.calls.append(("sign_out",))
        if self.auth_error is not None:
            raise BackendError(self.auth_error)
        self.session = None
        self.emit("SIGNED_OUT", None)

    async def get_session(self):
        self.calls.append(("get_session",))
        if self.session_gate is not None:
            await self.session_gate.wait()
        return self.session

    def on_auth_state_change(self, callback):
        self.subscribers.append(callback)
        return FakeSubscription(self, callback)

    def emit(self, event, session):
        if not self.emit_events:
            return
        for callback in list(self.subscribers):
            callback(event, session)

    def _start_session(self, user):
        self.session = AuthSession(user=user, access_token=uuid4().hex)
        self.emit("SIGNED_IN", self.session)
        return self.session

    def add_account(self, email, password, phone=None, metadata=None) -> AuthUser:
        user = AuthUser(id=f"user-{len(self.accounts) + 1}", email=email, phone=phone, metadata=metadata or {})
        self.accounts[email] = (user, password)
        return user

    # Tables

    def _check(self, table):
        if table in self.failing_tables:
            raise BackendError(f"permission denied for table {table}")

    async def select(self, table, filters, columns="*"):
        self.calls.append(("select", table, dict(filters), columns))
        self._check(table)
        rows = [
            dict(row)
            for row in self.tables[table]
            if all(row.get(k) == v for k, v in filters.items())
        ]
        if columns != "*":
            wanted = [c.strip() for c in columns.split(",")]
            rows = [{c: row.get(c) for c in wanted} for row in rows]
        return rows

    async def select_one(self, table, filters, columns="*"):
        rows = await self.select(table, filters, columns)
        return rows[0] if rows else None

    async def insert(self, table, row):
        self.calls.append(("insert", table, dict(row)))
        self._check(table)
        stored = {"id": str(uuid4()), **row}
        if table == "goals":
            stored.setdefault("status", "not_started")
        self.tables[table].append(stored)
        return dict(stored)

    async def update(self, table, values, filters):
        self.calls.append(("update", table, dict(values), dict(filters)))
        self._check(table)
        updated = []
        for row in self.tables[table]:
            if all(row.get(k) == v for k, v in filters.items()):
                row.update(values)
                updated.append(dict(row))
        return updated

    async def close(self):
        self.closed = True

    def network_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] != "get_session"]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def signed_in_user(backend):
    """An account with an active session and no profile row yet."""
    user = backend.add_account("ada@example.com", "secret1")
    backend.session = AuthSession(user=user, access_token="token")
    return user


@pytest.fixture
def make_session(backend):
    """Build a started AppSession on the fake backend."""

    async def factory(**kwargs) -> AppSession:
        app_session = AppSession(backend, **kwargs)
        await app_session.start()
        return app_session

    return factory


@pytest.fixture
def backend_factory(backend):
    """Backend factory for the web app; every browser shares ``backend``."""

    async def factory():
        return backend

    return factory


@pytest.fixture
def fresh_backends():
    """Backend factory handing each browser its own FakeBackend.

    Created backends are collected in ``fresh_backends.created``. Setting
    ``fresh_backends.first_gate`` makes the first backend's ``get_session``
    wait on that event.
    """
    created = []

    async def factory():
        backend = FakeBackend()
        if not created:
            backend.session_gate = factory.first_gate
        created.append(backend)
        return backend

    factory.created = created
    factory.first_gate = None
    return factory
