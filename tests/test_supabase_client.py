"""Tests for the Supabase adapter that need no network."""

import asyncio

from goalpath.clients.supabase import client as supabase_client
from goalpath.clients.supabase import SupabaseBackend


class StubAuth:
    def __init__(self):
        self.closed = False
        self.session_checks = 0

    async def close(self):
        self.closed = True

    async def get_session(self):
        self.session_checks += 1
        return None


class StubQuery:
    def __init__(self, rows):
        self.rows = rows

    def select(self, columns):
        return self

    def eq(self, column, value):
        self.rows = [r for r in self.rows if r.get(column) == value]
        return self

    async def execute(self):
        return type("Response", (), {"data": self.rows})()


class StubPostgrest:
    def __init__(self):
        self.closed = False

    async def aclose(self):
        self.closed = True


class StubClient:
    def __init__(self, rows=None):
        self.auth = StubAuth()
        self.postgrest = StubPostgrest()
        self.rows = rows or []

    def table(self, name):
        return StubQuery(list(self.rows))


class TestSupabaseBackend:
    def test_close_releases_http_clients(self):
        stub = StubClient()

        asyncio.run(SupabaseBackend(stub).close())

        assert stub.auth.closed
        assert stub.postgrest.closed

    def test_connect_disables_background_refresh(self, monkeypatch):
        seen = {}

        async def fake_create(url, key, options=None):
            seen["options"] = options
            return StubClient()

        monkeypatch.setattr(supabase_client, "acreate_client", fake_create)

        backend = asyncio.run(SupabaseBackend.connect("https://x.supabase.co", "key"))

        assert isinstance(backend, SupabaseBackend)
        assert seen["options"].auto_refresh_token is False

    def test_table_calls_refresh_session_first(self):
        stub = StubClient(rows=[{"id": "u1"}, {"id": "u2"}])

        rows = asyncio.run(SupabaseBackend(stub).select("profiles", {"id": "u2"}))

        assert rows == [{"id": "u2"}]
        assert stub.auth.session_checks == 1
