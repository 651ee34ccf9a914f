"""Tests for the web interface."""

import pytest
from fastapi.testclient import TestClient

from goalpath import __version__
from goalpath.config import Settings
from goalpath.web import create_app


@pytest.fixture
def client(backend_factory):
    with TestClient(create_app(backend_factory=backend_factory)) as client:
        yield client


class TestPages:
    def test_health_skips_session(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}
        assert "goalpath_sid" not in response.cookies

    def test_home_shows_auth_forms(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert 'action="/auth/sign-in"' in response.text
        assert 'action="/auth/sign-up"' in response.text
        assert "goalpath_sid" in response.cookies

    def test_anonymous_profile_goes_home(self, client):
        response = client.get("/profile", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/"

    def test_anonymous_completion_page_goes_home(self, client):
        response = client.get("/complete-profile", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/"

    def test_session_endpoint(self, client, signed_in_user):
        client.get("/profile")

        data = client.get("/auth/session").json()

        assert data["phase"] == "authenticated"
        assert data["user"]["id"] == signed_in_user.id
        assert data["current_route"] == "/complete-profile"


class TestOnboardingFlow:
    def test_phone_sign_up_then_complete_profile(self, client, backend):
        client.get("/")

        response = client.post(
            "/auth/sign-up",
            data={"identifier": "alice", "password": "secret1", "method": "phone"},
            follow_redirects=False,
        )
        assert response.status_code == 302
        assert response.headers["location"] == "/complete-profile"

        page = client.get("/complete-profile")
        assert page.status_code == 200
        assert "Account created!" in page.text

        response = client.post(
            "/complete-profile",
            data={"first_name": "Alice", "age": "31", "city": "Leeds"},
            follow_redirects=False,
        )
        assert response.status_code == 302
        assert response.headers["location"] == "/profile"

        stored = backend.tables["profiles"][0]
        assert stored["first_name"] == "Alice"
        assert stored["age"] == 31

        page = client.get("/profile")
        assert page.status_code == 200
        assert "Alice" in page.text
        assert "Profile updated successfully" in page.text

    def test_short_password_shows_error(self, client, backend):
        client.get("/")

        page = client.post(
            "/auth/sign-up",
            data={"identifier": "alice@example.com", "password": "12345"},
        )

        assert page.status_code == 200
        assert "Password must be at least 6 characters" in page.text
        assert backend.network_calls() == []

    def test_bad_age_stays_on_form(self, client, signed_in_user):
        client.get("/complete-profile")

        response = client.post(
            "/complete-profile",
            data={"first_name": "Ada", "age": "thirty"},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/complete-profile"
        assert "Age must be a whole number" in client.get("/complete-profile").text

    def test_sign_in_with_complete_profile(self, client, backend):
        user = backend.add_account("ada@example.com", "secret1")
        backend.tables["profiles"].append({"id": user.id, "first_name": "Ada"})
        client.get("/profile")

        response = client.post(
            "/auth/sign-in",
            data={"identifier": "ada@example.com", "password": "secret1"},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/"
        assert "Welcome back!" in client.get("/").text

    def test_sign_out_returns_home(self, client, backend, signed_in_user):
        backend.tables["profiles"].append({"id": signed_in_user.id, "first_name": "Ada"})
        client.get("/")

        response = client.post("/auth/sign-out", follow_redirects=False)

        assert response.headers["location"] == "/"
        assert client.get("/auth/session").json()["phase"] == "anonymous"


class TestGoals:
    @pytest.fixture
    def category(self, backend, signed_in_user):
        backend.tables["profiles"].append({"id": signed_in_user.id, "first_name": "Ada"})
        row = {"id": "cat-1", "user_id": signed_in_user.id, "name": "Health", "type": "personal"}
        backend.tables["categories"].append(row)
        return row

    def test_profile_lists_categories(self, client, category):
        page = client.get("/profile")

        assert page.status_code == 200
        assert "Health" in page.text
        assert "No goals yet." in page.text

    def test_add_goal(self, client, backend, category):
        client.get("/profile")

        response = client.post(
            "/profile/goals",
            data={"title": "Run 5k", "category_id": "cat-1", "priority": "2"},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/profile"
        assert backend.tables["goals"][0]["priority"] == 2
        page = client.get("/profile")
        assert "Run 5k" in page.text
        assert "Goal added successfully" in page.text

    def test_add_category(self, client, backend, category):
        client.get("/profile")

        client.post("/profile/categories", data={"name": "Career", "type": "professional"})

        assert [c["name"] for c in backend.tables["categories"]] == ["Health", "Career"]
        assert backend.tables["categories"][1]["color"] is None


class TestSessionActivity:
    def test_form_posts_keep_a_session_alive(self, backend_factory):
        settings = Settings(supabase_url="https://x.supabase.co", supabase_key="key", max_sessions=2)
        app = create_app(settings=settings, backend_factory=backend_factory)

        with TestClient(app) as client:
            client.get("/")
            active = client.cookies["goalpath_sid"]
            client.cookies.clear()
            client.get("/")
            idle = client.cookies["goalpath_sid"]

            # Only a form post from the first browser, no page view
            client.cookies.set("goalpath_sid", active)
            client.post("/auth/sign-in", data={"identifier": "a@b.co", "password": "x"}, follow_redirects=False)

            client.cookies.clear()
            client.get("/")

            assert active in app.state.sessions
            assert idle not in app.state.sessions
