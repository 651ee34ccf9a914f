"""FastAPI application for the goalpath web interface."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..config import DEFAULT_MAX_SESSIONS, DEFAULT_SESSION_COOKIE, Settings, load_settings
from ..logger import setup_logging
from ..models.session import Route
from .pages import enter_page, get_app_session, render
from .routers import auth, onboarding, profile
from .sessions import BackendFactory, SessionRegistry

# Template and static file paths
TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

# Paths served without an application session
SESSIONLESS_PATHS = ("/health", "/static")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - disposes browser sessions on shutdown."""
    yield
    await app.state.sessions.dispose_all()


def supabase_factory(settings: Settings) -> BackendFactory:
    """Backend factory creating one Supabase client per browser session."""
    from ..clients.supabase import SupabaseBackend

    async def create_backend():
        return await SupabaseBackend.connect(settings.supabase_url, settings.supabase_key)

    return create_backend


def create_app(
    settings: Settings | None = None,
    backend_factory: BackendFactory | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if backend_factory is None:
        settings = settings or load_settings()
        backend_factory = supabase_factory(settings)

    if settings is not None:
        setup_logging(settings.log_level)

    cookie_name = settings.session_cookie if settings else DEFAULT_SESSION_COOKIE
    max_sessions = settings.max_sessions if settings else DEFAULT_MAX_SESSIONS

    app = FastAPI(
        title="goalpath",
        description="Personal goal tracking",
        version=__version__,
        lifespan=lifespan,
    )

    # Mount static files
    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)
    app.state.sessions = SessionRegistry(backend_factory, max_sessions=max_sessions)

    @app.middleware("http")
    async def attach_app_session(request: Request, call_next):
        """Bind the browser's application session, creating one if needed."""
        if request.url.path.startswith(SESSIONLESS_PATHS):
            return await call_next(request)

        registry: SessionRegistry = request.app.state.sessions
        session_id, app_session, created = await registry.get_or_create(
            request.cookies.get(cookie_name)
        )
        app_session.touch()
        request.state.app_session = app_session
        response = await call_next(request)
        if created:
            response.set_cookie(cookie_name, session_id, httponly=True, samesite="lax")
        return response

    app.include_router(auth.router)
    app.include_router(onboarding.router)
    app.include_router(profile.router)

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request):
        """Landing page with the sign-in and sign-up forms."""
        app_session = get_app_session(request)
        redirect = enter_page(app_session, Route.HOME.value)
        if redirect:
            return redirect
        return render(request, "home.html")

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
