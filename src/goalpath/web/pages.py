"""Helpers shared by the page routers."""

from fastapi import Request
from fastapi.responses import RedirectResponse

from ..services.app_session import AppSession


def get_templates(request: Request):
    """Get templates from app state."""
    return request.app.state.templates


def get_app_session(request: Request) -> AppSession:
    """The application session the middleware attached to this request."""
    return request.state.app_session


def enter_page(app_session: AppSession, path: str) -> RedirectResponse | None:
    """Record a page view and follow any navigation queued for the browser."""
    app_session.visit(path)
    target = app_session.context.take_redirect()
    if target and target != path:
        return RedirectResponse(url=target, status_code=302)
    return None


def after_action(app_session: AppSession, fallback: str | None = None) -> RedirectResponse:
    """Redirect after a form post: queued navigation first, else ``fallback``."""
    target = app_session.context.take_redirect()
    return RedirectResponse(
        url=target or fallback or app_session.context.current_route,
        status_code=302,
    )


def render(request: Request, template: str, **context):
    """Render a page with the session state and any queued toasts."""
    app_session = get_app_session(request)
    return get_templates(request).TemplateResponse(
        template,
        {
            "request": request,
            "session_state": app_session.state,
            "user": app_session.user,
            "toasts": app_session.context.drain_toasts(),
            **context,
        },
    )
