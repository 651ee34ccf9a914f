"""Sign-up, sign-in and sign-out routes."""

from fastapi import APIRouter, Form, Request

from ..pages import after_action, get_app_session

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-up")
async def sign_up(
    request: Request,
    identifier: str = Form(""),
    password: str = Form(""),
    method: str = Form("email"),
):
    """Create an account; incomplete profiles land on the completion page."""
    app_session = get_app_session(request)
    await app_session.sign_up(identifier, password, method)
    return after_action(app_session)


@router.post("/sign-in")
async def sign_in(
    request: Request,
    identifier: str = Form(""),
    password: str = Form(""),
    method: str = Form("email"),
):
    """Sign in with an email address or phone number."""
    app_session = get_app_session(request)
    await app_session.sign_in(identifier, password, method)
    return after_action(app_session)


@router.post("/sign-out")
async def sign_out(request: Request):
    app_session = get_app_session(request)
    await app_session.sign_out()
    return after_action(app_session)


@router.get("/session")
async def session_state(request: Request):
    """Current session state as JSON."""
    app_session = get_app_session(request)
    return {
        **app_session.state.to_dict(),
        "current_route": app_session.context.current_route,
    }
