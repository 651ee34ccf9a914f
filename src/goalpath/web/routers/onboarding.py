"""Profile completion routes."""

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...models.session import Route
from ..pages import after_action, enter_page, get_app_session, render

router = APIRouter(prefix=Route.COMPLETE_PROFILE.value, tags=["onboarding"])


@router.get("", response_class=HTMLResponse)
async def complete_profile_page(request: Request):
    """Onboarding form. Only reachable with an active session."""
    app_session = get_app_session(request)
    redirect = enter_page(app_session, Route.COMPLETE_PROFILE.value)
    if redirect:
        return redirect

    if not app_session.state.is_authenticated:
        return RedirectResponse(url=Route.HOME.value, status_code=302)

    return render(request, "complete_profile.html", profile=app_session.board.profile)


@router.post("")
async def save_profile(
    request: Request,
    first_name: str = Form(""),
    last_name: str = Form(""),
    age: str = Form(""),
    gender: str = Form(""),
    city: str = Form(""),
    motivation: str = Form(""),
):
    """Store the onboarding answers and continue to the profile page."""
    app_session = get_app_session(request)

    try:
        parsed_age = int(age) if age.strip() else None
    except ValueError:
        app_session.context.notify_error("Age must be a whole number")
        return after_action(app_session, Route.COMPLETE_PROFILE.value)

    await app_session.complete_profile(
        {
            "first_name": first_name.strip(),
            "last_name": last_name.strip() or None,
            "age": parsed_age,
            "gender": gender or None,
            "city": city.strip() or None,
            "motivation": motivation.strip() or None,
        }
    )
    return after_action(app_session, Route.COMPLETE_PROFILE.value)
