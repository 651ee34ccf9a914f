"""Profile page with categorized goals."""

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...models.goals import MAX_PRIORITY, MIN_PRIORITY, NewCategory, NewGoal
from ...models.session import Route
from ..pages import after_action, enter_page, get_app_session, render

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_class=HTMLResponse)
async def profile_page(request: Request):
    """Profile header plus one card per category."""
    app_session = get_app_session(request)
    redirect = enter_page(app_session, Route.PROFILE.value)
    if redirect:
        return redirect

    if not app_session.state.is_authenticated:
        return RedirectResponse(url=Route.HOME.value, status_code=302)

    board = app_session.board
    await board.load()

    return render(
        request,
        "profile.html",
        profile=board.profile,
        categories=board.categories,
        category_goals=board.grouped(),
        form=board.form,
        priorities=list(range(MIN_PRIORITY, MAX_PRIORITY + 1)),
    )


@router.post("/goals")
async def add_goal(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    category_id: str = Form(""),
    target_date: str = Form(""),
    priority: str = Form("3"),
):
    """Add a goal for the signed-in user."""
    app_session = get_app_session(request)
    await app_session.board.add_goal(
        NewGoal(
            title=title,
            description=description,
            category_id=category_id,
            target_date=target_date,
            priority=priority,
        )
    )
    return after_action(app_session, Route.PROFILE.value)


@router.post("/categories")
async def add_category(
    request: Request,
    name: str = Form(...),
    type: str = Form(...),
    color: str = Form(""),
    icon: str = Form(""),
):
    app_session = get_app_session(request)
    await app_session.board.add_category(
        NewCategory(name=name, type=type, color=color, icon=icon)
    )
    return after_action(app_session, Route.PROFILE.value)
