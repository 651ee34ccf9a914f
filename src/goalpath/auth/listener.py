"""Auth state listener that gates users on profile completeness."""

import asyncio
import logging
from typing import Awaitable, Callable

from ..clients.base import BackendClient, Subscription
from ..models.session import (
    AuthSession,
    Route,
    SessionContext,
    SessionPhase,
    SessionState,
)
from .completeness import check_profile_completion

logger = logging.getLogger(__name__)

CompletenessCheck = Callable[[BackendClient, str], Awaitable[bool]]


class SessionListener:
    """Reacts to backend auth events for one application session.

    On every event:

    1. a session while away from the completion page triggers the
       completeness check, and an incomplete profile navigates to
       ``/complete-profile``;
    2. no session while on the completion page navigates home;
    3. anything else only updates the session state.

    Events that arrive during an explicit sign-out are dropped, and a check
    that finishes after the session changed hands does not navigate.
    """

    def __init__(
        self,
        backend: BackendClient,
        context: SessionContext,
        check: CompletenessCheck = check_profile_completion,
    ):
        self.backend = backend
        self.context = context
        self._check = check
        self._subscription: Subscription | None = None
        self._pending: set[asyncio.Task] = set()

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None

    def subscribe(self) -> None:
        if self._subscription is None:
            self._subscription = self.backend.on_auth_state_change(self.dispatch)

    def unsubscribe(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def dispatch(self, event: str, session: AuthSession | None) -> None:
        """Backend callback. Schedules ``handle`` on the running loop."""
        if self.context.state.phase is SessionPhase.SIGNING_OUT:
            logger.debug("Ignoring %s while signing out", event)
            return
        task = asyncio.get_running_loop().create_task(self.handle(event, session))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def settle(self) -> None:
        """Wait until every scheduled event has been handled."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def handle(self, event: str, session: AuthSession | None) -> str | None:
        """Apply one auth event. Returns the route navigated to, if any."""
        context = self.context
        previous = context.state
        on_completion_page = context.current_route == Route.COMPLETE_PROFILE.value

        if previous.phase is SessionPhase.SIGNING_OUT:
            return None

        if session is None:
            context.state = SessionState.anonymous()
            if on_completion_page:
                logger.info("Signed out on profile completion page, going home")
                context.navigate(Route.HOME)
                return Route.HOME.value
            return None

        user = session.user
        if on_completion_page:
            known = previous.profile_complete if previous.user_id == user.id else None
            context.state = SessionState.authenticated(user, known)
            return None

        context.state = SessionState.authenticated(user)
        complete = await self._check(self.backend, user.id)

        current = context.state
        if current.phase is not SessionPhase.AUTHENTICATED or current.user_id != user.id:
            logger.debug("Session changed during completeness check after %s", event)
            return None

        context.state = SessionState.authenticated(user, complete)
        if not complete:
            logger.info("Profile incomplete for %s, redirecting", user.id)
            context.navigate(Route.COMPLETE_PROFILE)
            return Route.COMPLETE_PROFILE.value
        return None
