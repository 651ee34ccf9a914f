"""Per-browser application session."""

import logging
from datetime import datetime

from ..auth.completeness import check_profile_completion
from ..auth.credentials import (
    AuthMethod,
    CredentialGateway,
    CredentialsError,
    validate_credentials,
)
from ..auth.listener import CompletenessCheck, SessionListener
from ..clients.base import BackendClient, BackendError
from ..db.repositories import ProfileRepository
from ..models.profile import Profile
from ..models.session import (
    AuthUser,
    Route,
    SessionContext,
    SessionPhase,
    SessionState,
)
from .goal_board import GoalBoard

logger = logging.getLogger(__name__)

AUTH_ERROR_FALLBACK = "An error occurred during authentication"


class AppSession:
    """Owns the backend client, listener and state of one browser session.

    Lifecycle: ``start`` fetches the current auth session once and subscribes
    to auth changes, user actions update the context, ``dispose`` releases the
    subscription.
    """

    def __init__(
        self,
        backend: BackendClient,
        check: CompletenessCheck = check_profile_completion,
    ):
        self.backend = backend
        self.context = SessionContext()
        self.gateway = CredentialGateway(backend)
        self.listener = SessionListener(backend, self.context, check)
        self.board = GoalBoard(backend, self.context)
        self._check = check
        self.started = False
        self.last_seen = datetime.now()

    @property
    def state(self) -> SessionState:
        return self.context.state

    @property
    def user(self) -> AuthUser | None:
        return self.context.state.user

    async def start(self) -> None:
        if self.started:
            return
        try:
            session = await self.backend.get_session()
        except BackendError as e:
            logger.error("Error initializing auth: %s", e.message)
            session = None

        self.listener.subscribe()
        self.started = True
        if session is not None and not session.is_expired:
            # A restored session is gated like a fresh sign-in
            await self.listener.handle("INITIAL_SESSION", session)
        else:
            self.context.state = SessionState.anonymous()

    async def dispose(self) -> None:
        self.listener.unsubscribe()
        await self.listener.settle()
        await self.backend.close()
        self.started = False

    def touch(self) -> None:
        """Mark the session as used by a request just now."""
        self.last_seen = datetime.now()

    def visit(self, route: str) -> None:
        """Record the page the browser is currently on."""
        self.context.current_route = route
        self.touch()

    async def sign_up(
        self, identifier: str, password: str, method: AuthMethod | str = AuthMethod.EMAIL
    ) -> AuthUser | None:
        """Create an account, then gate on profile completeness."""
        if self.context.state.phase is SessionPhase.AUTHENTICATING:
            return None
        try:
            credentials = validate_credentials(identifier, password, method)
        except CredentialsError as e:
            self.context.notify_error(e.message)
            return None

        previous = self.context.state
        self.context.state = SessionState.authenticating()
        try:
            user = await self.gateway.sign_up(credentials)
        except BackendError as e:
            logger.error("Auth error: %s", e.message)
            self.context.state = previous
            self.context.notify_error(e.message or AUTH_ERROR_FALLBACK)
            return None

        await self.listener.settle()
        state = self.context.state
        if state.phase is SessionPhase.AUTHENTICATING:
            # No session yet, e.g. the backend wants the email confirmed first
            self.context.state = previous
            state = previous

        if state.user_id == user.id and state.profile_complete is not None:
            complete = state.profile_complete
        else:
            complete = await self._check(self.backend, user.id)
        if not complete:
            self.context.navigate(Route.COMPLETE_PROFILE)

        self.context.notify("Account created!", "Please check your email for verification.")
        return user

    async def sign_in(
        self, identifier: str, password: str, method: AuthMethod | str = AuthMethod.EMAIL
    ) -> bool:
        if self.context.state.phase is SessionPhase.AUTHENTICATING:
            return False
        try:
            credentials = validate_credentials(identifier, password, method)
        except CredentialsError as e:
            self.context.notify_error(e.message)
            return False

        previous = self.context.state
        self.context.state = SessionState.authenticating()
        try:
            session = await self.gateway.sign_in(credentials)
        except BackendError as e:
            logger.error("Auth error: %s", e.message)
            self.context.state = previous
            self.context.notify_error(e.message or AUTH_ERROR_FALLBACK)
            return False

        await self.listener.settle()
        if self.context.state.phase is SessionPhase.AUTHENTICATING:
            # The backend did not report the change; apply it directly
            await self.listener.handle("SIGNED_IN", session)

        self.context.notify("Welcome back!", "You've successfully signed in.")
        return True

    async def sign_out(self) -> bool:
        """Explicit sign-out. A second call while one is running is ignored."""
        if self.context.state.phase is SessionPhase.SIGNING_OUT:
            return False

        previous = self.context.state
        self.context.state = SessionState.signing_out(previous.user)
        try:
            await self.gateway.sign_out()
        except BackendError as e:
            logger.error("Logout error: %s", e.message)
            self.context.state = previous
            self.context.notify_error(e.message or "Failed to sign out. Please try again.")
            return False

        self.context.state = SessionState.anonymous()
        self.board.reset()
        self.context.notify("Signed out successfully", "You have been logged out.")
        self.context.navigate(Route.HOME)
        return True

    async def complete_profile(self, fields: dict) -> Profile | None:
        """Save the profile-completion form for the signed-in user."""
        user = self.context.state.user
        if user is None or not self.context.state.is_authenticated:
            self.context.navigate(Route.HOME)
            return None
        first_name = fields.get("first_name")
        if not isinstance(first_name, str) or not first_name.strip():
            self.context.notify_error("First name is required")
            return None

        try:
            profile = await ProfileRepository(self.backend).update(user.id, fields)
        except BackendError as e:
            logger.error("Error saving profile for %s: %s", user.id, e.message)
            self.context.notify_error(e.message or "Failed to save profile")
            return None

        self.context.state = SessionState.authenticated(user, profile.is_complete)
        if self.board.loaded:
            self.board.profile = profile
        self.context.notify("Success", "Profile updated successfully")
        self.context.navigate(Route.PROFILE)
        return profile
