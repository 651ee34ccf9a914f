"""Authentication session and per-browser session state models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Route(str, Enum):
    """Pages the gating flow navigates between."""

    HOME = "/"
    PROFILE = "/profile"
    COMPLETE_PROFILE = "/complete-profile"


@dataclass
class AuthUser:
    """A user identity as reported by the backend auth service."""

    id: str
    email: str | None = None
    phone: str | None = None
    metadata: dict = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        """Best human-readable identifier for the user."""
        return self.metadata.get("username") or self.email or self.phone or self.id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "phone": self.phone,
            "metadata": self.metadata,
        }


@dataclass
class AuthSession:
    """Backend-issued proof of authentication."""

    user: AuthUser
    access_token: str = ""
    expires_at: datetime | None = None

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= datetime.now(self.expires_at.tzinfo)


class SessionPhase(str, Enum):
    """Where a browser session is in the sign-in lifecycle."""

    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    SIGNING_OUT = "signing_out"


@dataclass(frozen=True)
class SessionState:
    """Tagged session state.

    ``profile_complete`` only carries meaning in the AUTHENTICATED phase and is
    None until the completeness check has run.
    """

    phase: SessionPhase
    user: AuthUser | None = None
    profile_complete: bool | None = None

    @classmethod
    def anonymous(cls) -> "SessionState":
        return cls(SessionPhase.ANONYMOUS)

    @classmethod
    def authenticating(cls) -> "SessionState":
        return cls(SessionPhase.AUTHENTICATING)

    @classmethod
    def authenticated(
        cls, user: AuthUser, profile_complete: bool | None = None
    ) -> "SessionState":
        return cls(SessionPhase.AUTHENTICATED, user, profile_complete)

    @classmethod
    def signing_out(cls, user: AuthUser | None) -> "SessionState":
        return cls(SessionPhase.SIGNING_OUT, user)

    @property
    def is_authenticated(self) -> bool:
        return self.phase is SessionPhase.AUTHENTICATED

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user else None

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "user": self.user.to_dict() if self.user else None,
            "profile_complete": self.profile_complete,
        }


@dataclass
class Toast:
    """A transient notification shown on the next rendered page."""

    title: str
    description: str = ""
    variant: str = "default"  # default, destructive


@dataclass
class SessionContext:
    """Mutable per-browser application state.

    Created when a browser session starts, updated by auth events and user
    actions, and dropped when the session is disposed.
    """

    state: SessionState = field(default_factory=SessionState.anonymous)
    current_route: str = Route.HOME.value
    redirect_to: str | None = None
    toasts: list[Toast] = field(default_factory=list)

    def navigate(self, route: Route | str) -> None:
        """Request a navigation; the web layer performs it."""
        self.redirect_to = route.value if isinstance(route, Route) else route

    def take_redirect(self) -> str | None:
        """Return and clear the pending navigation."""
        target, self.redirect_to = self.redirect_to, None
        return target

    def notify(self, title: str, description: str = "", variant: str = "default") -> None:
        self.toasts.append(Toast(title, description, variant))

    def notify_error(self, description: str) -> None:
        self.notify("Error", description, variant="destructive")

    def drain_toasts(self) -> list[Toast]:
        toasts, self.toasts = self.toasts, []
        return toasts
