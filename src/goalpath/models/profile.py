"""User profile data model."""

from dataclasses import dataclass
from datetime import datetime

# Columns the profile-completion form is allowed to write
PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "age",
    "gender",
    "city",
    "motivation",
    "avatar_url",
)


@dataclass
class Profile:
    """One row of the ``profiles`` table, keyed by the auth user id."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    age: int | None = None
    gender: str | None = None
    city: str | None = None
    motivation: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_complete(self) -> bool:
        """Onboarding is finished once a first name is stored."""
        return has_first_name(self.first_name)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {name: getattr(self, name) for name in ("id", *PROFILE_FIELDS)}

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        """Create from a backend row."""
        return cls(
            id=data["id"],
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            age=data.get("age"),
            gender=data.get("gender"),
            city=data.get("city"),
            motivation=data.get("motivation"),
            avatar_url=data.get("avatar_url"),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )


def has_first_name(value) -> bool:
    """Completeness predicate: a non-empty first name."""
    return isinstance(value, str) and value != ""


def _parse_timestamp(value) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)
