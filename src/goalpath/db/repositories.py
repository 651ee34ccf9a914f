"""Data access layer for goalpath.

Rows live in the hosted backend; these repositories only shape queries and
convert rows into models. Category and goal access is always scoped by the
caller's user id.
"""

from ..clients.base import BackendClient
from ..models.goals import Category, Goal, NewCategory, NewGoal
from ..models.profile import PROFILE_FIELDS, Profile

PROFILES_TABLE = "profiles"
CATEGORIES_TABLE = "categories"
GOALS_TABLE = "goals"


class ProfileRepository:
    """Repository for user profiles."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def get(self, user_id: str) -> Profile | None:
        """Get a profile by user ID."""
        row = await self.backend.select_one(PROFILES_TABLE, {"id": user_id})
        if row is None:
            return None
        return Profile.from_dict(row)

    async def get_or_create(self, user_id: str) -> Profile:
        """Get a profile, inserting an empty one if the user has none yet."""
        profile = await self.get(user_id)
        if profile is not None:
            return profile
        row = await self.backend.insert(PROFILES_TABLE, {"id": user_id})
        return Profile.from_dict(row)

    async def get_first_name(self, user_id: str) -> str | None:
        row = await self.backend.select_one(
            PROFILES_TABLE, {"id": user_id}, columns="first_name"
        )
        if row is None:
            return None
        return row.get("first_name")

    async def update(self, user_id: str, fields: dict) -> Profile:
        """Update profile columns and return the stored profile."""
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        rows = await self.backend.update(PROFILES_TABLE, fields, {"id": user_id})
        if rows:
            return Profile.from_dict(rows[0])

        # No row yet: the user reached the form before the profile page
        row = await self.backend.insert(PROFILES_TABLE, {"id": user_id, **fields})
        return Profile.from_dict(row)


class CategoryRepository:
    """Repository for goal categories."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def list_for_user(self, user_id: str) -> list[Category]:
        rows = await self.backend.select(CATEGORIES_TABLE, {"user_id": user_id})
        return [Category.from_dict(row) for row in rows]

    async def create(self, user_id: str, category: NewCategory) -> Category:
        row = await self.backend.insert(CATEGORIES_TABLE, category.to_row(user_id))
        return Category.from_dict(row)


class GoalRepository:
    """Repository for goals."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def list_for_user(self, user_id: str) -> list[Goal]:
        rows = await self.backend.select(GOALS_TABLE, {"user_id": user_id})
        return [Goal.from_dict(row) for row in rows]

    async def create(self, user_id: str, goal: NewGoal) -> Goal:
        """Insert a goal and return the row the backend stored."""
        row = await self.backend.insert(GOALS_TABLE, goal.to_row(user_id))
        return Goal.from_dict(row)
