"""In-memory view of a user's profile, categories and goals."""

import logging

from ..clients.base import BackendClient, BackendError
from ..db.repositories import CategoryRepository, GoalRepository, ProfileRepository
from ..models.goals import (
    Category,
    CategoryGoals,
    Goal,
    NewCategory,
    NewGoal,
    group_goals_by_category,
)
from ..models.profile import Profile
from ..models.session import Route, SessionContext

logger = logging.getLogger(__name__)


class GoalBoard:
    """Backs the profile page for one application session.

    Holds the rows last fetched for the signed-in user and appends the
    backend's returned row whenever a goal or category is added.
    """

    def __init__(self, backend: BackendClient, context: SessionContext):
        self.context = context
        self.profile_repo = ProfileRepository(backend)
        self.category_repo = CategoryRepository(backend)
        self.goal_repo = GoalRepository(backend)
        self.profile: Profile | None = None
        self.categories: list[Category] = []
        self.goals: list[Goal] = []
        self.form = NewGoal()
        self.loaded = False

    def reset(self) -> None:
        self.profile = None
        self.categories = []
        self.goals = []
        self.form = NewGoal()
        self.loaded = False

    async def load(self) -> bool:
        """Fetch profile (creating it if missing), categories and goals."""
        user_id = self.context.state.user_id
        if user_id is None:
            self.context.navigate(Route.HOME)
            return False

        try:
            self.profile = await self.profile_repo.get_or_create(user_id)
            self.categories = await self.category_repo.list_for_user(user_id)
            self.goals = await self.goal_repo.list_for_user(user_id)
        except BackendError as e:
            logger.error("Error fetching profile data for %s: %s", user_id, e.message)
            self.context.notify_error(e.message or "Failed to load profile data")
            return False
        finally:
            self.loaded = True
        return True

    async def add_goal(self, form: NewGoal) -> Goal | None:
        """Insert a goal for the current user and append the stored row."""
        user_id = self.context.state.user_id
        if user_id is None:
            return None

        self.form = form
        try:
            goal = await self.goal_repo.create(user_id, form)
        except ValueError:
            self.context.notify_error(f"Priority must be a whole number, got {form.priority!r}")
            return None
        except BackendError as e:
            logger.error("Error adding goal for %s: %s", user_id, e.message)
            self.context.notify_error(e.message or "Failed to add goal")
            return None

        self.goals = [*self.goals, goal]
        self.form = NewGoal()
        self.context.notify("Success", "Goal added successfully")
        return goal

    async def add_category(self, form: NewCategory) -> Category | None:
        user_id = self.context.state.user_id
        if user_id is None:
            return None

        try:
            category = await self.category_repo.create(user_id, form)
        except BackendError as e:
            logger.error("Error adding category for %s: %s", user_id, e.message)
            self.context.notify_error(e.message or "Failed to add category")
            return None

        self.categories = [*self.categories, category]
        self.context.notify("Success", "Category added successfully")
        return category

    def goals_for_category(self, category_id: str) -> list[Goal]:
        return [g for g in self.goals if g.category_id == category_id]

    def grouped(self) -> list[CategoryGoals]:
        return group_goals_by_category(self.categories, self.goals)
