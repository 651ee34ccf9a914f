"""Data models for goalpath."""

from .goals import Category, CategoryGoals, Goal, NewCategory, NewGoal, group_goals_by_category
from .profile import Profile, has_first_name
from .session import (
    AuthSession,
    AuthUser,
    Route,
    SessionContext,
    SessionPhase,
    SessionState,
    Toast,
)

__all__ = [
    "AuthSession",
    "AuthUser",
    "Category",
    "CategoryGoals",
    "Goal",
    "group_goals_by_category",
    "has_first_name",
    "NewCategory",
    "NewGoal",
    "Profile",
    "Route",
    "SessionContext",
    "SessionPhase",
    "SessionState",
    "Toast",
]
