"""Database layer for goalpath."""

from .repositories import (
    CATEGORIES_TABLE,
    GOALS_TABLE,
    PROFILES_TABLE,
    CategoryRepository,
    GoalRepository,
    ProfileRepository,
)

__all__ = [
    "CATEGORIES_TABLE",
    "CategoryRepository",
    "GOALS_TABLE",
    "GoalRepository",
    "PROFILES_TABLE",
    "ProfileRepository",
]
