"""Application services for goalpath."""

from .app_session import AppSession
from .goal_board import GoalBoard

__all__ = ["AppSession", "GoalBoard"]
