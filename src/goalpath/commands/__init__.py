"""CLI commands for goalpath."""

from .account import signin, signup
from .serve import serve

__all__ = [
    "serve",
    "signin",
    "signup",
]
