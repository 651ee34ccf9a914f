"""Supabase backend client."""

from .client import SupabaseBackend

__all__ = ["SupabaseBackend"]
