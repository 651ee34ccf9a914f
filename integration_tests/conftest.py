"""Pytest configuration for integration tests."""

import os

import pytest


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def supabase_settings():
    """Project credentials; tests are skipped when they are not configured."""
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")
    if not url or not key:
        pytest.skip("SUPABASE_URL and SUPABASE_KEY are not set")
    return url, key
