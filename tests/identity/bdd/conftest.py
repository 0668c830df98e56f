"""Shared BDD fixtures for the Identity domain."""

import pytest


@pytest.fixture()
def outcome():
    """Container for the most recent command result."""
    return {"value": None}
