"""Pytest fixtures for taskdeck tests."""

import pytest

from tests.factories import build_snapshot_payload


@pytest.fixture
def snapshot_payload() -> dict:
    """Fresh two-folder snapshot document; safe to mutate."""
    return build_snapshot_payload()
