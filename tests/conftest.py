"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import logfire
import pytest

from boothdesk.domain.activity import Activity


BASE_TIME = datetime(2024, 9, 12, 9, 0, tzinfo=UTC)


@pytest.fixture(scope="session", autouse=True)
def _quiet_logfire() -> None:
    """Configure Logfire locally so spans never leave the test process."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def make_activity() -> Callable[..., Activity]:
    """Factory for Activity objects.

    Usage:
        activity = make_activity("Tarefa atribuída: ...", minute=5, staff_id="s1")
    """
    counter = {"next_id": 1}

    def _make(
        description: str,
        *,
        minute: int = 0,
        staff_id: str = "staff-1",
        activity_id: str | None = None,
    ) -> Activity:
        if activity_id is None:
            activity_id = f"act-{counter['next_id']}"
            counter["next_id"] += 1
        return Activity(
            id=activity_id,
            staff_id=staff_id,
            description=description,
            timestamp=BASE_TIME + timedelta(minutes=minute),
        )

    return _make
