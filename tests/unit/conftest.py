"""Pytest configuration and fixtures for unit tests."""

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

import pytest

from tests.unit.mocks import InMemoryDBClient


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDBClient for each test."""
    return InMemoryDBClient()


@pytest.fixture
def patched_db(monkeypatch, in_memory_db):
    """Patches boothdesk.core.db_client functions to use InMemoryDBClient."""
    monkeypatch.setattr("boothdesk.core.db_client.create_record", in_memory_db.create_record)
    monkeypatch.setattr("boothdesk.core.db_client.get_record", in_memory_db.get_record)
    monkeypatch.setattr("boothdesk.core.db_client.list_records", in_memory_db.list_records)
    monkeypatch.setattr("boothdesk.core.db_client.get_first_record", in_memory_db.get_first_record)

    return in_memory_db


@pytest.fixture
def log_activity(patched_db) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Write a raw activity record straight into the in-memory store.

    Usage:
        await log_activity("staff-1", "Tarefa atribuída: ...", datetime(...))
    """

    async def _log(staff_id: str, description: str, timestamp: datetime) -> dict[str, Any]:
        return await patched_db.create_record(
            "staff_activities",
            {"staff_id": staff_id, "description": description, "timestamp": timestamp.isoformat()},
        )

    return _log


@pytest.fixture
async def event_setup(patched_db) -> dict[str, Any]:
    """Create an active event with two staff members and one booth company.

    Also creates a staff member of another organizer company.
    """
    event = await patched_db.create_record(
        "events",
        {"name": "Feira 2024", "date": "2024-09-12", "details": "", "organizer_company_id": "org-1", "is_active": 1},
    )
    ana = await patched_db.create_record(
        "staff", {"name": "Ana Souza", "personal_code": "ANA01", "organizer_company_id": "org-1"}
    )
    bruno = await patched_db.create_record(
        "staff", {"name": "Bruno Lima", "personal_code": "BRU02", "organizer_company_id": "org-1"}
    )
    outsider = await patched_db.create_record(
        "staff", {"name": "Carla Reis", "personal_code": "CAR03", "organizer_company_id": "org-2"}
    )
    company = await patched_db.create_record(
        "participant_companies",
        {"name": "Acme", "booth_code": "A01", "event_id": event["id"], "responsible": "Rita", "contact": "rita@acme"},
    )

    return {"event": event, "ana": ana, "bruno": bruno, "outsider": outsider, "company": company}
