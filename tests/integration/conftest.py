"""Pytest configuration and fixtures for integration tests.

Integration tests run the services against a real SQLite file created in a
temporary directory, so filter parsing, sorting and type affinity are
exercised exactly as in production.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

import pytest

from boothdesk.core import db_client
from boothdesk.core.config import settings


logger = logging.getLogger(__name__)


@pytest.fixture
async def sqlite_db(tmp_path, monkeypatch) -> AsyncIterator[str]:
    """Point the db client at a fresh SQLite file with the full schema."""
    db_path = str(tmp_path / "boothdesk-test.db")
    monkeypatch.setattr(settings, "sqlite_db_path", db_path)

    await db_client.init_db()
    logger.info("Initialized test database at %s", db_path)

    yield db_path

    await db_client.close_connection()


@pytest.fixture
async def event_roster(sqlite_db) -> dict[str, Any]:
    """Create an active event, two organizer staff members, an outsider and a booth."""
    event = await db_client.create_record(
        collection="events",
        data={"name": "Feira 2024", "date": "2024-09-12", "organizer_company_id": 10, "is_active": 1},
    )
    ana = await db_client.create_record(
        collection="staff",
        data={"name": "Ana Souza", "personal_code": "ANA01", "organizer_company_id": 10},
    )
    bruno = await db_client.create_record(
        collection="staff",
        data={"name": "Bruno D'Ávila", "personal_code": "BRU02", "organizer_company_id": 10},
    )
    outsider = await db_client.create_record(
        collection="staff",
        data={"name": "Carla Reis", "personal_code": "CAR03", "organizer_company_id": 20},
    )
    company = await db_client.create_record(
        collection="participant_companies",
        data={"name": "Acme", "booth_code": "A01", "event_id": event["id"]},
    )
    return {"event": event, "ana": ana, "bruno": bruno, "outsider": outsider, "company": company}
