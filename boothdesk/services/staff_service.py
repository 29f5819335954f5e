"""Staff roster lookups."""

import logging

from boothdesk.core import db_client
from boothdesk.core.config import Constants
from boothdesk.core.errors import StoreReadError
from boothdesk.core.logging import span
from boothdesk.domain.staff import Event, Staff


logger = logging.getLogger(__name__)


async def get_event(*, event_id: str) -> Event | None:
    """Get an event by ID, or None if it does not exist.

    Raises:
        StoreReadError: If the store cannot be read
    """
    with span("staff_service.get_event"):
        try:
            record = await db_client.get_record(collection="events", record_id=event_id)
        except db_client.RecordNotFoundError:
            return None
        except (db_client.DatabaseError, ValueError) as e:
            msg = f"Failed to fetch event {event_id}: {e}"
            raise StoreReadError(msg) from e
        return Event(**record)


async def get_staff_by_organizer(*, organizer_company_id: str) -> list[Staff]:
    """List all staff employed by an organizer company, sorted by name.

    Raises:
        StoreReadError: If the store cannot be read
    """
    with span("staff_service.get_staff_by_organizer"):
        filter_query = f'organizer_company_id = "{db_client.sanitize_param(organizer_company_id)}"'
        staff: list[Staff] = []
        page = 1
        try:
            while True:
                records = await db_client.list_records(
                    collection="staff",
                    filter_query=filter_query,
                    sort="+name",
                    per_page=Constants.DEFAULT_PER_PAGE_LIMIT,
                    page=page,
                )
                staff.extend(Staff(**record) for record in records)
                if len(records) < Constants.DEFAULT_PER_PAGE_LIMIT:
                    break
                page += 1
        except (db_client.DatabaseError, ValueError) as e:
            msg = f"Failed to list staff for organizer {organizer_company_id}: {e}"
            raise StoreReadError(msg) from e

        logger.debug("Fetched %d staff for organizer %s", len(staff), organizer_company_id)
        return staff


async def get_staff_by_event(*, event_id: str) -> list[Staff]:
    """Get the staff roster of an event (the staff of its organizer company).

    Returns an empty roster when the event does not exist.

    Raises:
        StoreReadError: If the store cannot be read
    """
    with span("staff_service.get_staff_by_event"):
        event = await get_event(event_id=event_id)
        if event is None:
            logger.info("Event %s not found, empty roster", event_id)
            return []
        return await get_staff_by_organizer(organizer_company_id=event.organizer_company_id)


async def get_staff_by_name(*, name: str) -> Staff | None:
    """Find a staff member by exact name.

    Raises:
        StoreReadError: If the store cannot be read
    """
    with span("staff_service.get_staff_by_name"):
        try:
            record = await db_client.get_first_record(
                collection="staff",
                filter_query=f'name = "{db_client.sanitize_param(name)}"',
            )
        except (db_client.DatabaseError, ValueError) as e:
            msg = f"Failed to look up staff '{name}': {e}"
            raise StoreReadError(msg) from e
        return Staff(**record) if record else None


async def get_staff_by_personal_code(*, personal_code: str) -> Staff | None:
    """Find a staff member by personal check-in code (case-insensitive).

    Raises:
        StoreReadError: If the store cannot be read
    """
    with span("staff_service.get_staff_by_personal_code"):
        code = personal_code.strip().upper()
        try:
            record = await db_client.get_first_record(
                collection="staff",
                filter_query=f'personal_code = "{db_client.sanitize_param(code)}"',
            )
        except (db_client.DatabaseError, ValueError) as e:
            msg = f"Failed to look up staff by personal code: {e}"
            raise StoreReadError(msg) from e
        return Staff(**record) if record else None
