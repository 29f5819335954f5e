"""Activity log store: fetch and append staff activities."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import ValidationError

from boothdesk.core import db_client
from boothdesk.core.config import Constants
from boothdesk.core.errors import StoreReadError, StoreWriteError
from boothdesk.core.logging import span
from boothdesk.domain.activity import Activity


logger = logging.getLogger(__name__)

COLLECTION = "staff_activities"


def to_stored_timestamp(timestamp: datetime | None = None) -> str:
    """Format a timestamp for storage as an ISO-8601 string in UTC.

    Raises:
        ValueError: If the timestamp is naive
    """
    if timestamp is None:
        return datetime.now(UTC).isoformat()
    if timestamp.tzinfo is None or timestamp.utcoffset() is None:
        msg = f"Timestamp must be timezone-aware: {timestamp.isoformat()}"
        raise ValueError(msg)
    return timestamp.astimezone(UTC).isoformat()


async def _fetch_all_pages(*, filter_query: str) -> list[Activity]:
    """Walk every page of a newest-first activity query."""
    activities: list[Activity] = []
    page = 1
    while True:
        try:
            records = await db_client.list_records(
                collection=COLLECTION,
                filter_query=filter_query,
                sort="-timestamp",
                per_page=Constants.ACTIVITY_PAGE_SIZE,
                page=page,
            )
        except (db_client.DatabaseError, ValueError) as e:
            msg = f"Failed to fetch activities: {e}"
            raise StoreReadError(msg) from e

        try:
            activities.extend(Activity(**record) for record in records)
        except ValidationError as e:
            msg = f"Malformed activity record: {e}"
            raise StoreReadError(msg) from e

        if len(records) < Constants.ACTIVITY_PAGE_SIZE:
            break
        page += 1

    # The store orders timestamps as text, which is only chronological for a single offset
    activities.sort(key=lambda activity: activity.timestamp, reverse=True)
    return activities


async def fetch_activities(*, staff_id: str) -> list[Activity]:
    """Fetch the full activity log of one staff member, newest first.

    Raises:
        StoreReadError: If the store cannot be read
    """
    with span("activity_log_service.fetch_activities"):
        filter_query = f'staff_id = "{db_client.sanitize_param(staff_id)}"'
        activities = await _fetch_all_pages(filter_query=filter_query)
        logger.debug("Fetched %d activities for staff %s", len(activities), staff_id)
        return activities


async def fetch_activities_for_staff(*, staff_ids: Iterable[str]) -> list[Activity]:
    """Fetch the union of several staff members' activity logs, newest first.

    Staff IDs are queried in batches; the merged result is re-sorted so the
    newest-first ordering holds across batches.

    Raises:
        StoreReadError: If the store cannot be read
    """
    with span("activity_log_service.fetch_activities_for_staff"):
        ids = list(dict.fromkeys(staff_ids))
        if not ids:
            return []

        activities: list[Activity] = []
        for batch_start in range(0, len(ids), Constants.STAFF_ID_BATCH_SIZE):
            batch_ids = ids[batch_start : batch_start + Constants.STAFF_ID_BATCH_SIZE]
            staff_conditions = " || ".join(f'staff_id = "{db_client.sanitize_param(sid)}"' for sid in batch_ids)
            activities.extend(await _fetch_all_pages(filter_query=f"({staff_conditions})"))

        activities.sort(key=lambda activity: activity.timestamp, reverse=True)
        logger.debug("Fetched %d activities for %d staff members", len(activities), len(ids))
        return activities


async def append_activity(*, staff_id: str, description: str, timestamp: datetime | None = None) -> Activity:
    """Append a new entry to a staff member's activity log.

    Args:
        staff_id: Staff member owning the entry
        description: Free-text description
        timestamp: When the entry happened, timezone-aware (defaults to now).
            Stored converted to UTC.

    Returns:
        The stored activity with its assigned ID

    Raises:
        ValueError: If the timestamp has no timezone
        StoreWriteError: If the store rejects the write
    """
    with span("activity_log_service.append_activity"):
        recorded_at = to_stored_timestamp(timestamp)
        data = {
            "staff_id": staff_id,
            "description": description,
            "timestamp": recorded_at,
        }

        try:
            record = await db_client.create_record(collection=COLLECTION, data=data)
        except db_client.DatabaseError as e:
            logger.error("append_activity_failed", extra={"staff_id": staff_id, "error": str(e)})
            msg = f"Failed to append activity for staff {staff_id}: {e}"
            raise StoreWriteError(msg) from e

        logger.info("Appended activity %s for staff %s", record["id"], staff_id)
        return Activity(**record)


async def get_staff_activity(*, staff_id: str) -> list[Activity]:
    """Get a staff member's raw activity log for display.

    Read failures are logged and reported as an empty log.
    """
    try:
        return await fetch_activities(staff_id=staff_id)
    except StoreReadError as e:
        logger.error("get_staff_activity_failed", extra={"staff_id": staff_id, "error": str(e)})
        return []
