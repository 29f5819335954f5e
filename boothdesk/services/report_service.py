"""Report service: booth report submissions."""

import logging
from datetime import datetime

from boothdesk.core import db_client
from boothdesk.core.config import Constants
from boothdesk.core.errors import StoreReadError, StoreWriteError
from boothdesk.core.logging import log_with_context, span
from boothdesk.domain.report import Report
from boothdesk.services import activity_log_service, staff_service


logger = logging.getLogger(__name__)

COLLECTION = "reports"


async def append_report(
    *,
    event_id: str,
    booth_code: str,
    staff_name: str,
    label: str,
    response: str,
    timestamp: datetime | None = None,
) -> Report:
    """Append a report entry.

    Args:
        event_id: Event the report belongs to
        booth_code: Booth the report is about
        staff_name: Name of the reporting staff member
        label: Report label (the action reported)
        response: Human-readable response
        timestamp: When the report happened, timezone-aware (defaults to now)

    Returns:
        The stored report

    Raises:
        ValueError: If the timestamp has no timezone
        StoreWriteError: If the store rejects the write
    """
    with span("report_service.append_report"):
        data = {
            "event_id": event_id,
            "booth_code": booth_code.upper(),
            "staff_name": staff_name,
            "report_label": label,
            "response": response,
            "timestamp": activity_log_service.to_stored_timestamp(timestamp),
        }

        try:
            record = await db_client.create_record(collection=COLLECTION, data=data)
        except db_client.DatabaseError as e:
            logger.error("append_report_failed", extra={"event_id": event_id, "booth_code": booth_code, "error": str(e)})
            msg = f"Failed to append report '{label}' for booth {booth_code}: {e}"
            raise StoreWriteError(msg) from e

        log_with_context(logger, "info", "Report appended", event_id=event_id, booth_code=booth_code, label=label)
        return Report(**record)


async def submit_report(
    *,
    event_id: str,
    booth_code: str,
    staff_name: str,
    label: str,
    response: str,
) -> Report:
    """Submit a report and note it in the reporting staff member's activity log.

    The report is the primary write and its failure propagates. The activity
    entry is best effort: failing to find the staff member or to append the
    entry is logged and the submitted report is still returned.

    Raises:
        StoreWriteError: If the report itself cannot be stored
    """
    with span("report_service.submit_report"):
        report = await append_report(
            event_id=event_id,
            booth_code=booth_code,
            staff_name=staff_name,
            label=label,
            response=response,
        )

        try:
            staff = await staff_service.get_staff_by_name(name=staff_name)
            if staff is None:
                logger.warning("No staff named %s, report activity not logged", staff_name)
                return report

            await activity_log_service.append_activity(
                staff_id=staff.id,
                description=f"Registrou '{label}' para {report.booth_code}",
            )
        except (StoreReadError, StoreWriteError) as e:
            logger.warning("Failed to log report activity for %s: %s", staff_name, e)

        return report


async def get_reports_by_event(*, event_id: str) -> list[Report]:
    """Get every report of an event, newest first.

    Read failures are logged and reported as no reports.
    """
    with span("report_service.get_reports_by_event"):
        reports: list[Report] = []
        page = 1
        try:
            while True:
                records = await db_client.list_records(
                    collection=COLLECTION,
                    filter_query=f'event_id = "{db_client.sanitize_param(event_id)}"',
                    sort="-timestamp",
                    per_page=Constants.DEFAULT_PER_PAGE_LIMIT,
                    page=page,
                )
                reports.extend(Report(**record) for record in records)
                if len(records) < Constants.DEFAULT_PER_PAGE_LIMIT:
                    break
                page += 1
        except (db_client.DatabaseError, ValueError) as e:
            logger.error("get_reports_by_event_failed", extra={"event_id": event_id, "error": str(e)})
            return []

        reports.sort(key=lambda report: report.timestamp, reverse=True)
        return reports
