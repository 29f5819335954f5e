"""Booth check-in validation."""

import logging

from pydantic import BaseModel

from boothdesk.core import db_client
from boothdesk.core.errors import CheckinError, StoreReadError
from boothdesk.core.logging import span
from boothdesk.domain.staff import Event, ParticipantCompany, Staff
from boothdesk.services import staff_service


logger = logging.getLogger(__name__)


class CheckinResult(BaseModel):
    """Staff member, event and booth company of a successful check-in."""

    staff: Staff
    event: Event
    company: ParticipantCompany


async def get_company_by_booth_code(*, booth_code: str) -> ParticipantCompany | None:
    """Find the participant company occupying a booth.

    Raises:
        StoreReadError: If the store cannot be read
    """
    with span("checkin_service.get_company_by_booth_code"):
        code = booth_code.strip().upper()
        try:
            record = await db_client.get_first_record(
                collection="participant_companies",
                filter_query=f'booth_code = "{db_client.sanitize_param(code)}"',
            )
        except (db_client.DatabaseError, ValueError) as e:
            msg = f"Failed to look up booth {code}: {e}"
            raise StoreReadError(msg) from e
        return ParticipantCompany(**record) if record else None


async def validate_checkin(*, booth_code: str, personal_code: str) -> CheckinResult:
    """Validate a booth code / personal code pair.

    Both codes are case-insensitive. The booth and the staff member must
    exist, the booth's event must be active, and the staff member must work
    for the event's organizer company.

    Raises:
        CheckinError: If any check fails
        StoreReadError: If the store cannot be read
    """
    with span("checkin_service.validate_checkin"):
        company = await get_company_by_booth_code(booth_code=booth_code)
        if company is None:
            raise CheckinError("Invalid booth code.")

        staff = await staff_service.get_staff_by_personal_code(personal_code=personal_code)
        if staff is None:
            raise CheckinError("Invalid personal code.")

        event = await staff_service.get_event(event_id=company.event_id)
        if event is None:
            raise CheckinError("The booth's event was not found.")
        if not event.is_active:
            raise CheckinError("This event is currently inactive.")

        if event.organizer_company_id != staff.organizer_company_id:
            raise CheckinError("Staff member and booth do not belong to the same event.")

        logger.info("Staff %s checked in at booth %s", staff.id, company.booth_code)
        return CheckinResult(staff=staff, event=event, company=company)
