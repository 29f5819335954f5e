"""Staff-facing endpoints: check-in, own tasks, activity log and reports."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from boothdesk.core.errors import (
    CheckinError,
    StoreReadError,
    StoreWriteError,
    TaskNotFoundError,
    classify_error_with_response,
)
from boothdesk.domain.activity import Activity
from boothdesk.domain.report import Report
from boothdesk.domain.task import AssignedTask
from boothdesk.services import activity_log_service, checkin_service, report_service, task_service
from boothdesk.services.task_parser import count_performed_activities


logger = logging.getLogger(__name__)

router = APIRouter(tags=["staff"])


class CheckinRequest(BaseModel):
    """Codes typed by the staff member at the booth."""

    booth_code: str = Field(..., min_length=1)
    personal_code: str = Field(..., min_length=1)


class CompleteTaskRequest(BaseModel):
    """Check-in context needed to file the completion report."""

    event_id: str
    staff_name: str


class StaffActivityLog(BaseModel):
    """Raw activity log of a staff member."""

    activities: list[Activity]
    performed_count: int = Field(..., description="Activities the staff member performed (assignments excluded)")


class ReportRequest(BaseModel):
    """Report submitted from a booth."""

    booth_code: str = Field(..., min_length=1)
    staff_name: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    response: str


def _error(status_code: int, exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=classify_error_with_response(exc).model_dump(mode="json", exclude_none=True),
    )


@router.post("/checkin")
async def checkin(body: CheckinRequest) -> checkin_service.CheckinResult:
    """Validate a booth code / personal code pair."""
    try:
        return await checkin_service.validate_checkin(booth_code=body.booth_code, personal_code=body.personal_code)
    except CheckinError as e:
        logger.info("checkin_rejected", extra={"booth_code": body.booth_code, "reason": str(e)})
        raise _error(status.HTTP_400_BAD_REQUEST, e) from e
    except StoreReadError as e:
        logger.error("checkin_store_failed", extra={"error": str(e)})
        raise _error(status.HTTP_502_BAD_GATEWAY, e) from e


@router.get("/staff/{staff_id}/tasks")
async def list_pending_tasks(staff_id: str) -> list[AssignedTask]:
    """List the staff member's pending tasks."""
    return await task_service.get_pending_tasks_for_staff(staff_id=staff_id)


@router.get("/staff/{staff_id}/activities")
async def list_activities(staff_id: str) -> StaffActivityLog:
    """List the staff member's raw activity log, newest first, with the performed count."""
    activities = await activity_log_service.get_staff_activity(staff_id=staff_id)
    return StaffActivityLog(activities=activities, performed_count=count_performed_activities(activities))


@router.post("/staff/{staff_id}/tasks/{task_id}/complete")
async def complete_task(staff_id: str, task_id: str, body: CompleteTaskRequest) -> Activity:
    """Complete a pending task and file its report."""
    try:
        return await task_service.complete_task_by_id(
            staff_id=staff_id,
            task_id=task_id,
            event_id=body.event_id,
            staff_name=body.staff_name,
        )
    except TaskNotFoundError as e:
        raise _error(status.HTTP_404_NOT_FOUND, e) from e
    except StoreWriteError as e:
        raise _error(status.HTTP_502_BAD_GATEWAY, e) from e
    except ValueError as e:
        raise _error(status.HTTP_400_BAD_REQUEST, e) from e


@router.post("/events/{event_id}/reports", status_code=status.HTTP_201_CREATED)
async def submit_report(event_id: str, body: ReportRequest) -> Report:
    """Submit a report for a booth."""
    try:
        return await report_service.submit_report(
            event_id=event_id,
            booth_code=body.booth_code,
            staff_name=body.staff_name,
            label=body.label,
            response=body.response,
        )
    except StoreWriteError as e:
        raise _error(status.HTTP_502_BAD_GATEWAY, e) from e
