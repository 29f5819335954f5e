"""Admin endpoints: task assignment and event-wide views."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from boothdesk.core.errors import StoreWriteError, classify_error_with_response
from boothdesk.domain.activity import Activity
from boothdesk.domain.report import Report
from boothdesk.domain.task import AssignedTask
from boothdesk.services import report_service, task_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class AssignTaskRequest(BaseModel):
    """Task to assign to a staff member."""

    action_label: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    booth_code: str | None = None
    details: str | None = None


@router.get("/events/{event_id}/tasks")
async def list_event_tasks(event_id: str) -> list[AssignedTask]:
    """List every task assigned to the event's staff, newest first."""
    return await task_service.get_assigned_tasks_by_event(event_id=event_id)


@router.post("/staff/{staff_id}/tasks", status_code=status.HTTP_201_CREATED)
async def assign_task(staff_id: str, body: AssignTaskRequest) -> Activity:
    """Assign a task to a staff member."""
    try:
        return await task_service.assign_task(
            staff_id=staff_id,
            action_label=body.action_label,
            company_name=body.company_name,
            booth_code=body.booth_code,
            details=body.details,
        )
    except StoreWriteError as e:
        logger.error("assign_task_failed", extra={"staff_id": staff_id, "error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=classify_error_with_response(e).model_dump(mode="json", exclude_none=True),
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=classify_error_with_response(e).model_dump(mode="json", exclude_none=True),
        ) from e


@router.get("/events/{event_id}/reports")
async def list_event_reports(event_id: str) -> list[Report]:
    """List the reports of an event, newest first."""
    return await report_service.get_reports_by_event(event_id=event_id)
