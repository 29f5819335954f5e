"""Task service: assignment, task queries and task completion.

Tasks have no table of their own. Assigning or completing a task appends an
activity to the staff member's log, and every query re-derives task status
from that log (see task_reconciliation).
"""

import logging

from boothdesk.core.errors import (
    ActivityOrderError,
    StoreReadError,
    StoreWriteError,
    TaskCompletionError,
    TaskNotFoundError,
)
from boothdesk.core.logging import log_with_context, span
from boothdesk.domain.activity import Activity
from boothdesk.domain.task import AssignedTask, TaskStatus
from boothdesk.services import activity_log_service, report_service, staff_service
from boothdesk.services.task_parser import (
    build_assignment_description,
    classify_activities,
    extract_task_details,
    to_completion_description,
)
from boothdesk.services.task_reconciliation import reconcile_tasks


logger = logging.getLogger(__name__)

TASK_REPORT_LABEL_PREFIX = "[TAREFA]"
TASK_COMPLETED_FALLBACK_RESPONSE = "Tarefa Concluída."


async def assign_task(
    *,
    staff_id: str,
    action_label: str,
    company_name: str,
    booth_code: str | None = None,
    details: str | None = None,
) -> Activity:
    """Assign a task to a staff member by appending an assignment activity.

    Returns:
        The stored assignment activity (its ID becomes the task ID)

    Raises:
        ValueError: If the task fields cannot be represented in a description
        StoreWriteError: If the store rejects the write
    """
    with span("task_service.assign_task"):
        description = build_assignment_description(
            action_label=action_label,
            company_name=company_name,
            booth_code=booth_code,
            details=details,
        )
        activity = await activity_log_service.append_activity(staff_id=staff_id, description=description)
        log_with_context(
            logger, "info", "Task assigned", staff_id=staff_id, task_id=activity.id, booth_code=booth_code
        )
        return activity


async def get_pending_tasks_for_staff(*, staff_id: str) -> list[AssignedTask]:
    """Get the tasks still pending for one staff member.

    Tasks come back in reconciliation order (most recent assignment first).
    Staff names are left empty since the caller already knows who asked.
    A failed or out-of-order read is logged and reported as no pending tasks.
    """
    with span("task_service.get_pending_tasks_for_staff"):
        try:
            activities = await activity_log_service.fetch_activities(staff_id=staff_id)
        except StoreReadError as e:
            logger.error("get_pending_tasks_failed", extra={"staff_id": staff_id, "error": str(e)})
            return []

        try:
            tasks = reconcile_tasks(classify_activities(activities))
        except ActivityOrderError as e:
            logger.error("get_pending_tasks_unordered_log", extra={"staff_id": staff_id, "error": str(e)})
            return []

        return [task for task in tasks if task.status == TaskStatus.PENDING]


async def get_assigned_tasks_by_event(*, event_id: str) -> list[AssignedTask]:
    """Get every task assigned to an event's staff, pending and completed.

    Tasks carry the staff member's name and are sorted newest assignment
    first. A failed or out-of-order read is logged and reported as no tasks.
    """
    with span("task_service.get_assigned_tasks_by_event"):
        try:
            roster = await staff_service.get_staff_by_event(event_id=event_id)
            if not roster:
                return []

            staff_names = {staff.id: staff.name for staff in roster}
            activities = await activity_log_service.fetch_activities_for_staff(staff_ids=staff_names.keys())
        except StoreReadError as e:
            logger.error("get_event_tasks_failed", extra={"event_id": event_id, "error": str(e)})
            return []

        try:
            tasks = reconcile_tasks(classify_activities(activities), staff_names=staff_names)
        except ActivityOrderError as e:
            logger.error("get_event_tasks_unordered_log", extra={"event_id": event_id, "error": str(e)})
            return []

        return sorted(tasks, key=lambda task: task.timestamp, reverse=True)


async def complete_task(*, task: AssignedTask, event_id: str, staff_name: str) -> Activity:
    """Mark a task completed and record a report for it.

    Two appends, in this order and without a transaction:
    1. the completion activity (same core text as the assignment, so the
       task key matches);
    2. a report entry for the task's booth.

    If step 2 fails the task stays completed; the raised error has
    ``completion_recorded=True`` and the command must not be retried as a
    whole.

    Args:
        task: Pending task to complete
        event_id: Event the report is filed under
        staff_name: Name of the staff member completing the task

    Returns:
        The stored completion activity

    Raises:
        ValueError: If the task has no booth code to report against
        TaskCompletionError: If either append fails
    """
    with span("task_service.complete_task"):
        if not task.booth_code:
            msg = f"Task {task.id} has no booth code and cannot be reported"
            raise ValueError(msg)

        completion_description = to_completion_description(task.description)

        try:
            completion = await activity_log_service.append_activity(
                staff_id=task.staff_id,
                description=completion_description,
            )
        except StoreWriteError as e:
            msg = f"Failed to complete task {task.id}: {e}"
            raise TaskCompletionError(msg, completion_recorded=False) from e

        details = extract_task_details(task.description)
        try:
            await report_service.append_report(
                event_id=event_id,
                booth_code=task.booth_code,
                staff_name=staff_name,
                label=f"{TASK_REPORT_LABEL_PREFIX} {task.action_label}",
                response=details or TASK_COMPLETED_FALLBACK_RESPONSE,
            )
        except StoreWriteError as e:
            logger.error(
                "task_completed_without_report",
                extra={"task_id": task.id, "staff_id": task.staff_id, "completion_id": completion.id, "error": str(e)},
            )
            msg = f"Task {task.id} completed but its report could not be saved: {e}"
            raise TaskCompletionError(msg, completion_recorded=True) from e

        log_with_context(logger, "info", "Task completed", task_id=task.id, staff_id=task.staff_id)
        return completion


async def complete_task_by_id(*, staff_id: str, task_id: str, event_id: str, staff_name: str) -> Activity:
    """Complete one of a staff member's pending tasks, looked up by ID.

    Raises:
        TaskNotFoundError: If no pending task with that ID exists
        ValueError: If the task has no booth code
        TaskCompletionError: If either append fails
    """
    with span("task_service.complete_task_by_id"):
        pending = await get_pending_tasks_for_staff(staff_id=staff_id)
        task = next((t for t in pending if t.id == task_id), None)
        if task is None:
            msg = f"No pending task {task_id} for staff {staff_id}"
            raise TaskNotFoundError(msg)

        return await complete_task(task=task, event_id=event_id, staff_name=staff_name)
