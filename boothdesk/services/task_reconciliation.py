"""Reconciliation of assigned and completed tasks from an activity log.

The log is the single source of truth: tasks are never stored, they are
recomputed from scratch on every read by folding over the tagged activities.
"""

import logging
from collections.abc import Mapping, Sequence

from boothdesk.core.errors import ActivityOrderError
from boothdesk.domain.activity import ActivityKind, TaggedActivity
from boothdesk.domain.task import AssignedTask, TaskStatus


logger = logging.getLogger(__name__)

UNKNOWN_STAFF_NAME = "Desconhecido"


def ensure_newest_first(tagged: Sequence[TaggedActivity]) -> None:
    """Check that activities are ordered by non-increasing timestamp.

    First-seen-wins only means "most recent assignment wins" for newest-first
    input, so any other ordering is rejected.

    Raises:
        ActivityOrderError: If an activity is newer than the one before it
    """
    for previous, current in zip(tagged, tagged[1:], strict=False):
        if current.activity.timestamp > previous.activity.timestamp:
            msg = (
                f"Activity log must be ordered newest first: activity {current.activity.id} "
                f"({current.activity.timestamp.isoformat()}) follows activity {previous.activity.id} "
                f"({previous.activity.timestamp.isoformat()})"
            )
            raise ActivityOrderError(msg)


def reconcile_tasks(
    tagged: Sequence[TaggedActivity],
    *,
    staff_names: Mapping[str, str] | None = None,
) -> list[AssignedTask]:
    """Derive the current set of tasks from a newest-first tagged activity log.

    Args:
        tagged: Classified activities, newest first
        staff_names: Staff ID to name lookup. When given, every task gets a
            staff name (unknown IDs fall back to a placeholder); when omitted,
            staff names are left empty.

    Returns:
        One task per distinct assignment key, in first-seen order. A task is
        completed when any completion with the same key exists in the log,
        whichever of the two entries appears first.

    Raises:
        ActivityOrderError: If the log is not ordered newest first
    """
    ensure_newest_first(tagged)

    assigned: dict[tuple[str, str], TaggedActivity] = {}
    completed: set[tuple[str, str]] = set()

    for entry in tagged:
        if entry.kind == ActivityKind.COMPLETED:
            completed.add(entry.key)
        elif entry.kind == ActivityKind.ASSIGNED and entry.key not in assigned:
            assigned[entry.key] = entry

    tasks: list[AssignedTask] = []
    skipped = 0
    for key, entry in assigned.items():
        if entry.fields is None:
            skipped += 1
            continue

        activity = entry.activity
        staff_name = None
        if staff_names is not None:
            staff_name = staff_names.get(activity.staff_id, UNKNOWN_STAFF_NAME)

        tasks.append(
            AssignedTask(
                id=activity.id,
                staff_id=activity.staff_id,
                staff_name=staff_name,
                company_name=entry.fields.company_name,
                booth_code=entry.fields.booth_code,
                action_label=entry.fields.action_label,
                description=activity.description,
                timestamp=activity.timestamp,
                status=TaskStatus.COMPLETED if key in completed else TaskStatus.PENDING,
            )
        )

    if skipped:
        logger.debug("Skipped %d assignments that do not follow the task format", skipped)

    return tasks
