"""Parsing and building of task descriptions stored in the activity log.

Task state lives in free-text activity descriptions. The wire format must stay
byte-compatible with existing logs:

    Tarefa atribuída: Realizar '<action>' na empresa '<company>' [<booth>]
    Tarefa concluída: Realizar '<action>' na empresa '<company>' [<booth>]

The bracketed booth code is optional, and any description may carry a
trailing ``Descrição: <details>`` segment. Quotes and brackets inside fields
are not escaped; each field ends at the first closing quote or bracket.
"""

import re
from collections.abc import Iterable

from boothdesk.domain.activity import Activity, ActivityKind, TaggedActivity
from boothdesk.domain.task import TaskFields


ASSIGNED_MARKER = "Tarefa atribuída:"
COMPLETED_MARKER = "Tarefa concluída:"

_TASK_WITH_BOOTH_PATTERN = re.compile(r"Realizar '([^']+)' na empresa '([^']+)' \[([^\]]+)\]")
_TASK_PATTERN = re.compile(r"Realizar '([^']+)' na empresa '([^']+)'")
_DETAILS_PATTERN = re.compile(r"Descrição: (.*)$", re.DOTALL)


def parse_task_description(description: str) -> TaskFields | None:
    """Extract action, company and booth code from a core task description.

    Args:
        description: Description with the assigned/completed marker already stripped

    Returns:
        Parsed fields, or None when the text does not follow the task grammar
    """
    match = _TASK_WITH_BOOTH_PATTERN.search(description)
    if match:
        return TaskFields(
            action_label=match.group(1).strip(),
            company_name=match.group(2).strip(),
            booth_code=match.group(3).strip(),
        )

    match = _TASK_PATTERN.search(description)
    if match:
        return TaskFields(
            action_label=match.group(1).strip(),
            company_name=match.group(2).strip(),
        )

    return None


def extract_task_details(description: str) -> str | None:
    """Return the free-text ``Descrição:`` suffix of a description, if any."""
    match = _DETAILS_PATTERN.search(description)
    if not match or not match.group(1):
        return None
    return match.group(1)


def _strip_marker(description: str, marker: str) -> str:
    return description[len(marker) :].removeprefix(" ")


def classify_activity(activity: Activity) -> TaggedActivity:
    """Tag an activity as assignment, completion or unrelated entry."""
    description = activity.description

    if description.startswith(COMPLETED_MARKER):
        return TaggedActivity(
            activity=activity,
            kind=ActivityKind.COMPLETED,
            core=_strip_marker(description, COMPLETED_MARKER),
        )

    if description.startswith(ASSIGNED_MARKER):
        core = _strip_marker(description, ASSIGNED_MARKER)
        return TaggedActivity(
            activity=activity,
            kind=ActivityKind.ASSIGNED,
            core=core,
            fields=parse_task_description(core),
        )

    return TaggedActivity(activity=activity, kind=ActivityKind.UNRECOGNIZED, core=description)


def classify_activities(activities: Iterable[Activity]) -> list[TaggedActivity]:
    """Tag every activity of a fetched log, preserving order."""
    return [classify_activity(activity) for activity in activities]


def _validate_field(value: str, *, name: str, forbidden: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        msg = f"Task {name} cannot be empty"
        raise ValueError(msg)
    if forbidden in cleaned:
        msg = f"Task {name} cannot contain {forbidden!r}: {value}"
        raise ValueError(msg)
    return cleaned


def build_assignment_description(
    *,
    action_label: str,
    company_name: str,
    booth_code: str | None = None,
    details: str | None = None,
) -> str:
    """Build the description of a task assignment activity.

    Args:
        action_label: Action the staff member must perform
        company_name: Participant company the action refers to
        booth_code: Optional booth code of the company
        details: Optional free-text instructions appended as ``Descrição:``

    Returns:
        Description text prefixed with the assigned marker

    Raises:
        ValueError: If a field is empty or contains a character the format cannot escape
    """
    action = _validate_field(action_label, name="action label", forbidden="'")
    company = _validate_field(company_name, name="company name", forbidden="'")

    description = f"{ASSIGNED_MARKER} Realizar '{action}' na empresa '{company}'"
    if booth_code is not None and booth_code.strip():
        booth = _validate_field(booth_code, name="booth code", forbidden="]")
        description = f"{description} [{booth.upper()}]"

    if details is not None and details.strip():
        description = f"{description} Descrição: {details.strip()}"

    return description


def to_completion_description(description: str) -> str:
    """Turn an assignment description into its completion counterpart.

    The core text is kept unchanged so both entries share the same task key.

    Raises:
        ValueError: If the description is not an assignment
    """
    if not description.startswith(ASSIGNED_MARKER):
        msg = f"Not a task assignment: {description[:60]}"
        raise ValueError(msg)
    return COMPLETED_MARKER + description[len(ASSIGNED_MARKER) :]


def count_performed_activities(activities: Iterable[Activity]) -> int:
    """Count the activities a staff member actually performed (assignments excluded)."""
    return sum(1 for activity in activities if not activity.description.startswith(ASSIGNED_MARKER))
