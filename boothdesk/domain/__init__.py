"""Domain models and DTOs."""

from boothdesk.domain.activity import Activity, ActivityKind, TaggedActivity
from boothdesk.domain.report import Report
from boothdesk.domain.staff import Event, ParticipantCompany, Staff
from boothdesk.domain.task import AssignedTask, TaskFields, TaskStatus


__all__ = [
    "Activity",
    "ActivityKind",
    "AssignedTask",
    "Event",
    "ParticipantCompany",
    "Report",
    "Staff",
    "TaggedActivity",
    "TaskFields",
    "TaskStatus",
]
