"""Activity log domain models."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from boothdesk.domain.task import TaskFields


def as_utc(value: datetime) -> datetime:
    """Normalize a timestamp to UTC; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class ActivityKind(StrEnum):
    """Meaning of an activity for task reconciliation."""

    ASSIGNED = "assigned"
    COMPLETED = "completed"
    UNRECOGNIZED = "unrecognized"


class Activity(BaseModel):
    """Immutable staff activity log entry."""

    id: str = Field(..., description="Unique activity ID from database")
    staff_id: str = Field(..., description="ID of the staff member this entry belongs to")
    description: str = Field(..., description="Free-text description of what happened")
    timestamp: datetime = Field(..., description="When the entry was recorded (UTC)")

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        """Normalize the timestamp to UTC."""
        return as_utc(v)


@dataclass(frozen=True)
class TaggedActivity:
    """An activity classified once, right after it was fetched."""

    activity: Activity
    kind: ActivityKind
    core: str
    fields: TaskFields | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Task identity: the same logical task shares staff and core text."""
        return (self.activity.staff_id, self.core)
