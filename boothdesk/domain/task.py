"""Derived task domain models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(StrEnum):
    """Task status as derived from the activity log."""

    PENDING = "Pendente"
    COMPLETED = "Concluída"


class TaskFields(BaseModel):
    """Structured fields parsed out of a task description."""

    model_config = ConfigDict(frozen=True)

    action_label: str
    company_name: str
    booth_code: str | None = None


class AssignedTask(BaseModel):
    """Read-only view of an assigned task, computed from the activity log."""

    id: str = Field(..., description="ID of the assignment activity")
    staff_id: str = Field(..., description="Staff member the task is assigned to")
    staff_name: str | None = Field(default=None, description="Staff name (event-wide view only)")
    company_name: str = Field(..., description="Participant company the task refers to")
    booth_code: str | None = Field(default=None, description="Booth code embedded in the description")
    action_label: str = Field(..., description="Action to perform")
    description: str = Field(..., description="Original assignment description")
    timestamp: datetime = Field(..., description="When the task was assigned")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Derived task status")
