"""Report submission domain models."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from boothdesk.domain.activity import as_utc


class Report(BaseModel):
    """A report submitted for a booth during an event."""

    id: str = Field(..., description="Unique report ID from database")
    event_id: str = Field(..., description="Event the report belongs to")
    booth_code: str = Field(..., description="Booth the report is about")
    staff_name: str = Field(..., description="Name of the staff member who reported")
    report_label: str = Field(..., description="Label of the reported action")
    response: str = Field(..., description="Human-readable response")
    timestamp: datetime = Field(..., description="When the report was recorded (UTC)")

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        """Keep report timestamps in UTC."""
        return as_utc(v)
