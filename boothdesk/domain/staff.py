"""Staff, event and participant company domain models."""

from pydantic import BaseModel, Field


class Staff(BaseModel):
    """Booth staff member."""

    id: str = Field(..., description="Unique staff ID from database")
    name: str = Field(..., description="Display name")
    personal_code: str = Field(..., description="Code used to check in")
    organizer_company_id: str = Field(..., description="Organizer company employing the staff member")
    phone: str | None = Field(default=None, description="Phone number")
    department_id: str | None = Field(default=None, description="Department ID")
    role: str | None = Field(default=None, description="Free-text role")


class Event(BaseModel):
    """Event run by an organizer company."""

    id: str
    name: str
    date: str = ""
    details: str = ""
    organizer_company_id: str
    is_active: bool = True


class ParticipantCompany(BaseModel):
    """Company exhibiting at an event booth."""

    id: str
    name: str
    booth_code: str
    event_id: str
    responsible: str = ""
    contact: str = ""
