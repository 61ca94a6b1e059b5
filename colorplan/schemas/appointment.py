from __future__ import annotations

from datetime import date as Date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Priority = Literal["high", "medium", "low", "personal", "work"]
RecurrenceType = Literal["none", "daily", "weekly", "monthly"]

# Zero-padded 24h clock so string order equals chronological order.
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class PriorityStyle(BaseModel):
    label: str
    color: str
    bg_color: str
    icon: str


PRIORITY_CONFIG: Dict[Priority, PriorityStyle] = {
    "high": PriorityStyle(
        label="High priority",
        color="priority-high",
        bg_color="priority-high-bg",
        icon="🔴",
    ),
    "medium": PriorityStyle(
        label="Medium priority",
        color="priority-medium",
        bg_color="priority-medium-bg",
        icon="🟠",
    ),
    "low": PriorityStyle(
        label="Low priority",
        color="priority-low",
        bg_color="priority-low-bg",
        icon="🟢",
    ),
    "personal": PriorityStyle(
        label="Personal",
        color="priority-personal",
        bg_color="priority-personal-bg",
        icon="🔵",
    ),
    "work": PriorityStyle(
        label="Work / Study",
        color="priority-work",
        bg_color="priority-work-bg",
        icon="🟣",
    ),
}


class AppointmentFields(BaseModel):
    """Every appointment field except the id, as held in the edit form."""

    title: str = Field(..., description="Short title shown on the calendar")
    description: Optional[str] = None
    date: Date = Field(..., description="Calendar day of the appointment")
    time: str = Field(..., pattern=TIME_PATTERN, description="Start time, HH:MM")
    end_time: Optional[str] = Field(
        None,
        pattern=TIME_PATTERN,
        description="Optional end time, HH:MM. Not checked against the start time.",
    )
    priority: Priority = "medium"
    recurrence: RecurrenceType = Field(
        "none", description="Stored for reference only; never expanded into instances"
    )
    reminder: bool = False
    completed: bool = False


class AppointmentCreate(AppointmentFields):
    title: str = Field(..., min_length=1, description="Short title shown on the calendar")


class Appointment(AppointmentFields):
    id: str


class AppointmentUpdate(BaseModel):
    """Partial update. Only fields explicitly present in the payload are merged."""

    title: str = Field(None, min_length=1)
    description: Optional[str] = None
    date: Date = None
    time: str = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    priority: Priority = None
    recurrence: RecurrenceType = None
    reminder: bool = None
    completed: bool = None

    def changes(self) -> Dict[str, object]:
        return self.model_dump(exclude_unset=True)


class AppointmentListResponse(BaseModel):
    total: int
    items: List[Appointment]
