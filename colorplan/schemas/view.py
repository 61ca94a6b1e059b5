from __future__ import annotations

from datetime import date as Date
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from colorplan.schemas.appointment import Appointment, AppointmentFields, Priority

ViewType = Literal["day", "week", "month"]
PriorityFilter = Union[Priority, Literal["all"]]
NavigationDirection = Literal["prev", "next"]


class DateRange(BaseModel):
    """Inclusive range of calendar days."""

    start: Date
    end: Date

    def contains(self, day: Date) -> bool:
        return self.start <= day <= self.end


class AgendaStats(BaseModel):
    total: int = 0
    completed: int = 0
    upcoming: int = 0
    high_priority: int = Field(
        0, description="High priority appointments that are not completed yet"
    )


class CalendarDay(BaseModel):
    """One cell of the calendar grid."""

    date: Date
    in_current_month: bool
    is_selected: bool
    is_today: bool
    appointments: List[Appointment] = Field(default_factory=list)
    preview: List[Appointment] = Field(default_factory=list)
    overflow: int = 0


class FormState(BaseModel):
    open: bool = False
    appointment_id: Optional[str] = Field(
        None, description="Appointment being edited; None while creating a new one"
    )


class ViewState(BaseModel):
    selected_date: Date
    view_type: ViewType = "week"
    filter_priority: PriorityFilter = "all"
    form: FormState = Field(default_factory=FormState)


class PlannerSnapshot(BaseModel):
    """Everything the presentation layer reads on a render."""

    generated_at: str
    today: Date
    view: ViewState
    title: str
    range: DateRange
    appointments: List[Appointment]
    today_appointments: List[Appointment]
    all_appointments: List[Appointment]
    calendar: List[CalendarDay]
    stats: AgendaStats


class SelectDateRequest(BaseModel):
    date: Date


class ViewTypeRequest(BaseModel):
    view_type: ViewType


class FilterRequest(BaseModel):
    filter_priority: PriorityFilter


class NavigateRequest(BaseModel):
    direction: NavigationDirection


class FormOpenRequest(BaseModel):
    appointment_id: Optional[str] = None


class FormResponse(BaseModel):
    form: FormState
    draft: AppointmentFields
