"""Read-only views derived from the appointment list.

Every function here is pure: it takes the current appointments plus whatever
view state it needs and returns a fresh result. "Now" is always passed in by
the caller so the agenda and stats can be computed for a fixed instant.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List

from colorplan.schemas.appointment import Appointment
from colorplan.schemas.view import (
    AgendaStats,
    CalendarDay,
    DateRange,
    NavigationDirection,
    PriorityFilter,
    ViewType,
)

# Appointments listed inside a single grid cell before collapsing to "+N more".
PREVIEW_LIMITS: Dict[ViewType, int] = {"day": 0, "week": 3, "month": 2}


def filter_by_priority(
    appointments: Iterable[Appointment], filter_priority: PriorityFilter
) -> List[Appointment]:
    if filter_priority == "all":
        return list(appointments)
    return [item for item in appointments if item.priority == filter_priority]


def sort_appointments(appointments: Iterable[Appointment]) -> List[Appointment]:
    # sorted() is stable, so identical date/time pairs keep insertion order.
    return sorted(appointments, key=lambda item: (item.date, item.time))


def visible_appointments(
    appointments: Iterable[Appointment], filter_priority: PriorityFilter
) -> List[Appointment]:
    """Priority filter followed by the canonical ordering."""

    return sort_appointments(filter_by_priority(appointments, filter_priority))


def start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def end_of_week(day: date) -> date:
    return start_of_week(day) + timedelta(days=6)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def date_range(selected_date: date, view_type: ViewType) -> DateRange:
    if view_type == "day":
        return DateRange(start=selected_date, end=selected_date)
    if view_type == "week":
        return DateRange(start=start_of_week(selected_date), end=end_of_week(selected_date))
    if view_type == "month":
        return DateRange(start=start_of_month(selected_date), end=end_of_month(selected_date))
    raise ValueError(f"Unsupported view type: {view_type}")


def appointments_in_range(
    appointments: Iterable[Appointment], window: DateRange
) -> List[Appointment]:
    return [item for item in appointments if window.contains(item.date)]


def appointments_for_date(appointments: Iterable[Appointment], day: date) -> List[Appointment]:
    return [item for item in appointments if item.date == day]


def today_appointments(appointments: Iterable[Appointment], now: datetime) -> List[Appointment]:
    return appointments_for_date(appointments, now.date())


def compute_stats(appointments: Iterable[Appointment]) -> AgendaStats:
    items = list(appointments)
    completed = sum(1 for item in items if item.completed)
    high_priority = sum(1 for item in items if item.priority == "high" and not item.completed)
    return AgendaStats(
        total=len(items),
        completed=completed,
        upcoming=len(items) - completed,
        high_priority=high_priority,
    )


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping to the last day of shorter months."""

    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def navigate(
    selected_date: date, view_type: ViewType, direction: NavigationDirection
) -> date:
    step = 1 if direction == "next" else -1
    if view_type == "day":
        return selected_date + timedelta(days=step)
    if view_type == "week":
        return selected_date + timedelta(weeks=step)
    if view_type == "month":
        return add_months(selected_date, step)
    raise ValueError(f"Unsupported view type: {view_type}")


def calendar_days(selected_date: date, view_type: ViewType) -> List[date]:
    """Days shown by the calendar grid.

    Month grids are padded out to whole Monday-Sunday rows, so they can
    include trailing days of the previous month and leading days of the next.
    """

    if view_type == "day":
        return [selected_date]
    if view_type == "week":
        start, end = start_of_week(selected_date), end_of_week(selected_date)
    else:
        start = start_of_week(start_of_month(selected_date))
        end = end_of_week(end_of_month(selected_date))
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def build_calendar(
    appointments: List[Appointment],
    selected_date: date,
    view_type: ViewType,
    now: datetime,
) -> List[CalendarDay]:
    limit = PREVIEW_LIMITS[view_type]
    today = now.date()
    cells: List[CalendarDay] = []
    for day in calendar_days(selected_date, view_type):
        day_items = appointments_for_date(appointments, day)
        preview = day_items[:limit] if limit else day_items
        cells.append(
            CalendarDay(
                date=day,
                in_current_month=(day.year, day.month) == (selected_date.year, selected_date.month),
                is_selected=day == selected_date,
                is_today=day == today,
                appointments=day_items,
                preview=preview,
                overflow=len(day_items) - len(preview),
            )
        )
    return cells


def view_title(selected_date: date, view_type: ViewType) -> str:
    if view_type == "day":
        return f"{selected_date:%A} {selected_date.day} {selected_date:%B %Y}"
    if view_type == "week":
        start, end = start_of_week(selected_date), end_of_week(selected_date)
        if start.month == end.month:
            return f"{start.day} - {end.day} {end:%B %Y}"
        return f"{start.day} {start:%b} - {end.day} {end:%b %Y}"
    return f"{selected_date:%B %Y}"
