"""Server-rendered planner page built from a planner snapshot."""
from __future__ import annotations

import html
from datetime import datetime
from typing import Dict, Iterable, List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from colorplan.dependencies.services import get_clock, get_planner_service
from colorplan.schemas.appointment import PRIORITY_CONFIG, Appointment
from colorplan.schemas.view import AgendaStats, CalendarDay, PlannerSnapshot
from colorplan.services import PlannerService

router = APIRouter()

WEEKDAY_HEADERS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _time_span(appointment: Appointment) -> str:
    if appointment.end_time:
        return f"{appointment.time} - {appointment.end_time}"
    return appointment.time


def _appointment_item(appointment: Appointment) -> str:
    style = PRIORITY_CONFIG[appointment.priority]
    classes = ["appointment", style.color]
    if appointment.completed:
        classes.append("completed")
    parts = [
        f'<li class="{" ".join(classes)}" data-id="{html.escape(appointment.id)}">',
        f'<span class="dot">{style.icon}</span>',
        f'<span class="time">{html.escape(_time_span(appointment))}</span> ',
        f'<span class="title">{html.escape(appointment.title)}</span>',
        f'<span class="badge">{html.escape(style.label)}</span>',
    ]
    if appointment.description:
        parts.append(f'<p class="description">{html.escape(appointment.description)}</p>')
    parts.append("</li>")
    return "".join(parts)


def _appointment_list(appointments: Iterable[Appointment], empty_message: str) -> str:
    items = [_appointment_item(appointment) for appointment in appointments]
    if not items:
        return f'<p class="empty">{html.escape(empty_message)}</p>'
    return "<ul>" + "".join(items) + "</ul>"


def _stats_cards(stats: AgendaStats) -> str:
    cards: List[Dict[str, object]] = [
        {"label": "Today", "value": stats.total},
        {"label": "Completed", "value": stats.completed},
        {"label": "Upcoming", "value": stats.upcoming},
        {"label": "High priority", "value": stats.high_priority},
    ]
    cells = "".join(
        f'<div class="card"><span class="value">{card["value"]}</span>'
        f'<span class="label">{html.escape(str(card["label"]))}</span></div>'
        for card in cards
    )
    return f'<section class="stats">{cells}</section>'


def _calendar_cell(day: CalendarDay) -> str:
    classes = ["day"]
    if not day.in_current_month:
        classes.append("outside")
    if day.is_selected:
        classes.append("selected")
    if day.is_today:
        classes.append("today")
    entries = "".join(
        f'<div class="entry">{PRIORITY_CONFIG[item.priority].icon} {html.escape(item.title)}</div>'
        for item in day.preview
    )
    if day.overflow:
        entries += f'<div class="more">+{day.overflow} more</div>'
    return (
        f'<td class="{" ".join(classes)}" data-date="{day.date.isoformat()}">'
        f'<div class="number">{day.date.day}</div>{entries}</td>'
    )


def _calendar_grid(snapshot: PlannerSnapshot) -> str:
    if snapshot.view.view_type == "day":
        return _appointment_list(snapshot.appointments, "No appointments for this day")

    header = "".join(f"<th>{name}</th>" for name in WEEKDAY_HEADERS)
    rows: List[str] = []
    for start in range(0, len(snapshot.calendar), 7):
        week = snapshot.calendar[start:start + 7]
        rows.append("<tr>" + "".join(_calendar_cell(day) for day in week) + "</tr>")
    return (
        f'<table class="calendar {snapshot.view.view_type}"><thead><tr>'
        + header
        + "</tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


def render_planner(snapshot: PlannerSnapshot, app_name: str) -> str:
    filter_label = (
        "All priorities"
        if snapshot.view.filter_priority == "all"
        else PRIORITY_CONFIG[snapshot.view.filter_priority].label
    )
    return f"""
    <html>
        <head>
            <title>{html.escape(app_name)}</title>
            <style>
                body {{ font-family: Arial, sans-serif; margin: 2rem; }}
                section {{ margin-bottom: 2rem; }}
                .stats {{ display: flex; gap: 1rem; }}
                .card {{ border: 1px solid #ccc; padding: 1rem; min-width: 8rem; }}
                .card .value {{ display: block; font-size: 1.5rem; font-weight: bold; }}
                table {{ border-collapse: collapse; width: 100%; table-layout: fixed; }}
                th, td {{ border: 1px solid #ccc; padding: 0.5rem; vertical-align: top; }}
                th {{ background-color: #f0f0f0; }}
                td.outside {{ opacity: 0.4; }}
                td.selected {{ outline: 2px solid #3b82f6; }}
                td.today {{ background-color: #eff6ff; }}
                li.completed .title {{ text-decoration: line-through; }}
            </style>
        </head>
        <body>
            <h1>{html.escape(app_name)}</h1>
            {_stats_cards(snapshot.stats)}
            <section class="controls">
                <span class="view-type">{snapshot.view.view_type}</span>
                <span class="filter">{html.escape(filter_label)}</span>
            </section>
            <section class="calendar-view">
                <h2>{html.escape(snapshot.title)}</h2>
                {_calendar_grid(snapshot)}
            </section>
            <section class="agenda">
                <h2>Today's agenda</h2>
                {_appointment_list(snapshot.today_appointments, "Nothing planned for today")}
            </section>
        </body>
    </html>
    """


@router.get("/planner", response_class=HTMLResponse)
async def view_planner(
    request: Request,
    service: PlannerService = Depends(get_planner_service),
    now: datetime = Depends(get_clock),
) -> HTMLResponse:
    """Render the planner for the current view state as HTML."""

    snapshot = service.snapshot(now)
    return HTMLResponse(content=render_planner(snapshot, request.app.title))


@router.post("/planner/reset")
async def reset_planner(
    service: PlannerService = Depends(get_planner_service),
    now: datetime = Depends(get_clock),
) -> Dict[str, object]:
    """Reload the seed appointments and restore the default view state."""

    service.reset(now.date())
    return {"status": "reset", "total": len(service.store)}
