# colorplan/mcp_server.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field

from colorplan.schemas.appointment import (
    TIME_PATTERN,
    Appointment,
    AppointmentCreate,
    Priority,
    RecurrenceType,
)
from colorplan.schemas.view import AgendaStats, PriorityFilter
from colorplan.services import PlannerService
from colorplan.services import projection

log = logging.getLogger("colorplan.mcp")


# --------------------------
# Tool I/O models
# --------------------------
class AppointmentCreateInput(BaseModel):
    title: str = Field(..., min_length=1, description="Short title, e.g. 'Dentist'")
    date: str = Field(..., description="ISO date, e.g. '2026-10-19'")
    time: str = Field(..., pattern=TIME_PATTERN, description="Start time HH:MM")
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN, description="End time HH:MM")
    description: Optional[str] = None
    priority: Priority = "medium"
    recurrence: RecurrenceType = "none"
    reminder: bool = False


class AgendaOutput(BaseModel):
    date: str
    appointments: List[Appointment]
    stats: AgendaStats


class PlannerTools:
    """Planner operations exposed to MCP clients."""

    def __init__(
        self, planner: PlannerService, clock: Callable[[], datetime] = datetime.now
    ) -> None:
        self._planner = planner
        self._clock = clock

    def _agenda(self, filter_priority: PriorityFilter) -> AgendaOutput:
        now = self._clock()
        visible = projection.visible_appointments(self._planner.store.list(), filter_priority)
        items = projection.today_appointments(visible, now)
        return AgendaOutput(
            date=now.date().isoformat(),
            appointments=items,
            stats=projection.compute_stats(items),
        )

    async def appointments_today(self, filter_priority: PriorityFilter = "all") -> AgendaOutput:
        log.debug("appointments_today filter=%s", filter_priority)
        out = self._agenda(filter_priority)
        log.debug("appointments_today output=%s", out.model_dump())
        return out

    async def appointments_create(self, input: AppointmentCreateInput) -> Appointment:
        log.debug("appointments_create input=%s", input.model_dump())
        out = self._planner.add_appointment(AppointmentCreate(**input.model_dump()))
        log.debug("appointments_create output=%s", out.model_dump())
        return out

    async def appointments_toggle_complete(self, appointment_id: str) -> Optional[Appointment]:
        log.debug("appointments_toggle_complete id=%s", appointment_id)
        return self._planner.toggle_complete(appointment_id)

    async def agenda_stats(self) -> AgendaStats:
        return self._planner.stats(self._clock())


def build_mcp_server(
    planner: PlannerService, clock: Callable[[], datetime] = datetime.now
) -> FastMCP:
    # Name shown to MCP clients
    mcp = FastMCP("colorplan_mcp")
    tools = PlannerTools(planner, clock)

    @mcp.tool(name="appointments_today", description="List today's appointments in agenda order")
    async def appointments_today(filter_priority: PriorityFilter = "all") -> AgendaOutput:
        return await tools.appointments_today(filter_priority)

    @mcp.tool(name="appointments_create", description="Add an appointment to the planner")
    async def appointments_create(input: AppointmentCreateInput) -> Appointment:
        return await tools.appointments_create(input)

    @mcp.tool(
        name="appointments_toggle_complete",
        description="Mark an appointment done, or not done if it already was",
    )
    async def appointments_toggle_complete(appointment_id: str) -> Optional[Appointment]:
        return await tools.appointments_toggle_complete(appointment_id)

    @mcp.tool(
        name="agenda_stats",
        description="Counts for today's agenda under the planner's priority filter",
    )
    async def agenda_stats() -> AgendaStats:
        return await tools.agenda_stats()

    @mcp.tool(name="ping", description="Health check")
    async def ping(message: str) -> str:
        log.debug("ping %s", message)
        return f"pong: {message}"

    return mcp
