from __future__ import annotations

from datetime import datetime

from fastapi import Request

from colorplan.services import PlannerService


def get_planner_service(request: Request) -> PlannerService:
    """Return the planner owned by the running application."""

    return request.app.state.planner


def get_clock(request: Request) -> datetime:
    """Current local time, overridable per application for deterministic renders."""

    clock = getattr(request.app.state, "clock", None)
    return clock() if clock is not None else datetime.now()
