from datetime import date, datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from colorplan.dependencies.services import get_clock, get_planner_service
from colorplan.schemas.appointment import Appointment, AppointmentCreate
from colorplan.schemas.view import (
    AgendaStats,
    FilterRequest,
    FormOpenRequest,
    FormResponse,
    NavigateRequest,
    PlannerSnapshot,
    SelectDateRequest,
    ViewState,
    ViewTypeRequest,
)
from colorplan.services import PlannerService
from colorplan.services.exceptions import AppointmentNotFoundError

router = APIRouter()


@router.get("", response_model=PlannerSnapshot)
async def planner_snapshot(
    service: PlannerService = Depends(get_planner_service),
    now: datetime = Depends(get_clock),
):
    return service.snapshot(now)


@router.get("/today", response_model=List[Appointment])
async def today_agenda(
    service: PlannerService = Depends(get_planner_service),
    now: datetime = Depends(get_clock),
):
    return service.today_appointments(now)


@router.get("/stats", response_model=AgendaStats)
async def agenda_stats(
    service: PlannerService = Depends(get_planner_service),
    now: datetime = Depends(get_clock),
):
    return service.stats(now)


@router.get("/day/{day}", response_model=List[Appointment])
async def appointments_for_day(
    day: date,
    service: PlannerService = Depends(get_planner_service),
):
    return service.appointments_for_date(day)


@router.put("/date", response_model=ViewState)
async def select_date(
    req: SelectDateRequest,
    service: PlannerService = Depends(get_planner_service),
):
    service.select_date(req.date)
    return service.state


@router.put("/type", response_model=ViewState)
async def set_view_type(
    req: ViewTypeRequest,
    service: PlannerService = Depends(get_planner_service),
):
    service.set_view_type(req.view_type)
    return service.state


@router.put("/filter", response_model=ViewState)
async def set_filter(
    req: FilterRequest,
    service: PlannerService = Depends(get_planner_service),
):
    service.set_filter_priority(req.filter_priority)
    return service.state


@router.post("/navigate", response_model=ViewState)
async def navigate(
    req: NavigateRequest,
    service: PlannerService = Depends(get_planner_service),
):
    service.navigate(req.direction)
    return service.state


@router.get("/form", response_model=FormResponse)
async def form_state(
    service: PlannerService = Depends(get_planner_service),
    now: datetime = Depends(get_clock),
):
    return FormResponse(form=service.state.form, draft=service.form_draft(now))


@router.post("/form/open", response_model=FormResponse)
async def open_form(
    req: FormOpenRequest,
    service: PlannerService = Depends(get_planner_service),
    now: datetime = Depends(get_clock),
):
    try:
        form = service.open_form(req.appointment_id)
    except AppointmentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return FormResponse(form=form, draft=service.form_draft(now))


@router.post("/form/close", response_model=FormResponse)
async def close_form(
    service: PlannerService = Depends(get_planner_service),
    now: datetime = Depends(get_clock),
):
    form = service.close_form()
    return FormResponse(form=form, draft=service.form_draft(now))


@router.post("/form/submit", response_model=Appointment)
async def submit_form(
    req: AppointmentCreate,
    service: PlannerService = Depends(get_planner_service),
):
    return service.submit_form(req)
