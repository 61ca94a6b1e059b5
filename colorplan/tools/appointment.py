from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from colorplan.dependencies.services import get_planner_service
from colorplan.schemas.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentUpdate,
)
from colorplan.services import PlannerService
from colorplan.services.exceptions import AppointmentNotFoundError

router = APIRouter()


@router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    service: PlannerService = Depends(get_planner_service),
):
    items = service.visible()
    return AppointmentListResponse(total=len(items), items=items)


@router.get("/{appointment_id}", response_model=Appointment)
async def get_appointment(
    appointment_id: str,
    service: PlannerService = Depends(get_planner_service),
):
    try:
        return service.get_appointment(appointment_id)
    except AppointmentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("", response_model=Appointment, status_code=201)
async def create_appointment(
    req: AppointmentCreate,
    service: PlannerService = Depends(get_planner_service),
):
    return service.add_appointment(req)


@router.patch("/{appointment_id}", response_model=Optional[Appointment])
async def update_appointment(
    appointment_id: str,
    req: AppointmentUpdate,
    service: PlannerService = Depends(get_planner_service),
):
    return service.update_appointment(appointment_id, req)


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: str,
    service: PlannerService = Depends(get_planner_service),
) -> Dict[str, object]:
    deleted = service.delete_appointment(appointment_id)
    return {"status": "deleted" if deleted else "unchanged", "appointment_id": appointment_id}


@router.post("/{appointment_id}/toggle", response_model=Optional[Appointment])
async def toggle_appointment(
    appointment_id: str,
    service: PlannerService = Depends(get_planner_service),
):
    return service.toggle_complete(appointment_id)
