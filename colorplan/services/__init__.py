"""Service package public API definitions."""

from .planner import PlannerService
from .store import AppointmentStore

__all__ = [
    "AppointmentStore",
    "PlannerService",
]
