from __future__ import annotations

import itertools
import logging
from datetime import date
from typing import Dict, List, Optional

from colorplan.schemas.appointment import Appointment, AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)


def sample_day(today: date) -> List[AppointmentCreate]:
    """The sample agenda every fresh store starts with, all dated ``today``."""

    seeds: List[Dict[str, object]] = [
        {"title": "Breakfast", "time": "07:00", "priority": "personal"},
        {"title": "Start the washing machine", "time": "07:30", "priority": "medium"},
        {
            "title": "Focused study",
            "description": "Morning study session",
            "time": "07:30",
            "end_time": "10:00",
            "priority": "work",
        },
        {"title": "Hang the laundry / tidy up", "time": "09:30", "priority": "medium"},
        {"title": "Snack", "time": "10:30", "priority": "personal"},
        {
            "title": "Book reading",
            "description": "Late morning",
            "time": "10:45",
            "end_time": "12:00",
            "priority": "low",
        },
        {"title": "Project planning", "time": "12:00", "end_time": "12:30", "priority": "work"},
        {"title": "Lunch", "time": "12:30", "priority": "personal"},
        {"title": "Afternoon snack", "time": "13:30", "priority": "personal"},
        {"title": "Workout", "time": "14:00", "end_time": "14:25", "priority": "high"},
        {"title": "Shower / recovery", "time": "14:25", "end_time": "14:40", "priority": "personal"},
        {
            "title": "Project planning (deep focus)",
            "time": "14:40",
            "end_time": "15:40",
            "priority": "high",
        },
        {"title": "Study / review", "time": "15:40", "end_time": "17:30", "priority": "work"},
        {
            "title": "Light reading or review",
            "description": "Evening",
            "time": "18:00",
            "end_time": "19:00",
            "priority": "low",
        },
        {"title": "Dinner", "time": "19:30", "priority": "personal"},
    ]
    return [AppointmentCreate(date=today, recurrence="none", **seed) for seed in seeds]


class _BaseRepository:
    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def _next_id(self) -> str:
        return f"{self._prefix}-{next(self._counter):05d}"


class AppointmentStore(_BaseRepository):
    """Ordered, process-lifetime collection of appointments.

    Every mutation is total: ids that are not present turn the call into a
    no-op. Ids come from a counter that is never rewound, so an id is never
    handed out twice, even after the record it named has been deleted.
    """

    def __init__(
        self,
        seeds: Optional[List[AppointmentCreate]] = None,
    ) -> None:
        super().__init__("APT")
        self._seeds = list(seeds or [])
        self._appointments: List[Appointment] = []
        self._seed_defaults()

    def _seed_defaults(self) -> None:
        for fields in self._seeds:
            self._appointments.append(Appointment(id=self._next_id(), **fields.model_dump()))
        if self._seeds:
            logger.debug("Seeded store with %s appointments", len(self._seeds))

    def reset(self, seeds: Optional[List[AppointmentCreate]] = None) -> None:
        """Drop every record and load the seed set again.

        A new ``seeds`` list replaces the one given at construction.
        """

        if seeds is not None:
            self._seeds = list(seeds)
        self._appointments = []
        self._seed_defaults()

    def __len__(self) -> int:
        return len(self._appointments)

    def _index_of(self, appointment_id: str) -> Optional[int]:
        for index, record in enumerate(self._appointments):
            if record.id == appointment_id:
                return index
        return None

    def list(self) -> List[Appointment]:
        return list(self._appointments)

    def get(self, appointment_id: str) -> Optional[Appointment]:
        index = self._index_of(appointment_id)
        return self._appointments[index] if index is not None else None

    def create(self, fields: AppointmentCreate) -> Appointment:
        record = Appointment(id=self._next_id(), **fields.model_dump())
        self._appointments.append(record)
        logger.info("Created appointment %s '%s' on %s", record.id, record.title, record.date)
        return record

    def update(self, appointment_id: str, patch: AppointmentUpdate) -> Optional[Appointment]:
        index = self._index_of(appointment_id)
        if index is None:
            logger.debug("Ignoring update for unknown appointment %s", appointment_id)
            return None
        changes = patch.changes()
        updated = self._appointments[index].model_copy(update=changes)
        self._appointments[index] = updated
        logger.info("Updated appointment %s fields=%s", appointment_id, sorted(changes))
        return updated

    def delete(self, appointment_id: str) -> bool:
        index = self._index_of(appointment_id)
        if index is None:
            logger.debug("Ignoring delete for unknown appointment %s", appointment_id)
            return False
        del self._appointments[index]
        logger.info("Deleted appointment %s", appointment_id)
        return True

    def toggle_complete(self, appointment_id: str) -> Optional[Appointment]:
        index = self._index_of(appointment_id)
        if index is None:
            logger.debug("Ignoring toggle for unknown appointment %s", appointment_id)
            return None
        current = self._appointments[index]
        updated = current.model_copy(update={"completed": not current.completed})
        self._appointments[index] = updated
        logger.info("Appointment %s completed=%s", appointment_id, updated.completed)
        return updated
