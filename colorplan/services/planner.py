from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from colorplan.schemas.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentFields,
    AppointmentUpdate,
)
from colorplan.schemas.view import (
    AgendaStats,
    FormState,
    NavigationDirection,
    PlannerSnapshot,
    PriorityFilter,
    ViewState,
    ViewType,
)
from colorplan.services import projection
from colorplan.services.exceptions import AppointmentNotFoundError
from colorplan.services.store import AppointmentStore, sample_day

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now()


class PlannerService:
    """Owns one appointment store together with the UI selection state.

    A planner is created by the application factory and handed to routes via
    dependency injection. Tests build their own instances with a fixed
    ``today`` and pass ``now`` explicitly to every derivation.
    """

    def __init__(
        self,
        store: AppointmentStore,
        *,
        today: date,
        view_type: ViewType = "week",
        seed_factory: Optional[Callable[[date], List[AppointmentCreate]]] = None,
    ) -> None:
        self._store = store
        self._seed_factory = seed_factory
        self._initial_view_type = view_type
        self.state = ViewState(selected_date=today, view_type=view_type)

    @classmethod
    def with_sample_data(
        cls, today: date, *, seed: bool = True, view_type: ViewType = "week"
    ) -> "PlannerService":
        seed_factory = sample_day if seed else None
        store = AppointmentStore(seed_factory(today) if seed_factory else None)
        return cls(store, today=today, view_type=view_type, seed_factory=seed_factory)

    @property
    def store(self) -> AppointmentStore:
        return self._store

    def reset(self, today: date) -> None:
        """Reload the seed set dated ``today`` and restore the default view."""

        self._store.reset(self._seed_factory(today) if self._seed_factory else None)
        self.state = ViewState(selected_date=today, view_type=self._initial_view_type)
        logger.info("Planner reset to %s seed appointments", len(self._store))

    # -- mutations -----------------------------------------------------

    def add_appointment(self, fields: AppointmentCreate) -> Appointment:
        return self._store.create(fields)

    def update_appointment(
        self, appointment_id: str, patch: AppointmentUpdate
    ) -> Optional[Appointment]:
        return self._store.update(appointment_id, patch)

    def delete_appointment(self, appointment_id: str) -> bool:
        deleted = self._store.delete(appointment_id)
        if deleted and self.state.form.appointment_id == appointment_id:
            self.state.form = FormState()
        return deleted

    def toggle_complete(self, appointment_id: str) -> Optional[Appointment]:
        return self._store.toggle_complete(appointment_id)

    def get_appointment(self, appointment_id: str) -> Appointment:
        record = self._store.get(appointment_id)
        if record is None:
            raise AppointmentNotFoundError(appointment_id)
        return record

    # -- view state ----------------------------------------------------

    def select_date(self, selected_date: date) -> None:
        self.state.selected_date = selected_date

    def set_view_type(self, view_type: ViewType) -> None:
        self.state.view_type = view_type

    def set_filter_priority(self, filter_priority: PriorityFilter) -> None:
        self.state.filter_priority = filter_priority

    def navigate(self, direction: NavigationDirection) -> date:
        self.state.selected_date = projection.navigate(
            self.state.selected_date, self.state.view_type, direction
        )
        logger.debug("Navigated %s to %s", direction, self.state.selected_date)
        return self.state.selected_date

    # -- edit form -----------------------------------------------------

    def open_form(self, appointment_id: Optional[str] = None) -> FormState:
        if appointment_id is not None:
            self.get_appointment(appointment_id)
        self.state.form = FormState(open=True, appointment_id=appointment_id)
        return self.state.form

    def close_form(self) -> FormState:
        self.state.form = FormState()
        return self.state.form

    def form_draft(self, now: Optional[datetime] = None) -> AppointmentFields:
        """Values the form starts with: the edited record, or a blank draft."""

        target = self.state.form.appointment_id
        if target is not None:
            record = self._store.get(target)
            if record is not None:
                return AppointmentFields(**record.model_dump(exclude={"id"}))
        moment = now or _now()
        return AppointmentFields(
            title="",
            description="",
            date=moment.date(),
            time="09:00",
            end_time="10:00",
            priority="medium",
            recurrence="none",
            reminder=False,
            completed=False,
        )

    def submit_form(self, fields: AppointmentCreate) -> Appointment:
        """Save the form: update the edited record, or create a new one.

        Only the fields the caller set are merged into an edited record.
        """

        target = self.state.form.appointment_id
        saved: Optional[Appointment] = None
        if target is not None:
            saved = self._store.update(
                target, AppointmentUpdate(**fields.model_dump(exclude_unset=True))
            )
        if saved is None:
            saved = self._store.create(fields)
        self.close_form()
        return saved

    # -- projections ---------------------------------------------------

    def visible(self) -> List[Appointment]:
        return projection.visible_appointments(self._store.list(), self.state.filter_priority)

    def view_appointments(self) -> List[Appointment]:
        window = projection.date_range(self.state.selected_date, self.state.view_type)
        return projection.appointments_in_range(self.visible(), window)

    def appointments_for_date(self, day: date) -> List[Appointment]:
        return projection.appointments_for_date(self.visible(), day)

    def today_appointments(self, now: Optional[datetime] = None) -> List[Appointment]:
        return projection.today_appointments(self.visible(), now or _now())

    def stats(self, now: Optional[datetime] = None) -> AgendaStats:
        return projection.compute_stats(self.today_appointments(now))

    def snapshot(self, now: Optional[datetime] = None) -> PlannerSnapshot:
        moment = now or _now()
        visible = self.visible()
        selected, view_type = self.state.selected_date, self.state.view_type
        window = projection.date_range(selected, view_type)
        today_items = projection.today_appointments(visible, moment)
        return PlannerSnapshot(
            generated_at=moment.isoformat(),
            today=moment.date(),
            view=self.state.model_copy(deep=True),
            title=projection.view_title(selected, view_type),
            range=window,
            appointments=projection.appointments_in_range(visible, window),
            today_appointments=today_items,
            all_appointments=visible,
            calendar=projection.build_calendar(visible, selected, view_type, moment),
            stats=projection.compute_stats(today_items),
        )
