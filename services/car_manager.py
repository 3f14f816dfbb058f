# services/car_manager.py
"""
CarManager - the effect layer behind the dashboard.

Holds the current DashboardState, runs the backend calls through CarApi and
pushes every new state to its subscribers. Backend failures never leave this
class: each operation catches CarApiError and turns it into the fixed
user-facing message for that operation.
"""
import logging
from typing import Any, Callable, List, Optional, Union

from domain import dashboard
from domain.car import Car
from domain.dashboard import DashboardState
from services.carapi import CarApi
from services.config import Settings
from services.http import CarApiError

logger = logging.getLogger(__name__)

MSG_LOAD_FAILED = "Failed to fetch cars."
MSG_ADDED = "Car added successfully."
MSG_ADD_FAILED = "Error adding car."
MSG_UPDATED = "Car updated successfully."
MSG_UPDATE_FAILED = "Error updating car."
MSG_DELETE_FAILED = "Error deleting car."
MSG_NOT_FOUND = "Car not found."

Listener = Callable[[DashboardState], None]


class CarManager:
    def __init__(self, api: CarApi, state: Optional[DashboardState] = None):
        self.api = api
        self._state = state or DashboardState()
        self._listeners: List[Listener] = []
        self._mounted = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "CarManager":
        return cls(CarApi(settings))

    @property
    def state(self) -> DashboardState:
        return self._state

    # ---------- observers ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _set(self, new_state: DashboardState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    # ---------- list ----------
    def mount(self) -> None:
        """First render: load the list once."""
        if self._mounted:
            return
        self._mounted = True
        self.load_all()

    def load_all(self) -> bool:
        try:
            cars = self.api.list_all()
        except CarApiError as e:
            logger.warning("Error fetching cars: %s", e)
            self._set(dashboard.with_message(self._state, MSG_LOAD_FAILED))
            return False
        self._set(dashboard.with_cars(self._state, cars))
        return True

    # ---------- form ----------
    def update_field(self, name: str, value: Any) -> None:
        self._set(dashboard.update_field(self._state, name, value))

    def set_id_to_fetch(self, value: Any) -> None:
        self._set(dashboard.set_id_to_fetch(self._state, value))

    def validate_draft(self) -> bool:
        ok, new_state = dashboard.validate_draft(self._state)
        self._set(new_state)
        return ok

    def enter_edit(self, car: Car) -> None:
        self._set(dashboard.enter_edit(self._state, car))

    def reset_form(self) -> None:
        self._set(dashboard.reset_form(self._state))

    # ---------- mutations ----------
    def _mutate(self, call: Callable[[Car], Any], ok_msg: str, fail_msg: str) -> bool:
        if not self.validate_draft():
            return False
        try:
            call(self._state.draft)
        except CarApiError as e:
            logger.warning("%s %s", fail_msg, e)
            self._set(dashboard.with_message(self._state, fail_msg))
            return False
        self._set(dashboard.with_message(self._state, ok_msg))
        self.load_all()
        self.reset_form()
        return True

    def add(self) -> bool:
        return self._mutate(self.api.add, MSG_ADDED, MSG_ADD_FAILED)

    def update(self) -> bool:
        return self._mutate(self.api.update, MSG_UPDATED, MSG_UPDATE_FAILED)

    def delete(self, car_id: Union[str, int]) -> bool:
        try:
            text = self.api.delete(car_id)
        except CarApiError as e:
            logger.warning("Error deleting car %s: %s", car_id, e)
            self._set(dashboard.with_message(self._state, MSG_DELETE_FAILED))
            return False
        self._set(dashboard.with_message(self._state, text))
        self.load_all()
        return True

    # ---------- lookup ----------
    def get_by_id(self) -> bool:
        try:
            car = self.api.get(self._state.id_to_fetch)
        except CarApiError as e:
            logger.info("Lookup of %r failed: %s", self._state.id_to_fetch, e)
            s = dashboard.with_fetched(self._state, None)
            self._set(dashboard.with_message(s, MSG_NOT_FOUND))
            return False
        s = dashboard.with_fetched(self._state, car)
        self._set(dashboard.with_message(s, ""))
        return True
