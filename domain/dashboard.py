"""
The dashboard's view-state and its pure transitions.

Every function here takes a DashboardState and returns a new one; nothing
does I/O. services/car_manager.py is the layer that talks to the backend and
feeds the results back through these functions.
"""
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Tuple

from domain.car import Car, empty_draft

MSG_REQUIRED = "Please fill out all required fields."
MSG_EDITING = "Editing car with ID {id}"


@dataclass(frozen=True)
class DashboardState:
    cars: List[Car] = field(default_factory=list)
    draft: Car = field(default_factory=empty_draft)
    id_to_fetch: str = ""
    fetched_car: Optional[Car] = None
    message: str = ""
    edit_mode: bool = False


def update_field(state: DashboardState, name: str, value: Any) -> DashboardState:
    # ה-id נקבע ע"י השרת ואינו ניתן לעריכה
    if name == "id":
        return state
    return replace(state, draft=state.draft.with_field(name, value))


def set_id_to_fetch(state: DashboardState, value: Any) -> DashboardState:
    return replace(state, id_to_fetch="" if value is None else str(value).strip())


def validate_draft(state: DashboardState) -> Tuple[bool, DashboardState]:
    if state.draft.is_complete:
        return True, state
    return False, with_message(state, MSG_REQUIRED)


def enter_edit(state: DashboardState, car: Car) -> DashboardState:
    return replace(
        state,
        draft=car,
        edit_mode=True,
        message=MSG_EDITING.format(id=car.id),
    )


def reset_form(state: DashboardState) -> DashboardState:
    return replace(state, draft=empty_draft(), edit_mode=False)


def with_message(state: DashboardState, text: Optional[str]) -> DashboardState:
    return replace(state, message=text or "")


def with_cars(state: DashboardState, cars: List[Car]) -> DashboardState:
    return replace(state, cars=list(cars))


def with_fetched(state: DashboardState, car: Optional[Car]) -> DashboardState:
    return replace(state, fetched_car=car)


def message_kind(message: Optional[str]) -> Optional[str]:
    """'error' / 'success' for the banner colour, None when there is nothing to show."""
    if not message:
        return None
    return "error" if "error" in message.lower() else "success"
