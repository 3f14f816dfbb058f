# app/main.py
# Car Management Dashboard - Streamlit front for the car inventory REST backend.
# run: streamlit run app/main.py

from __future__ import annotations
import sys, json, pathlib
import streamlit as st
import pandas as pd

# ---------- Imports & path tweaks ----------
THIS = pathlib.Path(__file__).resolve()
ROOT = THIS.parent
PARENT = ROOT.parent
for extra in [PARENT, pathlib.Path.cwd()]:
    p = str(extra)
    if p not in sys.path:
        sys.path.append(p)

from domain.car import STATUSES, Car
from domain.dashboard import message_kind
from services.car_manager import CarManager
from services.config import Settings, configure_logging

TABLE_COLS = ["id", "brand", "model", "year", "price", "status"]

# ---------------- Session ----------------
def get_manager() -> CarManager:
    if "manager" not in st.session_state:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        manager = CarManager.from_settings(settings)
        st.session_state.changed = False
        # כל שינוי מצב מסמן שצריך לרנדר מחדש
        manager.subscribe(lambda _state: st.session_state.update(changed=True))
        st.session_state.manager = manager
        st.session_state.form_rev = 0
    return st.session_state.manager


def run(action, *args):
    """Runs a manager operation from a button and re-renders if state moved."""
    manager = get_manager()
    draft_before = manager.state.draft
    st.session_state.changed = False
    action(*args)
    if manager.state.draft != draft_before:
        # draft replaced from outside the widgets (reset/edit) -> fresh widget keys
        st.session_state.form_rev += 1
    if st.session_state.changed:
        st.rerun()


def _num_or_none(v, cast):
    if v in ("", None):
        return None
    try:
        return cast(v)
    except (TypeError, ValueError):
        return None


def _cars_to_dataframe(cars: list[Car]) -> pd.DataFrame:
    return pd.DataFrame([c.to_dict() for c in cars], columns=TABLE_COLS)


# ---------------- App config ----------------
st.set_page_config(page_title="Car Management Dashboard", page_icon="🚗", layout="wide")
st.title("Car Management Dashboard")

manager = get_manager()
manager.mount()
state = manager.state

kind = message_kind(state.message)
if kind == "error":
    st.error(state.message)
elif kind == "success":
    st.success(state.message)

st.header("Car Management")

# ---------------- Add / Update form ----------------
st.subheader("Edit Car" if state.edit_mode else "Add Car")
rev = st.session_state.form_rev
draft = state.draft

cols = st.columns(3)
with cols[0]:
    if state.edit_mode:
        st.text_input("ID (Read-Only)", value=str(draft.id), disabled=True, key=f"id_{rev}")
    brand = st.text_input("Brand", value=draft.brand, key=f"brand_{rev}")
with cols[1]:
    model = st.text_input("Model", value=draft.model, key=f"model_{rev}")
    year = st.number_input("Year", value=_num_or_none(draft.year, int), step=1,
                           format="%d", placeholder="Year", key=f"year_{rev}")
with cols[2]:
    price = st.number_input("Price", value=_num_or_none(draft.price, float), step=0.01,
                            format="%.2f", placeholder="Price", key=f"price_{rev}")
    status = st.selectbox("Status", STATUSES,
                          index=STATUSES.index(draft.status) if draft.status in STATUSES else 0,
                          key=f"status_{rev}")

# widget -> draft (handleChange)
for name, value in (("brand", brand), ("model", model), ("status", status),
                    ("year", "" if year is None else int(year)),
                    ("price", "" if price is None else float(price))):
    if getattr(manager.state.draft, name) != value:
        manager.update_field(name, value)

btns = st.columns(6)
if not state.edit_mode:
    if btns[0].button("Add Car", type="primary"):
        run(manager.add)
else:
    if btns[0].button("Update Car", type="primary"):
        run(manager.update)
    if btns[1].button("Cancel"):
        run(manager.reset_form)

st.divider()

# ---------------- Fetch by ID ----------------
st.subheader("Get Car By ID")
id_cols = st.columns([2, 1, 3])
with id_cols[0]:
    id_to_fetch = st.text_input("Enter ID", value=state.id_to_fetch, key="id_to_fetch",
                                label_visibility="collapsed", placeholder="Enter ID")
if id_to_fetch.strip() != manager.state.id_to_fetch:
    manager.set_id_to_fetch(id_to_fetch)
with id_cols[1]:
    if st.button("Fetch"):
        run(manager.get_by_id)

if state.fetched_car is not None:
    st.markdown("#### Car Found:")
    st.code(json.dumps(state.fetched_car.to_dict(), indent=2, ensure_ascii=False), language="json")

st.divider()

# ---------------- All cars ----------------
st.subheader("All Cars")
if not state.cars:
    st.write("No cars found.")
else:
    st.dataframe(_cars_to_dataframe(state.cars), use_container_width=True, hide_index=True)
    for c in state.cars:
        row = st.columns([4, 1, 1])
        row[0].write(f"**{c.id}** · {c.brand} {c.model} ({c.year}) · {c.price} · {c.status}")
        if row[1].button("Edit", key=f"edit_{c.id}"):
            run(manager.enter_edit, c)
        if row[2].button("Delete", key=f"delete_{c.id}"):
            run(manager.delete, c.id)
