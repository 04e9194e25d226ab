import re
import time
from decimal import Decimal, InvalidOperation

import streamlit as st

from core.state import Navigate, View

# Largest amount whose cents still fit a signed 64-bit SQLite INTEGER
MAX_AMOUNT = Decimal(2 ** 63 - 1) / 100


# -----------------------------
# Form input coercion
# -----------------------------
def coerce_age(value) -> int:
    """Turn form input like "40", "40.5" or " 40 yrs" into a positive integer.

    Reads the leading whole number and ignores the rest, so "40.5" is 40.
    """
    if isinstance(value, bool):
        raise ValueError("Age must be a positive number.")
    if isinstance(value, (int, float)):
        age = int(value)
    else:
        m = re.match(r"\s*(-?\d+)", str(value or ""))
        if not m:
            raise ValueError("Age is required.")
        age = int(m.group(1))
    if age <= 0:
        raise ValueError("Age must be a positive number.")
    return age


def clean_amount(text) -> str:
    """Keep only digits and dots, as typed into an amount field."""
    return re.sub(r"[^0-9.]", "", str(text or ""))


def parse_amount(value) -> Decimal:
    """Parse an amount into a non-negative Decimal with two places."""
    if isinstance(value, Decimal):
        amount = value
    else:
        text = clean_amount(value)
        if not text:
            raise ValueError("Amount is required.")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {value}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value}")
    if amount < 0:
        raise ValueError("Amount cannot be negative.")
    if amount > MAX_AMOUNT:
        raise ValueError("Amount is too large.")
    try:
        return amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value}")


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).to_integral_value())


def timestamp_id() -> str:
    """Millisecond timestamp string used for ledger and appointment ids."""
    return str(int(time.time() * 1000))


def format_money(amount) -> str:
    return f"${amount:,.2f}"


# -----------------------------
# Sidebar navigation
# -----------------------------
NAV_ITEMS = [
    (View.DASHBOARD, "Dashboard"),
    (View.PATIENTS, "Patients"),
    (View.APPOINTMENTS, "Appointments"),
    (View.SESSION, "Active Session"),
    (View.EXPENSES, "Expenses"),
    (View.REPORTS, "Reports"),
]


def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_sidebar(active_view: View, clinic_name: str, dispatch):
    """Render the navigation menu; each item emits a Navigate intent."""
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown(f"### {clinic_name}")
        for view, label in NAV_ITEMS:
            if st.button(
                label,
                key=f"nav_{view.value}",
                use_container_width=True,
                type="primary" if view is active_view else "secondary",
            ):
                dispatch(Navigate(view))
                st.rerun()


# -----------------------------
# One-shot messages across reruns
# -----------------------------
def flash(message: str, kind: str = "success"):
    st.session_state["flash"] = (kind, message)


def show_flash():
    item = st.session_state.pop("flash", None)
    if not item:
        return
    kind, message = item
    getattr(st, kind, st.info)(message)
