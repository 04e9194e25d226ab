import logging
import time

import streamlit as st

from core import config
from core.database import get_db_context, init_db
from core.helpers import render_sidebar, show_flash
from core.session_manager import dispatch, get_state, get_task_group, init_session_state
from core.state import Navigate, View, resolve_view
from screens import screen_for
from services.patient_service import get_patient
from services.seed_service import ensure_demo_data

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.25


@st.cache_resource
def bootstrap():
    """Create tables (and demo data) once per process."""
    init_db()
    if config.SEED_DEMO_DATA:
        ensure_demo_data()
    return True


def _focus_patient_id(state):
    if state.active_view is View.SESSION and state.active_session is not None:
        return state.active_session.patient_id
    return state.selected_patient_id


def main():
    st.set_page_config(
        page_title=config.CLINIC_NAME,
        page_icon="🧠",
        layout="wide",
    )

    init_session_state()
    bootstrap()

    state = get_state()

    with get_db_context() as db:
        patient_id = _focus_patient_id(state)
        patient_exists = get_patient(db, patient_id) is not None if patient_id else True

        view = resolve_view(state, patient_exists)
        if view is not state.active_view:
            logger.info("%s unavailable, showing %s", state.active_view.value, view.value)
            state = dispatch(Navigate(view))

        render_sidebar(view, config.CLINIC_NAME, dispatch)

        tasks = get_task_group(view)
        tasks.poll()

        st.title(view.title)
        show_flash()
        screen_for(view)(db, state)

    # Simulated background work completes on a later rerun
    if tasks.pending():
        time.sleep(POLL_INTERVAL_SECONDS)
        st.rerun()


if __name__ == "__main__":
    main()
