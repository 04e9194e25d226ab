from .database import get_db_context, init_db, engine, SessionLocal, Base
from .state import AppState, View, reduce, resolve_view
from .session_manager import init_session_state, get_state, dispatch, confirm_delete, clear_session

__all__ = [
    "get_db_context",
    "init_db",
    "engine",
    "SessionLocal",
    "Base",
    "AppState",
    "View",
    "reduce",
    "resolve_view",
    "init_session_state",
    "get_state",
    "dispatch",
    "confirm_delete",
    "clear_session",
]
