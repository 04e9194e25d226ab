"""Shared test fixtures."""

import pytest
from sqlalchemy.orm import sessionmaker

from core.database import init_db, make_engine
from core.session_manager import init_session_state


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    engine = make_engine("sqlite://")
    init_db(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def store():
    """Plain dict standing in for st.session_state."""
    data = {}
    init_session_state(data)
    return data


@pytest.fixture
def ann_form():
    return {"name": "Ann", "age": "40", "gender": "female", "phone": "555-1111"}
