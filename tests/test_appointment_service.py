"""Tests for appointments and status transitions."""

from datetime import date, timedelta

import pytest

from services.appointment_service import (
    appointments_for_date,
    appointments_for_week,
    create_appointment,
    filter_by_patient_name,
    get_appointment,
    list_appointments,
    next_appointment,
    set_status,
)

DAY = date(2024, 1, 22)  # a Monday


@pytest.fixture
def booked(db):
    create_appointment(db, "Sarah Johnson", DAY, "10:00 AM", "remote", appointment_id="1")
    create_appointment(db, "Michael Chen", DAY, "02:00 PM", "in-person", appointment_id="2")
    create_appointment(db, "Emma Davis", DAY + timedelta(days=1), "11:00 AM", "remote", appointment_id="3")
    return db


def test_mark_missed_changes_only_that_appointment(booked):
    set_status(booked, "1", "missed")
    statuses = {a.appointment_id: a.status for a in list_appointments(booked)}
    assert statuses == {"1": "missed", "2": "scheduled", "3": "scheduled"}


def test_any_status_reachable_from_any_other(booked):
    for status in ("attended", "missed", "rescheduled", "scheduled", "attended"):
        assert set_status(booked, "2", status).status == status


def test_invalid_status(booked):
    with pytest.raises(ValueError):
        set_status(booked, "1", "cancelled")
    assert get_appointment(booked, "1").status == "scheduled"


def test_unknown_appointment(booked):
    assert set_status(booked, "99", "missed") is None


@pytest.mark.parametrize("name,day,slot", [
    ("", DAY, "10:00 AM"),
    ("Ann", None, "10:00 AM"),
    ("Ann", DAY, ""),
])
def test_required_fields(db, name, day, slot):
    with pytest.raises(ValueError, match="required"):
        create_appointment(db, name, day, slot)
    assert list_appointments(db) == []


def test_new_appointment_is_scheduled(db):
    a = create_appointment(db, "Ann", "2024-02-01", "09:30 AM", patient_code="P001", notes=" first ")
    assert a.status == "scheduled"
    assert a.date == date(2024, 2, 1)
    assert a.notes == "first"
    assert a.appointment_id


def test_filters(booked):
    appointments = list_appointments(booked)
    assert [a.patient_name for a in filter_by_patient_name(appointments, "CHEN")] == ["Michael Chen"]
    assert len(appointments_for_date(appointments, DAY)) == 2

    week = appointments_for_week(appointments, DAY)
    assert list(week)[0] == date(2024, 1, 21)  # Sunday
    assert len(week) == 7
    assert len(week[DAY + timedelta(days=1)]) == 1


def test_next_appointment(booked):
    upcoming = next_appointment(booked, None, "Michael Chen", on_or_after=DAY)
    assert upcoming.appointment_id == "2"
    set_status(booked, "2", "attended")
    assert next_appointment(booked, None, "Michael Chen", on_or_after=DAY) is None
