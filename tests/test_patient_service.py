"""Tests for the patient store."""

from datetime import date

import pytest

from services.patient_service import (
    create_patient,
    delete_patient,
    get_patient,
    list_patients,
    patient_form_defaults,
    save_patient,
    search_patient_names,
)
from services.session_service import complete_session, get_sessions_for_patient
from services.medicine_service import add_medicine, list_medicines
from core.state import ActiveSession, SessionDraft


def test_add_patient_assigns_id_and_defaults(db, ann_form):
    patient = save_patient(db, ann_form)
    assert patient.patient_id == "P001"
    assert patient.age == 40
    assert isinstance(patient.age, int)
    assert patient.gender == "Female"
    assert patient.phone == "555-1111"
    assert patient.total_sessions == 0
    assert patient.session_type == "in-person"
    assert patient.last_session == date.today()


def test_fractional_age_keeps_whole_years(db, ann_form):
    patient = save_patient(db, {**ann_form, "age": "40.5"})
    assert patient.age == 40


def test_ids_unique_after_adds_updates_and_deletes(db):
    first = create_patient(db, "A", 30, "Male")
    second = create_patient(db, "B", 31, "Female")
    save_patient(db, {"patient_id": first.patient_id, "name": "A2", "age": 30, "gender": "Male"})
    delete_patient(db, second.patient_id)
    third = create_patient(db, "C", 32, "Other")

    ids = [p.patient_id for p in list_patients(db)]
    assert len(ids) == len(set(ids))
    assert third.patient_id != second.patient_id


def test_update_preserves_session_tracking(db, ann_form):
    patient = save_patient(db, ann_form)
    complete_session(db, ActiveSession(patient.patient_id, "remote"), SessionDraft(mental_notes="ok"))

    updated = save_patient(db, {
        **ann_form,
        "patient_id": patient.patient_id,
        "name": "Ann Lee",
        "age": "41",
        "last_session": "1999-01-01",
        "session_type": "in-person",
        "total_sessions": 99,
    })

    assert updated.patient_id == patient.patient_id
    assert updated.name == "Ann Lee"
    assert updated.age == 41
    assert updated.total_sessions == 1
    assert updated.session_type == "remote"
    assert updated.last_session == date.today()


def test_update_keeps_order(db):
    a = create_patient(db, "A", 30, "Male")
    create_patient(db, "B", 31, "Female")
    save_patient(db, {"patient_id": a.patient_id, "name": "A (edited)", "age": 30, "gender": "Male"})
    assert [p.name for p in list_patients(db)] == ["A (edited)", "B"]


def test_update_unknown_patient_returns_none(db, ann_form):
    assert save_patient(db, {**ann_form, "patient_id": "P999"}) is None


@pytest.mark.parametrize("form,message", [
    ({"name": "", "age": "40", "gender": "Female"}, "Name"),
    ({"name": "Ann", "age": "", "gender": "Female"}, "Age"),
    ({"name": "Ann", "age": "0", "gender": "Female"}, "Age"),
    ({"name": "Ann", "age": "40", "gender": "robot"}, "gender"),
])
def test_invalid_form_rejected(db, form, message):
    with pytest.raises(ValueError, match=message):
        save_patient(db, form)
    assert list_patients(db) == []


def test_search(db):
    create_patient(db, "Sarah Johnson", 34, "Female")
    create_patient(db, "Michael Chen", 42, "Male")
    assert [p.name for p in list_patients(db, "sarah")] == ["Sarah Johnson"]
    assert [p.name for p in list_patients(db, "p002")] == ["Michael Chen"]
    assert search_patient_names(db, "chen") == ["Michael Chen (P002)"]


def test_delete_removes_history(db, ann_form):
    patient = save_patient(db, ann_form)
    add_medicine(db, patient.patient_id, "Sertraline", "50mg", "Once daily")
    complete_session(db, ActiveSession(patient.patient_id), SessionDraft())

    assert delete_patient(db, patient.patient_id) is True
    assert get_patient(db, patient.patient_id) is None
    assert get_sessions_for_patient(db, patient.patient_id) == []
    assert list_medicines(db, patient.patient_id) == []


def test_delete_missing_patient(db):
    assert delete_patient(db, "P404") is False


def test_form_defaults(db, ann_form):
    assert patient_form_defaults()["name"] == ""
    patient = save_patient(db, ann_form)
    values = patient_form_defaults(patient)
    assert values["patient_id"] == patient.patient_id
    assert values["email"] == ""
    assert values["age"] == 40
