"""Tests for patient medicines and delivery tracking."""

import pytest

from services.medicine_service import (
    PLACEHOLDER_IMAGE,
    add_medicine,
    attach_image,
    list_medicines,
    update_delivery_status,
)
from services.patient_service import save_patient


@pytest.fixture
def medicine(db, ann_form):
    patient = save_patient(db, ann_form)
    return add_medicine(db, patient.patient_id, "Sertraline", "50mg", "Once daily")


def test_add_and_list(db, medicine):
    meds = list_medicines(db, "P001")
    assert [m.name for m in meds] == ["Sertraline"]
    assert meds[0].delivery_status == "not-shipped"


def test_update_delivery_status(db, medicine):
    assert update_delivery_status(db, medicine.id, "in-transit").delivery_status == "in-transit"
    with pytest.raises(ValueError):
        update_delivery_status(db, medicine.id, "lost")


def test_attach_image(db, medicine):
    assert attach_image(db, medicine.id).image == PLACEHOLDER_IMAGE
    assert attach_image(db, 999) is None


def test_add_for_unknown_patient(db):
    assert add_medicine(db, "P404", "Sertraline") is None


def test_name_required(db, medicine):
    with pytest.raises(ValueError):
        add_medicine(db, "P001", "  ")
