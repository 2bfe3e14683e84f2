"""Tests for the application session."""

import pytest

from medicare.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
    ValidationException,
)
from medicare.core.storage import MemoryStore
from medicare.main import create_app
from medicare.schemas.appointments import AppointmentStatus
from medicare.schemas.common import RecordKind
from medicare.schemas.notifications import NoticeLevel


@pytest.fixture
def app(settings, store):
    """Started session over an empty in-memory store."""
    return create_app(settings, store)


@pytest.fixture
def booked(app, sample_patient_data, sample_doctor_data):
    """Session with one patient, one doctor and one scheduled appointment."""
    patient_id = app.save_patient(sample_patient_data)
    doctor_id = app.save_doctor(sample_doctor_data)
    appointment = app.book_appointment(
        {
            "patient_id": patient_id,
            "doctor_id": doctor_id,
            "date": "2026-03-01",
            "time": "09:30",
            "reason": "Routine blood pressure checkup",
        }
    )
    app.notifications.drain()
    return app, patient_id, doctor_id, appointment.id


def test_first_start_seeds_demo_data_once(settings):
    """Test that demo data is seeded on first start and not duplicated on restart."""
    settings = settings.model_copy(update={"seed_demo_data": True})
    store = MemoryStore()

    first = create_app(settings, store)
    second = create_app(settings, store)

    for session in (first, second):
        assert session.repository.count(RecordKind.PATIENTS) == 5
        assert session.repository.count(RecordKind.DOCTORS) == 5
        assert session.repository.count(RecordKind.APPOINTMENTS) == 4


def test_records_survive_restart(app, settings, store, sample_patient_data):
    patient_id = app.save_patient(sample_patient_data)

    restarted = create_app(settings, store)

    assert restarted.repository.get(RecordKind.PATIENTS, patient_id).name == "Rohan Desai"


def test_theme_survives_restart(app, settings, store):
    assert app.theme.theme == "dark"

    assert app.toggle_theme() == "light"

    assert create_app(settings, store).theme.theme == "light"


def test_save_patient_announces_result(app, sample_patient_data):
    """Test the notices for adding and editing a patient."""
    patient_id = app.save_patient(sample_patient_data)
    app.save_patient({"disease": "Hypertension"}, patient_id=patient_id)

    notices = app.notifications.drain()
    assert [(n.level, n.title) for n in notices] == [
        (NoticeLevel.SUCCESS, "Patient added"),
        (NoticeLevel.SUCCESS, "Patient updated"),
    ]
    assert notices[0].message == "Rohan Desai has been registered."


def test_patient_view_uses_default_page_size(app):
    """Test that the patient table is paged by name."""
    for i in range(12):
        app.save_patient(
            {
                "name": f"Patient {i:02d}",
                "age": 30,
                "gender": "Other",
                "phone": "+91 99001 00000",
                "disease": "Observation",
                "admission_date": "2026-02-01",
            }
        )

    first = app.patient_view()
    app.patient_state.next_page(first)
    second = app.patient_view()

    assert first.total == 12
    assert len(first.items) == 10
    assert first.items[0].name == "Patient 00"
    assert [p.name for p in second.items] == ["Patient 10", "Patient 11"]


def test_book_without_patients_warns(app):
    """Test booking before any patient is registered."""
    with pytest.raises(BadRequestException):
        app.book_appointment({})

    [notice] = app.notifications.drain()
    assert notice.level == NoticeLevel.WARNING
    assert notice.title == "No patients registered"
    assert notice.message == "Please add a patient first before booking an appointment."


def test_book_announces_appointment(app, sample_patient_data, sample_doctor_data):
    patient_id = app.save_patient(sample_patient_data)
    doctor_id = app.save_doctor(sample_doctor_data)
    app.notifications.drain()

    app.book_appointment(
        {
            "patientId": patient_id,
            "doctorId": doctor_id,
            "date": "2026-03-01",
            "time": "09:30",
            "reason": "Routine blood pressure checkup",
        }
    )

    [notice] = app.notifications.drain()
    assert notice.title == "Appointment booked"
    assert notice.message == "Scheduled for Rohan Desai on 01 Mar 2026 at 09:30."


def test_delete_patient_requires_confirmation(booked):
    """Test that a patient is only removed once the deletion is confirmed."""
    app, patient_id, _, appointment_id = booked

    pending = app.request_delete_patient(patient_id)
    assert pending.message == "Delete Rohan Desai? All associated appointments will be affected."
    assert app.repository.exists(RecordKind.PATIENTS, patient_id)

    app.confirm(pending.token)

    assert not app.repository.exists(RecordKind.PATIENTS, patient_id)
    assert not app.repository.exists(RecordKind.APPOINTMENTS, appointment_id)
    assert [n.title for n in app.notifications.drain()] == ["Patient deleted"]


def test_dismissed_delete_changes_nothing(booked):
    app, _, doctor_id, _ = booked

    pending = app.request_delete_doctor(doctor_id)
    app.dismiss(pending.token)

    assert app.repository.exists(RecordKind.DOCTORS, doctor_id)
    with pytest.raises(NotFoundException):
        app.confirm(pending.token)


def test_delete_doctor_leaves_appointment_unlinked(booked):
    """Test that the appointment view shows Unknown after deleting its doctor."""
    app, _, doctor_id, appointment_id = booked

    pending = app.request_delete_doctor(doctor_id)
    assert pending.message == (
        "Delete Dr. Arjun Mehra? Their appointments will remain but won't be linked."
    )
    app.confirm(pending.token)

    [appointment] = app.appointment_view().items
    assert appointment.id == appointment_id
    assert app.resolver.describe(appointment).doctor_name == "Unknown"


def test_complete_then_cancel_is_rejected(booked):
    """Test that a completed appointment cannot be cancelled afterwards."""
    app, _, _, appointment_id = booked

    app.confirm(app.request_complete_appointment(appointment_id).token)
    pending = app.request_cancel_appointment(appointment_id)

    with pytest.raises(ConflictException):
        app.confirm(pending.token)

    appointment = app.repository.get(RecordKind.APPOINTMENTS, appointment_id)
    assert appointment.status == AppointmentStatus.COMPLETED
    assert [(n.level, n.title) for n in app.notifications.drain()] == [
        (NoticeLevel.SUCCESS, "Appointment completed"),
        (NoticeLevel.ERROR, "Action failed"),
    ]


def test_delete_appointment(booked):
    app, patient_id, _, appointment_id = booked

    pending = app.request_delete_appointment(appointment_id)
    assert pending.message == "Permanently delete this appointment record?"
    app.confirm(pending.token)

    assert app.repository.count(RecordKind.APPOINTMENTS) == 0
    assert app.repository.exists(RecordKind.PATIENTS, patient_id)


def test_requests_for_missing_records(app):
    with pytest.raises(NotFoundException):
        app.request_delete_patient("p_404")
    with pytest.raises(NotFoundException):
        app.request_cancel_appointment("a_404")
    assert app.confirmations.pending is None


def test_unknown_sort_column_keeps_patient_view_usable(app, sample_patient_data):
    """Test that a rejected sort click does not break later renders."""
    app.save_patient(sample_patient_data)

    with pytest.raises(ValidationException):
        app.patient_state.sort_by("bogus")

    assert app.patient_view().total == 1
    assert app.patient_state.sort.column == "name"


def test_doctor_and_appointment_states_check_sort_columns(app):
    app.doctor_state.sort_by("specialization")
    app.appointment_state.sort_by("patient")

    with pytest.raises(ValidationException):
        app.doctor_state.sort_by("patient")
