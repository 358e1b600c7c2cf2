"""
test_appointment.py
===================
Appointment record: merging, serialization and the confirmation summary.
"""

import datetime

import pytest

from telemed_app.appointment import Appointment, AccumulatorError, CONFIRMATION_MESSAGE, format_long_date


def booked():
    return Appointment(
        patient_name="Jane Doe",
        specialization_id=5,
        specialization="Neurology",
        doctor_id=5,
        doctor_name="Dr. Lisa Patel",
        date=datetime.date(2024, 7, 1),
        contact_number="555-000-1234",
        email="x@y.com",
        confirmed=True,
    )


def test_merge_adds_fields():
    first = Appointment(patient_name="Jane Doe")
    second = first.merge(contact_number="555-000-1234")

    assert second.patient_name == "Jane Doe"
    assert second.contact_number == "555-000-1234"
    # unchanged
    assert first.contact_number is None


def test_merge_refuses_overwrite():
    with pytest.raises(AccumulatorError):
        Appointment(patient_name="Jane Doe").merge(patient_name="John Roe")


def test_merge_same_value_is_allowed():
    appointment = Appointment(patient_name="Jane Doe")
    assert appointment.merge(patient_name="Jane Doe") == appointment


def test_to_dict_omits_unset_fields():
    data = Appointment(patient_name="Jane Doe").to_dict()
    assert data == {"patientName": "Jane Doe", "confirmed": False}


def test_to_dict_full_booking():
    data = booked().to_dict()
    assert data["doctorName"] == "Dr. Lisa Patel"
    assert data["date"] == "2024-07-01"
    assert data["confirmed"] is True
    assert "time" not in data


def test_format_long_date():
    assert format_long_date(datetime.date(2024, 7, 1)) == "July 1, 2024"
    assert format_long_date(datetime.date(2025, 12, 25)) == "December 25, 2025"


def test_summary_table_layout():
    lines = booked().summary_table().split("\n")

    assert lines[0] == "| Field           | Value                |"
    assert lines[1] == "|-----------------|----------------------|"
    assert lines[2] == "| Name            | Jane Doe             |"
    assert "| Date            | July 1, 2024         |" in lines
    assert lines[-1] == "| Status          | Confirmed            |"
    assert not any(line.startswith("| Time ") for line in lines)


def test_summary_table_includes_time_when_chosen():
    table = booked().merge(time_slot="10:00").summary_table()
    assert "| Time            | 10:00                |" in table


def test_confirmation_message():
    message = booked().confirmation_message()
    assert message.startswith(CONFIRMATION_MESSAGE)
    assert "Dr. Lisa Patel" in message
