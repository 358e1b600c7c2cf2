"""
appointment.py
==============
The appointment record built up over the conversation.

Every field is optional and appears only once its step has been validated.
Records are immutable; `merge` returns a new record with extra fields and
refuses to overwrite fields that are already set.
"""

import datetime
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

CONFIRMATION_MESSAGE = "Your appointment has been confirmed! You will receive a confirmation email shortly."


class AccumulatorError(ValueError):
    """Raised when a merge would overwrite an already collected field."""


@dataclass(frozen=True)
class Appointment:
    patient_name: Optional[str] = None
    symptom_ids: Optional[Tuple[int, ...]] = None
    symptom_names: Optional[Tuple[str, ...]] = None
    specialization_id: Optional[int] = None
    specialization: Optional[str] = None
    consultation_type: Optional[str] = None
    doctor_id: Optional[int] = None
    doctor_name: Optional[str] = None
    date: Optional[datetime.date] = None
    time_slot: Optional[str] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None
    confirmed: bool = False

    def merge(self, **updates: Any) -> "Appointment":
        """Return a copy with `updates` added; existing values are kept."""
        for name, value in updates.items():
            current = getattr(self, name)
            if current not in (None, False) and current != value:
                raise AccumulatorError(f"Field '{name}' is already set")
        return replace(self, **updates)

    def is_empty(self) -> bool:
        return self == Appointment()

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape for API responses; unset fields are omitted."""
        data: Dict[str, Any] = {}
        if self.patient_name is not None:
            data["patientName"] = self.patient_name
        if self.symptom_ids is not None:
            data["symptoms"] = [
                {"id": sid, "name": name}
                for sid, name in zip(self.symptom_ids, self.symptom_names or ())
            ]
        if self.specialization_id is not None:
            data["specializationId"] = self.specialization_id
            data["specialization"] = self.specialization
        if self.consultation_type is not None:
            data["consultationType"] = self.consultation_type
        if self.doctor_id is not None:
            data["doctorId"] = self.doctor_id
            data["doctorName"] = self.doctor_name
        if self.date is not None:
            data["date"] = self.date.isoformat()
        if self.time_slot is not None:
            data["time"] = self.time_slot
        if self.contact_number is not None:
            data["contactNumber"] = self.contact_number
        if self.email is not None:
            data["email"] = self.email
        data["confirmed"] = self.confirmed
        return data

    def summary_table(self) -> str:
        """Field/value table shown to the patient after confirmation."""
        rows = [
            ("Field", "Value"),
            ("Name", self.patient_name or ""),
            ("Specialization", self.specialization or ""),
            ("Doctor", self.doctor_name or ""),
            ("Date", format_long_date(self.date) if self.date else ""),
        ]
        if self.time_slot:
            rows.append(("Time", self.time_slot))
        rows += [
            ("Contact Number", self.contact_number or ""),
            ("Email", self.email or ""),
            ("Status", "Confirmed" if self.confirmed else "Pending"),
        ]
        lines = [f"| {label.ljust(15)} | {value.ljust(20)} |" for label, value in rows]
        separator = "|" + "-" * 17 + "|" + "-" * 22 + "|"
        return "\n".join([lines[0], separator] + lines[1:])

    def confirmation_message(self) -> str:
        return f"{CONFIRMATION_MESSAGE}\n\n{self.summary_table()}"


def format_long_date(value: datetime.date) -> str:
    """Format as 'July 1, 2024'."""
    return f"{value:%B} {value.day}, {value.year}"


