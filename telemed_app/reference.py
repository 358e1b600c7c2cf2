"""
reference.py
============
Immutable snapshot of the reference tables.

The database is read once at startup; the state machine only ever sees this
snapshot, so it can be shared by every session without locking.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from .models import Specialization, Symptom, Disease, Doctor


@dataclass(frozen=True)
class SymptomInfo:
    id: int
    name: str
    description: str


@dataclass(frozen=True)
class DiseaseInfo:
    id: int
    name: str
    description: str
    common_symptoms: FrozenSet[int]
    recommended_specialization: int


@dataclass(frozen=True)
class SpecializationInfo:
    id: int
    name: str
    description: str
    common_conditions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DoctorInfo:
    id: int
    name: str
    specialization_id: int
    qualifications: Tuple[str, ...]
    experience: str
    languages: Tuple[str, ...]
    rating: float
    review_count: int
    bio: str
    consultation_fee: float
    available_days: FrozenSet[str]
    time_slots: Tuple[str, ...]
    virtual_consultation: bool = True
    in_person_consultation: bool = True
    place_id: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def offers(self, consultation_type: Optional[str]) -> bool:
        """Whether the doctor offers the given consultation mode (None = any)."""
        if consultation_type is None:
            return True
        if consultation_type == "virtual":
            return self.virtual_consultation
        return self.in_person_consultation

    def to_dict(self) -> dict:
        """JSON shape used by the HTTP API."""
        return {
            "id": self.id,
            "name": self.name,
            "specialization": self.specialization_id,
            "qualifications": list(self.qualifications),
            "experience": self.experience,
            "languages": list(self.languages),
            "rating": self.rating,
            "reviewCount": self.review_count,
            "bio": self.bio,
            "consultationFee": self.consultation_fee,
            "availability": {
                "days": sorted(self.available_days, key=_weekday_index),
                "timeSlots": list(self.time_slots),
            },
            "virtualConsultationAvailable": self.virtual_consultation,
            "inPersonConsultationAvailable": self.in_person_consultation,
            "placeId": self.place_id,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _weekday_index(day: str) -> int:
    return _WEEKDAYS.index(day) if day in _WEEKDAYS else len(_WEEKDAYS)


@dataclass(frozen=True)
class ReferenceData:
    """All reference tables, each kept in natural (id) order."""
    symptoms: Tuple[SymptomInfo, ...]
    diseases: Tuple[DiseaseInfo, ...]
    specializations: Tuple[SpecializationInfo, ...]
    doctors: Tuple[DoctorInfo, ...]
    _specialization_index: Dict[int, SpecializationInfo] = field(default_factory=dict, init=False, repr=False, compare=False)
    _doctor_index: Dict[int, DoctorInfo] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._specialization_index.update({s.id: s for s in self.specializations})
        self._doctor_index.update({d.id: d for d in self.doctors})

    def specialization(self, specialization_id: int) -> Optional[SpecializationInfo]:
        return self._specialization_index.get(specialization_id)

    def specialization_by_name(self, name: str) -> Optional[SpecializationInfo]:
        return next((s for s in self.specializations if s.name == name), None)

    def doctor(self, doctor_id: int) -> Optional[DoctorInfo]:
        return self._doctor_index.get(doctor_id)

    def doctors_for(self, specialization_id: int) -> List[DoctorInfo]:
        return [d for d in self.doctors if d.specialization_id == specialization_id]

    def symptom_names(self) -> List[str]:
        return [s.name for s in self.symptoms]


def load_reference_data(db) -> ReferenceData:
    """Build the snapshot from the seeded database tables."""
    symptoms = tuple(
        SymptomInfo(id=s.id, name=s.name, description=s.description or "")
        for s in db.query(Symptom).order_by(Symptom.id).all()
    )
    diseases = tuple(
        DiseaseInfo(
            id=d.id,
            name=d.name,
            description=d.description or "",
            common_symptoms=frozenset(s.id for s in d.common_symptoms),
            recommended_specialization=d.recommended_specialization_id,
        )
        for d in db.query(Disease).order_by(Disease.id).all()
    )
    specializations = tuple(
        SpecializationInfo(
            id=s.id,
            name=s.name,
            description=s.description or "",
            common_conditions=tuple(s.common_conditions or ()),
        )
        for s in db.query(Specialization).order_by(Specialization.id).all()
    )
    doctors = tuple(doctor_info(d) for d in db.query(Doctor).order_by(Doctor.id).all())
    return ReferenceData(
        symptoms=symptoms,
        diseases=diseases,
        specializations=specializations,
        doctors=doctors,
    )


def doctor_info(row: Doctor) -> DoctorInfo:
    """Convert a Doctor row into its immutable counterpart."""
    return DoctorInfo(
        id=row.id,
        name=row.name,
        specialization_id=row.specialization_id,
        qualifications=tuple(row.qualifications or ()),
        experience=row.experience or "",
        languages=tuple(row.languages or ()),
        rating=float(row.rating or 0.0),
        review_count=int(row.review_count or 0),
        bio=row.bio or "",
        consultation_fee=float(row.consultation_fee or 0.0),
        available_days=frozenset(row.available_days or ()),
        time_slots=tuple(row.time_slots or ()),
        virtual_consultation=bool(row.virtual_consultation),
        in_person_consultation=bool(row.in_person_consultation),
        place_id=row.place_id,
        address=row.address,
        latitude=row.latitude,
        longitude=row.longitude,
    )
