"""
models.py
=========
SQLAlchemy ORM models for the Telemedicine Booking Service.
Contains the read-only reference tables:
 - Specialization
 - Symptom
 - Disease (with its symptom links)
 - Doctor
 - Prompt
Appointments are never written to the database.
"""

from sqlalchemy import Column, Integer, String, Float, Text, Boolean, JSON, ForeignKey, Table
from sqlalchemy.orm import declarative_base, relationship

# SQLAlchemy Base class
Base = declarative_base()

# ---------------------------------------------------------------------------
# ASSOCIATION TABLES
# ---------------------------------------------------------------------------

disease_symptoms = Table(
    "disease_symptoms",
    Base.metadata,
    Column("disease_id", Integer, ForeignKey("diseases.id"), primary_key=True),
    Column("symptom_id", Integer, ForeignKey("symptoms.id"), primary_key=True),
)

# ---------------------------------------------------------------------------
# TABLE DEFINITIONS
# ---------------------------------------------------------------------------

class Specialization(Base):
    """Medical practice area used to filter doctors."""
    __tablename__ = "specializations"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    description = Column(Text)
    common_conditions = Column(JSON, default=list)


class Symptom(Base):
    """Symptom the patient can mention in free text."""
    __tablename__ = "symptoms"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    description = Column(Text)


class Disease(Base):
    """Links symptoms to the specialization that usually treats them."""
    __tablename__ = "diseases"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    recommended_specialization_id = Column(Integer, ForeignKey("specializations.id"), nullable=False)

    # Relationships
    common_symptoms = relationship("Symptom", secondary=disease_symptoms, order_by="Symptom.id")
    recommended_specialization = relationship("Specialization")


class Doctor(Base):
    """Doctor profile, availability and practice location."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    specialization_id = Column(Integer, ForeignKey("specializations.id"), nullable=False)
    qualifications = Column(JSON, default=list)
    experience = Column(String)
    languages = Column(JSON, default=list)
    rating = Column(Float, default=0.0)
    review_count = Column(Integer, default=0)
    bio = Column(Text)
    consultation_fee = Column(Float, default=0.0)
    available_days = Column(JSON, default=list)
    time_slots = Column(JSON, default=list)
    virtual_consultation = Column(Boolean, default=True)
    in_person_consultation = Column(Boolean, default=True)
    place_id = Column(String, unique=True)
    address = Column(String)
    latitude = Column(Float)
    longitude = Column(Float)

    specialization = relationship("Specialization")


class Prompt(Base):
    """Bot message shown when the conversation enters a step."""
    __tablename__ = "prompts"

    id = Column(String, primary_key=True)
    step = Column(String, nullable=False, index=True)
    message = Column(Text, nullable=False)
    options = Column(JSON, default=list)
