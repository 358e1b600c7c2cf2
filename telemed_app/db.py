"""
db.py
=====
Handles database connection, session management and reference-data seeding
for the booking service.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL
from . import medical_data
from .models import Specialization, Symptom, Disease, Doctor, Prompt

logger = logging.getLogger(__name__)


def make_engine(url: str):
    """
    Create an engine for the given SQLAlchemy URL.
    In-memory SQLite must share one connection across threads, otherwise every
    request would see an empty database.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url)


engine = make_engine(DATABASE_URL)

# Create a configured session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency injection generator.
    Yields a database session, closes when done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(Base, bind=None):
    """
    Creates the tables if missing.
    Called once on FastAPI startup.
    """
    Base.metadata.create_all(bind=bind or engine)


def seed_reference_data(db) -> bool:
    """
    Insert the static reference rows if the tables are empty.
    Returns True when rows were inserted.
    """
    if db.query(Specialization).count() > 0:
        logger.info(f"🩻 {db.query(Doctor).count()} doctors already exist, skipping seed.")
        return False

    logger.info("🩺 No reference data found. Seeding specializations, symptoms and doctors...")

    db.add_all(
        Specialization(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            common_conditions=list(row["common_conditions"]),
        )
        for row in medical_data.SPECIALIZATIONS
    )
    symptoms = {
        row["id"]: Symptom(id=row["id"], name=row["name"], description=row["description"])
        for row in medical_data.SYMPTOMS
    }
    db.add_all(symptoms.values())
    db.flush()

    db.add_all(
        Disease(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            recommended_specialization_id=row["recommended_specialization"],
            common_symptoms=[symptoms[sid] for sid in row["common_symptoms"]],
        )
        for row in medical_data.DISEASES
    )
    db.add_all(
        Doctor(
            id=row["id"],
            name=row["name"],
            specialization_id=row["specialization_id"],
            qualifications=list(row["qualifications"]),
            experience=row["experience"],
            languages=list(row["languages"]),
            rating=row["rating"],
            review_count=row["review_count"],
            bio=row["bio"],
            consultation_fee=row["consultation_fee"],
            available_days=list(row["days"]),
            time_slots=list(row["time_slots"]),
            virtual_consultation=row["virtual"],
            in_person_consultation=row["in_person"],
            place_id=row["place_id"],
            address=row["address"],
            latitude=row["latitude"],
            longitude=row["longitude"],
        )
        for row in medical_data.DOCTORS
    )
    db.add_all(
        Prompt(id=prompt_id, step=step, message=message, options=list(options))
        for step, (prompt_id, message, options) in medical_data.PROMPTS.items()
    )
    db.commit()

    logger.info("✅ Reference data has been seeded.")
    return True
