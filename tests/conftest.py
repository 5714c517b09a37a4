import pytest
from datetime import datetime
from typing import AsyncGenerator, List
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wardcensus.infrastructure.database import Base
from wardcensus.domain.constants import PatientStatus, Specialty
from wardcensus.domain.patients.models import Patient, Visit


# In-memory database shared by every connection of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()

    await engine.dispose()


@pytest.fixture(scope="function")
def sample_patients_data() -> List[dict]:
    """Sample patient demographics."""
    return [
        {"mrn": "MRN001", "patient_name": "John Smith", "age": 67, "gender": "Male", "assigned_doctor": "Dr. Patel"},
        {"mrn": "MRN002", "patient_name": "Jane Doe", "age": 45, "gender": "Female", "assigned_doctor": "Dr. Patel"},
        {"mrn": "MRN003", "patient_name": "Alice Brown", "age": 72, "gender": "Female", "assigned_doctor": "Dr. Okafor"},
        {"mrn": "MRN004", "patient_name": "Bob White", "age": 58, "gender": "Male", "assigned_doctor": "Dr. Okafor"},
        {"mrn": "MRN005", "patient_name": "Carol Green", "age": 39, "gender": "Female", "assigned_doctor": "Dr. Lindqvist"},
    ]


@pytest.fixture(scope="function")
def sample_visits_data() -> List[dict]:
    """Sample visits: four canonical-specialty actives plus one off-list active."""
    return [
        {"mrn": "MRN001", "specialty": Specialty.NEUROLOGY.value, "patient_status": PatientStatus.ACTIVE.value,
         "admission_date": datetime(2024, 3, 10, 8, 30)},
        {"mrn": "MRN002", "specialty": Specialty.NEUROLOGY.value, "patient_status": PatientStatus.ACTIVE.value,
         "admission_date": datetime(2024, 3, 12, 14, 0)},
        {"mrn": "MRN003", "specialty": Specialty.NEUROLOGY.value, "patient_status": PatientStatus.ACTIVE.value,
         "admission_date": datetime(2024, 1, 5, 9, 15)},
        {"mrn": "MRN004", "specialty": Specialty.NEUROLOGY.value, "patient_status": PatientStatus.DISCHARGED.value,
         "admission_date": datetime(2024, 2, 1, 11, 0), "discharge_date": datetime(2024, 2, 10, 16, 45)},
        {"mrn": "MRN005", "specialty": Specialty.HEMATOLOGY.value, "patient_status": PatientStatus.ACTIVE.value,
         "admission_date": datetime(2024, 3, 1, 7, 0)},
        {"mrn": "MRN001", "specialty": "Cardiology", "patient_status": PatientStatus.ACTIVE.value,
         "admission_date": datetime(2024, 3, 15, 10, 0)},
        {"mrn": "MRN002", "specialty": Specialty.GENERAL_INTERNAL_MEDICINE.value,
         "patient_status": PatientStatus.DISCHARGED.value,
         "admission_date": datetime(2023, 12, 20, 13, 30), "discharge_date": datetime(2024, 1, 2, 10, 0)},
    ]


@pytest.fixture(scope="function")
async def seeded_ward(
    db_session: AsyncSession,
    sample_patients_data: List[dict],
    sample_visits_data: List[dict]
) -> AsyncSession:
    """Database session with the sample patients and visits loaded."""
    db_session.add_all([Patient(**data) for data in sample_patients_data])
    await db_session.flush()
    db_session.add_all([Visit(**data) for data in sample_visits_data])
    await db_session.commit()
    return db_session


@pytest.fixture(scope="function")
async def john_smith(db_session: AsyncSession) -> Patient:
    """A single patient for note tests."""
    patient = Patient(
        mrn="MRN001",
        patient_name="John Smith",
        age=67,
        gender="Male",
        assigned_doctor="Dr. Patel"
    )
    db_session.add(patient)
    await db_session.commit()
    return patient


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "census: mark test as census aggregation related"
    )
    config.addinivalue_line(
        "markers", "roster: mark test as specialty roster related"
    )
    config.addinivalue_line(
        "markers", "notes: mark test as patient notes related"
    )
