from sqlalchemy import Column, String, DateTime, ForeignKey, Integer
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from wardcensus.infrastructure.database import Base
from wardcensus.domain.constants import PatientStatus


class Patient(Base):
    """Patient demographics, keyed by medical record number"""
    __tablename__ = "patients"

    mrn = Column(String(50), primary_key=True)
    patient_name = Column(String(200), nullable=False)
    age = Column(Integer)
    gender = Column(String(20))
    assigned_doctor = Column(String(200))

    created_at = Column(DateTime, default=func.now())

    # Relationships
    visits = relationship("Visit", back_populates="patient")
    notes = relationship("PatientNote", back_populates="patient")


class Visit(Base):
    """One admission/discharge episode under a single specialty"""
    __tablename__ = "visits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mrn = Column(String(50), ForeignKey("patients.mrn"), nullable=False, index=True)

    admission_date = Column(DateTime, nullable=False, index=True)
    discharge_date = Column(DateTime)

    # Free text: rows outside the canonical specialties are kept but never grouped
    specialty = Column(String(100), nullable=False, index=True)
    patient_status = Column(String(20), nullable=False, default=PatientStatus.ACTIVE.value, index=True)

    created_at = Column(DateTime, default=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="visits")
