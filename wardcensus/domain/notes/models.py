from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from wardcensus.infrastructure.database import Base
from datetime import datetime, timezone
import uuid


class PatientNote(Base):
    """Free-text annotation on a patient's record"""
    __tablename__ = "patient_notes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    mrn = Column(String(50), ForeignKey("patients.mrn"), nullable=False, index=True)

    content = Column(Text, nullable=False)

    # Immutable after creation; ordering key for the timeline
    created_at = Column(DateTime, nullable=False, index=True)
    created_by = Column(String(100), nullable=False)
    updated_at = Column(DateTime)

    # Relationships
    patient = relationship("Patient", back_populates="notes")


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the timezone-less DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
