from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from wardcensus.core.exceptions import NotFoundError, DatabaseError, create_error_response
from wardcensus.domain.patients.models import Patient
from wardcensus.domain.patients.repository import PatientRepository
from wardcensus.domain.notes.service import NoteService
from wardcensus.schemas.note import NoteRead
from wardcensus.schemas.patient import PatientDetail, PatientRead


class PatientService:
    """Service layer for the patient record page"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.patient_repo = PatientRepository(db)
        self.note_service = NoteService(db)

    async def get_patient(self, mrn: str) -> Patient:
        """Get patient by MRN"""
        patient = await self.patient_repo.get_by_mrn(mrn)
        if not patient:
            raise NotFoundError(
                message="Patient not found",
                details={"mrn": mrn}
            )
        return patient

    async def load_patient_detail(self, mrn: str) -> PatientDetail:
        """Load demographics and notes independently.

        A failed patient fetch raises. A failed notes fetch is reported in
        ``notes_error`` so the demographics can still be shown.
        """
        patient = PatientRead.model_validate(await self.get_patient(mrn))

        try:
            notes = await self.note_service.list_notes(mrn)
        except DatabaseError as e:
            logger.error(f"Failed to fetch notes for patient {mrn}: {e.message}")
            return PatientDetail(patient=patient, notes=None, notes_error=create_error_response(e))

        return PatientDetail(
            patient=patient,
            notes=[NoteRead.model_validate(note) for note in notes]
        )
