"""
Note Service Layer

Business logic for the per-patient note timeline: newest-first listing,
creation and in-place content edits.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger
import uuid

from wardcensus.core.config import settings
from wardcensus.core.exceptions import NotFoundError, ValidationError
from wardcensus.domain.notes.models import PatientNote, utcnow
from wardcensus.domain.notes.repository import NoteRepository
from wardcensus.domain.patients.repository import PatientRepository


class NoteService:
    """Service layer for patient note management"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.note_repo = NoteRepository(db)
        self.patient_repo = PatientRepository(db)

    def _validate_content(self, content: str) -> None:
        if content is None or not content.strip():
            raise ValidationError(
                message="Note content cannot be empty",
                details={"field": "content"}
            )
        if len(content) > settings.NOTE_MAX_LENGTH:
            raise ValidationError(
                message=f"Note content exceeds {settings.NOTE_MAX_LENGTH} characters",
                details={"field": "content", "length": len(content)}
            )

    async def list_notes(self, mrn: str) -> List[PatientNote]:
        """Get all notes for a patient, newest first"""
        return await self.note_repo.get_by_patient(mrn)

    async def create_note(self, mrn: str, content: str, author: str) -> PatientNote:
        """Create a note; it becomes the head of the patient's timeline"""
        self._validate_content(content)
        if not author:
            raise ValidationError(
                message="Note author is required",
                details={"field": "created_by"}
            )

        patient = await self.patient_repo.get_by_mrn(mrn)
        if not patient:
            raise NotFoundError(
                message="Patient not found",
                details={"mrn": mrn}
            )

        note = await self.note_repo.create({
            "id": uuid.uuid4(),
            "mrn": mrn,
            "content": content,
            "created_at": utcnow(),
            "created_by": author,
        })
        logger.info(f"Note {note.id} added for patient {mrn} by {author}")
        return note

    async def update_note(self, note_id: uuid.UUID, new_content: str) -> PatientNote:
        """Replace a note's content; id, mrn and authorship are unchanged"""
        self._validate_content(new_content)

        note = await self.note_repo.update_content(note_id, new_content)
        if not note:
            raise NotFoundError(
                message="Note not found",
                details={"note_id": str(note_id)}
            )
        logger.info(f"Note {note_id} updated")
        return note
