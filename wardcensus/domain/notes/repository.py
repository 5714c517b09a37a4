"""
Note Repository Layer

Data access for patient notes. Reads raise RetrievalError and writes raise
DatabaseError when the store fails.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import uuid

from wardcensus.core.exceptions import ErrorHandler, DatabaseError
from wardcensus.domain.notes.models import PatientNote, utcnow


class NoteRepository:
    """Repository for patient note data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, note_data: dict) -> PatientNote:
        """Create a new note"""
        note = PatientNote(**note_data)
        async with ErrorHandler("insert note", DatabaseError, session=self.db):
            self.db.add(note)
            await self.db.commit()
            await self.db.refresh(note)
        return note

    async def get_by_id(self, note_id: uuid.UUID) -> Optional[PatientNote]:
        """Get note by ID"""
        with ErrorHandler("fetch note"):
            result = await self.db.execute(
                select(PatientNote).where(PatientNote.id == note_id)
            )
            return result.scalar_one_or_none()

    async def get_by_patient(self, mrn: str) -> List[PatientNote]:
        """Get all notes for a patient, newest first"""
        with ErrorHandler("fetch notes"):
            result = await self.db.execute(
                select(PatientNote)
                .where(PatientNote.mrn == mrn)
                .order_by(PatientNote.created_at.desc())
            )
            return list(result.scalars().all())

    async def update_content(self, note_id: uuid.UUID, content: str) -> Optional[PatientNote]:
        """Replace a note's content, leaving identity and authorship untouched"""
        note = await self.get_by_id(note_id)
        if note:
            async with ErrorHandler("update note", DatabaseError, session=self.db):
                note.content = content
                note.updated_at = utcnow()
                await self.db.commit()
                await self.db.refresh(note)
        return note
