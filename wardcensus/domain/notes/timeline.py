from typing import List, Optional
import uuid

from wardcensus.core.exceptions import NotFoundError, ValidationError
from wardcensus.domain.notes.service import NoteService
from wardcensus.schemas.note import NoteRead


class NoteTimeline:
    """One patient's notes as shown on the patient page.

    At most one note is editable at a time; ``editing_note_id`` names it and
    ``draft_content`` holds the unsaved text. Selecting another note drops
    the previous draft without saving it.
    """

    def __init__(self, service: NoteService, mrn: str):
        self.service = service
        self.mrn = mrn
        self.notes: List[NoteRead] = []
        self.editing_note_id: Optional[uuid.UUID] = None
        self.draft_content: str = ""

    def _index_of(self, note_id: uuid.UUID) -> int:
        for index, note in enumerate(self.notes):
            if note.id == note_id:
                return index
        raise NotFoundError(
            message="Note not found in timeline",
            details={"note_id": str(note_id), "mrn": self.mrn}
        )

    async def load(self) -> List[NoteRead]:
        notes = await self.service.list_notes(self.mrn)
        self.notes = [NoteRead.model_validate(note) for note in notes]
        if self.editing_note_id is not None and not any(n.id == self.editing_note_id for n in self.notes):
            self.cancel_edit()
        return self.notes

    async def add_note(self, content: str, author: str) -> NoteRead:
        note = NoteRead.model_validate(
            await self.service.create_note(self.mrn, content, author)
        )
        self.notes.insert(0, note)
        return note

    def begin_edit(self, note_id: uuid.UUID) -> None:
        note = self.notes[self._index_of(note_id)]
        self.editing_note_id = note.id
        self.draft_content = note.content

    def update_draft(self, content: str) -> None:
        if self.editing_note_id is None:
            raise ValidationError(message="No note is being edited")
        self.draft_content = content

    def cancel_edit(self) -> None:
        self.editing_note_id = None
        self.draft_content = ""

    async def save_edit(self, content: Optional[str] = None) -> NoteRead:
        """Persist the draft; on failure the note stays in editing state"""
        if self.editing_note_id is None:
            raise ValidationError(message="No note is being edited")
        if content is not None:
            self.draft_content = content

        index = self._index_of(self.editing_note_id)
        updated = NoteRead.model_validate(
            await self.service.update_note(self.editing_note_id, self.draft_content)
        )
        self.notes[index] = updated
        self.cancel_edit()
        return updated
