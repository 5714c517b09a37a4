from typing import Optional
from pydantic import BaseModel
from datetime import datetime
from uuid import UUID


class NoteRead(BaseModel):
    id: UUID
    mrn: str
    content: str
    created_at: datetime
    created_by: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
