from typing import List
from pydantic import BaseModel, Field


class SpecialtyCount(BaseModel):
    specialty: str
    count: int = Field(..., ge=0)


class CensusSummary(BaseModel):
    """Active visit counts, overall and per canonical specialty"""
    total_active: int = Field(..., ge=0)
    by_specialty: List[SpecialtyCount]
