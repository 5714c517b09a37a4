"""
Census Service Layer

Active-visit counts for the ward dashboard: one overall total plus one
count per canonical specialty, always in canonical order.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from wardcensus.core.exceptions import RetrievalError
from wardcensus.domain.constants import CANONICAL_SPECIALTIES, PatientStatus
from wardcensus.domain.patients.repository import VisitRepository
from wardcensus.schemas.census import CensusSummary, SpecialtyCount


class CensusService:
    """Service layer for ward census aggregation"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.visit_repo = VisitRepository(db)

    async def compute_census(self) -> CensusSummary:
        """Compute total and per-specialty active visit counts.

        Counts visits, not distinct patients. The total carries no specialty
        filter, so it also includes visits filed under non-canonical
        specialties. Any failed query fails the whole census.
        """
        try:
            total_active = await self.visit_repo.count_visits(patient_status=PatientStatus.ACTIVE)
            counts = await self.visit_repo.count_by_specialty(patient_status=PatientStatus.ACTIVE)
        except RetrievalError as e:
            logger.error(f"Census aggregation failed: {e.message}")
            raise RetrievalError(
                message="Failed to load census data",
                details={"operation": "compute census", "cause": e.details}
            ) from e

        by_specialty = [
            SpecialtyCount(specialty=specialty, count=counts.get(specialty, 0))
            for specialty in CANONICAL_SPECIALTIES
        ]
        logger.info(f"Census computed: {total_active} active visits")

        return CensusSummary(total_active=total_active, by_specialty=by_specialty)
