from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from wardcensus.core.exceptions import RetrievalError
from wardcensus.domain.patients.repository import VisitRepository
from wardcensus.domain.roster.builder import build_rosters
from wardcensus.domain.roster.view import RosterView
from wardcensus.schemas.roster import SpecialtyGroup


class RosterService:
    """Service layer for specialty rosters"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.visit_repo = VisitRepository(db)

    async def get_rosters(self) -> List[SpecialtyGroup]:
        """Fetch all visits and group them by canonical specialty"""
        try:
            visits = await self.visit_repo.get_all_with_patients()
        except RetrievalError as e:
            logger.error(f"Failed to fetch specialty rosters: {e.message}")
            raise

        groups = build_rosters(visits)
        logger.info(f"Built rosters from {len(visits)} visits")
        return groups

    async def open_view(self) -> RosterView:
        """Fresh view (no search, no sort) over newly fetched rosters"""
        return RosterView(await self.get_rosters())
