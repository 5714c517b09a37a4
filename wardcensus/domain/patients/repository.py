from typing import Optional, List, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from wardcensus.core.exceptions import ErrorHandler
from wardcensus.domain.constants import PatientStatus
from wardcensus.domain.patients.models import Patient, Visit


def _status_value(patient_status) -> str:
    if isinstance(patient_status, PatientStatus):
        return patient_status.value
    return patient_status


class PatientRepository:
    """Repository for patient data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_mrn(self, mrn: str) -> Optional[Patient]:
        """Get patient by medical record number"""
        with ErrorHandler("fetch patient"):
            result = await self.db.execute(
                select(Patient).where(Patient.mrn == mrn)
            )
            return result.scalar_one_or_none()


class VisitRepository:
    """Repository for visit data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_visits(
        self,
        specialty: Optional[str] = None,
        patient_status: Optional[PatientStatus] = None
    ) -> int:
        """Count visits with filters"""
        query = select(func.count(Visit.id))

        if specialty is not None:
            query = query.where(Visit.specialty == specialty)
        if patient_status is not None:
            query = query.where(Visit.patient_status == _status_value(patient_status))

        with ErrorHandler("count visits"):
            result = await self.db.execute(query)
            return result.scalar_one()

    async def count_by_specialty(self, patient_status: Optional[PatientStatus] = None) -> Dict[str, int]:
        """Count visits per specialty in a single grouped query"""
        query = select(Visit.specialty, func.count(Visit.id)).group_by(Visit.specialty)

        if patient_status is not None:
            query = query.where(Visit.patient_status == _status_value(patient_status))

        with ErrorHandler("count visits by specialty"):
            result = await self.db.execute(query)
            return {specialty: count for specialty, count in result.all()}

    async def get_all_with_patients(self) -> List[Visit]:
        """Get every visit with its patient, newest admission first"""
        query = (
            select(Visit)
            .options(selectinload(Visit.patient))
            .order_by(Visit.admission_date.desc(), Visit.id)
            .execution_options(populate_existing=True)
        )

        with ErrorHandler("fetch visits"):
            result = await self.db.execute(query)
            return list(result.scalars().all())
