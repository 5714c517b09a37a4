"""
Roster Builder

Groups visit rows by canonical specialty and projects each one into a
display-ready roster entry. Grouping is a stable partition, so the store's
admission-date-descending order survives inside every group.
"""

from typing import Iterable, List, Optional, Union
from datetime import date, datetime

from wardcensus.core.config import settings
from wardcensus.core.exceptions import DataIntegrityError
from wardcensus.domain.constants import CANONICAL_SPECIALTIES, PatientStatus, Specialty
from wardcensus.schemas.roster import SpecialtyGroup, SpecialtyRosterEntry

DateLike = Union[date, datetime, str]


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(value)


def format_display_date(value: Optional[DateLike], fmt: Optional[str] = None) -> Optional[str]:
    """Render a date with the configured display template; None stays None"""
    if value is None:
        return None
    moment = _as_datetime(value)
    return (fmt or settings.DATE_DISPLAY_FORMAT).format(
        day=moment.day, month=moment.month, year=moment.year
    )


def to_roster_entry(visit, fmt: Optional[str] = None) -> SpecialtyRosterEntry:
    """Project one visit row (with its joined patient) into a roster entry"""
    patient = getattr(visit, "patient", None)
    patient_name = getattr(patient, "patient_name", None) if patient is not None else None
    if not patient_name:
        raise DataIntegrityError(
            message=f"Visit for MRN {visit.mrn} has no resolvable patient",
            details={"mrn": visit.mrn, "specialty": visit.specialty}
        )

    status = visit.patient_status
    if isinstance(status, PatientStatus):
        status = status.value

    admitted_on = _as_datetime(visit.admission_date)
    discharged_on = _as_datetime(visit.discharge_date) if visit.discharge_date is not None else None

    return SpecialtyRosterEntry(
        mrn=visit.mrn,
        patient_name=patient_name,
        admission_date=format_display_date(admitted_on, fmt),
        discharge_date=format_display_date(discharged_on, fmt),
        patient_status=status,
        admitted_on=admitted_on,
        discharged_on=discharged_on,
    )


def build_rosters(raw_visits: Iterable, fmt: Optional[str] = None) -> List[SpecialtyGroup]:
    """Group visits into one roster per canonical specialty.

    Every canonical specialty yields a group, empty or not. Visits under any
    other specialty are left out.
    """
    groups = {specialty: [] for specialty in CANONICAL_SPECIALTIES}
    for visit in raw_visits:
        specialty = visit.specialty
        if isinstance(specialty, Specialty):
            specialty = specialty.value
        bucket = groups.get(specialty)
        if bucket is not None:
            bucket.append(to_roster_entry(visit, fmt))

    return [
        SpecialtyGroup(specialty=specialty, patients=groups[specialty])
        for specialty in CANONICAL_SPECIALTIES
    ]
