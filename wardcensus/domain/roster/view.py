"""
Roster View Engine

Free-text search and click-to-sort ordering over built specialty rosters.
Both are pure functions of (groups, search term, sort config), so the view
can be recomputed on every keystroke or header click.
"""

from typing import List, Optional, Sequence

from wardcensus.schemas.roster import (
    SortConfig, SortDirection, SortKey,
    SpecialtyGroup, SpecialtyRosterEntry
)

# Date columns sort on the underlying timestamps, not the display strings
_DATE_FIELDS = {
    SortKey.ADMISSION_DATE: "admitted_on",
    SortKey.DISCHARGE_DATE: "discharged_on",
}


def toggle_sort(current: Optional[SortConfig], key: SortKey) -> SortConfig:
    """Next sort state after clicking a column header.

    The same key flips direction; a different key starts ascending.
    """
    key = SortKey(key)
    if current is not None and current.key == key:
        direction = (
            SortDirection.DESCENDING
            if current.direction == SortDirection.ASCENDING
            else SortDirection.ASCENDING
        )
        return SortConfig(key=key, direction=direction)
    return SortConfig(key=key, direction=SortDirection.ASCENDING)


def matches_search(entry: SpecialtyRosterEntry, search_term: str) -> bool:
    if not search_term:
        return True
    needle = search_term.lower()
    return needle in entry.patient_name.lower() or needle in entry.mrn.lower()


def _sort_value(entry: SpecialtyRosterEntry, key: SortKey):
    value = getattr(entry, _DATE_FIELDS.get(key, key.value))
    # Missing values go after everything when ascending
    return (value is None, value if value is not None else "")


def sort_patients(
    patients: Sequence[SpecialtyRosterEntry],
    sort: Optional[SortConfig]
) -> List[SpecialtyRosterEntry]:
    """Stable sort of one group's patients; no config keeps input order"""
    if sort is None:
        return list(patients)
    return sorted(
        patients,
        key=lambda entry: _sort_value(entry, sort.key),
        reverse=sort.direction == SortDirection.DESCENDING,
    )


def apply_view(
    groups: Sequence[SpecialtyGroup],
    search_term: str = "",
    sort: Optional[SortConfig] = None
) -> List[SpecialtyGroup]:
    """Filter and sort each group independently; groups are never dropped"""
    return [
        group.model_copy(update={
            "patients": sort_patients(
                [entry for entry in group.patients if matches_search(entry, search_term)],
                sort,
            )
        })
        for group in groups
    ]


class RosterView:
    """Current search term and sort state over a set of built rosters"""

    def __init__(self, groups: Sequence[SpecialtyGroup]):
        self.groups = list(groups)
        self.search_term = ""
        self.sort: Optional[SortConfig] = None

    def set_search_term(self, search_term: str) -> None:
        self.search_term = search_term or ""

    def sort_by(self, key: SortKey) -> SortConfig:
        self.sort = toggle_sort(self.sort, key)
        return self.sort

    def clear_sort(self) -> None:
        self.sort = None

    @property
    def visible_groups(self) -> List[SpecialtyGroup]:
        return apply_view(self.groups, self.search_term, self.sort)
