# Specialty roster domain module
from wardcensus.domain.roster.builder import build_rosters, format_display_date
from wardcensus.domain.roster.view import apply_view, toggle_sort, RosterView

__all__ = [
    "build_rosters",
    "format_display_date",
    "apply_view",
    "toggle_sort",
    "RosterView",
]
