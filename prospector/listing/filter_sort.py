"""
Prospector - Filter & Sort Engine
Turns the saved prospect collection into the visible, ordered subset.

Pure: (prospects, criteria, sort_by) -> new list. The input is never mutated,
filters run before the sort, and every sort is stable so prospects with equal
keys keep their collection order.
"""

import unicodedata
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional

from prospector.models import Prospect

SORT_KEYS = ("probability", "name", "date")
DEFAULT_SORT = "probability"

DAY_START = time(0, 0, 0, tzinfo=timezone.utc)
DAY_END = time(23, 59, 59, tzinfo=timezone.utc)


@dataclass(frozen=True)
class FilterCriteria:
    sector: str = ""
    location: str = ""
    min_probability: Optional[float] = None
    max_probability: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self == FilterCriteria()


def _contains(haystack: str, needle: str) -> bool:
    needle = (needle or "").strip().lower()
    if not needle:
        return True
    return needle in (haystack or "").lower()


def _collation_key(name: str) -> str:
    # Accent- and case-insensitive, close to a locale-aware compare
    decomposed = unicodedata.normalize("NFKD", name or "")
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def _matches(p: Prospect, criteria: FilterCriteria, lower: Optional[datetime],
             upper: Optional[datetime]) -> bool:
    if not _contains(p.sector, criteria.sector):
        return False
    if not _contains(p.location, criteria.location):
        return False
    if criteria.min_probability is not None and p.hire_probability < criteria.min_probability:
        return False
    if criteria.max_probability is not None and p.hire_probability > criteria.max_probability:
        return False
    if lower is not None and p.created_at < lower:
        return False
    if upper is not None and p.created_at > upper:
        return False
    return True


def apply_filters(prospects: Iterable[Prospect], criteria: FilterCriteria = None) -> List[Prospect]:
    criteria = criteria or FilterCriteria()
    lower = datetime.combine(criteria.start_date, DAY_START) if criteria.start_date else None
    upper = datetime.combine(criteria.end_date, DAY_END) if criteria.end_date else None
    return [p for p in prospects if _matches(p, criteria, lower, upper)]


def sort_prospects(prospects: Iterable[Prospect], sort_by: str = DEFAULT_SORT) -> List[Prospect]:
    """Stable sort. Unknown keys fall back to probability."""
    if sort_by == "name":
        return sorted(prospects, key=lambda p: _collation_key(p.company_name))
    if sort_by == "date":
        return sorted(prospects, key=lambda p: p.created_at, reverse=True)
    return sorted(prospects, key=lambda p: p.hire_probability, reverse=True)


def filter_and_sort(prospects: Iterable[Prospect], criteria: FilterCriteria = None,
                    sort_by: str = DEFAULT_SORT) -> List[Prospect]:
    """Return the visible subset: filtered, then sorted."""
    return sort_prospects(apply_filters(prospects, criteria), sort_by)


def visible_ids(prospects: Iterable[Prospect], criteria: FilterCriteria = None,
                sort_by: str = DEFAULT_SORT) -> List[str]:
    return [p.id for p in filter_and_sort(prospects, criteria, sort_by)]
