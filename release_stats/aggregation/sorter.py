"""
Summary Sorter

Orders organization summaries by a requested field and direction.
"""

import logging
import unicodedata
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..errors import InvalidInputError
from .aggregator import OrgSummary

logger = logging.getLogger(__name__)


class SortField(str, Enum):
    """Fields the summaries can be sorted by."""
    ORGANIZATION = "organization"
    RELEASE_COUNT = "release_count"
    TOTAL_LABOR_HOURS = "total_labor_hours"

    @classmethod
    def parse(cls, value: Optional[Union[str, "SortField"]]) -> "SortField":
        """Map a raw query value to a field; unknown or missing values sort by organization."""
        if isinstance(value, cls):
            return value
        if value == cls.RELEASE_COUNT.value:
            return cls.RELEASE_COUNT
        if value == cls.TOTAL_LABOR_HOURS.value:
            return cls.TOTAL_LABOR_HOURS
        return cls.ORGANIZATION


class SortOrder(str, Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[Union[str, "SortOrder"]]) -> "SortOrder":
        """Only "desc" reverses; anything else is ascending."""
        if isinstance(value, cls):
            return value
        return cls.DESC if value == cls.DESC.value else cls.ASC


def _char_class(char: str) -> int:
    # Spaces, punctuation and symbols before digits before letters
    if char.isalpha():
        return 2
    if char.isdigit():
        return 1
    return 0


def collation_key(name: str) -> Tuple[Tuple, Tuple, Tuple, str]:
    """
    Locale-style collation key for a name.

    Compares in levels the way a root-locale collator does:
    base characters first (accents and case ignored, punctuation before
    digits before letters), then accents (unaccented first), then case
    (lowercase first). The raw name breaks any remaining tie.

    >>> sorted(["Zeta", "Énergie", "alpha", "Alpha"], key=collation_key)
    ['alpha', 'Alpha', 'Énergie', 'Zeta']
    """
    primary: List[Tuple[int, str]] = []
    accents: List[str] = []
    case: List[int] = []

    # NFKD splits accented letters into base character + combining marks
    for char in unicodedata.normalize("NFKD", name):
        if unicodedata.combining(char):
            if accents:
                accents[-1] += char
            else:
                accents.append(char)
            continue

        for base in char.casefold():
            primary.append((_char_class(base), base))
        accents.append("")
        case.append(1 if char.isupper() else 0)

    return (tuple(primary), tuple(accents), tuple(case), name)


def _organization_key(summary: OrgSummary):
    return collation_key(summary.organization)


SORT_KEYS: Dict[SortField, Callable[[OrgSummary], Any]] = {
    SortField.ORGANIZATION: _organization_key,
    SortField.RELEASE_COUNT: lambda summary: summary.release_count,
    SortField.TOTAL_LABOR_HOURS: lambda summary: summary.total_labor_hours,
}


def sort_summaries(
    summaries: List[OrgSummary],
    field: Optional[Union[str, SortField]] = None,
    order: Optional[Union[str, SortOrder]] = None
) -> List[OrgSummary]:
    """
    Sort summaries in place.

    The ascending sort is stable. Descending order is the ascending result
    reversed, so equal keys also appear in reverse.

    Args:
        summaries: Organization summaries
        field: release_count, total_labor_hours, or anything else for organization
        order: "desc" for descending, anything else for ascending

    Returns:
        The same list, sorted (a new list when given a tuple)

    Raises:
        InvalidInputError: If summaries is missing or not a list/tuple
    """
    if summaries is None or not isinstance(summaries, (list, tuple)):
        err = "sort_summaries: Invalid org data."
        logger.error(err)
        raise InvalidInputError(err)

    if isinstance(summaries, tuple):
        summaries = list(summaries)

    sort_field = SortField.parse(field)
    sort_order = SortOrder.parse(order)

    summaries.sort(key=SORT_KEYS[sort_field])
    if sort_order is SortOrder.DESC:
        summaries.reverse()

    logger.info(f"Sorted {len(summaries)} organizations by {sort_field.value} {sort_order.value}")
    return summaries
