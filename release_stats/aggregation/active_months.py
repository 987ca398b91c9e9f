"""
Active-Month Resolver

Rewrites each OrgSummary's month multiset into the months tied for most releases.
"""

import logging
from collections import Counter
from typing import Iterable, List

from ..errors import InvalidInputError
from .aggregator import OrgSummary

logger = logging.getLogger(__name__)

CALENDAR_MONTHS = range(1, 13)


def most_active_months(months: Iterable[int]) -> List[int]:
    """
    Months that occur most often, ascending.

    Every month sharing the highest count is returned, so ties yield
    several months. An empty input yields an empty list.

    Examples:
        [3, 3, 5]    -> [3]
        [3, 3, 5, 5] -> [3, 5]
        [7]          -> [7]
    """
    counts = Counter(months)
    if not counts:
        return []

    highest = max(counts.values())
    return [month for month in CALENDAR_MONTHS if counts.get(month) == highest]


def resolve_most_active_months(summaries: List[OrgSummary]) -> List[OrgSummary]:
    """
    Replace each summary's month multiset with its most active months.

    Summaries are updated in place; the same list is returned.

    Raises:
        InvalidInputError: If summaries is missing or not a list/tuple
    """
    if summaries is None or not isinstance(summaries, (list, tuple)):
        err = "resolve_most_active_months: Invalid org data."
        logger.error(err)
        raise InvalidInputError(err)

    for summary in summaries:
        summary.most_active_months = most_active_months(summary.most_active_months)
        logger.debug(f"{summary.organization}: most active months {summary.most_active_months}")

    logger.info(f"Resolved most active months for {len(summaries)} organizations")
    return summaries
