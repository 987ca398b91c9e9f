"""
Release Stats Pipeline

One synchronous run per request:
1. Load releases from the configured source
2. Aggregate them by organization
3. Resolve each organization's most active months
4. Sort the summaries
"""

import logging
from typing import List, Optional, Union

from .aggregation import (
    OrgSummary,
    SortField,
    SortOrder,
    aggregate_releases,
    resolve_most_active_months,
    sort_summaries,
)
from .ingestion import ReleaseSource

logger = logging.getLogger(__name__)


def run_pipeline(
    source: ReleaseSource,
    sort_field: Optional[Union[str, SortField]] = None,
    sort_order: Optional[Union[str, SortOrder]] = None
) -> List[OrgSummary]:
    """
    Produce sorted organization summaries from a release source.

    Errors from any stage propagate unchanged; nothing is retried and no
    partial result is returned.

    Args:
        source: Release source to load from
        sort_field: Field to sort by (see SortField.parse)
        sort_order: "desc" for descending, anything else ascending

    Returns:
        Sorted list of resolved OrgSummary objects

    Raises:
        SourceUnavailableError: If the source cannot be read
        SourceFormatError: If the source data is malformed
        InvalidInputError: If a stage receives invalid input
    """
    logger.info(f"Running pipeline (source={source.name}, sort={sort_field}, order={sort_order})")

    releases = source.load_releases()
    summaries = aggregate_releases(releases)
    summaries = resolve_most_active_months(summaries)
    summaries = sort_summaries(summaries, sort_field, sort_order)

    logger.info(f"Pipeline complete: {len(summaries)} organizations from {len(releases)} releases")
    return summaries
