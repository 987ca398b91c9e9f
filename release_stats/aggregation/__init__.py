"""
Aggregation Module

Turns raw release records into sorted per-organization summaries:
group and merge, resolve the most active months, then sort.
"""

from .aggregator import OrgSummary, aggregate_releases, merge_licenses
from .active_months import most_active_months, resolve_most_active_months
from .sorter import SortField, SortOrder, collation_key, sort_summaries

__all__ = [
    "OrgSummary",
    "aggregate_releases",
    "merge_licenses",
    "most_active_months",
    "resolve_most_active_months",
    "SortField",
    "SortOrder",
    "collation_key",
    "sort_summaries",
]
