"""
Organization Aggregator

Groups raw release records by organization into one OrgSummary each.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from pydantic import BaseModel, Field, ValidationError, field_serializer

from ..errors import InvalidInputError
from ..ingestion.records import RawRelease

logger = logging.getLogger(__name__)


class OrgSummary(BaseModel):
    """
    Per-organization rollup of release records.

    Field order is the serialization order (JSON keys and CSV columns).

    ``most_active_months`` holds every merged record's creation month while
    the aggregator runs; it only means "months tied for most active" after
    resolve_most_active_months() has rewritten it.
    """
    organization: str = Field(..., description="Organization name (identity key)")
    release_count: int = Field(1, ge=1, description="Number of merged releases")
    total_labor_hours: float = Field(0.0, description="Sum of labor hours")
    all_in_production: bool = Field(True, description="True iff every release is in Production")
    licenses: List[str] = Field(default_factory=list, description="Distinct license names, sorted")
    most_active_months: List[int] = Field(default_factory=list, description="Creation months")

    @field_serializer("total_labor_hours")
    def serialize_hours(self, value: float) -> Any:
        # Whole totals render as integers (15, not 15.0)
        return int(value) if float(value).is_integer() else value

    @classmethod
    def from_release(cls, release: RawRelease) -> "OrgSummary":
        """Seed a summary from the first release seen for an organization."""
        return cls(
            organization=release.organization,
            release_count=1,
            total_labor_hours=release.labor_hours,
            all_in_production=release.is_production,
            licenses=merge_licenses([], release.license_names),
            most_active_months=[release.created_month]
        )

    def merge(self, release: RawRelease) -> None:
        """Fold another release of the same organization into this summary."""
        self.release_count += 1
        self.total_labor_hours += release.labor_hours
        self.licenses = merge_licenses(self.licenses, release.license_names)
        self.most_active_months.append(release.created_month)

        if not release.is_production:
            self.all_in_production = False


def merge_licenses(current: Iterable[str], new: Iterable[str]) -> List[str]:
    """Union two license name collections, deduplicated and sorted ascending."""
    return sorted(set(current).union(new))


def _coerce_release(item: Any, index: int) -> RawRelease:
    """Accept a RawRelease or a code.json-shaped mapping."""
    if isinstance(item, RawRelease):
        return item

    if isinstance(item, Mapping):
        try:
            return RawRelease.model_validate(item)
        except ValidationError as e:
            err = f"aggregate_releases: Invalid release #{index}: {e.error_count()} validation error(s)"
            logger.error(err)
            raise InvalidInputError(err) from e

    err = f"aggregate_releases: Release #{index} is a {type(item).__name__}, not a release record"
    logger.error(err)
    raise InvalidInputError(err)


def aggregate_releases(releases: Sequence[Any]) -> List[OrgSummary]:
    """
    Group releases by organization.

    Args:
        releases: Sequence of RawRelease (or code.json-shaped dicts)

    Returns:
        One OrgSummary per distinct organization, in first-seen order

    Raises:
        InvalidInputError: If releases is missing, not a list/tuple, or holds
            an item that is not a valid release
    """
    if releases is None or not isinstance(releases, (list, tuple)):
        err = "aggregate_releases: Invalid release data."
        logger.error(err)
        raise InvalidInputError(err)

    # dict keeps first-seen insertion order
    summaries: Dict[str, OrgSummary] = {}

    for index, item in enumerate(releases):
        release = _coerce_release(item, index)
        summary = summaries.get(release.organization)

        if summary is None:
            summaries[release.organization] = OrgSummary.from_release(release)
            logger.debug(f"New organization: {release.organization}")
        else:
            summary.merge(release)

    logger.info(f"Aggregated {len(releases)} releases into {len(summaries)} organizations")
    return list(summaries.values())
