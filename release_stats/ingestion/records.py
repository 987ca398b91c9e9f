"""
Release Record Models

Pydantic models for the raw release entries of a code.json inventory.
Only the fields the aggregation needs are modelled; everything else is ignored.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRODUCTION_STATUS = "Production"


class License(BaseModel):
    """A single license entry under ``permissions.licenses``."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., description="License name (MIT, Apache-2.0, ...)")


class Permissions(BaseModel):
    """Usage permissions attached to a release."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    licenses: List[License] = Field(default_factory=list, description="Declared licenses")

    @field_validator("licenses", mode="before")
    @classmethod
    def null_licenses_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ReleaseDate(BaseModel):
    """Release date block; only the creation date is used."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    created: str = Field(..., description="Creation date (YYYY-MM-DD)")

    @field_validator("created")
    @classmethod
    def check_month(cls, value: str) -> str:
        parts = value.split("-")
        if len(parts) < 2 or not parts[1][:2].isdigit():
            raise ValueError(f"created date has no month component: {value!r}")
        month = int(parts[1][:2])
        if not 1 <= month <= 12:
            raise ValueError(f"created month out of range: {value!r}")
        return value

    @property
    def month(self) -> int:
        """Calendar month (1-12) of the creation date."""
        return int(self.created.split("-")[1][:2])


class RawRelease(BaseModel):
    """One software release as published in the ``releases`` array."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    organization: str = Field(..., description="Owning organization, the grouping key")
    labor_hours: float = Field(0.0, alias="laborHours", ge=0, description="Labor hours spent")
    status: Optional[str] = Field(None, description="Development status (Production, Beta, ...)")
    date: ReleaseDate = Field(..., description="Release dates")
    permissions: Permissions = Field(default_factory=Permissions, description="License info")

    @field_validator("labor_hours", mode="before")
    @classmethod
    def null_hours_to_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("permissions", mode="before")
    @classmethod
    def null_permissions_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def created_month(self) -> int:
        return self.date.month

    @property
    def license_names(self) -> List[str]:
        return [license.name for license in self.permissions.licenses]

    @property
    def is_production(self) -> bool:
        return self.status == PRODUCTION_STATUS
