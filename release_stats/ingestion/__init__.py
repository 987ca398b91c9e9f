"""
Ingestion Module

Loads code.json release records from a local file or a remote endpoint
and validates them into RawRelease models.
"""

from .records import License, Permissions, RawRelease, ReleaseDate, PRODUCTION_STATUS
from .sources import (
    CachedReleaseSource,
    FileReleaseSource,
    HttpReleaseSource,
    ReleaseSource,
    build_source,
    parse_releases,
)

__all__ = [
    "License",
    "Permissions",
    "RawRelease",
    "ReleaseDate",
    "PRODUCTION_STATUS",
    "ReleaseSource",
    "FileReleaseSource",
    "HttpReleaseSource",
    "CachedReleaseSource",
    "build_source",
    "parse_releases",
]
