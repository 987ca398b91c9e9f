"""
Release Sources

Supply the raw release records to the aggregation pipeline.

- FileReleaseSource: reads a local code.json document (the default backend)
- HttpReleaseSource: fetches a code.json document from a remote endpoint
- CachedReleaseSource: loads once from another source and serves the result read-only
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Tuple

import requests
from pydantic import ValidationError

from ..errors import SourceFormatError, SourceUnavailableError
from .records import RawRelease

logger = logging.getLogger(__name__)


def parse_releases(document: Any, origin: str, strict: bool = True) -> List[RawRelease]:
    """
    Validate the ``releases`` array of a code.json document.

    Args:
        document: Decoded JSON document
        origin: Where the document came from (used in messages)
        strict: If True, a malformed record fails the whole load;
            if False, it is skipped with a warning

    Returns:
        List of RawRelease records in document order

    Raises:
        SourceFormatError: If the document has no releases list, or a record
            is malformed in strict mode
    """
    if not isinstance(document, dict) or document.get("releases") is None:
        err = f"Unable to load releases from {origin}: no 'releases' field"
        logger.error(err)
        raise SourceFormatError(err)

    raw_releases = document["releases"]
    if not isinstance(raw_releases, list):
        err = f"Unable to load releases from {origin}: 'releases' is not a list"
        logger.error(err)
        raise SourceFormatError(err)

    releases = []
    for index, item in enumerate(raw_releases):
        try:
            releases.append(RawRelease.model_validate(item))
        except ValidationError as e:
            if strict:
                err = f"Malformed release #{index} in {origin}: {e.error_count()} validation error(s)"
                logger.error(f"{err}\n{e}")
                raise SourceFormatError(err) from e
            logger.warning(f"Skipping malformed release #{index} in {origin}: {e.error_count()} validation error(s)")

    logger.info(f"Loaded {len(releases)} releases from {origin}")
    return releases


class ReleaseSource(ABC):
    """
    Abstract supplier of release records.

    The pipeline only depends on ``load_releases``, so backends can be swapped
    (local file, remote API, cache) without touching the aggregation stages.
    """

    name = "abstract"

    @abstractmethod
    def load_releases(self) -> List[RawRelease]:
        """
        Load the release records.

        Returns:
            List of RawRelease records

        Raises:
            SourceUnavailableError: If the data cannot be read
            SourceFormatError: If the data is not a code.json document
        """
        pass


class FileReleaseSource(ReleaseSource):
    """Reads releases from a local code.json file."""

    name = "file"

    def __init__(self, path: str, strict: bool = True):
        """
        Initialize the file source.

        Args:
            path: Path to the JSON file holding a top-level ``releases`` list
            strict: Fail on malformed records instead of skipping them
        """
        self.path = Path(path)
        self.strict = strict
        logger.info(f"FileReleaseSource initialized with file: {path}")

    def load_releases(self) -> List[RawRelease]:
        logger.info(f"Loading release data from file: {self.path}")

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except OSError as e:
            err = f"Unable to read release file {self.path}: {e}"
            logger.error(err)
            raise SourceUnavailableError(err) from e
        except ValueError as e:
            err = f"Invalid JSON in release file {self.path}: {e}"
            logger.error(err)
            raise SourceFormatError(err) from e

        return parse_releases(document, origin=str(self.path), strict=self.strict)


class HttpReleaseSource(ReleaseSource):
    """Fetches releases from a remote code.json endpoint."""

    name = "http"

    def __init__(self, url: str, timeout: float = 30.0, strict: bool = True):
        """
        Initialize the HTTP source.

        Args:
            url: URL of the code.json document
            timeout: Request timeout in seconds
            strict: Fail on malformed records instead of skipping them
        """
        self.url = url
        self.timeout = timeout
        self.strict = strict
        logger.info(f"HttpReleaseSource initialized with URL: {url}")

    def load_releases(self) -> List[RawRelease]:
        logger.info(f"Requesting release data from: {self.url}")

        try:
            response = requests.get(
                self.url,
                headers={'Accept': 'application/json'},
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            err = f"Release endpoint {self.url} not available: {e}"
            logger.error(err)
            raise SourceUnavailableError(err) from e

        try:
            document = response.json()
        except ValueError as e:
            err = f"Release endpoint {self.url} did not return JSON: {e}"
            logger.error(err)
            raise SourceFormatError(err) from e

        return parse_releases(document, origin=self.url, strict=self.strict)


class CachedReleaseSource(ReleaseSource):
    """
    Caches another source's records for the life of the process.

    The first successful load is stored as an immutable tuple of frozen
    records; later calls return a fresh list over it without touching the
    inner source. Population happens under a lock so concurrent first
    requests trigger a single load. Failed loads are not cached.
    """

    def __init__(self, inner: ReleaseSource):
        self.inner = inner
        self._records: Optional[Tuple[RawRelease, ...]] = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return f"cached({self.inner.name})"

    def load_releases(self) -> List[RawRelease]:
        records = self._records
        if records is None:
            with self._lock:
                if self._records is None:
                    self._records = tuple(self.inner.load_releases())
                    logger.info(f"Cached {len(self._records)} releases from {self.inner.name} source")
                records = self._records
        return list(records)

    def clear(self) -> None:
        """Drop the cached records so the next load hits the inner source."""
        with self._lock:
            self._records = None
        logger.debug("Release cache cleared")


def build_source(config) -> ReleaseSource:
    """
    Build the release source described by the service configuration.

    Args:
        config: ServiceConfig instance

    Returns:
        Configured ReleaseSource
    """
    if config.release_source == "http":
        source: ReleaseSource = HttpReleaseSource(
            url=config.api_endpoint,
            timeout=config.api_timeout,
            strict=config.strict
        )
    else:
        source = FileReleaseSource(config.data_file, strict=config.strict)

    if config.cache_enabled:
        source = CachedReleaseSource(source)

    return source
