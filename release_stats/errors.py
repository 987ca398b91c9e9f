"""
Release Stats Exceptions

Typed failures raised by the record sources and the pipeline stages.
Each carries a stable ``kind`` and the HTTP status the API maps it to.
"""


class ReleaseStatsError(Exception):
    """Base class for every failure a pipeline run can surface."""

    kind = "release_stats_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.kind, "detail": self.message}


class SourceError(ReleaseStatsError):
    """Raised by a release source when it cannot supply records."""

    kind = "source_error"
    status_code = 502


class SourceUnavailableError(SourceError):
    """The release data could not be read (missing file, network failure, non-2xx)."""

    kind = "source_unavailable"
    status_code = 503


class SourceFormatError(SourceError):
    """The release data was read but is not a code.json document with releases."""

    kind = "source_format"
    status_code = 502


class InvalidInputError(ReleaseStatsError):
    """A pipeline stage received input that is missing or not a sequence."""

    kind = "invalid_input"
    status_code = 500
