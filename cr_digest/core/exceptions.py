"""
Error types raised by the Daily Digest reader.

Every upstream failure has its own class so the CLI can report it precisely.
The text cleaner never raises any of these.
"""

__all__ = [
    "DigestError",
    "ConfigurationError",
    "DeadlineExceeded",
    "DigestFetchError",
    "DigestDecodeError",
    "DigestNotFoundError",
    "MissingPdfUrlError",
    "PdfDownloadError",
    "TextExtractionError",
]


class DigestError(Exception):
    """Base class for all Daily Digest reader failures."""

    stage = "digest"


class ConfigurationError(DigestError):
    """Required configuration is missing or invalid."""

    stage = "config"


class DeadlineExceeded(DigestError):
    """The overall time budget for the run elapsed."""

    stage = "timeout"


class DigestFetchError(DigestError):
    """The metadata request failed at the transport or HTTP level."""

    stage = "fetch"


class DigestDecodeError(DigestError):
    """The metadata response was not the expected JSON document."""

    stage = "fetch"


class DigestNotFoundError(DigestError):
    """The metadata response listed no Congressional Record issues."""

    stage = "fetch"


class MissingPdfUrlError(DigestError):
    """The latest issue has no Daily Digest PDF link."""

    stage = "fetch"


class PdfDownloadError(DigestError):
    """Downloading the Daily Digest PDF failed."""

    stage = "download"


class TextExtractionError(DigestError):
    """The external text extraction tool failed."""

    stage = "extract"
