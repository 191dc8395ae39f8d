"""
Congress.gov API client for Congressional Record Daily Digest metadata.

The congressional-record endpoint lists issues newest first; the first entry
is the latest Daily Digest. An api.data.gov key is required.
"""

import json
from typing import Optional

import requests
import structlog
from pydantic import ValidationError

from ..core.deadline import Deadline, remaining_or_none
from ..core.exceptions import (
    DeadlineExceeded,
    DigestDecodeError,
    DigestFetchError,
    DigestNotFoundError,
    PdfDownloadError,
)
from ..core.models import CongressionalRecordResponse, DailyDigest

logger = structlog.get_logger(__name__)


class CongressRecordClient:
    """Client for the Congress.gov congressional-record endpoint."""

    RECORD_PATH = "/congressional-record"
    DOWNLOAD_CHUNK_SIZE = 64 * 1024

    def __init__(self, base_url: str, api_key: str, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. https://api.congress.gov/v3
            api_key: Congress.gov API key
            session: Optional preconfigured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": "CongressionalRecordDigest/1.0",
            "Accept": "application/json",
        })

    def __enter__(self) -> "CongressRecordClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def latest_daily_digest(self, deadline: Optional[Deadline] = None) -> DailyDigest:
        """
        Fetch metadata for the most recent Daily Digest.

        The body is streamed like a PDF download, so a slowly delivered
        response still fails once the budget is spent.

        Args:
            deadline: Overall run budget; the request times out with it

        Returns:
            DailyDigest for the newest issue

        Raises:
            DigestFetchError: Transport failure or non-2xx status
            DigestDecodeError: Response is not the expected JSON document
            DigestNotFoundError: Response lists no issues
            DeadlineExceeded: The budget elapsed before or during the request
        """
        operation = "metadata request"
        url = self.base_url + self.RECORD_PATH
        timeout = remaining_or_none(deadline, operation)

        logger.info("Fetching latest Congressional Record issue", url=url)
        try:
            with self.session.get(url,
                                  params={"api_key": self.api_key, "format": "json"},
                                  timeout=timeout, stream=True) as response:
                response.raise_for_status()
                body = self._read_body(response, deadline, operation)
        except requests.Timeout as e:
            raise DeadlineExceeded(f"{operation} timed out: {e}") from e
        except requests.RequestException as e:
            # Read timeouts inside a streamed body surface as ConnectionError
            if deadline is not None and deadline.expired:
                raise DeadlineExceeded(f"{operation} timed out: {e}") from e
            raise DigestFetchError(f"send request: {e}") from e

        try:
            wire = CongressionalRecordResponse.model_validate(json.loads(body))
        except (ValueError, ValidationError) as e:
            raise DigestDecodeError(f"decode response: {e}") from e

        if not wire.results.issues:
            raise DigestNotFoundError("no issues found")

        latest = wire.results.issues[0]
        digest = latest.to_digest()

        if latest.publish_date and digest.publish_date is None:
            logger.warning("Unparseable publish date", publish_date=latest.publish_date)

        logger.info("Found latest Daily Digest",
                    congress=digest.congress,
                    issue=digest.issue,
                    publish_date=str(digest.publish_date),
                    has_pdf=digest.pdf_url is not None)
        return digest

    def download_pdf(self, url: str, deadline: Optional[Deadline] = None) -> bytes:
        """
        Download a Daily Digest PDF.

        The body is streamed so the deadline is enforced across the whole
        transfer, not only per socket read.

        Args:
            url: PDF location from the digest metadata
            deadline: Overall run budget

        Returns:
            Raw PDF bytes

        Raises:
            PdfDownloadError: Transport failure or non-2xx status
            DeadlineExceeded: The budget elapsed before or during the download
        """
        operation = "PDF download"
        timeout = remaining_or_none(deadline, operation)

        logger.info("Downloading Daily Digest PDF", url=url)
        try:
            with self.session.get(url, headers={"Accept": "application/pdf"},
                                  timeout=timeout, stream=True) as response:
                response.raise_for_status()
                content = self._read_body(response, deadline, operation)
        except requests.Timeout as e:
            raise DeadlineExceeded(f"{operation} timed out: {e}") from e
        except requests.RequestException as e:
            if deadline is not None and deadline.expired:
                raise DeadlineExceeded(f"{operation} timed out: {e}") from e
            raise PdfDownloadError(f"download PDF: {e}") from e

        logger.info("Downloaded Daily Digest PDF", url=url, size_bytes=len(content))
        return content

    def _read_body(self, response: requests.Response, deadline: Optional[Deadline],
                   operation: str) -> bytes:
        """Read a streamed body, checking the deadline after every chunk."""
        chunks = []
        for chunk in response.iter_content(chunk_size=self.DOWNLOAD_CHUNK_SIZE):
            if deadline is not None:
                deadline.check(operation)
            if chunk:
                chunks.append(chunk)
        if deadline is not None:
            deadline.check(operation)
        return b"".join(chunks)
