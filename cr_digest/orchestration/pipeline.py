"""
Daily Digest pipeline: metadata -> PDF download -> text extraction -> cleanup.
"""

import time
from typing import Optional

import structlog

from ..core.config import Settings
from ..core.deadline import Deadline
from ..core.exceptions import DigestError, MissingPdfUrlError
from ..core.models import DailyDigest, DigestReport
from ..ingestion.congress_record import CongressRecordClient
from ..processing.pdf_text import PdfTextExtractor, TextExtractor
from ..processing.text_cleaner import TextCleaner, split_lines
from ..publishing.markdown_publisher import format_summary

logger = structlog.get_logger(__name__)


class DailyDigestPipeline:
    """Runs one fetch-extract-clean pass for the latest Daily Digest.

    Upstream failures are fatal: they are logged and re-raised, never retried.
    """

    def __init__(self,
                 settings: Settings,
                 client: Optional[CongressRecordClient] = None,
                 extractor: Optional[TextExtractor] = None,
                 cleaner: Optional[TextCleaner] = None):
        self.settings = settings
        self.client = client or CongressRecordClient(
            settings.congress_base_url, settings.congress_api_key
        )
        self.extractor = extractor or PdfTextExtractor(binary=settings.pdftotext_binary)
        self.cleaner = cleaner or TextCleaner()

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "DailyDigestPipeline":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def new_deadline(self) -> Deadline:
        return Deadline(self.settings.http_timeout_seconds)

    def fetch_metadata(self, deadline: Optional[Deadline] = None) -> DailyDigest:
        return self.client.latest_daily_digest(deadline)

    def fetch_text(self, digest: DailyDigest, deadline: Optional[Deadline] = None) -> str:
        """Download the digest PDF and return its raw extracted text."""
        if not digest.pdf_url:
            raise MissingPdfUrlError(f"no PDF URL found for daily digest issue {digest.issue or '?'}")

        pdf_bytes = self.client.download_pdf(digest.pdf_url, deadline)
        return self.extractor(pdf_bytes, deadline)

    def run(self, deadline: Optional[Deadline] = None, metadata_only: bool = False) -> DigestReport:
        """
        Execute the pipeline.

        Args:
            deadline: Overall budget; a fresh one from settings when omitted
            metadata_only: Stop after fetching the metadata

        Returns:
            DigestReport with the formatted summary and cleaned text

        Raises:
            DigestError: Any upstream failure, including DeadlineExceeded
        """
        deadline = deadline or self.new_deadline()
        start_time = time.monotonic()

        try:
            logger.info("=== Step 1: Digest metadata ===")
            digest = self.fetch_metadata(deadline)
            summary = format_summary(digest)
            if metadata_only:
                return DigestReport(digest=digest, summary=summary)

            logger.info("=== Step 2: PDF download and text extraction ===")
            step_start = time.monotonic()
            raw_text = self.fetch_text(digest, deadline)
            logger.info("Text extracted", duration_seconds=round(time.monotonic() - step_start, 3))
        except DigestError as e:
            logger.error("Pipeline failed",
                         error=str(e),
                         error_type=type(e).__name__,
                         duration_seconds=round(time.monotonic() - start_time, 3))
            raise

        # No deadline from here on: cleaning always runs to completion
        logger.info("=== Step 3: Text cleanup ===")
        raw_lines = split_lines(raw_text)
        cleaned_lines = self.cleaner.clean_lines(raw_lines)

        report = DigestReport(
            digest=digest,
            summary=summary,
            cleaned_text="\n".join(cleaned_lines),
            raw_line_count=len(raw_lines),
            cleaned_line_count=len(cleaned_lines),
        )
        logger.info("Pipeline completed",
                    issue=digest.issue,
                    raw_lines=report.raw_line_count,
                    cleaned_lines=report.cleaned_line_count,
                    duration_seconds=round(time.monotonic() - start_time, 3))
        return report
