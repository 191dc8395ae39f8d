"""
Plain-text extraction from Daily Digest PDFs using the pdftotext CLI.
"""

import os
import subprocess
import tempfile
from typing import Callable, List, Optional

import structlog

from ..core.deadline import Deadline, remaining_or_none
from ..core.exceptions import DeadlineExceeded, TextExtractionError

logger = structlog.get_logger(__name__)

# Anything shaped like this can stand in for the extractor: PDF bytes in, text out
TextExtractor = Callable[[bytes, Optional[Deadline]], str]


class PdfTextExtractor:
    """Runs ``pdftotext -layout -nopgbrk`` over PDF bytes."""

    DEFAULT_ARGS = ("-layout", "-nopgbrk")

    def __init__(self, binary: str = "pdftotext", extra_args: Optional[List[str]] = None):
        """
        Args:
            binary: pdftotext executable name or path
            extra_args: Options passed before the input file (default: -layout -nopgbrk)
        """
        self.binary = binary
        self.args = list(extra_args) if extra_args is not None else list(self.DEFAULT_ARGS)

    def __call__(self, pdf_bytes: bytes, deadline: Optional[Deadline] = None) -> str:
        return self.extract_text(pdf_bytes, deadline)

    def extract_text(self, pdf_bytes: bytes, deadline: Optional[Deadline] = None) -> str:
        """
        Extract the text layer of a PDF.

        The bytes are written to a temporary file that is removed whether
        extraction succeeds or fails.

        Args:
            pdf_bytes: Complete PDF document
            deadline: Overall run budget; the subprocess is killed when it elapses

        Returns:
            Extracted text, decoded as UTF-8 with replacement characters

        Raises:
            TextExtractionError: Empty input, missing binary or non-zero exit
            DeadlineExceeded: The budget elapsed before or during extraction
        """
        if not pdf_bytes:
            raise TextExtractionError("no PDF content to extract")

        fd, pdf_path = tempfile.mkstemp(prefix="daily-digest-", suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(pdf_bytes)

            timeout = remaining_or_none(deadline, "text extraction")
            command = [self.binary, *self.args, pdf_path, "-"]
            logger.debug("Running text extraction", command=command, size_bytes=len(pdf_bytes))

            try:
                result = subprocess.run(command, capture_output=True, timeout=timeout, check=False)
            except FileNotFoundError as e:
                raise TextExtractionError(f"{self.binary} not found; install poppler-utils") from e
            except subprocess.TimeoutExpired as e:
                raise DeadlineExceeded(f"{self.binary} timed out after {e.timeout:.1f}s") from e

            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            if result.returncode != 0:
                raise TextExtractionError(
                    f"{self.binary} failed with exit status {result.returncode}: {stderr}"
                )
            if stderr:
                logger.warning("Text extraction reported problems", stderr=stderr[:500])

            text = result.stdout.decode("utf-8", errors="replace")
            logger.info("Extracted PDF text", characters=len(text))
            return text
        finally:
            try:
                os.remove(pdf_path)
            except FileNotFoundError:
                pass
