"""Markdown rendering and file output for Daily Digest reports."""

from pathlib import Path
from typing import Union

import structlog

from ..core.models import DailyDigest, DigestReport

logger = structlog.get_logger(__name__)

UNKNOWN_DATE = "(unknown date)"
SUMMARY_TITLE = "# Congress.gov Daily Digest"


def format_summary(digest: DailyDigest) -> str:
    """Render digest metadata as a short labeled summary.

    Args:
        digest: Metadata of the digest

    Returns:
        Markdown summary ending with a newline
    """
    date = digest.publish_date.isoformat() if digest.publish_date else UNKNOWN_DATE

    lines = [SUMMARY_TITLE, ""]
    if digest.congress:
        lines.append(f"**Congress:** {digest.congress}")
    lines.append(f"**Issue:** {digest.issue}")
    lines.append(f"**PublishDate:** {date}")
    if digest.pdf_url:
        lines.append(f"**PDFUrl:** {digest.pdf_url}")
    return "\n".join(lines) + "\n"


def render_document(report: DigestReport) -> str:
    """Summary followed by the cleaned text, as printed to stdout."""
    if not report.cleaned_text:
        return report.summary
    return f"{report.summary}\n{report.cleaned_text}\n"


class MarkdownPublisher:
    """Publisher that writes digest reports as markdown files."""

    def __init__(self, output_path: Union[str, Path]):
        """Initialize the markdown publisher.

        Args:
            output_path: File to write; parent directories are created
        """
        self.output_path = Path(output_path)

    def publish(self, report: DigestReport) -> Path:
        """Write the rendered report.

        Args:
            report: Result of a digest run

        Returns:
            Path of the written file
        """
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(render_document(report), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write digest", filepath=str(self.output_path), error=str(e))
            raise

        logger.info(
            "Digest written",
            filepath=str(self.output_path),
            issue=report.digest.issue,
            lines=report.cleaned_line_count,
        )
        return self.output_path
