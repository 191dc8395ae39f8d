"""
Tests for summary formatting and markdown output
"""
import pytest

from cr_digest.core.models import DailyDigest, DigestReport
from cr_digest.publishing import MarkdownPublisher, format_summary, render_document


class TestFormatSummary:
    def test_full_metadata(self, sample_digest):
        assert format_summary(sample_digest) == (
            "# Congress.gov Daily Digest\n"
            "\n"
            "**Congress:** 118\n"
            "**Issue:** 3\n"
            "**PublishDate:** 2024-01-05\n"
            "**PDFUrl:** https://www.congress.gov/118/crec/2024/01/05/170/3/CREC-2024-01-05-dailydigest.pdf\n"
        )

    def test_unknown_date(self):
        summary = format_summary(DailyDigest(congress="118", issue="3"))
        assert "**PublishDate:** (unknown date)\n" in summary

    def test_pdf_url_omitted_when_missing(self):
        summary = format_summary(DailyDigest(congress="118", issue="3", publish_date="2024-01-05"))
        assert "PDFUrl" not in summary

    def test_congress_omitted_when_empty(self):
        summary = format_summary(DailyDigest(issue="3"))
        assert "Congress:" not in summary
        assert "**Issue:** 3\n" in summary


class TestRenderDocument:
    def test_summary_then_cleaned_text(self, sample_digest):
        report = DigestReport(
            digest=sample_digest,
            summary=format_summary(sample_digest),
            cleaned_text="## Daily Digest\nSome content",
        )

        rendered = render_document(report)

        assert rendered.startswith("# Congress.gov Daily Digest\n")
        assert rendered.endswith("\n\n## Daily Digest\nSome content\n")

    def test_metadata_only(self, sample_digest):
        report = DigestReport(digest=sample_digest, summary=format_summary(sample_digest))
        assert render_document(report) == report.summary


class TestMarkdownPublisher:
    @pytest.fixture
    def report(self, sample_digest):
        return DigestReport(
            digest=sample_digest,
            summary=format_summary(sample_digest),
            cleaned_text="## Senate\nMet at noon.",
            cleaned_line_count=2,
        )

    def test_writes_rendered_document(self, tmp_path, report):
        target = tmp_path / "out" / "digest.md"

        written = MarkdownPublisher(target).publish(report)

        assert written == target
        assert target.read_text(encoding="utf-8") == render_document(report)

    def test_write_failure_propagates(self, tmp_path, report):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(OSError):
            MarkdownPublisher(blocker / "digest.md").publish(report)
