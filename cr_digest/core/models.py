"""
Data models for the Daily Digest reader.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DailyDigest(BaseModel):
    """Identifying metadata of one Congressional Record Daily Digest."""
    congress: str = ""
    issue: str = ""
    publish_date: Optional[date] = None
    pdf_url: Optional[str] = None


class DigestReport(BaseModel):
    """Result of one full run: metadata plus the cleaned document text."""
    digest: DailyDigest
    summary: str
    cleaned_text: str = ""
    raw_line_count: int = 0
    cleaned_line_count: int = 0


# Wire models matching the congressional-record endpoint response

class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PdfLink(_WireModel):
    url: Optional[str] = Field(None, alias="Url")


class DigestLinks(_WireModel):
    pdf: List[PdfLink] = Field(default_factory=list, alias="PDF")


class IssueLinks(_WireModel):
    digest: Optional[DigestLinks] = Field(None, alias="Digest")


class RecordIssue(_WireModel):
    congress: str = Field("", alias="Congress")
    issue: str = Field("", alias="Issue")
    publish_date: Optional[str] = Field(None, alias="PublishDate")
    links: Optional[IssueLinks] = Field(None, alias="Links")

    @field_validator("congress", "issue", mode="before")
    @classmethod
    def _coerce_number(cls, value):
        # The API has served these both as strings and as integers
        if value is None:
            return ""
        return str(value)

    @property
    def parsed_publish_date(self) -> Optional[date]:
        """Publish date, or None when absent or not YYYY-MM-DD."""
        if not self.publish_date:
            return None
        try:
            return datetime.strptime(self.publish_date.split("T")[0], "%Y-%m-%d").date()
        except ValueError:
            return None

    @property
    def digest_pdf_url(self) -> Optional[str]:
        if self.links is None or self.links.digest is None:
            return None
        for link in self.links.digest.pdf:
            if link.url:
                return link.url
        return None

    def to_digest(self) -> DailyDigest:
        return DailyDigest(
            congress=self.congress,
            issue=self.issue,
            publish_date=self.parsed_publish_date,
            pdf_url=self.digest_pdf_url,
        )


class RecordResults(_WireModel):
    issues: List[RecordIssue] = Field(default_factory=list, alias="Issues")


class CongressionalRecordResponse(_WireModel):
    results: RecordResults = Field(alias="Results")
