import pytest

from cr_digest.core.config import load_settings
from cr_digest.core.models import DailyDigest

CONFIG_ENV_VARS = (
    "CONGRESS_API_KEY",
    "CONGRESS_BASE_URL",
    "HTTP_TIMEOUT_SECONDS",
    "PDFTOTEXT_BINARY",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every configuration variable from the environment"""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def settings(clean_env):
    return load_settings(congress_api_key="test-key", congress_base_url="https://api.example.test/v3")


@pytest.fixture
def sample_digest():
    return DailyDigest(
        congress="118",
        issue="3",
        publish_date="2024-01-05",
        pdf_url="https://www.congress.gov/118/crec/2024/01/05/170/3/CREC-2024-01-05-dailydigest.pdf",
    )


@pytest.fixture
def sample_api_payload():
    """Trimmed congressional-record response as served by api.congress.gov"""
    return {
        "Results": {
            "IndexStart": 1,
            "Issues": [
                {
                    "Congress": "118",
                    "Id": 26958,
                    "Issue": "3",
                    "Links": {
                        "Digest": {
                            "Label": "Daily Digest",
                            "Ordinal": 1,
                            "PDF": [
                                {
                                    "Part": "1",
                                    "Url": "https://www.congress.gov/118/crec/2024/01/05/170/3/CREC-2024-01-05-dailydigest.pdf",
                                }
                            ],
                        },
                        "FullRecord": {"PDF": [{"Part": "1", "Url": "https://example.test/full.pdf"}]},
                    },
                    "PublishDate": "2024-01-05",
                    "Session": "2",
                    "Volume": "170",
                },
                {
                    "Congress": "118",
                    "Issue": "2",
                    "Links": {"Digest": {"PDF": [{"Url": "https://example.test/older.pdf"}]}},
                    "PublishDate": "2024-01-04",
                },
            ],
            "TotalCount": 2,
        }
    }
