"""
Data ingestion module for the Congress.gov API.
"""

from .congress_record import CongressRecordClient

__all__ = ["CongressRecordClient"]
