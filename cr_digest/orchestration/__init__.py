"""
Pipeline orchestration for the Daily Digest reader.
"""

from .pipeline import DailyDigestPipeline

__all__ = ["DailyDigestPipeline"]
