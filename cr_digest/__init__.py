"""
Congressional Record Daily Digest Reader

Fetches the latest Daily Digest from the Congress.gov API, extracts the
text of its PDF and cleans it into a readable, section-annotated document.
"""

__version__ = "1.0.0"
__author__ = "Congressional Record Digest"
