"""
Publishing module for rendered Daily Digest documents.
"""

from .markdown_publisher import MarkdownPublisher, format_summary, render_document

__all__ = ["MarkdownPublisher", "format_summary", "render_document"]
