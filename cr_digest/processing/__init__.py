"""
Text extraction and cleanup for Daily Digest PDFs.
"""

from .pdf_text import PdfTextExtractor, TextExtractor
from .text_cleaner import TextCleaner, clean_lines, clean_text, split_lines

__all__ = ["PdfTextExtractor", "TextExtractor", "TextCleaner", "clean_lines", "clean_text",
           "split_lines"]
