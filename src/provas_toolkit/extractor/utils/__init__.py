"""
Extractor utilities: text normalization and the default text source.
"""

from .pdf import TextSource, read_document_text
from .text import normalize_text, split_lines

__all__ = [
    "TextSource",
    "normalize_text",
    "read_document_text",
    "split_lines",
]
