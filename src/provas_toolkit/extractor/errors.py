"""
Module: extractor.errors

Purpose:
    Typed errors for fatal single-file extraction conditions. Partial
    successes (unavailable answer key, invalid questions) are not errors
    and are reported through ExtractionResult.warnings and the
    validation summary instead.

Key Classes:
    - ExtractionError: Base class, carries the offending path
    - MissingFileError: Exam file does not exist
    - TextExtractionError: Text source could not decode the document
    - EmptyTextError: Document decoded to blank text
    - NoQuestionsFoundError: No question segments, even after fallback
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ExtractionError(Exception):
    """Base class for fatal single-file extraction errors."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class MissingFileError(ExtractionError, FileNotFoundError):
    """Raised when the exam file path does not exist."""


class TextExtractionError(ExtractionError):
    """Raised when the text source fails to decode a document."""


class EmptyTextError(ExtractionError):
    """Raised when a document yields blank or whitespace-only text."""


class NoQuestionsFoundError(ExtractionError):
    """Raised when neither the primary nor the fallback segmenter finds questions."""
