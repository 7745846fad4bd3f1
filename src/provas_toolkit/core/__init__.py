"""
Exam Extraction Core Package

Shared data models, the question record schema and serialization
helpers. These are the single source of truth for the extractor and the
batch orchestrator.
"""

from .models import (
    AnswerKeyEntry,
    BatchResult,
    ExamType,
    ExtractionResult,
    FileError,
    Question,
    ValidationSummary,
)

__all__ = [
    "AnswerKeyEntry",
    "BatchResult",
    "ExamType",
    "ExtractionResult",
    "FileError",
    "Question",
    "ValidationSummary",
]
