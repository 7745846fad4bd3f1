"""
Core Models Package

Data models shared by the extractor and the batch orchestrator.

Questions are mutable only in correct_answer (set once by the answer
associator); result containers are built once per call and returned.
"""

from .exam_types import ExamType
from .questions import (
    ALTERNATIVE_LETTERS,
    UNCLASSIFIED,
    AnswerKeyEntry,
    Question,
)
from .results import (
    BatchResult,
    BatchStats,
    ExtractionResult,
    FileError,
    FileRecord,
    QualityIssue,
    QualityReport,
    ValidationSummary,
)

__all__ = [
    "ALTERNATIVE_LETTERS",
    "UNCLASSIFIED",
    "AnswerKeyEntry",
    "BatchResult",
    "BatchStats",
    "ExamType",
    "ExtractionResult",
    "FileError",
    "FileRecord",
    "QualityIssue",
    "QualityReport",
    "Question",
    "ValidationSummary",
]
