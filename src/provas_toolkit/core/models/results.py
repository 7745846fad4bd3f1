"""
Module: results

Purpose:
    Result containers for single-file extraction and corpus batches.

Key Classes:
    - ValidationSummary: Per-extraction statistics and validity counts
    - ExtractionResult: Questions plus metadata for one exam file
    - FileError: Structured failure record for one exam file
    - BatchStats / QualityReport / QualityIssue: Corpus aggregates
    - BatchResult: Ordered per-file records plus aggregates

Used By:
    - extractor.pipeline: Returns ExtractionResult
    - batch.orchestrator: Builds BatchResult
    - core.utils.serialization: JSON output
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Union

from .exam_types import ExamType
from .questions import Question


@dataclass
class ValidationSummary:
    """
    Summary statistics for one extraction.

    Attributes:
        total_questions: Number of questions extracted.
        with_answer: Questions with a correct answer from the key.
        without_answer: Questions without one.
        subjects: Distinct subject tags seen.
        years: Distinct years seen.
        valid_count: Questions passing the validity rule.
        invalid_count: Questions failing it.
    """
    total_questions: int = 0
    with_answer: int = 0
    without_answer: int = 0
    subjects: Set[str] = field(default_factory=set)
    years: Set[int] = field(default_factory=set)
    valid_count: int = 0
    invalid_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalQuestoes": self.total_questions,
            "questoesComResposta": self.with_answer,
            "questoesSemResposta": self.without_answer,
            "materias": sorted(self.subjects),
            "anos": sorted(self.years),
            "validas": self.valid_count,
            "invalidas": self.invalid_count,
        }


@dataclass
class ExtractionResult:
    """
    Result of extracting one exam file.

    Attributes:
        questions: Extracted questions in document order.
        exam_type: Exam family inferred from the filename.
        filename: Exam file name (no directory).
        validation: Summary computed from questions.
        extraction_method: "primary" or "fallback" segmentation.
        answer_key_file: Name of the answer key used, if any.
        warnings: Non-fatal problems (unavailable answer key, etc.).
    """
    questions: List[Question]
    exam_type: ExamType
    filename: str
    validation: ValidationSummary
    extraction_method: str = "primary"
    answer_key_file: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def question_count(self) -> int:
        return len(self.questions)


@dataclass(frozen=True)
class FileError:
    """
    Failure record for one file in a batch.

    Attributes:
        filename: Exam file name.
        error: Error message.
        error_type: Exception class name (e.g. "MissingFileError").
    """
    filename: str
    error: str
    error_type: str = "Exception"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.filename,
            "error": self.error,
            "errorType": self.error_type,
            "status": "error",
        }


FileRecord = Union[ExtractionResult, FileError]


@dataclass
class BatchStats:
    """Corpus-level counts across all processed files."""
    total_files: int = 0
    success_count: int = 0
    error_count: int = 0
    files_with_answer_key: int = 0
    total_questions: int = 0
    questions_by_subject: Dict[str, int] = field(default_factory=dict)
    questions_by_year: Dict[int, int] = field(default_factory=dict)
    with_answer: int = 0
    without_answer: int = 0
    answer_rate: float = 0.0  # Percent of questions with an answer
    errors: List[FileError] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        """Percent of files extracted successfully."""
        if not self.total_files:
            return 0.0
        return round(self.success_count / self.total_files * 100, 2)


@dataclass(frozen=True)
class QualityIssue:
    """A single extraction-quality flag for one file."""
    filename: str
    issue_type: str
    message: str


@dataclass
class QualityReport:
    """Extraction-quality report across successful files."""
    valid_extractions: int = 0
    invalid_extractions: int = 0
    avg_questions_per_file: float = 0.0
    min_questions: Optional[int] = None
    max_questions: Optional[int] = None
    issues: List[QualityIssue] = field(default_factory=list)


@dataclass
class BatchResult:
    """
    Result of a corpus extraction.

    Attributes:
        records: Per-file ExtractionResult or FileError, in file order.
        stats: Aggregate counts.
        quality: Extraction-quality report.
        skipped: Files never dispatched because the batch was cancelled.
    """
    records: List[FileRecord] = field(default_factory=list)
    stats: BatchStats = field(default_factory=BatchStats)
    quality: QualityReport = field(default_factory=QualityReport)
    skipped: List[str] = field(default_factory=list)

    @property
    def successes(self) -> List[ExtractionResult]:
        return [r for r in self.records if isinstance(r, ExtractionResult)]

    @property
    def errors(self) -> List[FileError]:
        return [r for r in self.records if isinstance(r, FileError)]
