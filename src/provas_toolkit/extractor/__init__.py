"""
Module: extractor

Purpose:
    Single-file extraction pipeline: turns the text of one ENEM or
    vestibular exam (plus an optional answer key) into classified
    question records.

Key Functions:
    - extract_one(): Main entry point for extraction
    - normalize_text(), classify_exam_type(), segment_questions(),
      extract_alternatives(), classify_subject(), estimate_difficulty(),
      parse_answer_key(), associate_answers(), validate_extraction():
      the individual stages

Key Classes:
    - ExtractionConfig / BatchConfig: Configuration
    - DiagnosticsCollector: Detection issue collection

Dependencies:
    - fitz (PyMuPDF): PDF text extraction

Used By:
    - provas_toolkit.batch: Corpus extraction
    - provas_toolkit.cli: Command-line extraction
"""

from provas_toolkit.common.path_utils import extract_year

from .answer_key import associate_answers, parse_answer_key, parse_answer_key_entries
from .classification import classify_subject, estimate_difficulty
from .config import BatchConfig, ExtractionConfig
from .detection import (
    QuestionSegment,
    extract_alternatives,
    segment_questions,
    segment_questions_by_lines,
    split_stem,
)
from .diagnostics import DetectionDiagnosticsReport, DiagnosticsCollector
from .errors import (
    EmptyTextError,
    ExtractionError,
    MissingFileError,
    NoQuestionsFoundError,
    TextExtractionError,
)
from .exam_type import classify_exam_type
from .pipeline import extract_one
from .timing import TimingLog, timed_phase
from .utils import TextSource, normalize_text, read_document_text
from .validation import validate_extraction

__all__ = [
    "extract_one",
    "ExtractionConfig",
    "BatchConfig",
    # Stages
    "normalize_text",
    "classify_exam_type",
    "extract_year",
    "QuestionSegment",
    "segment_questions",
    "segment_questions_by_lines",
    "extract_alternatives",
    "split_stem",
    "classify_subject",
    "estimate_difficulty",
    "parse_answer_key",
    "parse_answer_key_entries",
    "associate_answers",
    "validate_extraction",
    # Text source
    "TextSource",
    "read_document_text",
    # Errors
    "ExtractionError",
    "MissingFileError",
    "TextExtractionError",
    "EmptyTextError",
    "NoQuestionsFoundError",
    # Instrumentation
    "DiagnosticsCollector",
    "DetectionDiagnosticsReport",
    "TimingLog",
    "timed_phase",
]
