"""
Module: extractor.pipeline

Purpose:
    Main pipeline for single-file question extraction. Coordinates text
    extraction, normalization, segmentation, per-question detection and
    classification, answer-key association and validation.

Key Functions:
    - extract_one(): Main entry point for one exam (and optional answer key)

Dependencies:
    - provas_toolkit.extractor.detection: Segmentation and alternatives
    - provas_toolkit.extractor.answer_key: Answer-key parsing/association
    - provas_toolkit.extractor.utils: Text source and normalization

Used By:
    - provas_toolkit.batch.orchestrator: Called once per exam file
    - provas_toolkit.cli: `provas-extract one`
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from provas_toolkit.common.path_utils import extract_year
from provas_toolkit.core.models import ExamType, ExtractionResult, Question

from .answer_key import associate_answers, parse_answer_key
from .classification import classify_subject, estimate_difficulty
from .config import ExtractionConfig
from .detection import (
    QuestionSegment,
    extract_alternatives,
    segment_questions,
    segment_questions_by_lines,
    split_stem,
)
from .diagnostics import DiagnosticsCollector
from .errors import EmptyTextError, ExtractionError, MissingFileError, NoQuestionsFoundError
from .exam_type import classify_exam_type
from .timing import TimingLog, timed_phase
from .utils import TextSource, normalize_text, read_document_text
from .validation import validate_extraction

logger = logging.getLogger(__name__)


def extract_one(
    exam_path: Union[str, Path],
    answer_key_path: Optional[Union[str, Path]] = None,
    *,
    config: Optional[ExtractionConfig] = None,
    text_source: TextSource = read_document_text,
    diagnostics_collector: Optional[DiagnosticsCollector] = None,
    timing_log: Optional[TimingLog] = None,
) -> ExtractionResult:
    """
    Extract questions from one exam document.

    Pipeline:
    1. Classify exam type and year from the filename
    2. Read and normalize the exam text
    3. Segment questions (marker-based, then line fallback)
    4. For each segment: alternatives, stem, subject, difficulty
    5. Parse the answer key (if any) and associate answers
    6. Summarize

    Args:
        exam_path: Exam document path.
        answer_key_path: Optional answer-key document path. A missing,
            unreadable or empty key is recorded in ``warnings``.
        config: Optional extraction configuration.
        text_source: Path -> text collaborator (PDF reader by default).
        diagnostics_collector: Optional shared collector for detection issues.
        timing_log: Optional shared timing log.

    Returns:
        ExtractionResult with questions in document order.

    Raises:
        MissingFileError: If exam_path doesn't exist.
        TextExtractionError: If the text source cannot decode the exam.
        EmptyTextError: If the exam text is blank.
        NoQuestionsFoundError: If no question is found even after fallback.

    Example:
        >>> result = extract_one(Path("2020_PV_impresso_D1_CD1.pdf"),
        ...                      Path("2020_GB_impresso_D1_CD1.pdf"))
        >>> result.exam_type, result.question_count
        (<ExamType.ENEM: 'enem'>, 90)
    """
    config = config or ExtractionConfig()
    exam_path = Path(exam_path)
    filename = exam_path.name

    if not exam_path.exists():
        raise MissingFileError(f"Exam file not found: {exam_path}", exam_path)

    owns_collector = diagnostics_collector is None and config.run_diagnostics
    if owns_collector:
        diagnostics_collector = DiagnosticsCollector()
    timing_log = timing_log or TimingLog()

    exam_type = classify_exam_type(filename)
    year = extract_year(filename)
    logger.info(f"Extracting {filename} as {exam_type.value} (year: {year or 'unknown'})")

    # Step 1: Text
    with timed_phase(timing_log, "text_extraction", filename):
        raw_text = text_source(exam_path)
        text = normalize_text(raw_text, strip_page_numbers=config.strip_page_numbers)
    if not text:
        raise EmptyTextError(f"No text extracted from {filename}", exam_path)

    # Step 2: Segmentation
    with timed_phase(timing_log, "segmentation", filename):
        segments = segment_questions(
            text,
            exam_type,
            pdf_name=filename,
            diagnostics_collector=diagnostics_collector,
        )
        extraction_method = "primary"
        if not segments:
            segments = segment_questions_by_lines(
                text,
                exam_type,
                lookahead=config.fallback_lookahead_lines,
                pdf_name=filename,
            )
            extraction_method = "fallback"
            logger.info(f"No question markers in {filename}, line fallback found {len(segments)} questions")
            if diagnostics_collector:
                diagnostics_collector.add_fallback_used(filename, len(segments))

    if not segments:
        raise NoQuestionsFoundError(f"No questions found in {filename}", exam_path)

    # Step 3: Questions
    with timed_phase(timing_log, "question_building", filename):
        questions = [
            _build_question(
                segment,
                exam_type=exam_type,
                year=year,
                filename=filename,
                config=config,
                diagnostics_collector=diagnostics_collector,
            )
            for segment in segments
        ]
    logger.info(f"Detected {len(questions)} questions in {filename} ({extraction_method})")

    # Step 4: Answer key
    warnings: List[str] = []
    answer_key_file: Optional[str] = None
    with timed_phase(timing_log, "answer_key", filename):
        answer_key = _load_answer_key(
            answer_key_path,
            text_source=text_source,
            warnings=warnings,
            filename=filename,
            diagnostics_collector=diagnostics_collector,
        )
        if answer_key:
            answer_key_file = Path(answer_key_path).name  # type: ignore[arg-type]
            assigned = associate_answers(questions, answer_key)
            logger.info(f"Associated {assigned}/{len(questions)} answers from {answer_key_file}")

    validation = validate_extraction(questions)

    if owns_collector and diagnostics_collector and diagnostics_collector.issue_count > 0:
        report = diagnostics_collector.generate_report()
        logger.info(f"Detection diagnostics for {filename}: {report.summary_by_type}")

    logger.debug(timing_log.summary())

    return ExtractionResult(
        questions=questions,
        exam_type=exam_type,
        filename=filename,
        validation=validation,
        extraction_method=extraction_method,
        answer_key_file=answer_key_file,
        warnings=warnings,
    )


def _build_question(
    segment: QuestionSegment,
    *,
    exam_type: ExamType,
    year: Optional[int],
    filename: str,
    config: ExtractionConfig,
    diagnostics_collector: Optional[DiagnosticsCollector],
) -> Question:
    """Turn one segment into a classified Question."""
    alternatives = extract_alternatives(
        segment.text,
        exam_type,
        tail_window_chars=config.tail_window_chars,
        min_alternatives=config.min_valid_alternatives,
    )
    stem = split_stem(segment.text, alternatives)

    question = Question(
        number=segment.number,
        exam_type=exam_type,
        stem=stem,
        alternatives=alternatives,
        subject=classify_subject(segment.number, stem, exam_type),
        difficulty=estimate_difficulty(stem),
        year=year,
        source_file=filename,
    )

    if len(alternatives) < config.min_valid_alternatives or not stem:
        logger.warning(
            f"Q{segment.number} in {filename}: {len(alternatives)} alternatives"
            f"{', empty stem' if not stem else ''}"
        )
        if diagnostics_collector:
            diagnostics_collector.add_incomplete_question(
                pdf_name=filename,
                question_number=segment.number,
                alternatives_found=list(alternatives),
                stem_empty=not stem,
                excerpt=segment.text,
            )

    return question


def _load_answer_key(
    answer_key_path: Optional[Union[str, Path]],
    *,
    text_source: TextSource,
    warnings: List[str],
    filename: str,
    diagnostics_collector: Optional[DiagnosticsCollector],
) -> Dict[int, str]:
    """
    Read and parse the answer key. Never raises: every failure becomes a
    warning and an empty map.
    """
    def unavailable(message: str) -> Dict[int, str]:
        logger.warning(message)
        warnings.append(message)
        if diagnostics_collector:
            diagnostics_collector.add_missing_answer_key(filename, message)
        return {}

    if answer_key_path is None:
        return unavailable(f"No answer key for {filename}")

    key_path = Path(answer_key_path)
    if not key_path.exists():
        return unavailable(f"Answer key not found: {key_path.name}")

    try:
        raw_text = text_source(key_path)
    except (ExtractionError, OSError) as e:
        return unavailable(f"Failed to read answer key {key_path.name}: {e}")

    # Tabular keys put bare numbers on their own lines
    answer_key = parse_answer_key(normalize_text(raw_text, strip_page_numbers=False))
    if not answer_key:
        return unavailable(f"Answer key {key_path.name} yielded no answers")

    logger.debug(f"Parsed {len(answer_key)} answers from {key_path.name}")
    return answer_key
