"""
Module: batch.report

Purpose:
    Corpus-level aggregates over per-file batch records: counts and
    answer coverage, an extraction-quality report, and a by-subject
    grouping of every extracted question.

Key Functions:
    - compute_stats(): Records -> BatchStats
    - quality_report(): Records -> QualityReport
    - group_by_subject(): Records -> subject -> question records

Used By:
    - batch.orchestrator: Fills BatchResult aggregates
    - cli: Summary output
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from provas_toolkit.common.thresholds import QUALITY_THRESHOLDS
from provas_toolkit.core.models import (
    UNCLASSIFIED,
    BatchStats,
    ExtractionResult,
    FileError,
    FileRecord,
    QualityIssue,
    QualityReport,
)


def compute_stats(records: Sequence[FileRecord]) -> BatchStats:
    """
    Aggregate counts across batch records.

    ``answer_rate`` is the percentage of extracted questions that carry
    a correct answer, rounded to two decimals.
    """
    stats = BatchStats(total_files=len(records))

    for record in records:
        if isinstance(record, FileError):
            stats.error_count += 1
            stats.errors.append(record)
            continue

        stats.success_count += 1
        if record.answer_key_file:
            stats.files_with_answer_key += 1
        stats.total_questions += record.question_count

        for question in record.questions:
            subject = question.subject or UNCLASSIFIED
            stats.questions_by_subject[subject] = stats.questions_by_subject.get(subject, 0) + 1
            if question.year is not None:
                stats.questions_by_year[question.year] = stats.questions_by_year.get(question.year, 0) + 1
            if question.correct_answer:
                stats.with_answer += 1
            else:
                stats.without_answer += 1

    if stats.total_questions:
        stats.answer_rate = round(stats.with_answer / stats.total_questions * 100, 2)

    return stats


def _file_issues(result: ExtractionResult) -> List[QualityIssue]:
    issues: List[QualityIssue] = []
    count = result.question_count
    thresholds = QUALITY_THRESHOLDS

    if count == 0:
        issues.append(QualityIssue(result.filename, "no_questions", "No questions extracted"))
        return issues
    if count < thresholds.few_questions:
        issues.append(QualityIssue(result.filename, "few_questions", f"Few questions extracted ({count})"))

    well_detected = sum(
        1 for q in result.questions if len(q.alternatives) >= thresholds.good_alternative_count
    )
    rate = well_detected / count
    if rate < thresholds.min_alternative_rate:
        issues.append(QualityIssue(
            result.filename,
            "low_alternative_rate",
            f"Alternatives detected for {rate:.0%} of questions",
        ))

    incomplete = sum(1 for q in result.questions if not q.is_valid)
    if incomplete:
        issues.append(QualityIssue(
            result.filename,
            "incomplete_questions",
            f"{incomplete} questions with empty stem or fewer than 2 alternatives",
        ))

    return issues


def quality_report(records: Sequence[FileRecord]) -> QualityReport:
    """
    Build the extraction-quality report.

    Only successful records contribute to the question-count figures;
    failed files count as invalid extractions.
    """
    successes = [r for r in records if isinstance(r, ExtractionResult)]
    report = QualityReport(
        valid_extractions=len(successes),
        invalid_extractions=len(records) - len(successes),
    )
    if not successes:
        return report

    counts = [r.question_count for r in successes]
    report.avg_questions_per_file = round(sum(counts) / len(counts), 2)
    report.min_questions = min(counts)
    report.max_questions = max(counts)

    for result in successes:
        report.issues.extend(_file_issues(result))

    return report


def group_by_subject(records: Sequence[FileRecord]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Group every extracted question record by subject.

    Each record is tagged with ``proveniencia``, the exam file it came from.
    """
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for record in records:
        if not isinstance(record, ExtractionResult):
            continue
        for question in record.questions:
            entry = question.to_dict()
            entry["proveniencia"] = record.filename
            grouped.setdefault(question.subject or UNCLASSIFIED, []).append(entry)
    return grouped
