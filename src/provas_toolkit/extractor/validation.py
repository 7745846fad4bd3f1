"""
Module: extractor.validation

Purpose:
    Summary statistics for one extraction, computed in a single pass
    over the final question list.

Key Functions:
    - validate_extraction(): Questions -> ValidationSummary
"""

from __future__ import annotations

import logging
from typing import Iterable

from provas_toolkit.core.models import Question, ValidationSummary

logger = logging.getLogger(__name__)


def validate_extraction(questions: Iterable[Question]) -> ValidationSummary:
    """
    Summarize extracted questions.

    Counts questions with and without a correct answer, collects the
    subject and year sets, and counts valid/invalid questions (valid
    means a non-empty stem and at least two alternatives).

    Example:
        >>> summary = validate_extraction([])
        >>> summary.total_questions, summary.valid_count
        (0, 0)
    """
    summary = ValidationSummary()
    for question in questions:
        summary.total_questions += 1
        if question.correct_answer:
            summary.with_answer += 1
        else:
            summary.without_answer += 1
        summary.subjects.add(question.subject)
        if question.year is not None:
            summary.years.add(question.year)
        if question.is_valid:
            summary.valid_count += 1
        else:
            summary.invalid_count += 1

    logger.debug(
        f"Validation: {summary.valid_count}/{summary.total_questions} valid, "
        f"{summary.with_answer} with answer"
    )
    return summary
