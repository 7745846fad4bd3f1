"""
Module: exam_types

Purpose:
    Closed set of exam families. Every exam-type-specific regular
    expression set is selected by matching on this enum, never by
    looking up a free-form string.

Key Classes:
    - ExamType: ENEM or generic vestibular

Used By:
    - extractor.exam_type: Filename classification
    - extractor.detection: Pattern selection
    - extractor.classification: ENEM numbering ranges
"""

from __future__ import annotations

from enum import Enum


class ExamType(str, Enum):
    """
    Exam family of a source document.

    The value is the lowercase tag used in serialized question records
    (``"enem"`` / ``"vestibular"``).

    Example:
        >>> ExamType("enem") is ExamType.ENEM
        True
        >>> ExamType.VESTIBULAR.value
        'vestibular'
    """

    ENEM = "enem"
    VESTIBULAR = "vestibular"

    def __str__(self) -> str:
        return self.value
