"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .path_utils import (
    ANSWER_KEY_MARKERS,
    answer_key_type_token,
    exam_type_token,
    extract_year,
    is_answer_key_name,
)
from .thresholds import (
    ALTERNATIVE_THRESHOLDS,
    DIFFICULTY_THRESHOLDS,
    QUALITY_THRESHOLDS,
    SEGMENTATION_THRESHOLDS,
)

__all__ = [
    # path_utils
    "ANSWER_KEY_MARKERS",
    "answer_key_type_token",
    "exam_type_token",
    "extract_year",
    "is_answer_key_name",
    # thresholds
    "ALTERNATIVE_THRESHOLDS",
    "DIFFICULTY_THRESHOLDS",
    "QUALITY_THRESHOLDS",
    "SEGMENTATION_THRESHOLDS",
]
