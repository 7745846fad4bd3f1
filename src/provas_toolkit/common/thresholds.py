"""Centralized threshold and magic number configuration.

This module contains the hardcoded thresholds used by the text
extraction heuristics. Having these in one place makes tuning against a
new corpus easier and documents what each value controls.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AlternativeThresholds:
    """Thresholds for alternative (A-E) extraction."""

    # Minimum characters of alternative text kept by each strategy
    line_min_chars: int = 1  # "A) 3" on its own line is a real alternative
    inline_min_chars: int = 1
    tail_min_chars: int = 2  # Tail window sees more stem noise
    enem_min_chars: int = 2
    tail_window_chars: int = 1500  # Characters scanned when no text block split exists
    line_max_continuation: int = 2  # Wrapped lines folded into one line-start alternative
    max_alternatives: int = 5


@dataclass
class DifficultyThresholds:
    """Thresholds for complex-verb density difficulty estimation."""

    tokens_per_unit: int = 100  # Density is complex verbs per 100 tokens
    hard_density: float = 5.0  # density > 5 -> 3
    medium_density: float = 2.0  # density > 2 -> 2


@dataclass
class SegmentationThresholds:
    """Thresholds for question segmentation."""

    fallback_lookahead_lines: int = 20  # Lines scanned after a fallback question start
    max_question_number: int = 999


@dataclass
class QualityThresholds:
    """Thresholds for the batch extraction-quality report."""

    few_questions: int = 10  # Fewer questions than this is flagged
    good_alternative_count: int = 4  # Questions with >= this many alternatives are "well detected"
    min_alternative_rate: float = 0.5  # Flag files below 50% well-detected questions
    min_valid_alternatives: int = 2


# Global instances for easy import
ALTERNATIVE_THRESHOLDS = AlternativeThresholds()
DIFFICULTY_THRESHOLDS = DifficultyThresholds()
SEGMENTATION_THRESHOLDS = SegmentationThresholds()
QUALITY_THRESHOLDS = QualityThresholds()
