"""
Module: extractor.detection

Purpose:
    Detection subpackage for identifying question elements in exam text.

Key Modules:
    - questions: Question boundary detection ("QUESTÃO 12", "12.")
    - alternatives: Alternative detection ("A) ...") and stem split

Used By:
    - extractor.pipeline: Orchestrates detection modules
"""

from .alternatives import (
    STRATEGIES,
    extract_alternatives,
    from_enem_sequence,
    from_inline_markers,
    from_line_starts,
    from_tail,
    split_stem,
)
from .questions import (
    QuestionSegment,
    question_pattern,
    segment_questions,
    segment_questions_by_lines,
)

__all__ = [
    "QuestionSegment",
    "question_pattern",
    "segment_questions",
    "segment_questions_by_lines",
    "STRATEGIES",
    "extract_alternatives",
    "from_line_starts",
    "from_inline_markers",
    "from_tail",
    "from_enem_sequence",
    "split_stem",
]
