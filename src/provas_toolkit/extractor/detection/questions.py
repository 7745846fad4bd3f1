"""
Module: extractor.detection.questions

Purpose:
    Question segmentation - splits normalized exam text into one raw
    segment per question. A marker-based pass ("QUESTÃO 12 ...") runs
    first; when it finds nothing, a line-oriented pass recovers
    questions from reflowed or partially OCR'd text ("12. ...").

Key Functions:
    - segment_questions(): Marker-based segmentation
    - segment_questions_by_lines(): Line-oriented fallback

Key Classes:
    - QuestionSegment: Immutable (number, text) pair

Used By:
    - extractor.pipeline: Segments exam text before alternative extraction
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Pattern

from provas_toolkit.common.thresholds import SEGMENTATION_THRESHOLDS
from provas_toolkit.core.models import ExamType

if TYPE_CHECKING:
    from ..diagnostics import DiagnosticsCollector

logger = logging.getLogger(__name__)

_ORDINAL = r"(?:[Nn][º°oO]?\.?\s*)?"

# ENEM booklets print the marker in caps ("QUESTÃO 91"); lowercase
# "questão 5" in running text is a cross-reference, not a boundary.
_ENEM_MARKER = r"(?:QUEST(?:Ã|A)O|Quest(?:ã|a)o)"
_ENEM_QUESTION_PATTERN = re.compile(
    rf"{_ENEM_MARKER}\s*{_ORDINAL}(\d{{1,3}})(?!\d)\s*[.)\-–:]?"
    rf"([\s\S]*?)"
    rf"(?={_ENEM_MARKER}\s*{_ORDINAL}\d{{1,3}}(?!\d)|\Z)"
)

# Vestibular layouts vary: "Questão 1.", "QUESTÃO Nº 1 -", "questão 01)"
_VESTIBULAR_MARKER = r"QUEST(?:Ã|A)O"
_VESTIBULAR_QUESTION_PATTERN = re.compile(
    rf"{_VESTIBULAR_MARKER}\s*{_ORDINAL}(\d{{1,3}})(?!\d)\s*[.)\-–:]?"
    rf"([\s\S]*?)"
    rf"(?={_VESTIBULAR_MARKER}\s*{_ORDINAL}\d{{1,3}}(?!\d)|\Z)",
    re.IGNORECASE,
)

# Line-oriented fallback: optional marker, number, optional "." or ")"
_LINE_START_PATTERN = re.compile(
    rf"^(?:{_VESTIBULAR_MARKER}\s*{_ORDINAL})?(\d{{1,3}})(?!\d)[.)]?\s*(.*)$",
    re.IGNORECASE,
)
_LINE_ALTERNATIVE_PATTERN = re.compile(r"^(?:\(([A-Ea-e])\)|([A-Ea-e])[.)])\s*\S")


@dataclass(frozen=True)
class QuestionSegment:
    """
    Raw text of one question.

    Attributes:
        number: Question number (> 0).
        text: Segment text after the question marker, stripped. Contains
            the stem followed by the alternatives.
        offset: Character offset of the marker in the normalized text.

    Example:
        >>> segment = QuestionSegment(number=1, text="What is 2+2? A) 3 B) 4")
        >>> segment.number
        1
    """
    number: int
    text: str
    offset: int = 0


def question_pattern(exam_type: ExamType) -> Pattern[str]:
    """Return the question boundary pattern for an exam family."""
    if exam_type is ExamType.ENEM:
        return _ENEM_QUESTION_PATTERN
    return _VESTIBULAR_QUESTION_PATTERN


def segment_questions(
    text: str,
    exam_type: ExamType,
    *,
    pdf_name: str = "",
    diagnostics_collector: Optional["DiagnosticsCollector"] = None,
) -> List[QuestionSegment]:
    """
    Split normalized text into question segments using question markers.

    Each marker starts a segment that runs up to the next marker or the
    end of the text. Numbers <= 0 are discarded with a warning. When a
    number repeats (a cross-reference such as "QUESTÃO 5" inside another
    question), the repeated span is folded back into the preceding
    segment so the first occurrence keeps the number.

    Args:
        text: Normalized exam text.
        exam_type: Selects the ENEM or vestibular marker pattern.
        pdf_name: Source name for log messages and diagnostics.
        diagnostics_collector: Optional collector for discarded numbers.

    Returns:
        Segments in document order with unique numbers.

    Example:
        >>> segs = segment_questions("QUESTÃO 1 What is 2+2? A) 3 B) 4 C) 5", ExamType.VESTIBULAR)
        >>> [(s.number, s.text) for s in segs]
        [(1, 'What is 2+2? A) 3 B) 4 C) 5')]
    """
    if not text:
        return []

    # Each entry: [number, marker_offset, content_start, content_end]
    spans: List[List[int]] = []
    seen: Dict[int, int] = {}

    for match in question_pattern(exam_type).finditer(text):
        raw_number = match.group(1)
        number = int(raw_number)
        if number <= 0:
            logger.warning(f"Invalid question number {raw_number!r} discarded in {pdf_name or 'text'}")
            if diagnostics_collector:
                diagnostics_collector.add_invalid_number(pdf_name, raw_number)
            if spans:
                spans[-1][3] = match.end()
            continue

        if number in seen:
            logger.debug(f"Repeated question marker {number} folded into previous segment")
            if spans:
                spans[-1][3] = match.end()
            continue

        seen[number] = len(spans)
        spans.append([number, match.start(), match.start(2), match.end(2)])

    return [
        QuestionSegment(number=number, text=text[start:end].strip(), offset=offset)
        for number, offset, start, end in spans
    ]


def _line_alternative_letter(line: str) -> Optional[str]:
    match = _LINE_ALTERNATIVE_PATTERN.match(line)
    if not match:
        return None
    return (match.group(1) or match.group(2)).upper()


def segment_questions_by_lines(
    text: str,
    exam_type: ExamType,
    *,
    lookahead: int = SEGMENTATION_THRESHOLDS.fallback_lookahead_lines,
    pdf_name: str = "",
) -> List[QuestionSegment]:
    """
    Line-oriented fallback segmentation.

    Scans line by line for a loose ``[QUESTÃO] <number>[.)]`` start. From
    each start, looks ahead up to `lookahead` lines for alternative lines
    ("A) ...", "(B) ...") and stops at five alternatives or at the next
    question start. A start is kept only when at least two alternative
    lines were found; its segment spans the start line through the last
    alternative line.

    Args:
        text: Normalized exam text.
        exam_type: Exam family (both families share the loose line pattern).
        lookahead: Maximum lines scanned after a start line.
        pdf_name: Source name for log messages.

    Returns:
        Segments in document order with unique numbers.

    Example:
        >>> text = "1. Quanto é 2+2?\\nA) 3\\nB) 4\\n2. Quanto é 3+3?\\nA) 6\\nB) 7"
        >>> [s.number for s in segment_questions_by_lines(text, ExamType.VESTIBULAR)]
        [1, 2]
    """
    if not text:
        return []

    lines = text.split("\n")
    offsets: List[int] = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line) + 1

    segments: List[QuestionSegment] = []
    seen: set[int] = set()
    i = 0

    while i < len(lines):
        start = _LINE_START_PATTERN.match(lines[i].strip())
        if not start or _line_alternative_letter(lines[i].strip()):
            i += 1
            continue

        number = int(start.group(1))
        if number <= 0 or number in seen:
            i += 1
            continue

        letters: set[str] = set()
        end = i + 1
        j = i + 1
        while j < len(lines) and j <= i + lookahead:
            line = lines[j].strip()
            letter = _line_alternative_letter(line)
            if letter:
                letters.add(letter)
                end = j + 1
                if len(letters) >= 5:
                    break
            elif _LINE_START_PATTERN.match(line):
                break
            j += 1

        if len(letters) < 2:
            i += 1
            continue

        body = "\n".join([start.group(2)] + lines[i + 1:end]).strip()
        segments.append(QuestionSegment(number=number, text=body, offset=offsets[i]))
        seen.add(number)
        i = end

    logger.debug(
        f"Line fallback ({exam_type.value}) found {len(segments)} questions in {pdf_name or 'text'}"
    )
    return segments
