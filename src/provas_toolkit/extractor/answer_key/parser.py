"""
Module: extractor.answer_key.parser

Purpose:
    Parse answer-key (gabarito) text into a question number -> letter
    map. Four patterns cover the common layouts and run in order over
    the whole text; the first pattern to claim a number keeps it.

Patterns (in order):
    1. "12. A" / "12 A" sequences
    2. "Questão 12 A" labels
    3. "12 A" cells of tabular text
    4. Permissive "<number> ... <letter>" scan, up to 20 non-digit characters apart

Key Functions:
    - parse_answer_key(): Text -> Dict[int, str]
    - parse_answer_key_entries(): Text -> List[AnswerKeyEntry]

Used By:
    - extractor.pipeline: Parses the paired answer-key document
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Pattern, Tuple

from provas_toolkit.core.models import AnswerKeyEntry

logger = logging.getLogger(__name__)

# A number written right after "Questão " belongs to pattern 2, so the
# generic sequence pattern skips it.
_NOT_QUESTION_LABEL = r"(?<!(?i:quest[ãa]o)\s)"

ANSWER_KEY_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("sequence", re.compile(rf"(?<!\d){_NOT_QUESTION_LABEL}(\d{{1,3}})[.\s]+([A-E])\b")),
    ("question_label", re.compile(r"(?i:quest(?:ão|ao))\s+(\d{1,3})[.\s]*([A-E])\b")),
    ("table", re.compile(r"\b(\d{1,3})\s+([A-E])\b")),
    ("permissive", re.compile(r"(?<!\d)(\d{1,3})(?!\d)\D{0,20}?([A-E])")),
)


def parse_answer_key(text: str) -> Dict[int, str]:
    """
    Parse answer-key text into a number -> letter map.

    Args:
        text: Answer-key text (normalized without page-number stripping).

    Returns:
        Mapping ordered by first discovery. Empty for blank input.

    Example:
        >>> parse_answer_key("1. A 2. C\\nQuestão 3 E")
        {1: 'A', 2: 'C', 3: 'E'}
    """
    answers: Dict[int, str] = {}
    if not text or not text.strip():
        logger.debug("Answer key text is empty")
        return answers

    for name, pattern in ANSWER_KEY_PATTERNS:
        added = 0
        for match in pattern.finditer(text):
            number = int(match.group(1))
            if number <= 0 or number in answers:
                continue
            answers[number] = match.group(2)
            added += 1
        if added:
            logger.debug(f"Answer key pattern {name!r} added {added} entries")

    return answers


def parse_answer_key_entries(text: str) -> List[AnswerKeyEntry]:
    """Parse answer-key text into entries sorted by question number."""
    return [
        AnswerKeyEntry(question_number=number, letter=letter)
        for number, letter in sorted(parse_answer_key(text).items())
    ]
