"""
Module: extractor.answer_key

Purpose:
    Answer-key (gabarito) parsing and association onto questions.
"""

from .associator import associate_answers
from .parser import ANSWER_KEY_PATTERNS, parse_answer_key, parse_answer_key_entries

__all__ = [
    "ANSWER_KEY_PATTERNS",
    "parse_answer_key",
    "parse_answer_key_entries",
    "associate_answers",
]
