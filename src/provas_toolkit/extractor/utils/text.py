"""
Module: extractor.utils.text

Purpose:
    Text cleaning for PDF-extracted exam text. Removes layout artifacts
    (runs of spaces, mixed line breaks, page-number lines) while keeping
    the line structure the segmenters rely on.

Key Functions:
    - normalize_text(): Clean raw extracted text
    - split_lines(): Line split used by line-oriented detectors

Used By:
    - extractor.pipeline: Normalizes exam and answer-key text
    - extractor.detection.alternatives: Line-start strategies
"""

from __future__ import annotations

import re
from typing import List

_LINE_BREAKS_RE = re.compile(r"\r\n|\r|\u2028|\u2029|\x0b|\x0c|\x85")
_HORIZONTAL_RUN_RE = re.compile(r"[^\S\n]{2,}")
_TRAILING_SPACE_RE = re.compile(r"[^\S\n]+\n")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
# The line break goes with the digits so the neighbouring lines join up
_PAGE_NUMBER_LINE_RE = re.compile(r"^[^\S\n]*\d+[^\S\n]*(?:\n|\Z)", re.MULTILINE)


def normalize_text(text: str, *, strip_page_numbers: bool = True) -> str:
    """
    Clean raw text produced by PDF-to-text conversion.

    Rules, in order:
    1. Every line-break variant (CRLF, CR, Unicode separators) becomes "\\n"
    2. Runs of 2+ whitespace characters within a line collapse to one space
    3. Lines containing only digits (page numbers) are removed together
       with their line break, so text broken by a page joins back up
    4. Runs of 3+ newlines collapse to exactly 2

    Args:
        text: Raw text; None-like empty input is allowed.
        strip_page_numbers: Remove digit-only lines. Disable for answer
            keys laid out as "number on one line, letter on the next".

    Returns:
        Cleaned text with surrounding whitespace stripped. Never raises.

    Example:
        >>> normalize_text("QUESTÃO  1\\r\\n\\r\\n\\r\\n\\r\\n12\\r\\nTexto")
        'QUESTÃO 1\\n\\nTexto'
    """
    if not text:
        return ""

    cleaned = _LINE_BREAKS_RE.sub("\n", text)
    cleaned = _HORIZONTAL_RUN_RE.sub(" ", cleaned)
    cleaned = _TRAILING_SPACE_RE.sub("\n", cleaned)
    if strip_page_numbers:
        cleaned = _PAGE_NUMBER_LINE_RE.sub("", cleaned)
    cleaned = _EXCESS_NEWLINES_RE.sub("\n\n", cleaned)
    return cleaned.strip()


def split_lines(text: str) -> List[str]:
    """Split text into stripped lines (empty lines preserved as "")."""
    return [line.strip() for line in text.split("\n")]
