"""
Module: extractor.detection.alternatives

Purpose:
    Alternative (A-E) extraction from one question segment, plus the
    matching stem split. Extraction runs an ordered chain of strategies
    and stops at the first one that finds at least two alternatives;
    when none does, the largest partial result is kept.

Strategies (in order):
    1. line_start: "A) text" / "(A) text" / "a. text" at line starts,
       with continuation lines folded in
    2. inline: "A) 3 B) 4 C) 5" anywhere in the segment
    3. tail: inline markers inside the trailing block of the segment
    4. enem_sequence: ENEM-only, bare "A texto" line starts accepted only
       in A, B, C... order

Key Functions:
    - extract_alternatives(): Run the strategy chain
    - split_stem(): Text before the alternatives

Used By:
    - extractor.pipeline: Builds each Question from its segment
"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from provas_toolkit.common.thresholds import ALTERNATIVE_THRESHOLDS, AlternativeThresholds
from provas_toolkit.core.models import ALTERNATIVE_LETTERS, ExamType

from ..utils.text import split_lines

logger = logging.getLogger(__name__)

# "A) texto", "A. texto", "(A) texto"; lowercase letters only at line starts
_LINE_MARKER_RE = re.compile(r"^(?:\(([A-Ea-e])\)|([A-Ea-e])[.)])\s*(.*)$")
# Inline markers must follow whitespace (or start the text) and be uppercase
_INLINE_RE = re.compile(r"(?<!\S)\(?([A-E])[.)]\s*(.*?)(?=\s\(?[A-E][.)]|\Z)", re.DOTALL)
# ENEM booklets often drop the punctuation: "A 2,5 m/s"
_ENEM_LINE_RE = re.compile(r"^([A-E])[.)\-:]?\s+(.+)$")
_BLOCK_SPLIT_RE = re.compile(r"\n[^\S\n]*\n")
# Shared passage headers ("Texto para as questões 3 e 4") end the running alternative
_BLOCK_HEADER_RE = re.compile(r"^(?:(?:[Tt]exto|[Ll]eia)\b.*\b[Qq]uest(?:ão|ões|ao|oes)\b|TEXTO\b)")

# Stem cut candidates
_PUNCT_MARKER_RE = re.compile(r"(?<!\S)\(?([A-Ea-e])[.)]")
_BARE_LINE_MARKER_RE = re.compile(r"^([A-E])[.)\-:]?\s", re.MULTILINE)

AlternativeStrategy = Callable[[str, AlternativeThresholds], Dict[str, str]]


def _clean(text: str) -> str:
    return " ".join(text.split())


def _is_noise(text: str, min_chars: int) -> bool:
    """Reject too-short text and text with no letter or digit."""
    return len(text) < min_chars or not any(ch.isalnum() for ch in text)


def _ordered(alternatives: Dict[str, str]) -> Dict[str, str]:
    return {letter: alternatives[letter] for letter in ALTERNATIVE_LETTERS if letter in alternatives}


def _inline_matches(text: str, min_chars: int) -> Dict[str, str]:
    found: Dict[str, str] = {}
    for match in _INLINE_RE.finditer(text):
        value = _clean(match.group(2))
        if not _is_noise(value, min_chars):
            # Last occurrence wins: real alternatives close the segment
            found[match.group(1)] = value
    return _ordered(found)


# ─────────────────────────────────────────────────────────────────────────────
# Strategies
# ─────────────────────────────────────────────────────────────────────────────

def from_line_starts(text: str, thresholds: AlternativeThresholds) -> Dict[str, str]:
    """Alternatives that each start their own line."""
    found: Dict[str, str] = {}
    current: Optional[str] = None
    parts: List[str] = []

    def flush() -> None:
        if current is None:
            return
        value = _clean(" ".join(parts))
        if not _is_noise(value, thresholds.line_min_chars):
            found[current] = value

    for line in split_lines(text):
        match = _LINE_MARKER_RE.match(line)
        if match:
            flush()
            current = (match.group(1) or match.group(2)).upper()
            parts = [match.group(3)]
        elif not line or _BLOCK_HEADER_RE.match(line):
            flush()
            current = None
            parts = []
        elif current is not None and len(parts) <= thresholds.line_max_continuation:
            parts.append(line)
    flush()

    return _ordered(found)


def from_inline_markers(text: str, thresholds: AlternativeThresholds) -> Dict[str, str]:
    """Alternatives written on one line ("A) 3 B) 4 C) 5")."""
    return _inline_matches(text, thresholds.inline_min_chars)


def from_tail(text: str, thresholds: AlternativeThresholds) -> Dict[str, str]:
    """Inline markers restricted to the last text block of the segment."""
    blocks = _BLOCK_SPLIT_RE.split(text.strip())
    if len(blocks) > 1:
        tail = blocks[-1]
    else:
        tail = text[-thresholds.tail_window_chars:]
    return _inline_matches(tail, thresholds.tail_min_chars)


def from_enem_sequence(text: str, thresholds: AlternativeThresholds) -> Dict[str, str]:
    """Bare line-start letters, accepted only as an A, B, C... run."""
    found: Dict[str, str] = {}
    expected = 0
    for line in split_lines(text):
        if expected >= len(ALTERNATIVE_LETTERS):
            break
        match = _ENEM_LINE_RE.match(line)
        if not match or match.group(1) != ALTERNATIVE_LETTERS[expected]:
            continue
        value = _clean(match.group(2))
        if _is_noise(value, thresholds.enem_min_chars):
            continue
        found[match.group(1)] = value
        expected += 1
    return found


@dataclass(frozen=True)
class _Strategy:
    name: str
    func: AlternativeStrategy
    enem_only: bool = False


STRATEGIES: Tuple[_Strategy, ...] = (
    _Strategy("line_start", from_line_starts),
    _Strategy("inline", from_inline_markers),
    _Strategy("tail", from_tail),
    _Strategy("enem_sequence", from_enem_sequence, enem_only=True),
)


def extract_alternatives(
    text: str,
    exam_type: ExamType,
    *,
    tail_window_chars: Optional[int] = None,
    min_alternatives: int = 2,
) -> Dict[str, str]:
    """
    Extract alternatives from a question segment.

    Args:
        text: Segment text (stem followed by alternatives).
        exam_type: ENEM enables the unpunctuated sequence strategy.
        tail_window_chars: Override for the tail strategy window.
        min_alternatives: Result size that stops the strategy chain.

    Returns:
        Letter -> text mapping ordered A-E, at most five entries, possibly
        empty. Keys are unique; text is whitespace-collapsed.

    Example:
        >>> extract_alternatives("What is 2+2? A) 3 B) 4 C) 5", ExamType.VESTIBULAR)
        {'A': '3', 'B': '4', 'C': '5'}
    """
    if not text or not text.strip():
        return {}

    thresholds = ALTERNATIVE_THRESHOLDS
    if tail_window_chars is not None:
        thresholds = dataclasses.replace(thresholds, tail_window_chars=tail_window_chars)

    best: Dict[str, str] = {}
    for strategy in STRATEGIES:
        if strategy.enem_only and exam_type is not ExamType.ENEM:
            continue
        found = strategy.func(text, thresholds)
        if len(found) >= min_alternatives:
            logger.debug(f"Alternatives found by {strategy.name}: {list(found)}")
            return found
        if len(found) > len(best):
            best = found

    return best


def split_stem(text: str, alternatives: Optional[Dict[str, str]] = None) -> str:
    """
    Return the stem: segment text before the alternatives.

    With extracted alternatives, the cut is the last marker of the first
    alternative letter (stems may enumerate "a) ... b) ..." items before
    the real alternatives). Without them, the cut is the first uppercase
    punctuated marker. Text with no marker is all stem.

    Example:
        >>> split_stem("What is 2+2? A) 3 B) 4 C) 5")
        'What is 2+2?'
    """
    if not text:
        return ""

    first = next(iter(alternatives), None) if alternatives else None
    cut: Optional[int] = None

    if first is None:
        for match in _PUNCT_MARKER_RE.finditer(text):
            if match.group(1).isupper():
                cut = match.start()
                break
    else:
        candidates = []
        for match in _PUNCT_MARKER_RE.finditer(text):
            letter = match.group(1)
            at_line_start = match.start() == 0 or text[match.start() - 1] == "\n"
            if letter.upper() == first and (letter.isupper() or at_line_start):
                candidates.append(match.start())
        if not candidates:
            # Bare "A texto" lines count only when no punctuated marker does
            for match in _BARE_LINE_MARKER_RE.finditer(text):
                if match.group(1) == first:
                    candidates.append(match.start())
        if candidates:
            cut = max(candidates)

    stem = text if cut is None else text[:cut]
    return stem.strip()
