"""Path and filename utilities.

Provides shared functions for reading metadata out of exam and answer-key
filenames. ENEM and vestibular corpora follow loose naming conventions
such as ``2020_PV_impresso_D1_CD1.pdf`` / ``2020_GB_impresso_D1_CD1.pdf``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

_YEAR_RE = re.compile(r"(?<!\d)(20\d{2})(?!\d)")

# Day/booklet token on the exam side: D1, D2, CD1, CD12
_EXAM_TYPE_TOKEN_RE = re.compile(r"(?<![a-z0-9])(cd\d+|d[12])(?!\d)", re.IGNORECASE)

# Answer keys may also be named after the booklet colour
_KEY_TYPE_TOKEN_RE = re.compile(
    r"(?<![a-z0-9])(cd\d+|d[12])(?!\d)|(azul|amarelo|cinza|rosa|branco|verde|laranja)",
    re.IGNORECASE,
)

ANSWER_KEY_MARKERS = ("gabarito", "gb_", "resposta", "answer")


def _name_of(filename: str | Path) -> str:
    if isinstance(filename, Path):
        return filename.name
    return Path(filename).name


def extract_year(filename: str | Path) -> Optional[int]:
    """Extract the exam year from a filename.

    Args:
        filename: Filename or Path object.

    Returns:
        First ``20xx`` token as an int, or None if absent.

    Examples:
        >>> extract_year("2020_PV_impresso_D1_CD1.pdf")
        2020
        >>> extract_year("fuvest_primeira_fase.pdf") is None
        True
    """
    match = _YEAR_RE.search(_name_of(filename))
    if match:
        return int(match.group(1))
    return None


def exam_type_token(filename: str | Path) -> Optional[str]:
    """Return the lowercase day/booklet token (``d1``, ``cd5``) of an exam name."""
    match = _EXAM_TYPE_TOKEN_RE.search(Path(_name_of(filename)).stem)
    return match.group(0).lower() if match else None


def answer_key_type_token(filename: str | Path) -> Optional[str]:
    """Return the lowercase day/booklet/colour token of an answer-key name."""
    match = _KEY_TYPE_TOKEN_RE.search(Path(_name_of(filename)).stem)
    return match.group(0).lower() if match else None


def is_answer_key_name(filename: str | Path) -> bool:
    """True if the filename carries an answer-key naming marker.

    Examples:
        >>> is_answer_key_name("2020_GB_impresso_D1_CD1.pdf")
        True
        >>> is_answer_key_name("2020_PV_impresso_D1_CD1.pdf")
        False
    """
    lowered = _name_of(filename).lower()
    return any(marker in lowered for marker in ANSWER_KEY_MARKERS)
