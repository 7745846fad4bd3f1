"""
Module: extractor.exam_type

Purpose:
    Infer the exam family (ENEM or vestibular) from a filename. The
    classification is a total, deterministic function of the basename.

Key Functions:
    - classify_exam_type(): Filename -> ExamType

Used By:
    - extractor.pipeline: Selects ENEM/vestibular pattern sets
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from provas_toolkit.core.models import ExamType

logger = logging.getLogger(__name__)

ENEM_KEYWORDS = ("enem", "pv_impresso")

# 2020_PV_impresso_D1_CD1.pdf and friends
_YEAR_PV_RE = re.compile(r"(?<!\d)20\d{2}_pv_")
_ENEM_DAY_RE = re.compile(r"[12]_dia")
_ENEM_CADERNO_RE = re.compile(r"caderno_(?:1|5|7)(?!\d)")

VESTIBULAR_KEYWORDS = (
    "fuvest",
    "unicamp",
    "unesp",
    "ufrj",
    "ufmg",
    "puc",
    "vestibular",
    "itajubá",
    "mackenzie",
    "mack",
)


def classify_exam_type(filename: str | Path) -> ExamType:
    """
    Classify an exam file as ENEM or vestibular by its name.

    ENEM when the lowercase basename contains "enem" or "pv_impresso",
    matches ``<year>_pv_``, mentions both "dia" and "caderno", or pairs a
    "1_dia"/"2_dia" token with caderno 1, 5 or 7. Names carrying a known
    vestibular institution keyword are vestibular, and so is anything
    else.

    Example:
        >>> classify_exam_type("2020_PV_impresso_D1_CD1.pdf")
        <ExamType.ENEM: 'enem'>
        >>> classify_exam_type("fuvest_2019_primeira_fase.pdf")
        <ExamType.VESTIBULAR: 'vestibular'>
    """
    name = Path(filename).name.lower()

    if any(keyword in name for keyword in ENEM_KEYWORDS):
        return ExamType.ENEM
    if _YEAR_PV_RE.search(name):
        return ExamType.ENEM
    if "dia" in name and "caderno" in name:
        return ExamType.ENEM
    if _ENEM_DAY_RE.search(name) and _ENEM_CADERNO_RE.search(name):
        return ExamType.ENEM

    if any(keyword in name for keyword in VESTIBULAR_KEYWORDS):
        return ExamType.VESTIBULAR

    logger.debug(f"No exam keywords in {name!r}, defaulting to vestibular")
    return ExamType.VESTIBULAR
