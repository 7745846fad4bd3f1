"""
Module: batch.pairing

Purpose:
    Find the answer-key file that belongs to an exam file. Corpora use
    loose, inconsistent naming (``2020_PV_impresso_D1_CD1.pdf`` pairs with
    ``2020_GB_impresso_D1_CD1.pdf``; ``fuvest_2019_dia1.pdf`` with
    ``fuvest_2019_gb_dia1.pdf``), so matching is an ordered rule table
    followed by a year/type heuristic.

Matching order:
    1. Filename transforms: each rule rewrites the exam stem; the first
       rewritten name found (case-insensitive substring) in a candidate wins
    2. Same year and same day/booklet/colour token
    3. Same year where either side has no token
    4. Nothing: the exam is processed without answers

Key Classes:
    - FilenameTransform: One (pattern -> replacement) or suffix rule
    - FilePairMatcher: Resolves exam -> answer-key pairs

Used By:
    - batch.orchestrator: Pairs every exam before extraction
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

from provas_toolkit.common.path_utils import (
    answer_key_type_token,
    exam_type_token,
    extract_year,
    is_answer_key_name,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilenameTransform:
    """
    A rule rewriting an exam stem into an expected answer-key stem.

    Either ``pattern``/``replacement`` (first case-insensitive match is
    replaced) or ``suffix`` (appended to the stem) is set.
    """
    name: str
    pattern: Optional[Pattern[str]] = None
    replacement: str = ""
    suffix: str = ""

    def apply(self, stem: str) -> Optional[str]:
        """Return the rewritten stem, or None when the rule does not apply."""
        if self.suffix:
            return stem + self.suffix
        if self.pattern is None:
            return None
        rewritten, count = self.pattern.subn(self.replacement, stem, count=1)
        return rewritten if count else None


def _rule(name: str, pattern: str, replacement: str) -> FilenameTransform:
    return FilenameTransform(name=name, pattern=re.compile(pattern, re.IGNORECASE), replacement=replacement)


FILENAME_TRANSFORMS: Tuple[FilenameTransform, ...] = (
    _rule("enem_pv_to_gb", r"_pv_impresso", "_gb_impresso"),
    _rule("dia_to_gb_dia", r"_dia_", "_gb_dia_"),
    _rule("dia_to_gb", r"_dia", "_gb_"),
    _rule("caderno_to_gabarito", r"_caderno", "_gabarito_"),
    _rule("diaN_to_gb_diaN", r"dia(\d)", r"gb_dia\1"),
    FilenameTransform(name="gabarito_suffix", suffix="_gabarito"),
    FilenameTransform(name="respostas_suffix", suffix="_respostas"),
    FilenameTransform(name="answer_suffix", suffix="_answer"),
)


class FilePairMatcher:
    """
    Resolves the answer key for exam files against a candidate listing.

    Candidates are sorted by name so resolution is deterministic. When
    the answer-key directory is the exam directory, only names carrying
    an answer-key marker ("gabarito", "gb_", ...) are candidates.

    Example:
        >>> matcher = FilePairMatcher(["2020_GB_impresso_D1_CD1.pdf"])
        >>> matcher.match("2020_PV_impresso_D1_CD1.pdf")
        '2020_GB_impresso_D1_CD1.pdf'
    """

    def __init__(
        self,
        candidates: Iterable[str],
        transforms: Sequence[FilenameTransform] = FILENAME_TRANSFORMS,
        *,
        answer_keys_only: bool = False,
    ):
        names = sorted(set(candidates))
        if answer_keys_only:
            names = [name for name in names if is_answer_key_name(name)]
        self._candidates: List[str] = names
        self._transforms = tuple(transforms)

    @classmethod
    def from_directory(
        cls,
        directory: Path,
        *,
        exam_directory: Optional[Path] = None,
    ) -> "FilePairMatcher":
        """
        Build a matcher from the files of an answer-key directory.

        A missing directory yields a matcher with no candidates.
        """
        if not directory.is_dir():
            logger.warning(f"Answer key directory not found: {directory}. Continuing without answer keys.")
            return cls([])
        shared = exam_directory is not None and directory.resolve() == exam_directory.resolve()
        names = [p.name for p in directory.iterdir() if p.is_file()]
        return cls(names, answer_keys_only=shared)

    @property
    def candidates(self) -> List[str]:
        return list(self._candidates)

    def match(self, exam_filename: str) -> Optional[str]:
        """
        Return the answer-key filename for an exam, or None.

        Args:
            exam_filename: Exam file name (directories are ignored).
        """
        exam_name = Path(exam_filename).name
        stem = Path(exam_name).stem
        candidates = [name for name in self._candidates if name != exam_name]

        # Rule 1: transforms
        for transform in self._transforms:
            expected = transform.apply(stem)
            if not expected:
                continue
            expected_lower = expected.lower()
            for candidate in candidates:
                if expected_lower in candidate.lower():
                    logger.info(f"Answer key for {exam_name}: {candidate} (rule {transform.name})")
                    return candidate

        # Rules 2-3: year, then type token
        year = extract_year(exam_name)
        if year is None:
            logger.info(f"No answer key found for {exam_name}")
            return None

        same_year = [name for name in candidates if extract_year(name) == year]
        exam_token = exam_type_token(exam_name)

        for candidate in same_year:
            key_token = answer_key_type_token(candidate)
            if exam_token and key_token and exam_token == key_token:
                logger.info(f"Answer key for {exam_name}: {candidate} (year/type)")
                return candidate

        for candidate in same_year:
            if not exam_token or not answer_key_type_token(candidate):
                logger.info(f"Answer key for {exam_name}: {candidate} (year only)")
                return candidate

        logger.info(f"No answer key found for {exam_name}")
        return None
