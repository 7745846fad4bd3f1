"""
Module: extractor.answer_key.associator

Purpose:
    Join a parsed answer key onto segmented questions.

Key Functions:
    - associate_answers(): Set correct answers, return how many were set
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from provas_toolkit.core.models import Question

logger = logging.getLogger(__name__)


def associate_answers(questions: Iterable[Question], answer_key: Mapping[int, str]) -> int:
    """
    Set ``correct_answer`` on every question whose number is in the key.

    Questions that already carry an answer are left untouched, so running
    the association twice changes nothing.

    Args:
        questions: Questions to update in place.
        answer_key: Question number -> letter map.

    Returns:
        Number of answers assigned.
    """
    if not answer_key:
        logger.info("Answer key is empty, no answers associated")
        return 0

    assigned = 0
    for question in questions:
        letter = answer_key.get(question.number)
        if letter and question.assign_answer(letter):
            assigned += 1

    logger.debug(f"Associated {assigned} answers from a key of {len(answer_key)} entries")
    return assigned
