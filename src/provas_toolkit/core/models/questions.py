"""
Module: questions

Purpose:
    Provides the Question dataclass - the record produced for each
    question segment of an exam - and AnswerKeyEntry, one parsed line of
    an answer key (gabarito).

Key Functions:
    - Question.is_valid: Non-empty stem and at least two alternatives
    - Question.assign_answer(): Set the correct answer exactly once
    - Question.to_dict() / Question.from_dict(): Record format

Dependencies:
    - dataclasses (std)
    - .exam_types.ExamType

Used By:
    - extractor.pipeline: Builds questions from segments
    - extractor.answer_key.associator: Sets correct answers
    - extractor.validation: Summary statistics
    - core.utils.serialization

Lifecycle:
    Questions are created fresh per extraction call. The only field that
    changes after construction is correct_answer, which is written once
    by the answer associator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .exam_types import ExamType

ALTERNATIVE_LETTERS = ("A", "B", "C", "D", "E")

UNCLASSIFIED = "Não classificada"


@dataclass(frozen=True)
class AnswerKeyEntry:
    """
    One (question number, letter) pair read from an answer key.

    Attributes:
        question_number: Positive question number.
        letter: Correct alternative, one of A-E.
    """
    question_number: int
    letter: str

    def __post_init__(self) -> None:
        if self.question_number <= 0:
            raise ValueError(f"question_number must be positive: {self.question_number}")
        if self.letter not in ALTERNATIVE_LETTERS:
            raise ValueError(f"letter must be one of A-E: {self.letter!r}")


@dataclass
class Question:
    """
    Extracted exam question.

    Attributes:
        number: Question number, unique within one exam.
        exam_type: Exam family the question was parsed as.
        stem: Question body (enunciado). Empty for degenerate parses.
        alternatives: Ordered letter -> text mapping, 0-5 entries.
        subject: Subject tag, or UNCLASSIFIED.
        difficulty: 1 (easy) to 3 (hard).
        correct_answer: Letter from the answer key, set at most once.
        year: Exam year inferred from the filename.
        source_file: Name of the exam file.

    Invariants:
        - number > 0
        - alternatives keys are a subset of A-E (so at most 5 entries)
        - 1 <= difficulty <= 3

    Example:
        >>> q = Question(number=1, exam_type=ExamType.VESTIBULAR,
        ...              stem="What is 2+2?", alternatives={"A": "3", "B": "4"})
        >>> q.is_valid
        True
    """

    number: int
    exam_type: ExamType
    stem: str = ""
    alternatives: Dict[str, str] = field(default_factory=dict)
    subject: str = UNCLASSIFIED
    difficulty: int = 1
    correct_answer: Optional[str] = None
    year: Optional[int] = None
    source_file: str = ""

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if self.number <= 0:
            raise ValueError(f"number must be positive: {self.number}")
        if not (1 <= self.difficulty <= 3):
            raise ValueError(f"difficulty must be 1-3: {self.difficulty}")
        unknown = [key for key in self.alternatives if key not in ALTERNATIVE_LETTERS]
        if unknown:
            raise ValueError(f"alternative letters must be A-E: {unknown}")
        if self.correct_answer is not None and self.correct_answer not in ALTERNATIVE_LETTERS:
            raise ValueError(f"correct_answer must be one of A-E: {self.correct_answer!r}")

    @property
    def is_valid(self) -> bool:
        """A question is valid iff its stem is non-empty and it has >= 2 alternatives."""
        return bool(self.stem.strip()) and len(self.alternatives) >= 2

    def assign_answer(self, letter: str) -> bool:
        """
        Set the correct answer if it is still unset.

        Args:
            letter: Alternative letter A-E.

        Returns:
            True if the answer was assigned, False if one was already set.

        Raises:
            ValueError: If letter is not A-E.
        """
        if letter not in ALTERNATIVE_LETTERS:
            raise ValueError(f"correct_answer must be one of A-E: {letter!r}")
        if self.correct_answer is not None:
            return False
        self.correct_answer = letter
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the question record shape used by storage and API layers."""
        return {
            "numero": self.number,
            "enunciado": self.stem,
            "alternativas": dict(self.alternatives),
            "resposta_correta": self.correct_answer,
            "materia": self.subject,
            "ano": self.year,
            "dificuldade": self.difficulty,
            "examType": self.exam_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, source_file: str = "") -> "Question":
        """Build a Question from a question record."""
        return cls(
            number=int(data["numero"]),
            exam_type=ExamType(data["examType"]),
            stem=data.get("enunciado") or "",
            alternatives=dict(data.get("alternativas") or {}),
            subject=data.get("materia") or UNCLASSIFIED,
            difficulty=int(data.get("dificuldade", 1)),
            correct_answer=data.get("resposta_correta"),
            year=data.get("ano"),
            source_file=source_file,
        )
