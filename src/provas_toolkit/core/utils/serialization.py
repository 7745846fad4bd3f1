"""
Serialization Utilities

Provides to/from JSON utilities for the toolkit's data models.

Question records keep the field names relied upon by the downstream
persistence and API layers (`numero`, `enunciado`, `alternativas`,
`resposta_correta`, `materia`, `ano`, `dificuldade`, `examType`).
Result and batch containers serialize to plain dicts for report files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from ..models.questions import Question
from ..models.results import BatchResult, ExtractionResult, FileError, QualityReport, BatchStats
from ..schemas.validator import validate_question_record


# ─────────────────────────────────────────────────────────────────────────────
# Question Serialization
# ─────────────────────────────────────────────────────────────────────────────

def question_to_record(question: Question) -> dict[str, Any]:
    """Serialize a Question to its record dictionary."""
    return question.to_dict()


def question_from_record(
    data: dict[str, Any],
    *,
    validate: bool = True,
    source_file: str = "",
) -> Question:
    """
    Deserialize a Question from a record dictionary.

    Args:
        data: Record dictionary from JSON
        validate: Whether to validate the record first
        source_file: Exam file name to attach (records do not carry it)

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_question_record(data)
    return Question.from_dict(data, source_file=source_file)


def save_records_jsonl(path: Path, questions: Iterable[Question]) -> int:
    """
    Write question records to a JSONL file, one record per line.

    Returns:
        Number of records written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for question in questions:
            f.write(json.dumps(question_to_record(question), ensure_ascii=False))
            f.write("\n")
            count += 1
    return count


def load_records_jsonl(path: Path, *, validate: bool = True) -> list[Question]:
    """Load questions from a JSONL file written by save_records_jsonl()."""
    questions: list[Question] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            questions.append(question_from_record(json.loads(line), validate=validate))
    return questions


# ─────────────────────────────────────────────────────────────────────────────
# Result Serialization
# ─────────────────────────────────────────────────────────────────────────────

def result_to_dict(result: ExtractionResult) -> dict[str, Any]:
    """Serialize a single-file ExtractionResult."""
    return {
        "fileName": result.filename,
        "examType": result.exam_type.value,
        "gabaritoFile": result.answer_key_file,
        "extractionMethod": result.extraction_method,
        "status": "success",
        "questoes": [question_to_record(q) for q in result.questions],
        "validation": result.validation.to_dict(),
        "warnings": list(result.warnings),
    }


def _stats_to_dict(stats: BatchStats) -> dict[str, Any]:
    return {
        "totalArquivos": stats.total_files,
        "arquivosComSucesso": stats.success_count,
        "arquivosComErro": stats.error_count,
        "arquivosComGabarito": stats.files_with_answer_key,
        "totalQuestoes": stats.total_questions,
        "questoesPorMateria": dict(stats.questions_by_subject),
        "questoesPorAno": {str(year): count for year, count in sorted(stats.questions_by_year.items())},
        "questoesComResposta": stats.with_answer,
        "questoesSemResposta": stats.without_answer,
        "taxaResposta": stats.answer_rate,
        "taxaSucesso": stats.success_rate,
        "erros": [e.to_dict() for e in stats.errors],
    }


def _quality_to_dict(quality: QualityReport) -> dict[str, Any]:
    return {
        "validExtractions": quality.valid_extractions,
        "invalidExtractions": quality.invalid_extractions,
        "avgQuestionsPerFile": quality.avg_questions_per_file,
        "minQuestions": quality.min_questions,
        "maxQuestions": quality.max_questions,
        "qualityIssues": [
            {"fileName": i.filename, "type": i.issue_type, "issue": i.message}
            for i in quality.issues
        ],
    }


def batch_to_dict(batch: BatchResult) -> dict[str, Any]:
    """Serialize a BatchResult including aggregates."""
    records = []
    for record in batch.records:
        if isinstance(record, FileError):
            records.append(record.to_dict())
        else:
            records.append(result_to_dict(record))
    return {
        "results": records,
        "stats": _stats_to_dict(batch.stats),
        "quality": _quality_to_dict(batch.quality),
        "skipped": list(batch.skipped),
    }


def save_json(path: Path, data: dict[str, Any]) -> None:
    """Write a dict as pretty-printed UTF-8 JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
