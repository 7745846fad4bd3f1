"""
Schema Validation Utilities

Validates question records (the JSON shape consumed by the storage and
API layers) before they leave the toolkit.

- `validate_question_record()` runs fast structural checks
- strict mode additionally validates against question.schema.json
  with jsonschema
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

RECORD_FIELDS = (
    "numero",
    "enunciado",
    "alternativas",
    "resposta_correta",
    "materia",
    "ano",
    "dificuldade",
    "examType",
)

_LETTERS = ("A", "B", "C", "D", "E")
_EXAM_TYPES = ("enem", "vestibular")


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_question_record(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a question record.

    Args:
        data: Record dictionary (see Question.to_dict()).
        strict: If True, also validate against the JSON schema.

    Raises:
        ValidationError: If data is invalid.
    """
    missing = [f for f in RECORD_FIELDS if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    numero = data["numero"]
    if not isinstance(numero, int) or isinstance(numero, bool) or numero <= 0:
        raise ValidationError(
            f"Invalid numero: {numero!r} (must be a positive integer)",
            path="numero",
        )

    alternativas = data["alternativas"]
    if not isinstance(alternativas, dict):
        raise ValidationError("alternativas must be a dict", path="alternativas")
    bad_letters = [k for k in alternativas if k not in _LETTERS]
    if bad_letters:
        raise ValidationError(
            f"Invalid alternative letters: {bad_letters}",
            path="alternativas",
        )

    answer = data["resposta_correta"]
    if answer is not None and answer not in _LETTERS:
        raise ValidationError(
            f"Invalid resposta_correta: {answer!r}",
            path="resposta_correta",
        )

    if data["dificuldade"] not in (1, 2, 3):
        raise ValidationError(
            f"Invalid dificuldade: {data['dificuldade']!r} (must be 1-3)",
            path="dificuldade",
        )

    if data["examType"] not in _EXAM_TYPES:
        raise ValidationError(
            f"Invalid examType: {data['examType']!r}",
            path="examType",
        )

    if strict:
        import jsonschema

        schema = _load_schema("question")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            )
