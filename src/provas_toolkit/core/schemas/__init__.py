"""
Schemas Package

JSON schema for question records and validation helpers.
"""

from .validator import RECORD_FIELDS, ValidationError, validate_question_record

__all__ = [
    "RECORD_FIELDS",
    "ValidationError",
    "validate_question_record",
]
