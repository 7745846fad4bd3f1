"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    batch_to_dict,
    load_records_jsonl,
    question_from_record,
    question_to_record,
    result_to_dict,
    save_json,
    save_records_jsonl,
)

__all__ = [
    "batch_to_dict",
    "load_records_jsonl",
    "question_from_record",
    "question_to_record",
    "result_to_dict",
    "save_json",
    "save_records_jsonl",
]
