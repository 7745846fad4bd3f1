"""
Module: batch

Purpose:
    Corpus extraction: exam/answer-key pairing, the worker-pool
    orchestrator and corpus-level reports.

Key Classes:
    - FilePairMatcher: Exam -> answer-key resolution
    - BatchOrchestrator: Parallel extraction with per-file isolation

Key Functions:
    - extract_batch(): One-call corpus extraction
    - compute_stats(), quality_report(), group_by_subject(): Aggregates
"""

from .orchestrator import BatchOrchestrator, extract_batch
from .pairing import FILENAME_TRANSFORMS, FilenameTransform, FilePairMatcher
from .report import compute_stats, group_by_subject, quality_report

__all__ = [
    "BatchOrchestrator",
    "extract_batch",
    "FilePairMatcher",
    "FilenameTransform",
    "FILENAME_TRANSFORMS",
    "compute_stats",
    "quality_report",
    "group_by_subject",
]
