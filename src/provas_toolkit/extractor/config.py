"""
Module: extractor.config

Purpose:
    Configuration dataclasses for the extraction pipeline and the batch
    orchestrator. Provides immutable settings for normalization,
    segmentation and worker-pool behaviour.

Key Classes:
    - ExtractionConfig: Settings for a single-file extraction
    - BatchConfig: Settings for corpus extraction

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - extractor.pipeline: Uses ExtractionConfig for pipeline settings
    - batch.orchestrator: Uses BatchConfig for worker pool settings
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from provas_toolkit.common.thresholds import (
    ALTERNATIVE_THRESHOLDS,
    QUALITY_THRESHOLDS,
    SEGMENTATION_THRESHOLDS,
)


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for the single-file extraction pipeline.

    Attributes:
        strip_page_numbers: Drop digit-only lines from exam text (default True)
        min_valid_alternatives: Alternatives that end the strategy chain; questions
            with fewer are logged as incomplete (default 2)
        fallback_lookahead_lines: Lines scanned by the fallback segmenter (default 20)
        tail_window_chars: Characters scanned by the tail alternative strategy (default 1500)
        run_diagnostics: Collect detection diagnostics (default False)
    """
    strip_page_numbers: bool = True
    min_valid_alternatives: int = QUALITY_THRESHOLDS.min_valid_alternatives
    fallback_lookahead_lines: int = SEGMENTATION_THRESHOLDS.fallback_lookahead_lines
    tail_window_chars: int = ALTERNATIVE_THRESHOLDS.tail_window_chars
    run_diagnostics: bool = False


@dataclass(frozen=True)
class BatchConfig:
    """
    Configuration for corpus extraction.

    Attributes:
        max_workers: Worker threads processing files (default 4)
        per_file_timeout: Seconds before a running file is recorded as timed out
            (default None, no bound)
        poll_interval: Seconds between completion/timeout checks (default 0.1)
        exam_suffixes: File suffixes treated as exam documents
        extraction: Settings passed to each single-file extraction
    """
    max_workers: int = 4
    per_file_timeout: Optional[float] = None
    poll_interval: float = 0.1
    exam_suffixes: Tuple[str, ...] = (".pdf", ".txt")
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
