"""
Module: batch.orchestrator

Purpose:
    Corpus extraction: pairs every exam file in a directory with its
    answer key and runs the single-file pipeline on a thread pool. One
    file's failure (or timeout) becomes a FileError record and never
    aborts the batch.

Key Classes:
    - BatchOrchestrator: Worker pool with cancellation and per-file timeout

Key Functions:
    - extract_batch(): One-call corpus extraction

Dependencies:
    - concurrent.futures: Thread pool execution

Used By:
    - provas_toolkit.cli: `provas-extract batch`
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

from provas_toolkit.common.path_utils import is_answer_key_name
from provas_toolkit.core.models import BatchResult, ExtractionResult, FileError, FileRecord

from ..extractor.config import BatchConfig
from ..extractor.diagnostics import DiagnosticsCollector
from ..extractor.errors import MissingFileError
from ..extractor.pipeline import extract_one
from ..extractor.timing import TimingLog
from ..extractor.utils import TextSource, read_document_text
from .pairing import FilePairMatcher
from .report import compute_stats, quality_report

logger = logging.getLogger(__name__)


class BatchOrchestrator:
    """
    Runs extract_one() over an exam directory.

    Files are dispatched to a ThreadPoolExecutor; results are collected
    on the calling thread, so no result list is shared with workers.
    Records keep the enumeration order of the exam files.

    Usage:
        orchestrator = BatchOrchestrator(Path("provas"), Path("gabaritos"))
        result = orchestrator.run()
        # From another thread: orchestrator.cancel()

    Attributes:
        exam_dir: Directory holding exam documents.
        answer_key_dir: Directory holding answer-key documents (may be
            the exam directory).
    """

    def __init__(
        self,
        exam_dir: Path,
        answer_key_dir: Path,
        *,
        config: Optional[BatchConfig] = None,
        text_source: TextSource = read_document_text,
        diagnostics_collector: Optional[DiagnosticsCollector] = None,
        timing_log: Optional[TimingLog] = None,
    ):
        self.exam_dir = Path(exam_dir)
        self.answer_key_dir = Path(answer_key_dir)
        self.config = config or BatchConfig()
        self._text_source = text_source
        self._diagnostics = diagnostics_collector
        self.timing_log = timing_log or TimingLog()
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        """Stop dispatching files. Files already running finish normally."""
        logger.info("Batch cancellation requested")
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def exam_files(self) -> List[Path]:
        """
        List exam documents: matching suffixes, no answer-key markers.

        Raises:
            MissingFileError: If the exam directory does not exist.
        """
        if not self.exam_dir.is_dir():
            raise MissingFileError(f"Exam directory not found: {self.exam_dir}", self.exam_dir)

        suffixes = {s.lower() for s in self.config.exam_suffixes}
        files = sorted(
            p for p in self.exam_dir.iterdir()
            if p.is_file() and p.suffix.lower() in suffixes and not is_answer_key_name(p.name)
        )
        logger.info(f"Found {len(files)} exam files in {self.exam_dir}")
        return files

    def run(self, exam_paths: Optional[Iterable[Union[str, Path]]] = None) -> BatchResult:
        """
        Extract every exam file.

        Args:
            exam_paths: Explicit exam paths; defaults to exam_files().

        Returns:
            BatchResult with one record per dispatched file, aggregates,
            and the names of files skipped by cancellation.
        """
        paths = [Path(p) for p in exam_paths] if exam_paths is not None else self.exam_files()
        matcher = FilePairMatcher.from_directory(self.answer_key_dir, exam_directory=self.exam_dir)

        records: List[Optional[FileRecord]] = [None] * len(paths)
        skipped: Set[int] = set()
        started: Dict[int, float] = {}
        started_lock = threading.Lock()
        timeout = self.config.per_file_timeout

        def work(index: int, path: Path) -> Optional[ExtractionResult]:
            with started_lock:
                started[index] = time.monotonic()
            if self._cancel_event.is_set():
                return None
            key_name = matcher.match(path.name)
            key_path = self.answer_key_dir / key_name if key_name else None
            return extract_one(
                path,
                key_path,
                config=self.config.extraction,
                text_source=self._text_source,
                diagnostics_collector=self._diagnostics,
                timing_log=self.timing_log,
            )

        executor = ThreadPoolExecutor(max_workers=max(1, self.config.max_workers))
        timed_out = False
        try:
            futures: Dict[Future, int] = {
                executor.submit(work, index, path): index
                for index, path in enumerate(paths)
            }
            pending = set(futures)

            while pending:
                if self._cancel_event.is_set():
                    for future in list(pending):
                        if future.cancel():
                            pending.discard(future)
                            skipped.add(futures[future])
                    if not pending:
                        break

                done, _ = wait(pending, timeout=self.config.poll_interval, return_when=FIRST_COMPLETED)
                for future in done:
                    pending.discard(future)
                    index = futures[future]
                    if future.cancelled():
                        skipped.add(index)
                        continue
                    record = self._record_for(paths[index], future)
                    if record is None:
                        skipped.add(index)
                    else:
                        records[index] = record

                if timeout is not None:
                    now = time.monotonic()
                    for future in list(pending):
                        index = futures[future]
                        with started_lock:
                            start = started.get(index)
                        if start is not None and now - start > timeout:
                            pending.discard(future)
                            timed_out = True
                            records[index] = self._failure(
                                paths[index],
                                f"Extraction exceeded {timeout:g}s",
                                "TimeoutError",
                            )
        finally:
            # A timed-out worker cannot be interrupted; do not block on it
            executor.shutdown(wait=not timed_out, cancel_futures=True)

        final_records = [r for r in records if r is not None]
        result = BatchResult(
            records=final_records,
            stats=compute_stats(final_records),
            quality=quality_report(final_records),
            skipped=[paths[i].name for i in sorted(skipped)],
        )

        logger.info(
            f"Batch complete: {result.stats.success_count}/{result.stats.total_files} files, "
            f"{result.stats.total_questions} questions"
            + (f", {len(result.skipped)} skipped" if result.skipped else ""),
            extra={
                "exam_dir": str(self.exam_dir),
                "success_count": result.stats.success_count,
                "error_count": result.stats.error_count,
            },
        )
        return result

    def _record_for(self, path: Path, future: Future) -> Optional[FileRecord]:
        """Convert a finished future into a record (None when skipped)."""
        try:
            result = future.result()
        except Exception as e:
            return self._failure(path, str(e), type(e).__name__)
        if result is None:
            return None
        logger.info(f"Extraction complete for {path.name}: {result.question_count} questions")
        return result

    def _failure(self, path: Path, message: str, error_type: str) -> FileError:
        logger.warning(
            f"Failed to extract {path.name}: {message}",
            extra={"pdf_name": path.name, "error": message, "error_type": error_type},
        )
        return FileError(filename=path.name, error=message, error_type=error_type)


def extract_batch(
    exam_dir: Path,
    answer_key_dir: Path,
    *,
    config: Optional[BatchConfig] = None,
    text_source: TextSource = read_document_text,
    diagnostics_collector: Optional[DiagnosticsCollector] = None,
) -> BatchResult:
    """
    Extract a whole corpus.

    Example:
        >>> result = extract_batch(Path("provas"), Path("gabaritos"))
        >>> result.stats.success_rate
        100.0
    """
    orchestrator = BatchOrchestrator(
        exam_dir,
        answer_key_dir,
        config=config,
        text_source=text_source,
        diagnostics_collector=diagnostics_collector,
    )
    return orchestrator.run()
