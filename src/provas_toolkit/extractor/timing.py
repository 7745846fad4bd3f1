"""
Module: extractor.timing

Purpose:
    Timing instrumentation for the extraction pipeline to identify
    slow phases and slow documents across a corpus.

Key Classes:
    - TimingLog: Collects per-file phase durations

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - threading (std): Batch workers share one log

Used By:
    - extractor.pipeline: Times text, segmentation, answer-key phases
    - batch.orchestrator: One shared log per batch run
"""

from __future__ import annotations

import json
import logging
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Tuple

logger = logging.getLogger(__name__)


class TimingLog:
    """
    Timing metrics for the extraction pipeline.

    Attributes:
        file_timings: Dict of filename -> {phase_name -> duration_seconds}

    Example:
        >>> log = TimingLog()
        >>> log.log("2020_PV_impresso_D1_CD1.pdf", "text_extraction", 0.234)
        >>> log.get_file_total("2020_PV_impresso_D1_CD1.pdf")
        0.234
    """

    def __init__(self) -> None:
        self.file_timings: Dict[str, Dict[str, float]] = {}
        self._lock = threading.Lock()

    def log(self, filename: str, phase: str, duration: float) -> None:
        """Log a phase duration for one file (repeated phases accumulate)."""
        with self._lock:
            phases = self.file_timings.setdefault(filename, {})
            phases[phase] = phases.get(phase, 0.0) + duration

    def get_file_total(self, filename: str) -> float:
        """Get total time recorded for a file."""
        with self._lock:
            return sum(self.file_timings.get(filename, {}).values())

    def get_phase_averages(self) -> Dict[str, float]:
        """Calculate average time per phase across all files."""
        with self._lock:
            snapshot = {name: dict(phases) for name, phases in self.file_timings.items()}

        phase_totals: Dict[str, float] = {}
        phase_counts: Dict[str, int] = {}
        for phases in snapshot.values():
            for phase, duration in phases.items():
                phase_totals[phase] = phase_totals.get(phase, 0.0) + duration
                phase_counts[phase] = phase_counts.get(phase, 0) + 1

        return {phase: phase_totals[phase] / phase_counts[phase] for phase in phase_totals}

    def get_slowest_files(self, n: int = 3) -> List[Tuple[str, float, str, float]]:
        """Get the N slowest files with their total time and slowest phase."""
        with self._lock:
            snapshot = {name: dict(phases) for name, phases in self.file_timings.items()}

        results = []
        for name, phases in snapshot.items():
            if not phases:
                continue
            slowest_phase = max(phases.items(), key=lambda x: x[1])
            results.append((name, sum(phases.values()), slowest_phase[0], slowest_phase[1]))

        results.sort(key=lambda x: x[1], reverse=True)
        return results[:n]

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Extraction Timing Summary ==="]

        averages = self.get_phase_averages()
        if averages:
            lines.append("Phase averages:")
            for phase, avg in sorted(averages.items(), key=lambda x: -x[1]):
                lines.append(f"  {phase:25s} {avg:.3f}s")

        slowest = self.get_slowest_files(3)
        if slowest:
            lines.append("")
            lines.append("Slowest files:")
            for name, total, slow_phase, slow_duration in slowest:
                lines.append(f"  {name}: {total:.3f}s ({slow_phase}: {slow_duration:.3f}s)")

        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        with self._lock:
            file_timings = {name: dict(phases) for name, phases in self.file_timings.items()}
        return {
            "file_timings": file_timings,
            "phase_averages": self.get_phase_averages(),
            "slowest_files": [
                {"file": name, "total": total, "slowest_phase": phase, "phase_duration": dur}
                for name, total, phase, dur in self.get_slowest_files(5)
            ],
        }

    def save(self, path: Path) -> None:
        """Save timing data to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved timing data to {path}")


@contextmanager
def timed_phase(log: TimingLog, phase: str, filename: str) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    The duration is recorded even when the block raises.

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "segmentation", "prova.pdf"):
        ...     segments = segment_questions(text, ExamType.ENEM)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        log.log(filename, phase, time.perf_counter() - start)
