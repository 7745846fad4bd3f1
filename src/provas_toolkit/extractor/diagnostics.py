"""
Module: extractor.diagnostics

Captures detection issues during extraction and generates diagnostic
reports for tuning the heuristics against a corpus.

Issue types:
- invalid_number: Question marker with a number <= 0, discarded
- incomplete_question: Question without a stem or with < 2 alternatives
- missing_answer_key: Answer key absent, unreadable or empty
- fallback_used: Primary segmentation found nothing, fallback ran
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

logger = logging.getLogger(__name__)


@dataclass
class DetectionIssue:
    """
    A single detection issue with diagnostic context.

    Fields:
    - question_number: 0 for file-level issues
    - excerpt: Segment text for question-level issues (truncated on export)
    """
    issue_type: str
    pdf_name: str
    question_number: int
    message: str
    excerpt: str = ""

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "issue_type": self.issue_type,
            "pdf_name": self.pdf_name,
            "question_number": self.question_number,
            "message": self.message,
        }
        if self.excerpt:
            d["excerpt"] = self.excerpt[:2000]
        return d


class DiagnosticsCollector:
    """
    Thread-safe collector for detection issues.

    One collector can be shared by every worker of a batch; issues are
    appended under a lock and the report is built from a snapshot.
    """

    def __init__(self):
        self._issues: List[DetectionIssue] = []
        self._lock = threading.Lock()
        self._pdfs: Set[str] = set()

    def _add(self, issue: DetectionIssue) -> None:
        with self._lock:
            self._issues.append(issue)
            self._pdfs.add(issue.pdf_name)

    def add_invalid_number(self, pdf_name: str, raw_number: str) -> None:
        """Record a discarded question marker."""
        self._add(DetectionIssue(
            issue_type="invalid_number",
            pdf_name=pdf_name,
            question_number=0,
            message=f"Question marker with invalid number {raw_number!r} discarded",
        ))

    def add_incomplete_question(
        self,
        pdf_name: str,
        question_number: int,
        alternatives_found: List[str],
        stem_empty: bool,
        excerpt: str = "",
    ) -> None:
        """Record a question that fails the validity rule."""
        problems = []
        if stem_empty:
            problems.append("empty stem")
        if len(alternatives_found) < 2:
            problems.append(f"{len(alternatives_found)} alternatives {alternatives_found}")
        self._add(DetectionIssue(
            issue_type="incomplete_question",
            pdf_name=pdf_name,
            question_number=question_number,
            message=f"Q{question_number} INCOMPLETE: {', '.join(problems)}",
            excerpt=excerpt,
        ))

    def add_missing_answer_key(self, pdf_name: str, reason: str) -> None:
        """Record an exam processed without answers."""
        self._add(DetectionIssue(
            issue_type="missing_answer_key",
            pdf_name=pdf_name,
            question_number=0,
            message=reason,
        ))

    def add_fallback_used(self, pdf_name: str, questions_found: int) -> None:
        """Record that the line-oriented fallback segmenter ran."""
        self._add(DetectionIssue(
            issue_type="fallback_used",
            pdf_name=pdf_name,
            question_number=0,
            message=f"No question markers found; line fallback found {questions_found} questions",
        ))

    def generate_report(self) -> "DetectionDiagnosticsReport":
        with self._lock:
            return DetectionDiagnosticsReport.from_issues(list(self._issues), set(self._pdfs))

    @property
    def issue_count(self) -> int:
        with self._lock:
            return len(self._issues)

    def issues_for(self, pdf_name: str, issue_type: Optional[str] = None) -> List[DetectionIssue]:
        """Issues recorded for one file, optionally filtered by type."""
        with self._lock:
            return [
                issue for issue in self._issues
                if issue.pdf_name == pdf_name
                and (issue_type is None or issue.issue_type == issue_type)
            ]


@dataclass
class DetectionDiagnosticsReport:
    """Complete diagnostics report."""
    generated_at: str
    source_pdfs: List[str]
    total_issues: int
    summary_by_type: Dict[str, int]
    issues: List[DetectionIssue]

    @classmethod
    def from_issues(cls, issues: List[DetectionIssue], pdfs: Set[str]) -> "DetectionDiagnosticsReport":
        summary_by_type: Dict[str, int] = {}
        for issue in issues:
            summary_by_type[issue.issue_type] = summary_by_type.get(issue.issue_type, 0) + 1

        return cls(
            generated_at=datetime.now(timezone.utc).isoformat(),
            source_pdfs=sorted(pdfs),
            total_issues=len(issues),
            summary_by_type=summary_by_type,
            issues=issues,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "source_pdfs": self.source_pdfs,
            "total_issues": self.total_issues,
            "summary_by_type": self.summary_by_type,
            "issues": [issue.to_dict() for issue in self.issues],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info(f"Detection diagnostics saved: {path}")
