"""
Unit Tests for Detection Diagnostics
"""

import json
import threading

from provas_toolkit.extractor.diagnostics import (
    DetectionDiagnosticsReport,
    DetectionIssue,
    DiagnosticsCollector,
)


class TestDiagnosticsCollector:
    """Tests for DiagnosticsCollector."""

    def test_collector_when_issues_added_then_report_summarizes_by_type(self):
        # Arrange
        collector = DiagnosticsCollector()
        collector.add_invalid_number("a.pdf", "0")
        collector.add_incomplete_question("a.pdf", 3, ["A"], stem_empty=True, excerpt="A) x")
        collector.add_missing_answer_key("b.pdf", "No answer key for b.pdf")
        collector.add_fallback_used("b.pdf", 4)

        # Act
        report = collector.generate_report()

        # Assert
        assert report.total_issues == 4
        assert report.source_pdfs == ["a.pdf", "b.pdf"]
        assert report.summary_by_type == {
            "invalid_number": 1,
            "incomplete_question": 1,
            "missing_answer_key": 1,
            "fallback_used": 1,
        }

    def test_incomplete_question_when_both_problems_then_message_lists_them(self):
        collector = DiagnosticsCollector()

        collector.add_incomplete_question("a.pdf", 7, ["A"], stem_empty=True)

        message = collector.issues_for("a.pdf")[0].message
        assert message.startswith("Q7 INCOMPLETE")
        assert "empty stem" in message
        assert "1 alternatives" in message

    def test_issues_for_when_filtered_then_only_matching_type(self):
        collector = DiagnosticsCollector()
        collector.add_invalid_number("a.pdf", "0")
        collector.add_fallback_used("a.pdf", 1)
        collector.add_fallback_used("b.pdf", 1)

        assert len(collector.issues_for("a.pdf")) == 2
        assert [i.issue_type for i in collector.issues_for("a.pdf", "fallback_used")] == ["fallback_used"]

    def test_collector_when_shared_by_threads_then_no_issue_lost(self):
        collector = DiagnosticsCollector()

        def add_many(name: str) -> None:
            for _ in range(200):
                collector.add_fallback_used(name, 0)

        threads = [threading.Thread(target=add_many, args=(f"{i}.pdf",)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert collector.issue_count == 1600
        assert len(collector.generate_report().source_pdfs) == 8


class TestDiagnosticsReport:
    """Tests for report export."""

    def test_to_dict_when_long_excerpt_then_truncated(self):
        issue = DetectionIssue("incomplete_question", "a.pdf", 1, "m", excerpt="x" * 5000)

        assert len(issue.to_dict()["excerpt"]) == 2000

    def test_to_dict_when_no_excerpt_then_key_omitted(self):
        issue = DetectionIssue("fallback_used", "a.pdf", 0, "m")

        assert "excerpt" not in issue.to_dict()

    def test_save_when_called_then_writes_json(self, tmp_path):
        report = DetectionDiagnosticsReport.from_issues(
            [DetectionIssue("invalid_number", "a.pdf", 0, "questão 0 descartada")],
            {"a.pdf"},
        )
        path = tmp_path / "diag" / "report.json"

        report.save(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["total_issues"] == 1
        assert data["issues"][0]["message"] == "questão 0 descartada"
        assert "generated_at" in data
