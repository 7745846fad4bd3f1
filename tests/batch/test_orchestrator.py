"""
Integration Tests for Batch Orchestration

Covers pairing, failure isolation, ordering, cancellation and per-file
timeouts of BatchOrchestrator.
"""

import threading
from pathlib import Path

import pytest

from provas_toolkit.batch import BatchOrchestrator, extract_batch
from provas_toolkit.core.models import ExtractionResult, FileError
from provas_toolkit.extractor import BatchConfig, DiagnosticsCollector, MissingFileError


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class TestBatchRun:
    """Tests for a full corpus run."""

    def test_run_when_corpus_then_every_exam_extracted(self, corpus):
        # Arrange
        exam_dir, key_dir = corpus

        # Act
        result = BatchOrchestrator(exam_dir, key_dir).run()

        # Assert
        assert [r.filename for r in result.records] == [
            "fuvest_2019_prova.txt",
            "unesp_2021_prova.txt",
            "unicamp_2020_prova.txt",
        ]
        assert result.stats.success_count == 3
        assert result.stats.error_count == 0
        assert result.stats.files_with_answer_key == 2
        assert result.stats.total_questions == 9
        assert result.stats.with_answer == 6
        assert result.stats.answer_rate == 66.67
        assert result.stats.questions_by_year == {2019: 3, 2020: 3, 2021: 3}
        assert result.skipped == []

    def test_run_when_exams_paired_then_answer_key_names_recorded(self, corpus):
        exam_dir, key_dir = corpus

        result = BatchOrchestrator(exam_dir, key_dir).run()

        keys = {r.filename: r.answer_key_file for r in result.successes}
        assert keys == {
            "fuvest_2019_prova.txt": "fuvest_2019_prova_gabarito.txt",
            "unesp_2021_prova.txt": None,
            "unicamp_2020_prova.txt": "unicamp_2020_prova_gabarito.txt",
        }

    def test_run_when_one_file_missing_then_error_record_in_place(self, corpus):
        exam_dir, key_dir = corpus
        paths = [
            exam_dir / "fuvest_2019_prova.txt",
            exam_dir / "nao_existe_2019.txt",
            exam_dir / "unicamp_2020_prova.txt",
        ]

        result = BatchOrchestrator(exam_dir, key_dir, config=BatchConfig(max_workers=2)).run(paths)

        assert len(result.records) == 3
        assert isinstance(result.records[0], ExtractionResult)
        assert isinstance(result.records[1], FileError)
        assert isinstance(result.records[2], ExtractionResult)
        assert result.records[1].error_type == "MissingFileError"
        assert result.stats.success_count == 2
        assert result.stats.error_count == 1
        assert result.stats.success_rate == 66.67

    def test_run_when_text_source_raises_then_other_files_unaffected(self, corpus):
        exam_dir, key_dir = corpus

        def flaky_source(path: Path) -> str:
            if path.name.startswith("unesp"):
                raise RuntimeError("decoder crashed")
            return _read(path)

        result = BatchOrchestrator(exam_dir, key_dir, text_source=flaky_source).run()

        errors = result.errors
        assert [(e.filename, e.error_type) for e in errors] == [("unesp_2021_prova.txt", "RuntimeError")]
        assert "decoder crashed" in errors[0].error
        assert result.stats.success_count == 2

    def test_run_when_diagnostics_shared_then_collects_across_workers(self, corpus):
        exam_dir, key_dir = corpus
        collector = DiagnosticsCollector()

        BatchOrchestrator(exam_dir, key_dir, diagnostics_collector=collector).run()

        assert [i.pdf_name for i in collector.generate_report().issues] == ["unesp_2021_prova.txt"]

    def test_run_when_single_worker_then_same_records(self, corpus):
        exam_dir, key_dir = corpus

        serial = BatchOrchestrator(exam_dir, key_dir, config=BatchConfig(max_workers=1)).run()
        parallel = BatchOrchestrator(exam_dir, key_dir, config=BatchConfig(max_workers=4)).run()

        assert [r.filename for r in serial.records] == [r.filename for r in parallel.records]
        assert serial.stats.total_questions == parallel.stats.total_questions

    def test_extract_batch_when_called_then_runs_orchestrator(self, corpus):
        exam_dir, key_dir = corpus

        result = extract_batch(exam_dir, key_dir)

        assert result.stats.total_files == 3
        assert result.quality.valid_extractions == 3


class TestExamFiles:
    """Tests for exam file enumeration."""

    def test_exam_files_when_mixed_directory_then_only_exams(self, corpus):
        exam_dir, key_dir = corpus
        (exam_dir / "notas.md").write_text("x", encoding="utf-8")
        (exam_dir / "fuvest_2019_gabarito.txt").write_text("1. A", encoding="utf-8")

        files = BatchOrchestrator(exam_dir, key_dir).exam_files()

        assert [p.name for p in files] == [
            "fuvest_2019_prova.txt",
            "unesp_2021_prova.txt",
            "unicamp_2020_prova.txt",
        ]

    def test_run_when_exam_dir_missing_then_missing_file_error(self, tmp_path):
        with pytest.raises(MissingFileError):
            BatchOrchestrator(tmp_path / "nao_existe", tmp_path).run()

    def test_run_when_shared_directory_then_keys_not_extracted_as_exams(self, corpus):
        exam_dir, key_dir = corpus
        for key in key_dir.iterdir():
            (exam_dir / key.name).write_text(_read(key), encoding="utf-8")

        result = BatchOrchestrator(exam_dir, exam_dir).run()

        assert result.stats.total_files == 3
        assert result.stats.files_with_answer_key == 2


class TestCancellation:
    """Tests for cancel()."""

    def test_run_when_cancelled_before_start_then_everything_skipped(self, corpus):
        exam_dir, key_dir = corpus
        orchestrator = BatchOrchestrator(exam_dir, key_dir)

        orchestrator.cancel()
        result = orchestrator.run()

        assert orchestrator.cancelled
        assert result.records == []
        assert sorted(result.skipped) == [
            "fuvest_2019_prova.txt",
            "unesp_2021_prova.txt",
            "unicamp_2020_prova.txt",
        ]

    def test_run_when_cancelled_mid_batch_then_running_file_finishes(self, corpus):
        exam_dir, key_dir = corpus
        holder = {}

        def cancelling_source(path: Path) -> str:
            holder["orchestrator"].cancel()
            return _read(path)

        orchestrator = BatchOrchestrator(
            exam_dir,
            key_dir,
            config=BatchConfig(max_workers=1),
            text_source=cancelling_source,
        )
        holder["orchestrator"] = orchestrator

        result = orchestrator.run()

        assert [r.filename for r in result.records] == ["fuvest_2019_prova.txt"]
        assert result.skipped == ["unesp_2021_prova.txt", "unicamp_2020_prova.txt"]


class TestTimeout:
    """Tests for per-file timeouts."""

    def test_run_when_file_exceeds_timeout_then_timeout_error_record(self, corpus):
        exam_dir, key_dir = corpus
        release = threading.Event()

        def slow_source(path: Path) -> str:
            if path.name.startswith("unesp"):
                release.wait(10)
            return _read(path)

        config = BatchConfig(max_workers=3, per_file_timeout=0.3, poll_interval=0.05)
        try:
            result = BatchOrchestrator(exam_dir, key_dir, config=config, text_source=slow_source).run()
        finally:
            release.set()

        assert [type(r).__name__ for r in result.records] == [
            "ExtractionResult",
            "FileError",
            "ExtractionResult",
        ]
        assert result.records[1].error_type == "TimeoutError"
        assert result.stats.error_count == 1
