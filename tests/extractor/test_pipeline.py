"""
Integration Tests for the Single-File Extraction Pipeline

Exercise extract_one() end to end on .txt documents (read by the
default text source) and on injected text sources.
"""

import json
from pathlib import Path

import pytest

from provas_toolkit.core.models import ALTERNATIVE_LETTERS, ExamType
from provas_toolkit.core.utils.serialization import result_to_dict
from provas_toolkit.extractor import (
    DiagnosticsCollector,
    EmptyTextError,
    ExtractionConfig,
    MissingFileError,
    NoQuestionsFoundError,
    TextExtractionError,
    TimingLog,
    extract_one,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestExtractOne:
    """Tests for extract_one() on a well-formed vestibular exam."""

    def test_extract_when_exam_and_key_then_questions_answered(self, exam_file, answer_key_file):
        # Act
        result = extract_one(exam_file, answer_key_file)

        # Assert
        assert result.filename == "fuvest_2019_prova.txt"
        assert result.exam_type is ExamType.VESTIBULAR
        assert result.extraction_method == "primary"
        assert result.answer_key_file == "fuvest_2019_prova_gabarito.txt"
        assert result.warnings == []
        assert [q.number for q in result.questions] == [1, 2, 3]
        assert [q.correct_answer for q in result.questions] == ["C", "B", "C"]
        assert result.validation.with_answer == 3
        assert result.validation.valid_count == 3

    def test_extract_when_exam_parsed_then_question_fields_filled(self, exam_file):
        result = extract_one(exam_file)

        first = result.questions[0]
        assert first.stem == "Resolva a equação x + 2 = 5."
        assert first.alternatives == {"A": "1", "B": "2", "C": "3", "D": "4", "E": "5"}
        assert first.year == 2019
        assert first.source_file == "fuvest_2019_prova.txt"
        assert [q.subject for q in result.questions] == ["Matemática", "Física", "História"]
        assert result.validation.years == {2019}

    def test_extract_when_run_twice_then_identical_results(self, exam_file, answer_key_file):
        first = result_to_dict(extract_one(exam_file, answer_key_file))
        second = result_to_dict(extract_one(exam_file, answer_key_file))

        assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)

    def test_extract_when_done_then_question_invariants_hold(self, exam_file, answer_key_file):
        result = extract_one(exam_file, answer_key_file)

        numbers = [q.number for q in result.questions]
        assert len(numbers) == len(set(numbers))
        for q in result.questions:
            assert q.number > 0
            assert set(q.alternatives) <= set(ALTERNATIVE_LETTERS)
            assert 1 <= q.difficulty <= 3
            assert q.correct_answer is None or q.correct_answer in ALTERNATIVE_LETTERS
        summary = result.validation
        assert summary.with_answer + summary.without_answer == summary.total_questions
        assert summary.valid_count + summary.invalid_count == summary.total_questions

    def test_extract_when_str_paths_then_accepted(self, exam_file, answer_key_file):
        result = extract_one(str(exam_file), str(answer_key_file))

        assert result.question_count == 3


class TestAnswerKeyWarnings:
    """A missing or unusable answer key never fails the extraction."""

    def test_extract_when_no_key_then_warning_and_no_answers(self, exam_file):
        result = extract_one(exam_file)

        assert result.answer_key_file is None
        assert len(result.warnings) == 1
        assert result.validation.with_answer == 0
        assert result.validation.without_answer == 3

    def test_extract_when_key_path_missing_then_warning(self, exam_file, tmp_path):
        result = extract_one(exam_file, tmp_path / "nao_existe_gabarito.txt")

        assert result.answer_key_file is None
        assert "not found" in result.warnings[0]
        assert result.question_count == 3

    def test_extract_when_key_has_no_answers_then_warning(self, exam_file, tmp_path):
        key = _write(tmp_path / "vazio_gabarito.txt", "Gabarito indisponível")

        result = extract_one(exam_file, key)

        assert result.answer_key_file is None
        assert "yielded no answers" in result.warnings[0]

    def test_extract_when_key_unreadable_then_warning(self, exam_file, answer_key_file):
        def text_source(path: Path) -> str:
            if path == answer_key_file:
                raise TextExtractionError("corrupt", path)
            return path.read_text(encoding="utf-8")

        result = extract_one(exam_file, answer_key_file, text_source=text_source)

        assert "Failed to read answer key" in result.warnings[0]
        assert result.question_count == 3

    def test_extract_when_key_missing_then_diagnostics_recorded(self, exam_file):
        collector = DiagnosticsCollector()

        extract_one(exam_file, diagnostics_collector=collector)

        assert len(collector.issues_for(exam_file.name, "missing_answer_key")) == 1


class TestExtractionErrors:
    """Fatal conditions raise typed errors."""

    def test_extract_when_exam_missing_then_missing_file_error(self, tmp_path):
        with pytest.raises(MissingFileError) as exc_info:
            extract_one(tmp_path / "nao_existe.pdf")

        assert isinstance(exc_info.value, FileNotFoundError)
        assert exc_info.value.path == tmp_path / "nao_existe.pdf"

    def test_extract_when_text_only_page_numbers_then_empty_text_error(self, tmp_path):
        exam = _write(tmp_path / "prova.txt", "  \n 12 \n\n")

        with pytest.raises(EmptyTextError):
            extract_one(exam)

    def test_extract_when_no_questions_then_no_questions_error(self, tmp_path):
        exam = _write(tmp_path / "prova.txt", "Texto sem questões.")

        with pytest.raises(NoQuestionsFoundError):
            extract_one(exam)

    def test_extract_when_text_source_fails_then_error_propagates(self, exam_file):
        def failing_source(path: Path) -> str:
            raise TextExtractionError("cannot decode", path)

        with pytest.raises(TextExtractionError):
            extract_one(exam_file, text_source=failing_source)


class TestSegmentationFallback:
    """Tests for the line-oriented fallback path."""

    def test_extract_when_no_markers_then_fallback_used(self, tmp_path):
        exam = _write(
            tmp_path / "lista.txt",
            "1. Quanto é 2+2?\nA) 3\nB) 4\n2. Quanto é 3+3?\nA) 6\nB) 7\n",
        )
        collector = DiagnosticsCollector()

        result = extract_one(exam, diagnostics_collector=collector)

        assert result.extraction_method == "fallback"
        assert [q.number for q in result.questions] == [1, 2]
        assert result.questions[0].stem == "Quanto é 2+2?"
        assert result.questions[1].alternatives == {"A": "6", "B": "7"}
        assert len(collector.issues_for("lista.txt", "fallback_used")) == 1


class TestPipelineCollaborators:
    """Tests for injected text sources, diagnostics and timing."""

    def test_extract_when_enem_exam_then_areas_from_numbering(self, tmp_path):
        text = (
            "QUESTÃO 01\nLeia o texto.\nA) um\nB) dois\n\n"
            "QUESTÃO 46\nSobre a sociedade.\nA) três\nB) quatro\n"
        )
        exam = _write(tmp_path / "2020_PV_impresso_D1_CD1.txt", "placeholder")

        result = extract_one(exam, text_source=lambda path: text)

        assert result.exam_type is ExamType.ENEM
        assert [q.number for q in result.questions] == [1, 46]
        assert [q.subject for q in result.questions] == ["Linguagens e Códigos", "Ciências Humanas"]
        assert all(q.year == 2020 for q in result.questions)

    def test_extract_when_question_incomplete_then_diagnosed(self, tmp_path):
        exam = _write(
            tmp_path / "fuvest_2018.txt",
            "QUESTÃO 1\nEnunciado completo?\nA) sim\nB) não\n\nQUESTÃO 2\nSó uma.\nA) única\n",
        )
        collector = DiagnosticsCollector()

        result = extract_one(exam, diagnostics_collector=collector)

        issues = collector.issues_for("fuvest_2018.txt", "incomplete_question")
        assert [i.question_number for i in issues] == [2]
        assert result.validation.invalid_count == 1
        assert result.question_count == 2

    def test_extract_when_page_numbers_kept_then_config_respected(self, tmp_path):
        text = "QUESTÃO 1\nQual?\n7\nA) sim\nB) não\n"
        exam = _write(tmp_path / "prova.txt", text)

        stripped = extract_one(exam)
        kept = extract_one(exam, config=ExtractionConfig(strip_page_numbers=False))

        assert "7" not in stripped.questions[0].stem
        assert kept.questions[0].stem == "Qual?\n7"

    def test_extract_when_alternative_crosses_page_break_then_text_kept(self, tmp_path):
        text = "QUESTÃO 1\nDe que cor é o céu?\nA) azul que se\n37\nestende ao mar\nB) verde\n"
        exam = _write(tmp_path / "prova.txt", text)

        result = extract_one(exam)

        assert result.questions[0].alternatives == {"A": "azul que se estende ao mar", "B": "verde"}

    def test_extract_when_timing_log_given_then_phases_recorded(self, exam_file, answer_key_file):
        timing = TimingLog()

        extract_one(exam_file, answer_key_file, timing_log=timing)

        phases = timing.file_timings[exam_file.name]
        assert {"text_extraction", "segmentation", "question_building", "answer_key"} <= set(phases)
