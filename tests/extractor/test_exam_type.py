"""
Unit Tests for Exam Type and Year Classification
"""

from pathlib import Path

import pytest

from provas_toolkit.common.path_utils import extract_year
from provas_toolkit.core.models import ExamType
from provas_toolkit.extractor.exam_type import classify_exam_type


class TestClassifyExamType:
    """Tests for classify_exam_type()."""

    @pytest.mark.parametrize("filename", [
        "2020_PV_impresso_D1_CD1.pdf",
        "ENEM_2019_prova.pdf",
        "2021_pv_reaplicacao_D2.pdf",
        "prova_dia_caderno_azul.pdf",
        "1_dia_caderno_5.pdf",
    ])
    def test_classify_when_enem_naming_then_enem(self, filename):
        assert classify_exam_type(filename) is ExamType.ENEM

    @pytest.mark.parametrize("filename", [
        "fuvest_2019_primeira_fase.pdf",
        "unicamp_2020.pdf",
        "Mackenzie_2018.pdf",
        "lista_de_exercicios.pdf",
    ])
    def test_classify_when_not_enem_then_vestibular(self, filename):
        assert classify_exam_type(filename) is ExamType.VESTIBULAR

    def test_classify_when_path_given_then_uses_basename(self):
        """Directory names do not affect the classification."""
        path = Path("/corpus/enem/fuvest_2019.pdf")

        assert classify_exam_type(path) is ExamType.VESTIBULAR

    def test_classify_when_called_twice_then_same_result(self):
        name = "2020_PV_impresso_D1_CD1.pdf"

        assert classify_exam_type(name) is classify_exam_type(name)


class TestExtractYear:
    """Tests for extract_year()."""

    @pytest.mark.parametrize("filename, expected", [
        ("2020_PV_impresso_D1_CD1.pdf", 2020),
        ("fuvest_2019_primeira_fase.pdf", 2019),
        ("prova.pdf", None),
        ("codigo_120201.pdf", None),
    ])
    def test_extract_when_filename_given_then_returns_year(self, filename, expected):
        assert extract_year(filename) == expected
