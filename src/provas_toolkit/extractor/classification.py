"""
Module: extractor.classification

Purpose:
    Per-question heuristics: subject classification (ENEM number ranges,
    then a keyword table) and difficulty estimation from the density of
    complex cognitive verbs in the stem.

Key Functions:
    - classify_subject(): Question number + stem -> subject tag
    - estimate_difficulty(): Stem -> 1 (easy), 2 (medium) or 3 (hard)

Dependencies:
    - provas_toolkit.common.thresholds: Difficulty density cut-offs
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from provas_toolkit.common.thresholds import DIFFICULTY_THRESHOLDS
from provas_toolkit.core.models import UNCLASSIFIED, ExamType

logger = logging.getLogger(__name__)

# ENEM booklets group questions by knowledge area:
# day 1 holds 1-90, day 2 holds 91-180.
ENEM_AREA_RANGES: Tuple[Tuple[int, int, str], ...] = (
    (1, 45, "Linguagens e Códigos"),
    (46, 90, "Ciências Humanas"),
    (91, 135, "Ciências da Natureza"),
    (136, 180, "Matemática"),
)

# Order matters: the first subject with a matching keyword wins.
SUBJECT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "Português": (
        "texto", "gramática", "literatura", "linguagem", "verbos", "substantivo",
        "adjetivo", "pronome", "acentuação", "crase", "pontuação",
    ),
    "Literatura": (
        "romance", "poema", "autor", "obra", "personagem", "narrador",
        "machado de assis", "clarice lispector", "guimarães rosa", "mário de andrade",
    ),
    "Matemática": (
        "equação", "função", "geometria", "trigonometria", "logaritmo", "derivada",
        "integral", "matriz", "estatística", "probabilidade", "números", "álgebra",
    ),
    "Física": (
        "velocidade", "aceleração", "força", "energia", "eletricidade", "magnetismo",
        "óptica", "mecânica", "ondas", "termologia", "cinemática",
    ),
    "Química": (
        "elemento", "reação", "mol", "átomo", "molécula", "ácido", "base",
        "orgânica", "inorgânica", "equilíbrio", "eletroquímica", "tabela periódica",
    ),
    "Biologia": (
        "célula", "organismo", "genética", "evolução", "ecologia", "sistema",
        "tecido", "órgão", "ciclo celular", "dna", "rna", "bioquímica", "reprodução",
    ),
    "História": (
        "século", "guerra", "revolução", "império", "república", "período",
        "civilização", "sociedade", "brasil", "colônia", "independência", "escravidão",
    ),
    "Geografia": (
        "relevo", "clima", "população", "economia", "território", "região", "país",
        "continente", "urbanização", "globalização", "meio ambiente", "hidrografia",
    ),
    "Filosofia": (
        "filósofo", "pensamento", "ética", "moral", "conhecimento", "existência",
        "metafísica", "sócrates", "platão", "aristóteles", "iluminismo",
    ),
    "Sociologia": (
        "sociedade", "cultura", "classe", "social", "política", "instituição",
        "poder", "marx", "durkheim", "weber", "movimento social", "trabalho",
    ),
    "Inglês": (
        "inglês", "english", "according to", "the text", "the author",
    ),
}

COMPLEX_TERMS: Tuple[str, ...] = (
    "demonstrar",
    "determinar",
    "analisar",
    "comparar",
    "calcular",
    "resolver",
    "comprovar",
    "inferir",
    "interpretar",
    "sintetizar",
    "evidenciar",
    "relacionar",
    "justificar",
    "argumentar",
)


def enem_area(number: int) -> Optional[str]:
    """Knowledge area for an ENEM question number, or None outside 1-180."""
    for low, high, area in ENEM_AREA_RANGES:
        if low <= number <= high:
            return area
    return None


def classify_subject(number: int, stem: str, exam_type: ExamType) -> str:
    """
    Classify a question's subject.

    For ENEM, the question number range decides the area even when the
    stem is empty. Otherwise (and for ENEM numbers above 180) the stem is
    matched case-insensitively against SUBJECT_KEYWORDS in table order.

    Args:
        number: Question number.
        stem: Question stem.
        exam_type: Exam family.

    Returns:
        Subject tag, or UNCLASSIFIED when nothing matches.

    Example:
        >>> classify_subject(100, "", ExamType.ENEM)
        'Ciências da Natureza'
        >>> classify_subject(3, "Resolva a equação x + 1 = 2", ExamType.VESTIBULAR)
        'Matemática'
    """
    if exam_type is ExamType.ENEM:
        area = enem_area(number)
        if area:
            return area

    if not stem or not stem.strip():
        return UNCLASSIFIED

    lowered = stem.lower()
    for subject, keywords in SUBJECT_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return subject

    return UNCLASSIFIED


def estimate_difficulty(stem: str) -> int:
    """
    Estimate difficulty from complex-verb density.

    density = complex tokens / max(1, tokens / 100); above 5 is hard (3),
    above 2 is medium (2), anything else, including an empty stem, is
    easy (1).

    Example:
        >>> estimate_difficulty("Calcule a velocidade média do carro.")
        1
        >>> estimate_difficulty("Analisar, comparar e justificar.")
        2
    """
    if not stem or not stem.strip():
        return 1

    tokens = stem.split()
    complex_count = sum(
        1 for token in tokens
        if any(term in token.lower() for term in COMPLEX_TERMS)
    )
    density = complex_count / max(1, len(tokens) / DIFFICULTY_THRESHOLDS.tokens_per_unit)

    if density > DIFFICULTY_THRESHOLDS.hard_density:
        return 3
    if density > DIFFICULTY_THRESHOLDS.medium_density:
        return 2
    return 1
