import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import provas_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


VESTIBULAR_TEXT = (
    "FUVEST 2019 - PRIMEIRA FASE\n"
    "\n"
    "QUESTÃO 1\n"
    "Resolva a equação x + 2 = 5.\n"
    "A) 1\n"
    "B) 2\n"
    "C) 3\n"
    "D) 4\n"
    "E) 5\n"
    "\n"
    "QUESTÃO 2\n"
    "Qual é a velocidade média de um carro que percorre 100 km em 2 h?\n"
    "A) 25 km/h\n"
    "B) 50 km/h\n"
    "C) 75 km/h\n"
    "D) 100 km/h\n"
    "E) 200 km/h\n"
    "\n"
    "QUESTÃO 3\n"
    "Em que século ocorreu a independência do Brasil?\n"
    "A) XVII\n"
    "B) XVIII\n"
    "C) XIX\n"
    "D) XX\n"
    "E) XXI\n"
)

ANSWER_KEY_TEXT = "GABARITO\n1. C\n2. B\n3. C\n"


# Common test fixtures
@pytest.fixture
def vestibular_text() -> str:
    """Three well-formed vestibular questions (Matemática, Física, História)."""
    return VESTIBULAR_TEXT


@pytest.fixture
def answer_key_text() -> str:
    """Answer key for vestibular_text."""
    return ANSWER_KEY_TEXT


@pytest.fixture
def exam_file(tmp_path: Path) -> Path:
    """Write vestibular_text as a .txt exam document."""
    path = tmp_path / "fuvest_2019_prova.txt"
    path.write_text(VESTIBULAR_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def answer_key_file(tmp_path: Path) -> Path:
    """Write the matching answer key next to exam_file."""
    path = tmp_path / "fuvest_2019_prova_gabarito.txt"
    path.write_text(ANSWER_KEY_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def corpus(tmp_path: Path):
    """
    Build a small corpus: (exam_dir, answer_key_dir).

    Three vestibular exams; the first two have answer keys.
    """
    exam_dir = tmp_path / "provas"
    key_dir = tmp_path / "gabaritos"
    exam_dir.mkdir()
    key_dir.mkdir()

    for name in ("fuvest_2019_prova", "unicamp_2020_prova", "unesp_2021_prova"):
        (exam_dir / f"{name}.txt").write_text(VESTIBULAR_TEXT, encoding="utf-8")
    for name in ("fuvest_2019_prova", "unicamp_2020_prova"):
        (key_dir / f"{name}_gabarito.txt").write_text(ANSWER_KEY_TEXT, encoding="utf-8")

    return exam_dir, key_dir
