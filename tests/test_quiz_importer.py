"""Tests for the quiz text import and export format."""

from __future__ import annotations

from pathlib import Path

import pytest

from quizline.core.quiz_exporter import save_questions_to_file, serialize_questions
from quizline.core.quiz_importer import QuizImportError, load_questions_from_file, parse_quiz_text

SAMPLE_PATH = Path(__file__).resolve().parents[1] / "quizline" / "data" / "sample_questions.txt"

TWO_QUESTIONS = """\
Q: What is the capital of France?
A: London
B: Paris
CORRECT: b

---

Q: Which number is prime?
It is the only even one.
A: 2
B: 4
C: 6
CORRECT: A
"""


def test_parse_maps_correct_letter_to_index_token():
    questions = parse_quiz_text(TWO_QUESTIONS)

    assert [question.id for question in questions] == [1, 2]
    assert questions[0].options == ("London", "Paris")
    assert questions[0].correct_answer == "1"
    assert questions[1].question == "Which number is prime?\nIt is the only even one."
    assert questions[1].correct_option_text() == "2"


def test_bundled_sample_file_loads():
    imported = load_questions_from_file(SAMPLE_PATH)

    assert len(imported.questions) == 5
    assert imported.questions[0].correct_option_text() == "Paris"


@pytest.mark.parametrize(
    "text,message",
    [
        ("Q: Q?\nA: one\nB: two\n", "CORRECT is required"),
        ("Q: Q?\nA: one\nCORRECT: A\n", "options must be lettered"),
        ("Q: Q?\nA: one\nC: three\nCORRECT: A\n", "options must be lettered"),
        ("Q: Q?\nA: one\nB: two\nCORRECT: C\n", "CORRECT must be one of A, B"),
        ("A: one\nB: two\nCORRECT: A\n", "question text missing"),
        ("Stray line\nQ: Q?\nA: one\nB: two\nCORRECT: A\n", "outside of a known section"),
    ],
)
def test_malformed_blocks_are_rejected(text, message):
    with pytest.raises(QuizImportError, match=message):
        parse_quiz_text(text)


def test_empty_file_is_rejected(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("\n---\n", encoding="utf-8")

    with pytest.raises(QuizImportError):
        load_questions_from_file(path)


def test_export_then_import_preserves_questions(tmp_path, sample_questions):
    path = tmp_path / "nested" / "quiz.txt"

    save_questions_to_file(path, sample_questions)
    reloaded = load_questions_from_file(path).questions

    assert [question.question for question in reloaded] == [q.question for q in sample_questions]
    assert [question.options for question in reloaded] == [q.options for q in sample_questions]
    assert [question.correct_answer for question in reloaded] == ["1", "0", "2"]


def test_serialize_uses_letters_and_separators(sample_questions):
    text = serialize_questions(sample_questions[:2])

    assert text == (
        "Q: What is 2 + 2?\nA: 3\nB: 4\nC: 5\nCORRECT: B"
        "\n\n---\n\n"
        "Q: Largest ocean?\nA: Pacific\nB: Atlantic\nCORRECT: A\n"
    )


def test_export_rejects_empty_quiz(tmp_path):
    with pytest.raises(ValueError):
        save_questions_to_file(tmp_path / "quiz.txt", [])
