"""Utilities for exporting questions to the plain-text format used for imports."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from quizline.core.models import Question
from quizline.core.quiz_importer import OPTION_LETTERS


def save_questions_to_file(file_path: Path, questions: Sequence[Question]) -> None:
    """Persist the provided questions to disk in the text import format."""

    if not questions:
        raise ValueError("Cannot export an empty quiz.")

    file_path = Path(file_path).resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(serialize_questions(questions), encoding="utf-8")


def serialize_questions(questions: Sequence[Question]) -> str:
    blocks = [_serialize_question(question) for question in questions]
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_question(question: Question) -> str:
    if len(question.options) > len(OPTION_LETTERS):
        raise ValueError(f"Question {question.id} has more than {len(OPTION_LETTERS)} options.")

    lines: list[str] = []

    question_lines = question.question.splitlines() or [question.question]
    lines.append(f"Q: {question_lines[0]}")
    lines.extend(question_lines[1:])

    for letter, option_text in zip(OPTION_LETTERS, question.options):
        option_lines = option_text.splitlines() or [option_text]
        lines.append(f"{letter}: {option_lines[0]}")
        lines.extend(option_lines[1:])

    if question.correct_answer.isdigit() and int(question.correct_answer) < len(question.options):
        lines.append(f"CORRECT: {OPTION_LETTERS[int(question.correct_answer)]}")

    return "\n".join(lines)
