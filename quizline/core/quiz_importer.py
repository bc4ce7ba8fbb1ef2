"""Utilities for importing questions from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Question text. Additional lines until the next marker are treated
       as part of the question.
    A: First option text
    B: Second option text
    ...           (two to six options, lettered A-F in order)
    CORRECT: A|B|C|D|E|F

Example:

    Q: What is the capital of France?
    A: London
    B: Berlin
    C: Paris
    D: Madrid
    CORRECT: C

The CORRECT letter is stored as the option index token ("C" becomes "2").
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import groupby
from pathlib import Path
import re

from quizline.core.models import Question

OPTION_LETTERS = ("A", "B", "C", "D", "E", "F")
MIN_OPTIONS = 2

_MARKER = re.compile(r"^(Q|[A-F]|CORRECT)\s*:\s*(.*)$", re.IGNORECASE)


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path
    questions: list[Question]


def load_questions_from_file(file_path: Path) -> ImportedQuiz:
    source_path = Path(file_path)
    questions = parse_quiz_text(source_path.read_text(encoding="utf-8"))
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=source_path, questions=questions)


def parse_quiz_text(text: str) -> list[Question]:
    """Parse every block in ``text``; ids are the 1-based block positions."""
    return [_parse_block(lines, position) for position, lines in enumerate(_iter_blocks(text), start=1)]


def _is_separator(line: str) -> bool:
    return line.strip() in ("", "---")


def _iter_blocks(text: str) -> Iterator[list[str]]:
    for separator, lines in groupby(text.splitlines(), key=_is_separator):
        if not separator:
            yield [line.strip() for line in lines]


def _parse_block(lines: list[str], position: int) -> Question:
    sections: dict[str, list[str]] = {}
    current: str | None = None

    for line in lines:
        match = _MARKER.match(line)
        if match:
            current = match.group(1).upper()
            sections[current] = [match.group(2).strip()]
        elif current in ("Q", *OPTION_LETTERS):
            sections[current].append(line)
        else:
            raise QuizImportError(f"Question {position}: text outside of a known section: '{line}'.")

    question_text = "\n".join(sections.pop("Q", [])).strip()
    if not question_text:
        raise QuizImportError(f"Question {position}: question text missing (Q: ...)")

    correct_letter = " ".join(sections.pop("CORRECT", [])).strip().upper() or None
    letters = OPTION_LETTERS[: len(sections)]
    if len(sections) < MIN_OPTIONS or set(sections) != set(letters):
        raise QuizImportError(
            f"Question {position}: options must be lettered A, B, ... in order, at least {MIN_OPTIONS}."
        )

    options = tuple("\n".join(sections[letter]).strip() for letter in letters)
    if not all(options):
        raise QuizImportError(f"Question {position}: option text cannot be empty.")

    if correct_letter is None:
        raise QuizImportError(f"Question {position}: CORRECT is required.")
    if correct_letter not in letters:
        raise QuizImportError(f"Question {position}: CORRECT must be one of {', '.join(letters)}.")

    return Question(
        id=position,
        question=question_text,
        options=options,
        correct_answer=str(letters.index(correct_letter)),
    )
