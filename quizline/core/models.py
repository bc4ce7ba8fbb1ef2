"""Domain models for the quiz application."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from quizline.constants.quiz_constants import UNANSWERED


class Category(str, Enum):
    """Independent question pools; each value names its store collection."""

    MS_WORD = "ms-word"
    MS_EXCEL = "ms-excel"
    MS_POWERPOINT = "ms-powerpoint"

    @property
    def collection(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | Category) -> Category:
        """Return the category for ``value`` or raise ``ValueError``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError) as exc:
            raise ValueError(f"Unknown category: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question.

    ``correct_answer`` is the stringified zero-based index of the correct
    option and is compared to submitted answers by exact string equality.
    """

    id: str | int
    question: str
    options: tuple[str, ...]
    correct_answer: str

    @classmethod
    def from_document(cls, document_id: str | int, data: Mapping[str, Any]) -> Question:
        """Build a question from a stored document.

        Documents written through the HTTP façade carry a numeric ``correct``
        field instead of ``correctAnswer``; both read back as the index token.
        """
        if data.get("correctAnswer") is not None:
            correct_answer = str(data["correctAnswer"])
        elif isinstance(data.get("correct"), (int, float)) and not isinstance(data.get("correct"), bool):
            correct_answer = str(int(data["correct"]))
        else:
            correct_answer = ""
        return cls(
            id=document_id,
            question=str(data.get("question", "")),
            options=tuple(str(option) for option in data.get("options") or ()),
            correct_answer=correct_answer,
        )

    def to_document(self) -> dict[str, Any]:
        """Return the stored field set (without the id)."""
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
        }

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.to_document()}

    def correct_option_text(self) -> str | None:
        """Return the option the correct-answer token points at, if any."""
        if self.correct_answer.isdigit():
            index = int(self.correct_answer)
            if index < len(self.options):
                return self.options[index]
        return None


@dataclass(frozen=True, slots=True)
class QuizResult:
    """Outcome for one question, derived at result-generation time."""

    question: str
    user_answer: str
    correct_answer: str
    is_correct: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QuizResult:
        return cls(
            question=str(data.get("question", "")),
            user_answer=str(data.get("userAnswer", UNANSWERED)),
            correct_answer=str(data.get("correctAnswer", "")),
            is_correct=bool(data.get("isCorrect", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "userAnswer": self.user_answer,
            "correctAnswer": self.correct_answer,
            "isCorrect": self.is_correct,
        }


@dataclass(frozen=True, slots=True)
class Score:
    """Aggregate score: number of correct results out of ``total``."""

    score: int
    total: int

    def to_dict(self) -> dict[str, int]:
        return {"score": self.score, "total": self.total}


@dataclass(slots=True)
class QuizSessionRecord:
    """Append-only record of a completed quiz session."""

    session_id: str
    results: list[QuizResult]
    score: float
    total_questions: float
    completed_at: datetime | None
    id: str | None = None

    @classmethod
    def from_document(cls, document_id: str, data: Mapping[str, Any]) -> QuizSessionRecord:
        raw_results = data.get("results")
        if raw_results is None:
            raw_results = data.get("answers") or []
        return cls(
            id=document_id,
            session_id=str(data.get("sessionId", "")),
            results=[QuizResult.from_dict(item) for item in raw_results if isinstance(item, Mapping)],
            score=data.get("score") or 0,
            total_questions=data.get("totalQuestions") or 0,
            completed_at=_parse_timestamp(data.get("completedAt")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sessionId": self.session_id,
            "results": [result.to_dict() for result in self.results],
            "score": self.score,
            "totalQuestions": self.total_questions,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }


@dataclass(frozen=True, slots=True)
class QuizStats:
    """Aggregate statistics across every stored question and session."""

    total_questions: int
    total_results: int
    average_score: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QuizStats:
        return cls(
            total_questions=int(data.get("totalQuestions", 0)),
            total_results=int(data.get("totalResults", 0)),
            average_score=float(data.get("averageScore", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalQuestions": self.total_questions,
            "totalResults": self.total_results,
            "averageScore": self.average_score,
        }


@dataclass(slots=True)
class StoredDocument:
    """A document as returned by a document store: its key plus its fields."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None
