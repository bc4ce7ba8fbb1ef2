"""Persistence gateway contract and the input-shape checks shared by its transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
import math
import random
import string
import time
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, model_validator

from quizline.constants.quiz_constants import (
    DEFAULT_QUESTION_COLLECTION,
    SESSION_ID_PREFIX,
    SESSION_ID_SUFFIX_LENGTH,
)
from quizline.core.models import Category, Question, QuizResult, QuizSessionRecord, QuizStats

_BASE36 = string.digits + string.ascii_lowercase


class QuestionValidationError(ValueError):
    """Question data is missing required fields or has the wrong shape."""


class SubmissionValidationError(ValueError):
    """A quiz result submission is missing fields or has non-numeric totals."""


def is_option_token(token: str, option_count: int | None = None) -> bool:
    """Return True when ``token`` is a canonical option index (``"0"``, ``"1"``...)."""
    if not token.isdigit() or token != str(int(token)):
        return False
    return option_count is None or int(token) < option_count


class QuestionData(BaseModel):
    """Full question fields as written on create."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    question: StrictStr = Field(min_length=1)
    options: list[StrictStr] = Field(min_length=1)
    correct_answer: StrictStr = Field(alias="correctAnswer")

    @model_validator(mode="after")
    def _correct_answer_points_at_option(self) -> QuestionData:
        if not is_option_token(self.correct_answer, len(self.options)):
            raise ValueError("correctAnswer must be the index of one of the options.")
        return self


class QuestionUpdate(BaseModel):
    """Partial question fields as merged on update."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    question: Annotated[StrictStr, Field(min_length=1)] | None = None
    options: Annotated[list[StrictStr], Field(min_length=1)] | None = None
    correct_answer: StrictStr | None = Field(default=None, alias="correctAnswer")

    @model_validator(mode="after")
    def _correct_answer_is_token(self) -> QuestionUpdate:
        if self.correct_answer is None:
            return self
        option_count = len(self.options) if self.options is not None else None
        if not is_option_token(self.correct_answer, option_count):
            raise ValueError("correctAnswer must be the index of one of the options.")
        return self


def validate_question_data(data: Mapping[str, Any] | Question) -> dict[str, Any]:
    """Return the document fields for a new question or raise ``QuestionValidationError``."""
    if isinstance(data, Question):
        data = data.to_document()
    try:
        return QuestionData.model_validate(data).model_dump(by_alias=True)
    except ValidationError as exc:
        raise QuestionValidationError(str(exc)) from exc


def validate_question_update(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return the fields to merge into a question or raise ``QuestionValidationError``."""
    try:
        return QuestionUpdate.model_validate(data).model_dump(by_alias=True, exclude_none=True)
    except ValidationError as exc:
        raise QuestionValidationError(str(exc)) from exc


def validate_submission_totals(score: Any, total: Any) -> None:
    for name, value in (("score", score), ("total", total)):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise SubmissionValidationError(f"{name} must be a finite number, got {value!r}.")


def question_collection(category: Category | str | None) -> str:
    """Collection holding ``category``'s questions; the façade's default when ``None``."""
    if category is None:
        return DEFAULT_QUESTION_COLLECTION
    return Category.parse(category).collection


def generate_session_id() -> str:
    """``session_<epoch ms>_<9 base36 chars>``; unique enough, not collision-free."""
    suffix = "".join(random.choices(_BASE36, k=SESSION_ID_SUFFIX_LENGTH))
    return f"{SESSION_ID_PREFIX}{int(time.time() * 1000)}_{suffix}"


class QuizGateway(ABC):
    """Reads and writes questions and quiz results for the quiz flow.

    Validation failures raise before any store or network call. Store and
    transport errors reach the caller unchanged; nothing is retried.
    """

    @abstractmethod
    async def get_questions(self, category: Category | None) -> list[Question]:
        """Return a category's questions in the order the store reports them."""

    @abstractmethod
    async def add_question(self, category: Category | None, data: Mapping[str, Any] | Question) -> str:
        """Create a question and return its id."""

    @abstractmethod
    async def update_question(
        self, category: Category | None, question_id: str, data: Mapping[str, Any]
    ) -> None:
        """Merge ``data`` into an existing question."""

    @abstractmethod
    async def delete_question(self, category: Category | None, question_id: str) -> None:
        """Remove a question."""

    @abstractmethod
    async def save_quiz_result(self, results: Sequence[QuizResult], score: int, total: int) -> str:
        """Append one session record and return its id."""

    @abstractmethod
    async def get_quiz_results(self) -> list[QuizSessionRecord]:
        """Return every stored session record."""

    @abstractmethod
    async def get_stats(self) -> QuizStats:
        """Return question/result counts and the average score."""

    async def aclose(self) -> None:
        """Release transport resources."""
