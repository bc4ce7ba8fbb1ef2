"""Gateway that talks to a document store directly."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
import logging
import math
from typing import Any

from quizline.constants.quiz_constants import DEFAULT_QUESTION_COLLECTION, RESULTS_COLLECTION
from quizline.core.models import Category, Question, QuizResult, QuizSessionRecord, QuizStats
from quizline.core.services.document_store import DocumentStore
from quizline.gateway.base import (
    QuestionValidationError,
    QuizGateway,
    generate_session_id,
    is_option_token,
    question_collection,
    validate_question_data,
    validate_question_update,
    validate_submission_totals,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DirectStoreGateway(QuizGateway):
    """Category-scoped CRUD over a ``DocumentStore``.

    The HTTP façade serves its endpoints through this class as well, so both
    transports share one set of timestamps, ids and record shapes.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def store(self) -> DocumentStore:
        return self._store

    async def get_questions(self, category: Category | None) -> list[Question]:
        collection = question_collection(category)
        documents = await self._store.list_documents(collection)
        return [Question.from_document(document.id, document.data) for document in documents]

    async def add_question(self, category: Category | None, data: Mapping[str, Any] | Question) -> str:
        fields = validate_question_data(data)
        collection = question_collection(category)
        now = _utcnow()
        fields.update(createdAt=now, updatedAt=now)
        question_id = await self._store.add_document(collection, fields)
        logger.info("Added question %s to %s", question_id, collection)
        return question_id

    async def update_question(
        self, category: Category | None, question_id: str, data: Mapping[str, Any]
    ) -> None:
        fields = validate_question_update(data)
        collection = question_collection(category)
        if "correctAnswer" in fields and "options" not in fields:
            stored = await self._store.get_document(collection, str(question_id))
            if not is_option_token(fields["correctAnswer"], len(stored.data.get("options") or ())):
                raise QuestionValidationError("correctAnswer must be the index of one of the stored options.")
        fields["updatedAt"] = _utcnow()
        await self._store.update_document(collection, str(question_id), fields)

    async def delete_question(self, category: Category | None, question_id: str) -> None:
        await self._store.delete_document(question_collection(category), str(question_id))

    async def save_quiz_result(self, results: Sequence[QuizResult], score: int, total: int) -> str:
        validate_submission_totals(score, total)
        return await self.save_submission([result.to_dict() for result in results], score, total)

    async def save_submission(
        self,
        answers: Sequence[Mapping[str, Any]],
        score: float,
        total: float,
        completed_at: datetime | None = None,
    ) -> str:
        """Append a session record built from already-serialized answers."""
        validate_submission_totals(score, total)
        now = _utcnow()
        record = {
            "sessionId": generate_session_id(),
            "results": [dict(answer) for answer in answers],
            "score": score,
            "totalQuestions": total,
            "completedAt": completed_at or now,
            "submittedAt": now,
        }
        record_id = await self._store.add_document(RESULTS_COLLECTION, record)
        logger.info("Saved quiz result %s (%s/%s)", record["sessionId"], score, total)
        return record_id

    async def get_quiz_results(self) -> list[QuizSessionRecord]:
        documents = await self._store.list_documents(RESULTS_COLLECTION)
        return [QuizSessionRecord.from_document(document.id, document.data) for document in documents]

    async def get_stats(self) -> QuizStats:
        total_questions = 0
        for collection in _question_collections():
            total_questions += len(await self._store.list_documents(collection))

        results = await self._store.list_documents(RESULTS_COLLECTION)
        total_score = sum(_numeric(document.data.get("score")) for document in results)
        average = total_score / len(results) if results else 0
        return QuizStats(
            total_questions=total_questions,
            total_results=len(results),
            average_score=_round_half_up(average),
        )


def _question_collections() -> Iterable[str]:
    yield DEFAULT_QUESTION_COLLECTION
    for category in Category:
        yield category.collection


def _round_half_up(value: float) -> float:
    """Two decimals, halves rounded up."""
    return math.floor(value * 100 + 0.5) / 100


def _numeric(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return value
