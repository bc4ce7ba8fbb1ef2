"""Gateway that goes through the HTTP façade."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
import logging
from typing import Any

import httpx

from quizline.core.models import Category, Question, QuizResult, QuizSessionRecord, QuizStats
from quizline.gateway.base import (
    QuizGateway,
    validate_question_data,
    validate_question_update,
    validate_submission_totals,
)

logger = logging.getLogger(__name__)


def _facade_question_body(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Translate document fields into the façade's ``{question, options, correct}`` body."""
    body = {key: value for key, value in fields.items() if key != "correctAnswer"}
    if "correctAnswer" in fields:
        body["correct"] = int(fields["correctAnswer"])
    return body


class HttpFacadeGateway(QuizGateway):
    """Same contract as the direct gateway, one HTTP request per call.

    ``base_url`` is the façade root including its ``/api`` prefix. Non-2xx
    responses raise ``httpx.HTTPStatusError``.
    """

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None) -> None:
        self._client = client if client is not None else httpx.AsyncClient(base_url=base_url)

    async def __aenter__(self) -> HttpFacadeGateway:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_questions(self, category: Category | None) -> list[Question]:
        payload = await self._request("GET", "/quiz", params=self._category_params(category))
        return [Question.from_document(item.get("id"), item) for item in payload.get("questions", [])]

    async def add_question(self, category: Category | None, data: Mapping[str, Any] | Question) -> str:
        body = _facade_question_body(validate_question_data(data))
        payload = await self._request("POST", "/questions", json=body, params=self._category_params(category))
        return str(payload["id"])

    async def update_question(
        self, category: Category | None, question_id: str, data: Mapping[str, Any]
    ) -> None:
        body = _facade_question_body(validate_question_update(data))
        await self._request(
            "PUT", f"/questions/{question_id}", json=body, params=self._category_params(category)
        )

    async def delete_question(self, category: Category | None, question_id: str) -> None:
        await self._request("DELETE", f"/questions/{question_id}", params=self._category_params(category))

    async def save_quiz_result(self, results: Sequence[QuizResult], score: int, total: int) -> str:
        validate_submission_totals(score, total)
        body = {
            "answers": [result.to_dict() for result in results],
            "score": score,
            "totalQuestions": total,
            "completedAt": datetime.now(timezone.utc).isoformat(),
        }
        payload = await self._request("POST", "/submit", json=body)
        return str(payload["id"])

    async def get_quiz_results(self) -> list[QuizSessionRecord]:
        payload = await self._request("GET", "/results")
        return [QuizSessionRecord.from_document(item.get("id"), item) for item in payload.get("results", [])]

    async def get_stats(self) -> QuizStats:
        return QuizStats.from_dict(await self._request("GET", "/stats"))

    async def health_check(self) -> dict[str, Any]:
        return await self._request("GET", "/health")

    @staticmethod
    def _category_params(category: Category | None) -> dict[str, str] | None:
        if category is None:
            return None
        return {"category": Category.parse(category).value}

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            logger.warning("%s %s failed with status %s", method, path, response.status_code)
        response.raise_for_status()
        return response.json()
