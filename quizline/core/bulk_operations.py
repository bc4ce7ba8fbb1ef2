"""Bulk question import and delete through a gateway.

Every record is attempted on its own; a failing record is logged and counted
and the remaining records are still processed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from quizline.core.models import Category, Question
from quizline.gateway.base import QuizGateway

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BulkError:
    """One record that could not be written."""

    position: int
    label: str
    message: str


@dataclass(slots=True)
class BulkSummary:
    """Outcome of a bulk operation."""

    succeeded: list[str] = field(default_factory=list)
    errors: list[BulkError] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.errors)

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count

    def describe(self) -> str:
        return f"{self.success_count} succeeded, {self.failure_count} failed"


async def bulk_add_questions(
    gateway: QuizGateway,
    category: Category | None,
    questions: Iterable[Question | Mapping[str, Any]],
) -> BulkSummary:
    summary = BulkSummary()
    for position, question in enumerate(questions, start=1):
        label = question.question if isinstance(question, Question) else str(question.get("question", ""))
        try:
            question_id = await gateway.add_question(category, question)
        except Exception as exc:
            logger.warning("Could not add question %d (%s): %s", position, label, exc)
            summary.errors.append(BulkError(position=position, label=label, message=str(exc)))
        else:
            summary.succeeded.append(question_id)
    logger.info("Bulk add finished: %s", summary.describe())
    return summary


async def bulk_delete_questions(
    gateway: QuizGateway,
    category: Category | None,
    question_ids: Iterable[str],
) -> BulkSummary:
    summary = BulkSummary()
    for position, question_id in enumerate(question_ids, start=1):
        try:
            await gateway.delete_question(category, question_id)
        except Exception as exc:
            logger.warning("Could not delete question %s: %s", question_id, exc)
            summary.errors.append(BulkError(position=position, label=str(question_id), message=str(exc)))
        else:
            summary.succeeded.append(str(question_id))
    logger.info("Bulk delete finished: %s", summary.describe())
    return summary
