"""Shared fixtures for the quizline test suite."""

from __future__ import annotations

import pytest

from quizline.core.models import Question
from quizline.core.services.document_store import InMemoryDocumentStore
from quizline.gateway.direct import DirectStoreGateway


@pytest.fixture
def sample_questions() -> list[Question]:
    """Three questions whose correct answers are options B, A and C."""
    return [
        Question(id="q1", question="What is 2 + 2?", options=("3", "4", "5"), correct_answer="1"),
        Question(id="q2", question="Largest ocean?", options=("Pacific", "Atlantic"), correct_answer="0"),
        Question(id="q3", question="Red planet?", options=("Venus", "Earth", "Mars"), correct_answer="2"),
    ]


@pytest.fixture
def question_fields() -> dict[str, object]:
    return {
        "question": "What is the capital of France?",
        "options": ["London", "Berlin", "Paris", "Madrid"],
        "correctAnswer": "2",
    }


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def direct_gateway(memory_store: InMemoryDocumentStore) -> DirectStoreGateway:
    return DirectStoreGateway(memory_store)
