"""Tests for the session owner wrapping the quiz state."""

from __future__ import annotations

import pytest

from quizline.constants.quiz_constants import RESULTS_COLLECTION
from quizline.core.models import Category
from quizline.core.quiz_manager import QuizManager


def test_select_category_resets_on_change(sample_questions):
    manager = QuizManager()
    manager.start(Category.MS_WORD, sample_questions)
    manager.submit_answer("1")
    manager.next_question()

    manager.select_category("ms-word")
    assert manager.current_index == 1
    assert manager.user_answers == {"q1": "1"}

    manager.select_category(Category.MS_EXCEL)
    assert manager.category is Category.MS_EXCEL
    assert manager.questions == ()
    assert manager.current_index == 0


def test_unknown_category_is_rejected():
    manager = QuizManager()

    with pytest.raises(ValueError):
        manager.select_category("ms-access")


def test_reset_quiz_keeps_category_and_questions(sample_questions):
    manager = QuizManager()
    manager.start("ms-powerpoint", sample_questions)
    manager.submit_answer("0")

    manager.reset_quiz()

    assert manager.category is Category.MS_POWERPOINT
    assert len(manager.questions) == 3
    assert manager.get_score().score == 0


async def test_load_category_and_save_results(direct_gateway, memory_store, question_fields):
    await direct_gateway.add_question(Category.MS_EXCEL, question_fields)
    manager = QuizManager()

    questions = await manager.load_category(direct_gateway, "ms-excel")
    manager.submit_answer("2")
    record_id = await manager.save_results(direct_gateway)

    assert len(questions) == 1
    assert manager.is_last_question()
    stored = await memory_store.get_document(RESULTS_COLLECTION, record_id)
    assert stored.data["score"] == 1
    assert stored.data["totalQuestions"] == 1
    assert stored.data["results"][0]["isCorrect"] is True
