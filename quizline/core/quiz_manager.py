"""Owns the quiz state of one session and connects it to a gateway."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging

from quizline.core import quiz_state
from quizline.core.models import Category, Question, QuizResult, Score
from quizline.core.quiz_state import QuizState
from quizline.gateway.base import QuizGateway

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade over the pure quiz-state transitions for a single active session.

    Each mutating call swaps in a new ``QuizState`` snapshot. The session is
    bound to one category; selecting another category starts over.
    """

    def __init__(self) -> None:
        self._state = QuizState()
        self._category: Category | None = None

    @property
    def state(self) -> QuizState:
        return self._state

    @property
    def category(self) -> Category | None:
        return self._category

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._state.questions

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def user_answers(self) -> Mapping[str, str]:
        return self._state.user_answers

    # --- Category binding ---

    def select_category(self, category: Category | str) -> None:
        """Bind the session to ``category``, discarding state if it changes."""
        category = Category.parse(category)
        if category != self._category:
            self._category = category
            self._state = QuizState()

    def start(self, category: Category | str, questions: Iterable[Question]) -> None:
        self.select_category(category)
        self.set_questions(questions)

    # --- State transitions ---

    def set_questions(self, questions: Iterable[Question]) -> None:
        self._state = quiz_state.set_questions(questions)

    def current_question(self) -> Question | None:
        return quiz_state.current_question(self._state)

    def progress(self) -> float:
        return quiz_state.progress(self._state)

    def is_last_question(self) -> bool:
        return quiz_state.is_last_question(self._state)

    def submit_answer(self, answer: str) -> None:
        self._state = quiz_state.submit_answer(self._state, answer)

    def next_question(self) -> None:
        self._state = quiz_state.next_question(self._state)

    def get_results(self) -> list[QuizResult]:
        return quiz_state.get_results(self._state)

    def get_score(self) -> Score:
        return quiz_state.get_score(self._state)

    def reset_quiz(self) -> None:
        self._state = quiz_state.reset_quiz(self._state)

    # --- Persistence ---

    async def load_category(self, gateway: QuizGateway, category: Category | str) -> list[Question]:
        """Fetch ``category``'s questions and start a session over them."""
        category = Category.parse(category)
        questions = await gateway.get_questions(category)
        self.start(category, questions)
        logger.info("Loaded %d questions for %s", len(questions), category.value)
        return questions

    async def save_results(self, gateway: QuizGateway) -> str:
        """Persist the current results and score; returns the stored record id."""
        results = self.get_results()
        score = self.get_score()
        record_id = await gateway.save_quiz_result(results, score.score, score.total)
        logger.info("Quiz results saved as %s (%d/%d)", record_id, score.score, score.total)
        return record_id
