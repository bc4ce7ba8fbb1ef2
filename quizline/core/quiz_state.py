"""Quiz progression as an immutable snapshot and pure transition functions.

Every transition returns a new ``QuizState``; nothing here raises. Empty
question sets, advancing past the end and answering with no current question
are no-ops or zero values, so callers can repeat any call safely.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from quizline.constants.quiz_constants import UNANSWERED
from quizline.core.models import Question, QuizResult, Score


def _frozen_answers(answers: Mapping[str, str] | None = None) -> Mapping[str, str]:
    return MappingProxyType(dict(answers or {}))


@dataclass(frozen=True, slots=True)
class QuizState:
    """Snapshot of one quiz session.

    Attributes:
        questions: Questions in load order.
        current_index: Position of the current question (0 when empty).
        user_answers: Submitted answers keyed by ``str(question.id)``.
    """

    questions: tuple[Question, ...] = ()
    current_index: int = 0
    user_answers: Mapping[str, str] = field(default_factory=_frozen_answers)

    @property
    def total(self) -> int:
        return len(self.questions)


def set_questions(questions: Iterable[Question]) -> QuizState:
    """Start a fresh session over ``questions``: first position, no answers."""
    return QuizState(questions=tuple(questions))


def current_question(state: QuizState) -> Question | None:
    if 0 <= state.current_index < state.total:
        return state.questions[state.current_index]
    return None


def progress(state: QuizState) -> float:
    """Percentage of the way through the quiz, counting the current question."""
    if not state.total:
        return 0
    return (state.current_index + 1) / state.total * 100


def is_last_question(state: QuizState) -> bool:
    return state.current_index == state.total - 1


def submit_answer(state: QuizState, answer: str) -> QuizState:
    """Record ``answer`` for the current question; the latest answer wins."""
    question = current_question(state)
    if question is None:
        return state
    answers = dict(state.user_answers)
    answers[str(question.id)] = answer
    return replace(state, user_answers=_frozen_answers(answers))


def next_question(state: QuizState) -> QuizState:
    """Advance one position; saturates on the last question."""
    if not state.total or is_last_question(state):
        return state
    return replace(state, current_index=state.current_index + 1)


def get_results(state: QuizState) -> list[QuizResult]:
    results: list[QuizResult] = []
    for question in state.questions:
        answer = state.user_answers.get(str(question.id))
        results.append(
            QuizResult(
                question=question.question,
                user_answer=answer if answer is not None else UNANSWERED,
                correct_answer=question.correct_answer,
                is_correct=answer == question.correct_answer,
            )
        )
    return results


def get_score(state: QuizState) -> Score:
    results = get_results(state)
    return Score(score=sum(1 for result in results if result.is_correct), total=len(results))


def reset_quiz(state: QuizState) -> QuizState:
    """Back to the first question with no answers, keeping the loaded questions."""
    return QuizState(questions=state.questions)
