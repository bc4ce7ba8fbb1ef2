"""Quiz-related constants shared across the state machine, gateways and server."""

UNANSWERED: str = "Not answered"

# Collection used by the HTTP façade when no category is given.
DEFAULT_QUESTION_COLLECTION: str = "questions"
RESULTS_COLLECTION: str = "quizResults"

SESSION_ID_PREFIX: str = "session_"
SESSION_ID_SUFFIX_LENGTH: int = 9
