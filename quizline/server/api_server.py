"""FastAPI façade exposing question CRUD, result submission and statistics."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import math
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, model_validator
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from quizline.constants.network_constants import API_PREFIX, DEFAULT_HOST, DEFAULT_PORT
from quizline.core.models import Category
from quizline.core.services.document_store import DocumentStore
from quizline.gateway.base import QuestionValidationError, SubmissionValidationError
from quizline.gateway.direct import DirectStoreGateway

logger = logging.getLogger(__name__)

_INVALID_QUESTION = "Invalid question data"
_INVALID_SUBMISSION = "Invalid submission data"
_SERVER_ERROR = "Internal server error"


def _is_option_index(value: float, option_count: int | None) -> bool:
    if not math.isfinite(value) or value != int(value) or value < 0:
        return False
    return option_count is None or int(value) < option_count


class QuestionPayload(BaseModel):
    """Payload schema for creating a question; ``correct`` is the option index."""

    question: StrictStr = Field(min_length=1)
    options: list[StrictStr] = Field(min_length=1)
    correct: StrictInt | StrictFloat

    @model_validator(mode="after")
    def _correct_points_at_option(self) -> QuestionPayload:
        if not _is_option_index(self.correct, len(self.options)):
            raise ValueError("correct must be the index of one of the options.")
        return self

    def to_fields(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": self.options,
            "correctAnswer": str(int(self.correct)),
        }


class QuestionUpdatePayload(BaseModel):
    """Payload schema for partial question updates."""

    question: StrictStr | None = None
    options: list[StrictStr] | None = None
    correct: StrictInt | StrictFloat | None = None

    @model_validator(mode="after")
    def _correct_points_at_option(self) -> QuestionUpdatePayload:
        if self.correct is None:
            return self
        option_count = len(self.options) if self.options is not None else None
        if not _is_option_index(self.correct, option_count):
            raise ValueError("correct must be the index of one of the options.")
        return self

    def to_fields(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_none=True, exclude={"correct"})
        if self.correct is not None:
            fields["correctAnswer"] = str(int(self.correct))
        return fields


class SubmissionPayload(BaseModel):
    """Payload schema for a completed quiz."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    answers: list[dict[str, Any]]
    score: StrictInt | StrictFloat
    total_questions: StrictInt | StrictFloat = Field(alias="totalQuestions")
    completed_at: datetime | None = Field(default=None, alias="completedAt")


def _validation_message(path: str) -> str:
    if path.endswith("/submit"):
        return _INVALID_SUBMISSION
    if "/questions" in path:
        return _INVALID_QUESTION
    return "Invalid request"


def _server_error(action: str) -> HTTPException:
    logger.exception("Error %s", action)
    return HTTPException(status_code=500, detail=_SERVER_ERROR)


def _get_gateway_dependency(gateway: DirectStoreGateway):
    def dependency() -> DirectStoreGateway:
        return gateway

    return dependency


def create_api_app(store: DocumentStore, cors_origins: list[str] | None = None) -> FastAPI:
    """Create a FastAPI application serving the façade over ``store``."""
    app = FastAPI(title="Quizline API", version="0.1.0")
    gateway_dep = _get_gateway_dependency(DirectStoreGateway(store))

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse({"error": _validation_message(request.url.path)}, status_code=400)

    @app.get(f"{API_PREFIX}/quiz")
    async def get_quiz(
        category: Category | None = None,
        gateway: DirectStoreGateway = Depends(gateway_dep),
    ) -> dict[str, object]:
        try:
            questions = await gateway.get_questions(category)
        except Exception as exc:
            raise _server_error("getting questions") from exc
        return {"questions": [question.to_dict() for question in questions]}

    @app.post(f"{API_PREFIX}/questions")
    async def add_question(
        payload: QuestionPayload,
        category: Category | None = None,
        gateway: DirectStoreGateway = Depends(gateway_dep),
    ) -> dict[str, object]:
        try:
            question_id = await gateway.add_question(category, payload.to_fields())
        except QuestionValidationError as exc:
            raise HTTPException(status_code=400, detail=_INVALID_QUESTION) from exc
        except Exception as exc:
            raise _server_error("adding question") from exc
        return {"id": question_id, "success": True}

    @app.put(f"{API_PREFIX}/questions/{{question_id}}")
    async def update_question(
        question_id: str,
        payload: QuestionUpdatePayload,
        category: Category | None = None,
        gateway: DirectStoreGateway = Depends(gateway_dep),
    ) -> dict[str, object]:
        try:
            await gateway.update_question(category, question_id, payload.to_fields())
        except QuestionValidationError as exc:
            raise HTTPException(status_code=400, detail=_INVALID_QUESTION) from exc
        except Exception as exc:
            raise _server_error("updating question") from exc
        return {"success": True}

    @app.delete(f"{API_PREFIX}/questions/{{question_id}}")
    async def delete_question(
        question_id: str,
        category: Category | None = None,
        gateway: DirectStoreGateway = Depends(gateway_dep),
    ) -> dict[str, object]:
        try:
            await gateway.delete_question(category, question_id)
        except Exception as exc:
            raise _server_error("deleting question") from exc
        return {"success": True}

    @app.post(f"{API_PREFIX}/submit")
    async def submit_results(
        payload: SubmissionPayload,
        gateway: DirectStoreGateway = Depends(gateway_dep),
    ) -> dict[str, object]:
        try:
            record_id = await gateway.save_submission(
                payload.answers,
                payload.score,
                payload.total_questions,
                completed_at=payload.completed_at,
            )
        except SubmissionValidationError as exc:
            raise HTTPException(status_code=400, detail=_INVALID_SUBMISSION) from exc
        except Exception as exc:
            raise _server_error("saving quiz result") from exc
        return {"id": record_id, "success": True}

    @app.get(f"{API_PREFIX}/results")
    async def get_results(gateway: DirectStoreGateway = Depends(gateway_dep)) -> dict[str, object]:
        try:
            records = await gateway.get_quiz_results()
        except Exception as exc:
            raise _server_error("getting quiz results") from exc
        return {"results": [record.to_dict() for record in records]}

    @app.get(f"{API_PREFIX}/stats")
    async def get_stats(gateway: DirectStoreGateway = Depends(gateway_dep)) -> dict[str, object]:
        try:
            stats = await gateway.get_stats()
        except Exception as exc:
            raise _server_error("getting stats") from exc
        return stats.to_dict()

    @app.get(f"{API_PREFIX}/health")
    async def health() -> dict[str, str]:
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


def run_api_server(app: FastAPI, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve ``app`` with uvicorn until interrupted."""
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)
    server.run()
