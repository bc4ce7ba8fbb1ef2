"""Persistence gateways: direct document-store access or the HTTP façade."""

from .base import (
    QuestionValidationError,
    QuizGateway,
    SubmissionValidationError,
    generate_session_id,
)
from .direct import DirectStoreGateway
from .factory import create_gateway, create_store
from .http import HttpFacadeGateway

__all__ = [
    "DirectStoreGateway",
    "HttpFacadeGateway",
    "QuestionValidationError",
    "QuizGateway",
    "SubmissionValidationError",
    "create_gateway",
    "create_store",
    "generate_session_id",
]
