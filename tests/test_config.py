"""Tests for environment-driven settings and the gateway factory."""

from __future__ import annotations

import pytest

from quizline.config import load_settings
from quizline.constants.network_constants import DEFAULT_API_URL_DEV, DEFAULT_CORS_ORIGINS, DEFAULT_PORT
from quizline.core.services.document_store import InMemoryDocumentStore
from quizline.gateway import DirectStoreGateway, HttpFacadeGateway, create_gateway, create_store


def test_defaults():
    settings = load_settings({})

    assert not settings.production
    assert settings.api_url == DEFAULT_API_URL_DEV
    assert settings.store_backend == "memory"
    assert settings.gateway_transport == "direct"
    assert settings.cors_origins == list(DEFAULT_CORS_ORIGINS)
    assert settings.port == DEFAULT_PORT


def test_production_uses_production_url():
    settings = load_settings(
        {
            "QUIZLINE_PRODUCTION": "true",
            "QUIZLINE_API_URL": "https://quiz.example.com/api",
            "QUIZLINE_API_URL_DEV": "http://localhost:9000/api",
        }
    )

    assert settings.production
    assert settings.api_url == "https://quiz.example.com/api"


def test_production_requires_url():
    with pytest.raises(ValueError, match="QUIZLINE_API_URL"):
        load_settings({"QUIZLINE_PRODUCTION": "1"})


def test_overrides_are_parsed():
    settings = load_settings(
        {
            "QUIZLINE_STORE": "Firestore",
            "QUIZLINE_GATEWAY": "http",
            "FIRESTORE_PROJECT_ID": "quiz-project",
            "QUIZLINE_CORS_ORIGINS": "http://a.test, http://b.test,",
            "QUIZLINE_PORT": "9001",
        }
    )

    assert settings.store_backend == "firestore"
    assert settings.gateway_transport == "http"
    assert settings.firestore_project_id == "quiz-project"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.port == 9001


@pytest.mark.parametrize(
    "env",
    [{"QUIZLINE_STORE": "sqlite"}, {"QUIZLINE_GATEWAY": "grpc"}, {"QUIZLINE_PORT": "eighty"}],
)
def test_invalid_values_raise(env):
    with pytest.raises(ValueError):
        load_settings(env)


async def test_factory_builds_configured_gateway():
    memory_settings = load_settings({})
    http_settings = load_settings({"QUIZLINE_GATEWAY": "http"})

    assert isinstance(create_store(memory_settings), InMemoryDocumentStore)
    assert isinstance(create_gateway(memory_settings), DirectStoreGateway)

    gateway = create_gateway(http_settings)
    assert isinstance(gateway, HttpFacadeGateway)
    await gateway.aclose()
