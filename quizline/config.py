"""Environment-supplied settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os

from dotenv import load_dotenv

from quizline.constants.network_constants import (
    DEFAULT_API_URL_DEV,
    DEFAULT_CORS_ORIGINS,
    DEFAULT_HOST,
    DEFAULT_PORT,
)

STORE_BACKENDS = ("memory", "firestore")
GATEWAY_TRANSPORTS = ("direct", "http")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class Settings:
    """Runtime configuration; ``production`` selects which façade URL is used."""

    production: bool = False
    api_url: str = DEFAULT_API_URL_DEV
    store_backend: str = "memory"
    gateway_transport: str = "direct"
    firestore_project_id: str | None = None
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build ``Settings`` from ``env`` (default: the process environment plus ``.env``)."""
    if env is None:
        load_dotenv()
        env = os.environ

    production = env.get("QUIZLINE_PRODUCTION", "").strip().lower() in _TRUE_VALUES
    if production:
        api_url = env.get("QUIZLINE_API_URL", "")
        if not api_url:
            raise ValueError("QUIZLINE_API_URL must be set when QUIZLINE_PRODUCTION is enabled.")
    else:
        api_url = env.get("QUIZLINE_API_URL_DEV", DEFAULT_API_URL_DEV)

    store_backend = env.get("QUIZLINE_STORE", "memory").strip().lower()
    if store_backend not in STORE_BACKENDS:
        raise ValueError(f"QUIZLINE_STORE must be one of {', '.join(STORE_BACKENDS)}.")

    gateway_transport = env.get("QUIZLINE_GATEWAY", "direct").strip().lower()
    if gateway_transport not in GATEWAY_TRANSPORTS:
        raise ValueError(f"QUIZLINE_GATEWAY must be one of {', '.join(GATEWAY_TRANSPORTS)}.")

    raw_origins = env.get("QUIZLINE_CORS_ORIGINS")
    cors_origins = (
        [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        if raw_origins
        else list(DEFAULT_CORS_ORIGINS)
    )

    raw_port = env.get("QUIZLINE_PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError as exc:
        raise ValueError(f"QUIZLINE_PORT must be an integer, got {raw_port!r}.") from exc

    return Settings(
        production=production,
        api_url=api_url,
        store_backend=store_backend,
        gateway_transport=gateway_transport,
        firestore_project_id=env.get("FIRESTORE_PROJECT_ID") or None,
        cors_origins=cors_origins,
        log_level=env.get("QUIZLINE_LOG_LEVEL", "INFO"),
        host=env.get("QUIZLINE_HOST", DEFAULT_HOST),
        port=port,
    )
