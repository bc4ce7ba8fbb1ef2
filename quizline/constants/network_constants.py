"""Network configuration constants for the quiz service."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
API_PREFIX: str = "/api"

DEFAULT_API_URL_DEV: str = "http://localhost:8000/api"
DEFAULT_CORS_ORIGINS: tuple[str, ...] = (
    "http://localhost:4200",
    "http://localhost:56359",
)
