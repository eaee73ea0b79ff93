"""Configuration management for the Qdrant SDK.

Loads environment variables using pydantic-settings for type-safe configuration.
Connection address, credentials, and the client-wide gRPC deadline are defined here.
"""

import os
from functools import lru_cache
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_LOADED = False
_ENV_LOCK = Lock()

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_env_file() -> str | None:
    """Locate the .env file regardless of the current working directory.

    Preference order:
        1. QDRANT_SDK_ENV_FILE environment variable (explicit override)
        2. Current working directory (common for local runs)
    """
    override = os.getenv("QDRANT_SDK_ENV_FILE")
    if override:
        override_path = Path(override).expanduser()
        if override_path.is_file():
            return str(override_path)

    cwd_candidate = Path.cwd() / ".env"
    if cwd_candidate.is_file():
        return str(cwd_candidate)

    return None


_DEFAULT_ENV_FILE = _resolve_env_file()


def ensure_env_loaded() -> None:
    """Load environment variables from disk exactly once."""
    global _ENV_LOADED

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        env_path = _DEFAULT_ENV_FILE or _resolve_env_file()
        if env_path:
            load_dotenv(env_path, override=False)

        _ENV_LOADED = True


ensure_env_loaded()


class QdrantSdkConfig(BaseSettings):
    """Connection settings for the Qdrant gRPC client.

    Every field can be supplied through the environment (case-insensitive),
    e.g. ``QDRANT_GRPC_URL=https://qdrant.internal:6334``.
    """

    model_config = SettingsConfigDict(
        env_file=_DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== Connection ==========
    qdrant_grpc_url: str = "http://localhost:6334"
    qdrant_api_key: SecretStr | None = None
    qdrant_certificate_thumbprint: str | None = None

    # ========== Deadlines ==========
    qdrant_grpc_timeout: float = Field(default=0.0, ge=0)  # 0 disables the deadline

    # ========== Observability ==========
    log_level: str = "INFO"

    @field_validator("qdrant_grpc_url")
    @classmethod
    def _validate_grpc_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("qdrant_grpc_url must not be empty")
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @property
    def grpc_timeout(self) -> float | None:
        """Client-wide deadline in seconds, or None when disabled."""
        return self.qdrant_grpc_timeout or None


@lru_cache(maxsize=1)
def get_config() -> QdrantSdkConfig:
    """Return cached Settings instance (process-local).

    Returns:
        QdrantSdkConfig: The configuration instance loaded from environment variables.
    """
    return QdrantSdkConfig()


# Export convenience accessors
__all__ = ["QdrantSdkConfig", "ensure_env_loaded", "get_config"]
