"""Client factories for CLI commands.

Connection settings come from ``QdrantSdkConfig`` (environment and ``.env``);
global command-line options override individual fields. Clients are created
at command invocation time and closed when the command finishes.
"""

from typing import Any

from pydantic import SecretStr

from qdrant_sdk import AsyncQdrantClient, QdrantClient
from qdrant_sdk.common.config import QdrantSdkConfig, get_config


def resolve_config(
    url: str | None = None,
    api_key: str | None = None,
    certificate_thumbprint: str | None = None,
    timeout: float | None = None,
    log_level: str | None = None,
) -> QdrantSdkConfig:
    """Return the process configuration with command-line overrides applied."""
    overrides: dict[str, Any] = {}
    if url is not None:
        overrides["qdrant_grpc_url"] = url
    if api_key is not None:
        overrides["qdrant_api_key"] = SecretStr(api_key)
    if certificate_thumbprint is not None:
        overrides["qdrant_certificate_thumbprint"] = certificate_thumbprint
    if timeout is not None:
        overrides["qdrant_grpc_timeout"] = timeout
    if log_level is not None:
        overrides["log_level"] = log_level.upper()

    config = get_config()
    if not overrides:
        return config
    # model_validate re-runs field validators that model_copy would skip
    return QdrantSdkConfig.model_validate({**config.model_dump(), **overrides})


def get_client(config: QdrantSdkConfig) -> QdrantClient:
    return QdrantClient.from_config(config)


def get_async_client(config: QdrantSdkConfig) -> AsyncQdrantClient:
    return AsyncQdrantClient.from_config(config)


__all__ = ["get_async_client", "get_client", "resolve_config"]
