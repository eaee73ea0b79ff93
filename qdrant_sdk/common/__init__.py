"""Common utilities for the Qdrant SDK.

This package provides configuration, structured logging and correlation-id
tracing shared by the client library and the CLI.
"""

from qdrant_sdk.common.config import QdrantSdkConfig, get_config
from qdrant_sdk.common.logging import get_logger, setup_logging
from qdrant_sdk.common.tracing import TracingContext, get_correlation_id

__all__ = [
    "QdrantSdkConfig",
    "TracingContext",
    "get_config",
    "get_correlation_id",
    "get_logger",
    "setup_logging",
]
