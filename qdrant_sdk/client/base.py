"""Behaviour shared by the sync and async facades: deadlines, logging and error mapping."""

from datetime import timedelta

import grpc

from qdrant_sdk.common.logging import get_logger
from qdrant_sdk.exceptions import QdrantException

logger = get_logger("qdrant_sdk.client")

GrpcTimeoutLike = float | int | timedelta


def convert_grpc_timeout(grpc_timeout: GrpcTimeoutLike | None) -> float | None:
    """Client-side deadline in seconds for every call; 0 or None means no deadline."""
    if grpc_timeout is None:
        return None
    seconds = (
        grpc_timeout.total_seconds()
        if isinstance(grpc_timeout, timedelta)
        else float(grpc_timeout)
    )
    if seconds < 0:
        raise ValueError(f"grpc_timeout must not be negative, got {seconds}")
    return seconds or None


def _status_name(error: grpc.RpcError) -> str | None:
    code = getattr(error, "code", None)
    if not callable(code):
        return None
    status = code()
    return getattr(status, "name", None)


def _details(error: grpc.RpcError) -> str:
    details = getattr(error, "details", None)
    if callable(details) and details():
        return str(details())
    return str(error)


class BaseQdrantClient:
    """State and helpers common to ``QdrantClient`` and ``AsyncQdrantClient``."""

    def __init__(self, grpc_timeout: GrpcTimeoutLike | None = None) -> None:
        self._grpc_timeout = convert_grpc_timeout(grpc_timeout)

    @property
    def grpc_timeout(self) -> float | None:
        return self._grpc_timeout

    @staticmethod
    def _log_call(operation: str, collection_name: str | None) -> None:
        logger.debug(
            "Qdrant operation",
            extra={"operation": operation, "collection_name": collection_name},
        )

    @staticmethod
    def _operation_failed(
        operation: str, collection_name: str | None, error: grpc.RpcError
    ) -> QdrantException:
        """Log a failed RPC and build the exception to raise from it.

        Must be called from inside the ``except`` block so the traceback is logged.
        """
        status = _status_name(error)
        logger.exception(
            "Qdrant operation failed",
            extra={
                "operation": operation,
                "collection_name": collection_name,
                "status_code": status,
            },
        )
        return QdrantException(f"{operation} failed: {_details(error)}", status_code=status)

    @staticmethod
    def _ensure(result: bool, message: str) -> None:
        if not result:
            logger.error(message)
            raise QdrantException(message)


__all__ = ["BaseQdrantClient", "GrpcTimeoutLike", "convert_grpc_timeout"]
