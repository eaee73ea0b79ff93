"""Typed client SDK for the Qdrant vector database gRPC API."""

from qdrant_sdk.client import AsyncQdrantClient, QdrantClient
from qdrant_sdk.exceptions import CertificateValidationError, QdrantException
from qdrant_sdk.transport import AsyncQdrantGrpcClient, ClientConfiguration, QdrantGrpcClient

__version__ = "0.1.0"

__all__ = [
    "AsyncQdrantClient",
    "AsyncQdrantGrpcClient",
    "CertificateValidationError",
    "ClientConfiguration",
    "QdrantClient",
    "QdrantException",
    "QdrantGrpcClient",
    "__version__",
]
