"""High-level Qdrant client facades."""

from qdrant_sdk.client.async_client import AsyncQdrantClient
from qdrant_sdk.client.qdrant_client import QdrantClient
from qdrant_sdk.client.requests import convert_timeout
from qdrant_sdk.exceptions import CertificateValidationError, QdrantException

__all__ = [
    "AsyncQdrantClient",
    "CertificateValidationError",
    "QdrantClient",
    "QdrantException",
    "convert_timeout",
]
