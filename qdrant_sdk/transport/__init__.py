"""gRPC transport: channels, credentials and low-level stub clients."""

from qdrant_sdk.transport.certificates import (
    certificate_thumbprint,
    normalize_thumbprint,
    pinned_channel_credentials,
    validate_thumbprint,
)
from qdrant_sdk.transport.channel import (
    DEFAULT_PORT,
    Address,
    ClientConfiguration,
    create_async_channel,
    create_channel,
    parse_address,
)
from qdrant_sdk.transport.grpc_client import AsyncQdrantGrpcClient, QdrantGrpcClient

__all__ = [
    "DEFAULT_PORT",
    "Address",
    "AsyncQdrantGrpcClient",
    "ClientConfiguration",
    "QdrantGrpcClient",
    "certificate_thumbprint",
    "create_async_channel",
    "create_channel",
    "normalize_thumbprint",
    "parse_address",
    "pinned_channel_credentials",
    "validate_thumbprint",
]
