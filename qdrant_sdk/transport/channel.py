"""gRPC channel creation for Qdrant.

Provides:
- ``ClientConfiguration`` with the API key and pinned certificate thumbprint
- Address parsing (``http://``, ``https://`` or bare ``host:port``)
- Interceptors adding the ``api-key`` metadata header to every call
- Sync (``grpc``) and async (``grpc.aio``) channel factories
"""

import collections
import re
from typing import Any, NamedTuple
from urllib.parse import urlsplit

import grpc
from pydantic import BaseModel, Field, SecretStr, field_validator

from qdrant_sdk.common.logging import get_logger
from qdrant_sdk.transport.certificates import normalize_thumbprint, pinned_channel_credentials

logger = get_logger(__name__)

DEFAULT_PORT = 6334
API_KEY_HEADER = "api-key"

ChannelOptions = list[tuple[str, Any]]


class ClientConfiguration(BaseModel):
    """Connection credentials applied to every channel.

    Examples:
        >>> config = ClientConfiguration(
        ...     api_key="secret",
        ...     certificate_thumbprint="AB:CD:...",
        ... )
    """

    api_key: SecretStr | None = Field(
        default=None, description="Sent as the api-key header on every call"
    )
    certificate_thumbprint: str | None = Field(
        default=None, description="SHA-256 thumbprint the server certificate must match"
    )

    @field_validator("certificate_thumbprint")
    @classmethod
    def validate_certificate_thumbprint(cls, v: str | None) -> str | None:
        """Validate the thumbprint is 64 hex digits once separators are removed."""
        if v is None:
            return v
        if not re.fullmatch(r"[0-9A-Fa-f]{64}", normalize_thumbprint(v)):
            raise ValueError("certificate_thumbprint must be a SHA-256 hex digest")
        return v


class Address(NamedTuple):
    """A parsed server address."""

    host: str
    port: int
    secure: bool

    @property
    def target(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"


def parse_address(address: str) -> Address:
    """Parse ``http://host:port``, ``https://host:port`` or ``host:port``.

    Bare addresses are insecure; a missing port defaults to 6334.

    Raises:
        ValueError: On an unsupported scheme or a missing host.
    """
    address = address.strip()
    if "://" not in address:
        address = f"http://{address}"

    parts = urlsplit(address)
    if parts.scheme not in ("http", "https"):
        raise ValueError(f"Unsupported address scheme '{parts.scheme}' in {address!r}")
    if not parts.hostname:
        raise ValueError(f"Address has no host: {address!r}")

    port = parts.port or DEFAULT_PORT
    return Address(host=parts.hostname, port=port, secure=parts.scheme == "https")


class _ClientCallDetails(
    collections.namedtuple(
        "_ClientCallDetails",
        ("method", "timeout", "metadata", "credentials", "wait_for_ready", "compression"),
    ),
    grpc.ClientCallDetails,
):
    pass


class ApiKeyInterceptor(grpc.UnaryUnaryClientInterceptor):
    """Adds the ``api-key`` header to unary calls on a sync channel."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    def intercept_unary_unary(self, continuation, client_call_details, request):
        metadata = list(client_call_details.metadata or [])
        metadata.append((API_KEY_HEADER, self._api_key))
        details = _ClientCallDetails(
            client_call_details.method,
            client_call_details.timeout,
            metadata,
            client_call_details.credentials,
            client_call_details.wait_for_ready,
            client_call_details.compression,
        )
        return continuation(details, request)


class AsyncApiKeyInterceptor(grpc.aio.UnaryUnaryClientInterceptor):
    """Adds the ``api-key`` header to unary calls on a ``grpc.aio`` channel."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    async def intercept_unary_unary(self, continuation, client_call_details, request):
        metadata = grpc.aio.Metadata(
            *(client_call_details.metadata or ()), (API_KEY_HEADER, self._api_key)
        )
        details = grpc.aio.ClientCallDetails(
            client_call_details.method,
            client_call_details.timeout,
            metadata,
            client_call_details.credentials,
            client_call_details.wait_for_ready,
        )
        return await continuation(details, request)


def _resolve(
    address: str | Address,
    configuration: ClientConfiguration | None,
    options: ChannelOptions | None,
) -> tuple[Address, ClientConfiguration, grpc.ChannelCredentials | None, ChannelOptions]:
    addr = address if isinstance(address, Address) else parse_address(address)
    config = configuration or ClientConfiguration()
    channel_options = list(options or [])
    credentials: grpc.ChannelCredentials | None = None

    if addr.secure:
        if config.certificate_thumbprint is not None:
            credentials, extra = pinned_channel_credentials(
                addr.host, addr.port, config.certificate_thumbprint
            )
            channel_options.extend(extra)
        else:
            credentials = grpc.ssl_channel_credentials()
    else:
        if config.certificate_thumbprint is not None:
            logger.warning(
                "Certificate thumbprint ignored for insecure channel",
                extra={"target": addr.target},
            )
        if config.api_key is not None:
            logger.warning(
                "API key is sent over an insecure channel", extra={"target": addr.target}
            )

    return addr, config, credentials, channel_options


def create_channel(
    address: str | Address,
    configuration: ClientConfiguration | None = None,
    options: ChannelOptions | None = None,
) -> grpc.Channel:
    """Create a sync channel, intercepted with the API key when one is configured.

    Raises:
        ValueError: If the address cannot be parsed.
        CertificateValidationError: If certificate pinning fails.
    """
    addr, config, credentials, channel_options = _resolve(address, configuration, options)

    if credentials is not None:
        channel = grpc.secure_channel(addr.target, credentials, options=channel_options)
    else:
        channel = grpc.insecure_channel(addr.target, options=channel_options)

    logger.debug(
        "Created gRPC channel",
        extra={"target": addr.target, "secure": addr.secure, "pinned": config.certificate_thumbprint is not None},
    )

    if config.api_key is None:
        return channel
    return grpc.intercept_channel(channel, ApiKeyInterceptor(config.api_key.get_secret_value()))


def create_async_channel(
    address: str | Address,
    configuration: ClientConfiguration | None = None,
    options: ChannelOptions | None = None,
) -> grpc.aio.Channel:
    """Create a ``grpc.aio`` channel; same behaviour as ``create_channel``.

    Certificate pinning fetches the server certificate with a blocking
    handshake before the channel exists.
    """
    addr, config, credentials, channel_options = _resolve(address, configuration, options)

    interceptors = []
    if config.api_key is not None:
        interceptors.append(AsyncApiKeyInterceptor(config.api_key.get_secret_value()))

    logger.debug(
        "Created async gRPC channel",
        extra={"target": addr.target, "secure": addr.secure, "pinned": config.certificate_thumbprint is not None},
    )

    if credentials is not None:
        return grpc.aio.secure_channel(
            addr.target, credentials, options=channel_options, interceptors=interceptors
        )
    return grpc.aio.insecure_channel(
        addr.target, options=channel_options, interceptors=interceptors
    )


__all__ = [
    "API_KEY_HEADER",
    "DEFAULT_PORT",
    "Address",
    "ApiKeyInterceptor",
    "AsyncApiKeyInterceptor",
    "ClientConfiguration",
    "create_async_channel",
    "create_channel",
    "parse_address",
]
