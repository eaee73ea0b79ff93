"""TLS certificate thumbprint pinning.

gRPC has no per-connection verification callback, so pinning works by fetching
the server's leaf certificate over an unverified handshake, checking its
SHA-256 thumbprint, and then trusting exactly that certificate as the root for
the real gRPC channel. Only the leaf certificate is compared.
"""

import hashlib
import ipaddress
import socket
import ssl

import grpc
from cryptography import x509
from cryptography.x509.oid import NameOID

from qdrant_sdk.common.logging import get_logger
from qdrant_sdk.exceptions import CertificateValidationError

logger = get_logger(__name__)

_COLON = ":"
_HYPHEN = "-"


def normalize_thumbprint(thumbprint: str) -> str:
    """Strip ``:`` separators, or ``-`` separators when there are no colons."""
    if _COLON in thumbprint:
        return thumbprint.replace(_COLON, "")
    if _HYPHEN in thumbprint:
        return thumbprint.replace(_HYPHEN, "")
    return thumbprint


def certificate_thumbprint(der: bytes) -> str:
    """Upper-case hex SHA-256 digest of a DER-encoded certificate."""
    return hashlib.sha256(der).hexdigest().upper()


def validate_thumbprint(der: bytes, thumbprint: str) -> bool:
    """Check a DER certificate against a pinned thumbprint (case-insensitive)."""
    expected = normalize_thumbprint(thumbprint).upper()
    return certificate_thumbprint(der) == expected


def fetch_server_certificate(host: str, port: int, timeout: float = 10.0) -> bytes:
    """Fetch the leaf certificate presented by ``host:port``.

    The chain is not verified here; trust is decided by thumbprint.

    Raises:
        CertificateValidationError: If the connection or handshake fails.
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    context.set_alpn_protocols(["h2"])

    try:
        with socket.create_connection((host, port), timeout=timeout) as sock:
            with context.wrap_socket(sock, server_hostname=host) as tls:
                der = tls.getpeercert(binary_form=True)
    except OSError as e:
        logger.exception(
            "Failed to fetch server certificate", extra={"host": host, "port": port}
        )
        raise CertificateValidationError(
            f"Failed to fetch certificate from {host}:{port}: {e}"
        ) from e

    if not der:
        raise CertificateValidationError(f"Server {host}:{port} presented no certificate")
    return der


def certificate_names(der: bytes) -> list[str]:
    """DNS and IP subject alternative names of a certificate, else its common name."""
    cert = x509.load_der_x509_certificate(der)
    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    except x509.ExtensionNotFound:
        san = None

    if san is not None:
        names = list(san.get_values_for_type(x509.DNSName))
        names.extend(str(ip) for ip in san.get_values_for_type(x509.IPAddress))
        if names:
            return names

    return [
        str(attr.value) for attr in cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    ]


def _host_matches(host: str, name: str) -> bool:
    host = host.lower()
    name = name.lower()
    if name.startswith("*."):
        try:
            ipaddress.ip_address(host)
        except ValueError:
            head, _, rest = host.partition(".")
            return bool(head) and rest == name[2:]
        return False
    return host == name


def pinned_channel_credentials(
    host: str,
    port: int,
    thumbprint: str,
) -> tuple[grpc.ChannelCredentials, list[tuple[str, str]]]:
    """Credentials that trust only the server certificate matching ``thumbprint``.

    Returns:
        The channel credentials and extra channel options; the options carry
        ``grpc.ssl_target_name_override`` when ``host`` is not named in the
        certificate.

    Raises:
        CertificateValidationError: If the thumbprint does not match.
    """
    der = fetch_server_certificate(host, port)
    if not validate_thumbprint(der, thumbprint):
        logger.error(
            "Server certificate thumbprint mismatch",
            extra={"host": host, "port": port, "thumbprint": certificate_thumbprint(der)},
        )
        raise CertificateValidationError(
            f"Certificate presented by {host}:{port} does not match the pinned thumbprint"
        )

    options: list[tuple[str, str]] = []
    names = certificate_names(der)
    if names and not any(_host_matches(host, name) for name in names):
        exact = [name for name in names if not name.startswith("*.")]
        # a wildcard only matches with a leading label
        override = exact[0] if exact else "host" + names[0][1:]
        options.append(("grpc.ssl_target_name_override", override))

    logger.debug(
        "Pinned server certificate", extra={"host": host, "port": port, "names": names}
    )
    pem = ssl.DER_cert_to_PEM_cert(der).encode("ascii")
    return grpc.ssl_channel_credentials(root_certificates=pem), options


__all__ = [
    "certificate_names",
    "certificate_thumbprint",
    "fetch_server_certificate",
    "normalize_thumbprint",
    "pinned_channel_credentials",
    "validate_thumbprint",
]
