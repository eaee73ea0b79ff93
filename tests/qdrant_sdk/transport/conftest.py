"""Fixtures for transport tests: throwaway self-signed certificates."""

import ipaddress
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID


def _self_signed(common_name: str, dns_names: list[str], ips: list[str]) -> bytes:
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(UTC)
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
    )
    alt_names: list[x509.GeneralName] = [x509.DNSName(dns) for dns in dns_names]
    alt_names.extend(x509.IPAddress(ipaddress.ip_address(ip)) for ip in ips)
    if alt_names:
        builder = builder.add_extension(x509.SubjectAlternativeName(alt_names), critical=False)
    cert = builder.sign(key, hashes.SHA256())
    return cert.public_bytes(serialization.Encoding.DER)


@pytest.fixture
def make_certificate() -> Callable[..., bytes]:
    """Factory for DER-encoded self-signed certificates.

    Returns:
        Callable taking ``common_name`` and optional ``dns_names``/``ips``.
    """

    def _make(
        common_name: str = "qdrant.local",
        dns_names: list[str] | None = None,
        ips: list[str] | None = None,
    ) -> bytes:
        return _self_signed(common_name, dns_names or [], ips or [])

    return _make


@pytest.fixture
def server_certificate(make_certificate: Callable[..., bytes]) -> bytes:
    """Certificate for qdrant.local and 127.0.0.1."""
    return make_certificate("qdrant.local", dns_names=["qdrant.local"], ips=["127.0.0.1"])
