"""Tests for certificate thumbprint pinning."""

import hashlib
import ssl
from collections.abc import Callable
from typing import Any

import grpc
import pytest

from qdrant_sdk.exceptions import CertificateValidationError
from qdrant_sdk.transport.certificates import (
    _host_matches,
    certificate_names,
    certificate_thumbprint,
    fetch_server_certificate,
    normalize_thumbprint,
    pinned_channel_credentials,
    validate_thumbprint,
)


def _colon_separated(hex_digest: str) -> str:
    return ":".join(hex_digest[i : i + 2] for i in range(0, len(hex_digest), 2))


@pytest.mark.unit
class TestThumbprints:
    """Test thumbprint normalization and comparison."""

    def test_normalize_colons(self) -> None:
        """Colons are stripped."""
        assert normalize_thumbprint("AB:CD:EF") == "ABCDEF"

    def test_normalize_hyphens_without_colons(self) -> None:
        """Hyphens are stripped only when there are no colons."""
        assert normalize_thumbprint("AB-CD-EF") == "ABCDEF"
        assert normalize_thumbprint("AB:CD-EF") == "ABCD-EF"

    def test_thumbprint_is_upper_hex_sha256(self, server_certificate: bytes) -> None:
        """The thumbprint is the upper-case SHA-256 of the DER bytes."""
        expected = hashlib.sha256(server_certificate).hexdigest().upper()

        assert certificate_thumbprint(server_certificate) == expected

    def test_validate_accepts_any_case_and_separator(self, server_certificate: bytes) -> None:
        """Lower case and colon-separated pins match."""
        digest = hashlib.sha256(server_certificate).hexdigest()

        assert validate_thumbprint(server_certificate, digest)
        assert validate_thumbprint(server_certificate, _colon_separated(digest.upper()))

    def test_validate_rejects_other_certificate(
        self, server_certificate: bytes, make_certificate: Callable[..., bytes]
    ) -> None:
        """A pin for another certificate does not match."""
        other = certificate_thumbprint(make_certificate("other.local"))

        assert not validate_thumbprint(server_certificate, other)


@pytest.mark.unit
class TestCertificateNames:
    """Test name extraction and host matching."""

    def test_san_dns_and_ip(self, server_certificate: bytes) -> None:
        """DNS and IP subject alternative names are listed."""
        assert certificate_names(server_certificate) == ["qdrant.local", "127.0.0.1"]

    def test_common_name_fallback(self, make_certificate: Callable[..., bytes]) -> None:
        """Without SANs the common name is used."""
        assert certificate_names(make_certificate("legacy.local")) == ["legacy.local"]

    @pytest.mark.parametrize(
        ("host", "name", "expected"),
        [
            ("qdrant.local", "qdrant.local", True),
            ("QDRANT.local", "qdrant.LOCAL", True),
            ("node1.cluster.local", "*.cluster.local", True),
            ("a.b.cluster.local", "*.cluster.local", False),
            ("cluster.local", "*.cluster.local", False),
            ("10.0.0.1", "*.0.0.1", False),
            ("other.local", "qdrant.local", False),
        ],
    )
    def test_host_matches(self, host: str, name: str, expected: bool) -> None:
        """Exact names match case-insensitively; wildcards cover one label."""
        assert _host_matches(host, name) is expected


@pytest.mark.unit
class TestFetchServerCertificate:
    """Test the unverified certificate fetch."""

    def test_connection_failure(self, mocker: Any) -> None:
        """Socket errors become CertificateValidationError."""
        mocker.patch(
            "qdrant_sdk.transport.certificates.socket.create_connection",
            side_effect=ConnectionRefusedError("refused"),
        )

        with pytest.raises(CertificateValidationError, match="Failed to fetch certificate"):
            fetch_server_certificate("qdrant.local", 6334)

    def test_handshake_uses_unverified_context(
        self, mocker: Any, server_certificate: bytes
    ) -> None:
        """The peer certificate is read without chain verification."""
        mocker.patch("qdrant_sdk.transport.certificates.socket.create_connection")
        context = mocker.MagicMock()
        tls = context.wrap_socket.return_value.__enter__.return_value
        tls.getpeercert.return_value = server_certificate
        mocker.patch(
            "qdrant_sdk.transport.certificates.ssl.create_default_context", return_value=context
        )

        der = fetch_server_certificate("qdrant.local", 6334)

        assert der == server_certificate
        assert context.check_hostname is False
        assert context.verify_mode == ssl.CERT_NONE
        tls.getpeercert.assert_called_once_with(binary_form=True)


@pytest.mark.unit
class TestPinnedChannelCredentials:
    """Test credential construction from a pinned certificate."""

    @pytest.fixture
    def fetch(self, mocker: Any, server_certificate: bytes) -> Any:
        return mocker.patch(
            "qdrant_sdk.transport.certificates.fetch_server_certificate",
            return_value=server_certificate,
        )

    def test_matching_thumbprint(self, fetch: Any, server_certificate: bytes) -> None:
        """A matching pin yields credentials and no name override."""
        credentials, options = pinned_channel_credentials(
            "qdrant.local", 6334, certificate_thumbprint(server_certificate)
        )

        assert isinstance(credentials, grpc.ChannelCredentials)
        assert options == []
        fetch.assert_called_once_with("qdrant.local", 6334)

    def test_mismatch_raises(self, fetch: Any) -> None:
        """A different pin is rejected."""
        with pytest.raises(CertificateValidationError, match="does not match"):
            pinned_channel_credentials("qdrant.local", 6334, "00" * 32)

    def test_name_override_when_host_not_in_certificate(
        self, fetch: Any, server_certificate: bytes
    ) -> None:
        """Connecting by another name overrides the TLS target name."""
        _, options = pinned_channel_credentials(
            "10.1.2.3", 6334, certificate_thumbprint(server_certificate)
        )

        assert options == [("grpc.ssl_target_name_override", "qdrant.local")]

    def test_wildcard_only_certificate(
        self, mocker: Any, make_certificate: Callable[..., bytes]
    ) -> None:
        """A wildcard-only certificate gets a concrete override name."""
        der = make_certificate("cluster", dns_names=["*.cluster.local"])
        mocker.patch(
            "qdrant_sdk.transport.certificates.fetch_server_certificate", return_value=der
        )

        _, options = pinned_channel_credentials("127.0.0.1", 6334, certificate_thumbprint(der))

        assert options == [("grpc.ssl_target_name_override", "host.cluster.local")]
